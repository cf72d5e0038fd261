"""CLI package for the books service"""
from .main import cli

__all__ = ['cli']
