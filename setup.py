from setuptools import setup, find_namespace_packages

setup(
    name="books_service",
    version="1.0.0",
    description="CRUD and search REST service for a catalog of books",
    packages=find_namespace_packages(include=['api*', 'cli*', 'core*']),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "Click",
        "SQLAlchemy>=2.0",
        "fastapi",
        "pydantic>=2",
        "pydantic-core",
        "uvicorn",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "books-service=cli.main:main",
        ],
    },
)
