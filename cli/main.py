# cli/main.py
import logging
import click
from .commands.db import db
from .commands.book import book
from .commands.serve import serve

@click.group()
@click.option('--log-level', envvar='LOG_LEVEL', default="WARNING", show_default=True,
              help="Logging level")
def cli(log_level: str):
    """Books Service CLI"""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

cli.add_command(db)
cli.add_command(book)
cli.add_command(serve)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
