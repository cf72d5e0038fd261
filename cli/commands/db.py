# cli/commands/db.py
import click
from core.seed import seed_sample_books
from ..utils import database_url_option, open_database

@click.group()
def db():
    """Database management commands"""
    pass

@db.command()
@database_url_option
def init(database_url: str | None):
    """Create the books table if it does not exist"""
    open_database(database_url)
    click.echo(click.style("Database schema is ready", fg='green'))

@db.command()
@database_url_option
def seed(database_url: str | None):
    """Load the sample catalog into an empty database

    Example:
        books-service db seed
        books-service db seed --db sqlite:///catalog.db
    """
    database = open_database(database_url)
    with database.get_db() as session:
        added = seed_sample_books(session)

    if added:
        click.echo(click.style(f"Loaded {added} sample books", fg='green'))
    else:
        click.echo(click.style("Database already has books, nothing loaded", fg='yellow'))
