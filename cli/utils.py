import click
from decimal import Decimal
from typing import Iterable
from core.sa.database import Database

database_url_option = click.option(
    '--database-url', '--db', default=None, envvar='DATABASE_URL',
    help="Database connection string (defaults to DATABASE_URL or a local SQLite file)"
)


def open_database(database_url: str | None) -> Database:
    """Build a Database for a command, creating the schema if needed"""
    database = Database(database_url)
    database.init_db()
    return database


def format_price(price: Decimal) -> str:
    return f"{price:.2f}"


def print_books(books: Iterable, empty_message: str = "No books found."):
    """Print one line per book"""
    books = list(books)
    if not books:
        click.echo(click.style(empty_message, fg='yellow'))
        return

    for book in books:
        stock_color = 'red' if book.stock == 0 else ('yellow' if book.stock < 10 else 'green')
        click.echo(
            click.style(f"[{book.id}] ", fg='blue') +
            click.style(book.title, fg='cyan') +
            f" by {book.author} (ISBN {book.isbn}) " +
            click.style(format_price(book.price), fg='green') +
            " | stock " + click.style(str(book.stock), fg=stock_color) +
            f" | {book.category}"
        )
    click.echo(click.style(f"\n{len(books)} book(s)", fg='blue'))
