# cli/commands/book.py
import click
from core.exceptions import BookNotFoundError
from core.sa.repositories.book import SORT_ORDERS
from core.services.book_service import BookService
from ..utils import database_url_option, open_database, print_books, format_price

@click.group()
def book():
    """Book catalog commands"""
    pass

@book.command(name="list")
@database_url_option
@click.option('--sort', type=click.Choice(list(SORT_ORDERS)), default=None,
              help='Order of the listing (default: insertion order)')
def list_books(database_url: str | None, sort: str | None):
    """List every book in the catalog

    Example:
        books-service book list --sort price-desc
    """
    database = open_database(database_url)
    with database.get_db() as session:
        service = BookService(session)
        books = service.get_books_sorted(sort) if sort else service.get_all_books()
        print_books(books)

@book.command()
@database_url_option
@click.argument('isbn')
def show(database_url: str | None, isbn: str):
    """Show a single book by ISBN"""
    database = open_database(database_url)
    with database.get_db() as session:
        try:
            book_obj = BookService(session).get_book_by_isbn(isbn)
        except BookNotFoundError as e:
            raise click.ClickException(str(e)) from e

        click.echo(f"  ID: {book_obj.id}")
        click.echo(f"  Title: {book_obj.title}")
        click.echo(f"  Author: {book_obj.author}")
        click.echo(f"  ISBN: {book_obj.isbn}")
        click.echo(f"  Category: {book_obj.category}")
        click.echo(f"  Price: {format_price(book_obj.price)}")
        click.echo(f"  Stock: {book_obj.stock}")
        if book_obj.description:
            click.echo(f"  Description: {book_obj.description}")
        click.echo(f"  Created: {book_obj.created_at:%Y-%m-%d %H:%M:%S}")
        click.echo(f"  Updated: {book_obj.updated_at:%Y-%m-%d %H:%M:%S}")

@book.command()
@database_url_option
@click.argument('query')
def search(database_url: str | None, query: str):
    """Find books whose title or author contains QUERY"""
    database = open_database(database_url)
    with database.get_db() as session:
        print_books(BookService(session).search_books(query),
                    empty_message=f"No books matching '{query}'.")

@book.command()
@database_url_option
def stats(database_url: str | None):
    """Show book count and average price per category"""
    database = open_database(database_url)
    with database.get_db() as session:
        service = BookService(session)
        counts = dict(service.get_statistics_by_category())
        averages = dict(service.get_average_price_by_category())

    if not counts:
        click.echo(click.style("No books found.", fg='yellow'))
        return

    click.echo(click.style(f"{'Category':<20}{'Books':>8}{'Avg price':>12}", fg='blue'))
    for category, count in counts.items():
        click.echo(f"{category.display_name:<20}{count:>8}{format_price(averages[category]):>12}")

@book.command()
def categories():
    """List the available categories"""
    for category in BookService.get_categories():
        click.echo(f"{category.name:<16} {category.display_name}")
