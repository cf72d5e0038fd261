# tests/conftest.py
import os
import sys
import pytest
from decimal import Decimal
from pathlib import Path
from sqlalchemy.sql import text

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sqlalchemy.orm import Session
from fastapi.testclient import TestClient

from core.models.book import BookCategory
from core.sa.database import Database, get_db
from core.sa.repositories.book import BookRepository
from core.services.book_service import BookService
from api.main import app
from tests.utils import make_request


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory):
    """Create a temporary directory for the test database."""
    test_dir = tmp_path_factory.mktemp("test_db")
    return str(test_dir / "test_books.db")


@pytest.fixture(scope="session")
def database(test_db_path):
    """Create a test database instance"""
    db = Database(f"sqlite:///{test_db_path}")

    # Drop all tables and recreate schema
    db.drop_db()
    db.init_db()

    yield db

    db.dispose()
    try:
        os.remove(test_db_path)
    except OSError:
        pass  # Ignore errors if file doesn't exist


@pytest.fixture(scope="function")
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def cleanup_db(db_session):
    """Start every test with an empty books table"""
    db_session.execute(text("DELETE FROM books"))
    db_session.commit()
    yield
    db_session.rollback()


@pytest.fixture
def book_repo(db_session):
    return BookRepository(db_session)


@pytest.fixture
def book_service(db_session):
    return BookService(db_session)


@pytest.fixture
def client(database):
    """API client whose requests use the test database"""
    def override_get_db():
        session = database.get_session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # Not used as a context manager so the startup seeding never runs
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_books(book_service):
    """A small catalog covering stock levels, prices and categories"""
    requests = [
        make_request(title="The Lord of the Rings", author="J.R.R. Tolkien", isbn="9788445071405",
                     price=Decimal("29.99"), stock=50, category=BookCategory.FANTASY),
        make_request(title="The Hobbit", author="J.R.R. Tolkien", isbn="9780547928227",
                     price=Decimal("14.99"), stock=5, category=BookCategory.FANTASY),
        make_request(title="1984", author="George Orwell", isbn="9788497594257",
                     price=Decimal("19.99"), stock=30, category=BookCategory.FICTION),
        make_request(title="Out of Stock Book", author="Author", isbn="2222222222",
                     price=Decimal("10.00"), stock=0, category=BookCategory.FICTION),
        make_request(title="Clean Code", author="Robert C. Martin", isbn="9780132350884",
                     price=Decimal("45.99"), stock=15, category=BookCategory.TECHNOLOGY),
    ]
    return [book_service.create_book(request) for request in requests]

