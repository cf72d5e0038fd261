# tests/test_api/test_books_api.py

import pytest
from tests.utils import make_payload, titles

BASE = "/api/books"


@pytest.fixture
def catalog(client):
    """Create a few books through the API and return their JSON bodies."""
    payloads = [
        make_payload(title="The Lord of the Rings", author="J.R.R. Tolkien", isbn="9788445071405",
                     price=29.99, stock=50, category="Fantasy"),
        make_payload(title="1984", author="George Orwell", isbn="9788497594257",
                     price=19.99, stock=50, category="Fiction"),
        make_payload(title="Out of Stock Book", author="Author", isbn="2222222222",
                     price=10.00, stock=0, category="Fiction"),
        make_payload(title="The 7 Habits of Highly Effective People", author="Stephen R. Covey",
                     isbn="9788497594260", price=22.99, stock=5, category="Self-Help"),
    ]
    created = []
    for payload in payloads:
        resp = client.post(BASE, json=payload)
        assert resp.status_code == 201
        created.append(resp.json())
    return created


def test_create_and_get_book(client):
    resp = client.post(BASE, json=make_payload())
    assert resp.status_code == 201
    book = resp.json()
    assert book["id"] is not None
    assert book["title"] == "Test Book"
    assert book["price"] == 19.99
    assert book["category"] == "Fiction"
    assert book["createdAt"] == book["updatedAt"]

    resp = client.get(f"{BASE}/{book['id']}")
    assert resp.status_code == 200
    assert resp.json() == book


def test_create_accepts_display_label(client):
    resp = client.post(BASE, json=make_payload(category="Self-Help"))
    assert resp.status_code == 201
    assert resp.json()["category"] == "Self-Help"

    resp = client.get(f"{BASE}/category/SELF_HELP")
    assert titles(resp.json()) == ["Test Book"]


def test_list_books(client, catalog):
    resp = client.get(BASE)
    assert resp.status_code == 200
    assert titles(resp.json()) == titles(catalog)


def test_list_books_empty(client):
    resp = client.get(BASE)
    assert resp.status_code == 200
    assert resp.json() == []


def test_get_book_by_isbn(client, catalog):
    resp = client.get(f"{BASE}/isbn/9788497594257")
    assert resp.status_code == 200
    assert resp.json()["title"] == "1984"


def test_get_book_not_found(client):
    resp = client.get(f"{BASE}/999")
    assert resp.status_code == 404
    body = resp.json()
    assert body["status"] == 404
    assert body["error"] == "Book not found"
    assert body["message"] == "Book not found with ID: 999"

    resp = client.get(f"{BASE}/isbn/0000000000")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Book not found with ISBN: 0000000000"


def test_update_book(client, catalog):
    book = catalog[0]
    resp = client.put(f"{BASE}/{book['id']}", json=make_payload(
        title="Updated Title", author="Updated Author", isbn=book["isbn"], category="History"
    ))
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["title"] == "Updated Title"
    assert updated["author"] == "Updated Author"
    assert updated["category"] == "History"
    assert updated["createdAt"] == book["createdAt"]
    assert updated["updatedAt"] > book["updatedAt"]


def test_update_book_duplicate_isbn(client, catalog):
    resp = client.put(f"{BASE}/{catalog[0]['id']}", json=make_payload(isbn=catalog[1]["isbn"]))
    assert resp.status_code == 409
    assert resp.json()["message"] == f"A book with ISBN {catalog[1]['isbn']} already exists"


def test_update_missing_book(client):
    resp = client.put(f"{BASE}/999", json=make_payload())
    assert resp.status_code == 404


def test_delete_book(client, catalog):
    book_id = catalog[0]["id"]
    resp = client.delete(f"{BASE}/{book_id}")
    assert resp.status_code == 204
    assert resp.content == b""

    assert client.get(f"{BASE}/{book_id}").status_code == 404
    assert client.delete(f"{BASE}/{book_id}").status_code == 404


def test_duplicate_isbn_on_create(client):
    assert client.post(BASE, json=make_payload()).status_code == 201

    resp = client.post(BASE, json=make_payload(title="Another"))
    assert resp.status_code == 409
    body = resp.json()
    assert body["error"] == "Duplicate ISBN"
    assert "1234567890" in body["message"]
    assert len(client.get(BASE).json()) == 1


def test_search_by_author_and_title(client, catalog):
    resp = client.get(f"{BASE}/author/tolkien")
    assert resp.status_code == 200
    assert resp.json()[0]["author"] == "J.R.R. Tolkien"

    resp = client.get(f"{BASE}/title/HABITS")
    assert titles(resp.json()) == ["The 7 Habits of Highly Effective People"]

    assert client.get(f"{BASE}/author/nobody").json() == []


def test_books_by_category(client, catalog):
    resp = client.get(f"{BASE}/category/Fiction")
    assert resp.status_code == 200
    assert titles(resp.json()) == ["1984", "Out of Stock Book"]


def test_books_by_unknown_category(client):
    resp = client.get(f"{BASE}/category/Poetry")
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid argument"


def test_stock_endpoints(client, catalog):
    in_stock = client.get(f"{BASE}/in-stock")
    out_of_stock = client.get(f"{BASE}/out-of-stock")
    low_stock = client.get(f"{BASE}/low-stock")

    assert in_stock.status_code == out_of_stock.status_code == low_stock.status_code == 200
    assert "Out of Stock Book" not in titles(in_stock.json())
    assert "1984" in titles(in_stock.json())
    assert titles(out_of_stock.json()) == ["Out of Stock Book"]
    assert out_of_stock.json()[0]["stock"] == 0
    assert titles(low_stock.json()) == ["Out of Stock Book", "The 7 Habits of Highly Effective People"]


def test_in_and_out_of_stock_are_exact(client):
    client.post(BASE, json=make_payload(title="1984", isbn="9788497594257", stock=50))
    client.post(BASE, json=make_payload(title="Out of Stock Book", isbn="2222222222", stock=0))

    assert titles(client.get(f"{BASE}/out-of-stock").json()) == ["Out of Stock Book"]
    assert titles(client.get(f"{BASE}/in-stock").json()) == ["1984"]


def test_price_range_is_inclusive(client, catalog):
    resp = client.get(f"{BASE}/price-range", params={"minPrice": "15.00", "maxPrice": "30.00"})
    assert resp.status_code == 200
    assert "1984" in titles(resp.json())

    resp = client.get(f"{BASE}/price-range", params={"minPrice": "19.99", "maxPrice": "19.99"})
    assert titles(resp.json()) == ["1984"]


def test_price_range_requires_both_bounds(client):
    resp = client.get(f"{BASE}/price-range", params={"minPrice": "15.00"})
    assert resp.status_code == 400
    assert "maxPrice" in resp.json()["details"]


def test_max_and_min_price(client, catalog):
    assert titles(client.get(f"{BASE}/max-price/10.00").json()) == ["Out of Stock Book"]
    assert titles(client.get(f"{BASE}/min-price/29.99").json()) == ["The Lord of the Rings"]


def test_search_title_or_author(client, catalog):
    resp = client.get(f"{BASE}/search", params={"q": "Tolkien"})
    assert resp.status_code == 200
    assert resp.json()[0]["author"] == "J.R.R. Tolkien"

    resp = client.get(f"{BASE}/search", params={"q": "of"})
    assert titles(resp.json()) == [
        "The Lord of the Rings", "Out of Stock Book", "The 7 Habits of Highly Effective People"
    ]


def test_sorted_endpoints(client, catalog):
    price_asc = [b["price"] for b in client.get(f"{BASE}/sorted/price-asc").json()]
    price_desc = [b["price"] for b in client.get(f"{BASE}/sorted/price-desc").json()]
    by_title = titles(client.get(f"{BASE}/sorted/title").json())
    by_author = [b["author"] for b in client.get(f"{BASE}/sorted/author").json()]

    assert price_asc == sorted(price_asc)
    assert price_desc == sorted(price_desc, reverse=True)
    assert by_title == sorted(by_title)
    assert by_author == sorted(by_author)


def test_sorted_unknown_order(client):
    assert client.get(f"{BASE}/sorted/rating").status_code == 400


def test_update_stock(client, catalog):
    book = catalog[1]
    resp = client.patch(f"{BASE}/{book['id']}/stock", params={"stock": 25})
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["stock"] == 25
    assert updated["title"] == book["title"]
    assert updated["price"] == book["price"]
    assert updated["createdAt"] == book["createdAt"]
    assert updated["updatedAt"] > book["updatedAt"]


def test_update_stock_missing_book(client):
    assert client.patch(f"{BASE}/999/stock", params={"stock": 1}).status_code == 404


def test_exists_by_isbn(client):
    client.post(BASE, json=make_payload(isbn="4444444444"))

    resp = client.get(f"{BASE}/exists/4444444444")
    assert resp.status_code == 200
    assert resp.json() is True
    assert client.get(f"{BASE}/exists/9999999999").json() is False


def test_statistics(client, catalog):
    resp = client.get(f"{BASE}/statistics/category")
    assert resp.status_code == 200
    assert resp.json() == [["Fantasy", 1], ["Fiction", 2], ["Self-Help", 1]]

    resp = client.get(f"{BASE}/statistics/average-price")
    assert resp.status_code == 200
    rows = resp.json()
    assert all(len(row) == 2 for row in rows)
    averages = dict(rows)
    assert averages["Fantasy"] == 29.99
    assert averages["Self-Help"] == 22.99


def test_categories(client):
    resp = client.get(f"{BASE}/categories")
    assert resp.status_code == 200
    categories = resp.json()
    assert len(categories) == 20
    assert categories[0] == "Fiction"
    assert "Self-Help" in categories
    assert "SELF_HELP" not in categories


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy", "service": "books-service"}


def test_create_with_empty_body(client):
    resp = client.post(BASE, json={})
    assert resp.status_code == 400
    body = resp.json()
    assert body["status"] == 400
    assert body["error"] == "Validation error"
    assert body["details"] == {
        "title": "Title is required",
        "author": "Author is required",
        "isbn": "ISBN is required",
        "price": "Price is required",
        "stock": "Stock is required",
        "category": "Category is required",
    }


def test_create_with_invalid_fields(client):
    resp = client.post(BASE, json=make_payload(isbn="12345", price=0, stock=-1, category="Poetry"))
    assert resp.status_code == 400
    details = resp.json()["details"]
    assert details["isbn"] == "ISBN must be 10 or 13 digits"
    assert details["price"] == "Price must be greater than 0"
    assert details["stock"] == "Stock cannot be negative"
    assert "category" in details
    assert client.get(BASE).json() == []


def test_non_numeric_id(client):
    resp = client.get(f"{BASE}/abc")
    assert resp.status_code == 400
    assert "book_id" in resp.json()["details"]


def test_unexpected_error_hides_details(client):
    from fastapi.testclient import TestClient
    from api.main import app
    from api.routes.books import get_book_service

    def broken_service():
        raise RuntimeError("connection string leaked")

    app.dependency_overrides[get_book_service] = broken_service
    resp = TestClient(app, raise_server_exceptions=False).get(BASE)

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Internal server error"
    assert body["message"] == "An unexpected error occurred"
    assert "leaked" not in resp.text


def test_create_rejects_sub_cent_price(client):
    resp = client.post(BASE, json=make_payload(price=0.004))
    assert resp.status_code == 400
    assert resp.json()["details"]["price"] == "Price cannot have more than 2 decimal places"
    assert client.get(BASE).json() == []


def test_create_with_malformed_json(client):
    resp = client.post(BASE, content=b'{"title": "Broken",', headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["details"] == {"body": "Request body is not valid JSON"}


def test_search_ignores_case_of_accented_letters(client):
    client.post(BASE, json=make_payload(title="Álgebra", author="Gabriel García Márquez"))

    assert titles(client.get(f"{BASE}/author/MÁRQUEZ").json()) == ["Álgebra"]
    assert titles(client.get(f"{BASE}/search", params={"q": "álgebra"}).json()) == ["Álgebra"]
