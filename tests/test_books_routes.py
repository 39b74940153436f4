"""
Tests for the books service API
"""

import pytest
from fastapi.testclient import TestClient

from books_service.main import create_app

BOOK = {"title": "Clean Code", "author": "Robert C. Martin", "price": 45.99, "category": "Technology", "stock": 25}


@pytest.fixture
def client(books_settings):
    with TestClient(create_app(books_settings)) as test_client:
        yield test_client


class TestBookRoutes:

    def test_create_book_applies_defaults(self, client):
        response = client.post("/api/books", json={"title": "Dune", "author": "Frank Herbert", "price": 9.5})

        assert response.status_code == 201
        data = response.json()
        assert data["id"]
        assert data["isbn"] == ""
        assert data["category"] == "General"
        assert data["stock"] == 0

    @pytest.mark.parametrize("body", [
        {"author": "A", "price": 1.0},
        {"title": "T", "price": 1.0},
        {"title": "T", "author": "A"},
    ])
    def test_create_book_requires_fields(self, client, body):
        response = client.post("/api/books", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Title, author, and price are required", "code": 400}

    def test_get_book(self, client):
        created = client.post("/api/books", json=BOOK).json()

        response = client.get(f"/api/books/{created['id']}")
        assert response.status_code == 200
        assert response.json()["price"] == 45.99

    def test_get_unknown_book(self, client):
        response = client.get("/api/books/missing")

        assert response.status_code == 404
        assert response.json() == {"error": "Book not found", "code": 404}

    def test_list_filters_are_case_insensitive_substrings(self, client):
        client.post("/api/books", json=BOOK)
        client.post("/api/books", json={"title": "Gatsby", "author": "F. Scott Fitzgerald", "price": 12.99, "category": "Fiction"})

        assert [b["title"] for b in client.get("/api/books", params={"category": "tech"}).json()] == ["Clean Code"]
        assert [b["title"] for b in client.get("/api/books", params={"author": "SCOTT"}).json()] == ["Gatsby"]
        assert len(client.get("/api/books").json()) == 2

    def test_update_book_merges_fields(self, client):
        created = client.post("/api/books", json=BOOK).json()

        response = client.put(f"/api/books/{created['id']}", json={"price": 39.99, "id": "ignored"})

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == created["id"]
        assert data["price"] == 39.99
        assert data["title"] == "Clean Code"

    def test_update_unknown_book(self, client):
        response = client.put("/api/books/missing", json={"price": 1.0})
        assert response.status_code == 404

    def test_delete_book(self, client):
        created = client.post("/api/books", json=BOOK).json()

        response = client.delete(f"/api/books/{created['id']}")
        assert response.status_code == 200
        assert response.json() == {"message": "Book deleted successfully"}
        assert client.get(f"/api/books/{created['id']}").status_code == 404

    def test_delete_unknown_book(self, client):
        assert client.delete("/api/books/missing").status_code == 404

    def test_sample_books_are_seeded(self, books_settings):
        settings = books_settings.model_copy(update={"seed_sample_data": True})
        with TestClient(create_app(settings)) as client:
            titles = [b["title"] for b in client.get("/api/books").json()]
        assert titles == ["The Great Gatsby", "To Kill a Mockingbird", "Clean Code"]
