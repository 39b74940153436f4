"""
Book catalog business logic
"""

from typing import List, Optional
import structlog

from shared.schemas.book import Book, BookCreate, BookUpdate
from shared.utils.errors import InvalidRequest, NotFound
from shared.utils.store import RecordStore

logger = structlog.get_logger(__name__)

SAMPLE_BOOKS = [
    {
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "isbn": "978-0-7432-7356-5",
        "price": 12.99,
        "category": "Fiction",
        "stock": 50,
    },
    {
        "title": "To Kill a Mockingbird",
        "author": "Harper Lee",
        "isbn": "978-0-06-112008-4",
        "price": 14.99,
        "category": "Fiction",
        "stock": 30,
    },
    {
        "title": "Clean Code",
        "author": "Robert C. Martin",
        "isbn": "978-0-13-235088-4",
        "price": 45.99,
        "category": "Technology",
        "stock": 25,
    },
]


class BookService:
    """CRUD over the catalog store"""

    def __init__(self, store: RecordStore[Book]):
        self.store = store

    async def seed(self) -> None:
        for data in SAMPLE_BOOKS:
            book = Book(**data)
            await self.store.insert(book.id, book)
        logger.info("Sample books loaded", count=len(SAMPLE_BOOKS))

    async def list_books(self, category: Optional[str] = None, author: Optional[str] = None) -> List[Book]:
        """Case-insensitive substring filters on category and author"""
        books = await self.store.list()
        if category:
            books = [b for b in books if category.lower() in b.category.lower()]
        if author:
            books = [b for b in books if author.lower() in b.author.lower()]
        return books

    async def get_book(self, book_id: str) -> Book:
        book = await self.store.get(book_id)
        if not book:
            raise NotFound("Book not found")
        return book

    async def create_book(self, data: BookCreate) -> Book:
        if not data.title or not data.author or not data.price:
            raise InvalidRequest("Title, author, and price are required")
        if data.price < 0:
            raise InvalidRequest("Price must not be negative")

        book = Book(
            title=data.title,
            author=data.author,
            isbn=data.isbn or "",
            price=data.price,
            category=data.category or "General",
            stock=data.stock or 0,
        )
        await self.store.insert(book.id, book)
        logger.info("Book created", book_id=book.id, title=book.title)
        return book

    async def update_book(self, book_id: str, data: BookUpdate) -> Book:
        existing = await self.get_book(book_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        updated = existing.model_copy(update=changes)
        await self.store.update(book_id, updated)
        logger.info("Book updated", book_id=book_id, fields=sorted(changes))
        return updated

    async def delete_book(self, book_id: str) -> None:
        if not await self.store.delete(book_id):
            raise NotFound("Book not found")
        logger.info("Book deleted", book_id=book_id)
