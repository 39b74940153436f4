"""
Book catalog routes
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request

from shared.schemas.book import Book, BookCreate, BookUpdate
from books_service.services.book_service import BookService

router = APIRouter()


def get_book_service(request: Request) -> BookService:
    """Dependency to get the book service instance"""
    return request.app.state.book_service


@router.get("", response_model=List[Book])
async def list_books(
    category: Optional[str] = Query(None, description="Filter by category"),
    author: Optional[str] = Query(None, description="Filter by author"),
    service: BookService = Depends(get_book_service)
):
    """List books"""
    return await service.list_books(category=category, author=author)


@router.get("/{book_id}", response_model=Book)
async def get_book(book_id: str, service: BookService = Depends(get_book_service)):
    """Get a book by ID"""
    return await service.get_book(book_id)


@router.post("", response_model=Book, status_code=201)
async def create_book(data: BookCreate, service: BookService = Depends(get_book_service)):
    """Create a new book"""
    return await service.create_book(data)


@router.put("/{book_id}", response_model=Book)
async def update_book(book_id: str, data: BookUpdate, service: BookService = Depends(get_book_service)):
    """Update a book"""
    return await service.update_book(book_id, data)


@router.delete("/{book_id}")
async def delete_book(book_id: str, service: BookService = Depends(get_book_service)):
    """Delete a book"""
    await service.delete_book(book_id)
    return {"message": "Book deleted successfully"}
