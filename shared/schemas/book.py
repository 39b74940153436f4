"""
Book data schemas
"""

from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field


class Book(BaseModel):
    """Catalog record"""
    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    author: str
    isbn: str = ""
    price: float = Field(..., ge=0)
    category: str = "General"
    stock: int = 0


class BookCreate(BaseModel):
    """Schema for POST /api/books; required fields are checked by the service"""
    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None
    stock: Optional[int] = None


class BookUpdate(BaseModel):
    """Partial update; only fields present in the request are applied"""
    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category: Optional[str] = None
    stock: Optional[int] = None
