"""
User data schemas
"""

from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator


class User(BaseModel):
    """Identity record"""
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    email: str
    address: str = ""
    phone: str = ""


class UserCreate(BaseModel):
    """Schema for POST /api/users; required fields are checked by the service"""
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        """Basic email format check"""
        if v and '@' not in v:
            raise ValueError('Invalid email format')
        return v


class UserUpdate(BaseModel):
    """Partial update; only fields present in the request are applied"""
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        """Basic email format check"""
        if v is not None and '@' not in v:
            raise ValueError('Invalid email format')
        return v
