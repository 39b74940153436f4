"""
User management routes
"""

from typing import List
from fastapi import APIRouter, Depends, Request

from shared.schemas.user import User, UserCreate, UserUpdate
from users_service.services.user_service import UserService

router = APIRouter()


def get_user_service(request: Request) -> UserService:
    """Dependency to get the user service instance"""
    return request.app.state.user_service


@router.get("", response_model=List[User])
async def list_users(service: UserService = Depends(get_user_service)):
    """List users"""
    return await service.list_users()


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    """Get a user by ID"""
    return await service.get_user(user_id)


@router.post("", response_model=User, status_code=201)
async def create_user(data: UserCreate, service: UserService = Depends(get_user_service)):
    """Create a new user"""
    return await service.create_user(data)


@router.put("/{user_id}", response_model=User)
async def update_user(user_id: str, data: UserUpdate, service: UserService = Depends(get_user_service)):
    """Update a user"""
    return await service.update_user(user_id, data)


@router.delete("/{user_id}")
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    """Delete a user"""
    await service.delete_user(user_id)
    return {"message": "User deleted successfully"}
