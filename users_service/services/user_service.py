"""
User management business logic
"""

from typing import List
import structlog

from shared.schemas.user import User, UserCreate, UserUpdate
from shared.utils.errors import InvalidRequest, NotFound
from shared.utils.store import RecordStore

logger = structlog.get_logger(__name__)

SAMPLE_USERS = [
    {
        "name": "John Doe",
        "email": "john.doe@example.com",
        "address": "123 Main St, City, State 12345",
        "phone": "+1-555-0123",
    },
    {
        "name": "Jane Smith",
        "email": "jane.smith@example.com",
        "address": "456 Oak Ave, City, State 67890",
        "phone": "+1-555-0456",
    },
]


class UserService:
    """CRUD over the identity store; emails are unique"""

    def __init__(self, store: RecordStore[User]):
        self.store = store

    async def seed(self) -> None:
        for data in SAMPLE_USERS:
            user = User(**data)
            await self.store.insert(user.id, user)
        logger.info("Sample users loaded", count=len(SAMPLE_USERS))

    async def list_users(self) -> List[User]:
        return await self.store.list()

    async def get_user(self, user_id: str) -> User:
        user = await self.store.get(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    async def _email_taken(self, email: str, exclude_id: str = None) -> bool:
        for user in await self.store.list():
            if user.email == email and user.id != exclude_id:
                return True
        return False

    async def create_user(self, data: UserCreate) -> User:
        if not data.name or not data.email:
            raise InvalidRequest("Name and email are required")
        if await self._email_taken(data.email):
            raise InvalidRequest("Email already exists")

        user = User(
            name=data.name,
            email=data.email,
            address=data.address or "",
            phone=data.phone or "",
        )
        await self.store.insert(user.id, user)
        logger.info("User created", user_id=user.id)
        return user

    async def update_user(self, user_id: str, data: UserUpdate) -> User:
        existing = await self.get_user(user_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "email" in changes and await self._email_taken(changes["email"], exclude_id=user_id):
            raise InvalidRequest("Email already exists")
        updated = existing.model_copy(update=changes)
        await self.store.update(user_id, updated)
        logger.info("User updated", user_id=user_id, fields=sorted(changes))
        return updated

    async def delete_user(self, user_id: str) -> None:
        if not await self.store.delete(user_id):
            raise NotFound("User not found")
        logger.info("User deleted", user_id=user_id)
