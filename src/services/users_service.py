"""
Users service - business logic for the user directory
"""

import logging
from typing import Optional

from fastapi import Depends

from database.connection import Database, get_database
from models.enums import ErrorType
from services.base_service import BaseService, ServiceResult

logger = logging.getLogger(__name__)

LIST_USERS_SQL = "SELECT id, name, email, created_at FROM users ORDER BY id ASC"
GET_USER_SQL = "SELECT id, name, email, created_at FROM users WHERE id = $1::text::integer"
CREATE_USER_SQL = (
    "INSERT INTO users (name, email) VALUES ($1, $2) "
    "RETURNING id, name, email, created_at"
)

class UsersService(BaseService):
    """Service for user directory operations"""

    def __init__(self, db: Database):
        super().__init__(db, "users")

    async def list_users(self) -> ServiceResult:
        """Return every user ordered by ascending id"""
        return await self.run(LIST_USERS_SQL)

    async def get_user(self, user_id: str) -> ServiceResult:
        """
        Get a user by id

        Args:
            user_id: Raw path value; bound as a parameter and cast by the database

        Returns:
            ServiceResult with one row, or NOT_FOUND
        """
        result = await self.run(GET_USER_SQL, str(user_id))
        if result.success and not result.data:
            return ServiceResult.failure(ErrorType.NOT_FOUND, "User not found")
        return result

    async def create_user(self, name: Optional[str], email: Optional[str]) -> ServiceResult:
        """
        Create a new user

        Args:
            name: Display name, must be present and non-empty
            email: Email address, must be present, non-empty and unused

        Returns:
            ServiceResult with the created row including id and created_at
        """
        if not name or not email:
            return ServiceResult.failure(ErrorType.VALIDATION_ERROR, "Name and email are required")

        logger.info(f"Creating new user: {email}")
        return await self.run(CREATE_USER_SQL, name, email)


def get_users_service(db: Database = Depends(get_database)) -> UsersService:
    """FastAPI dependency building the users service on the application's pool"""
    return UsersService(db)
