"""
User directory API routes
All database operations go through the users service.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends

from models.enums import ErrorType
from models.user import UserCreateRequest, UserResponse
from services.base_service import ServiceResult
from services.users_service import UsersService, get_users_service
from utils.error_handling import APIError

router = APIRouter()
logger = logging.getLogger(__name__)

def _raise_for_result(result: ServiceResult, failure_message: str) -> None:
    """Map a failed service result onto the HTTP error contract"""
    if result.success:
        return
    if result.error_type == ErrorType.VALIDATION_ERROR:
        raise APIError(400, "Validation failed", result.error)
    elif result.error_type == ErrorType.NOT_FOUND:
        raise APIError(404, "User not found")
    elif result.error_type == ErrorType.CONFLICT:
        raise APIError(409, "User already exists", "Email already registered")
    else:
        raise APIError(500, failure_message, result.error)

@router.get("", response_model=List[UserResponse])
async def list_users(users_service: UsersService = Depends(get_users_service)):
    """Retrieve all users ordered by id"""
    result = await users_service.list_users()
    _raise_for_result(result, "Failed to fetch users")
    return result.data

@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, users_service: UsersService = Depends(get_users_service)):
    """Retrieve a specific user by id"""
    result = await users_service.get_user(user_id)
    _raise_for_result(result, "Failed to fetch user")
    return result.data[0]

@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    request: UserCreateRequest,
    users_service: UsersService = Depends(get_users_service)
):
    """Create a new user"""
    result = await users_service.create_user(request.name, request.email)
    _raise_for_result(result, "Failed to create user")

    user = result.data[0]
    logger.info(f"Created user {user['id']}")
    return user
