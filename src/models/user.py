"""
User-related Pydantic models
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

class UserCreateRequest(BaseModel):
    # Optional so missing fields reach the service's own validation
    name: Optional[str] = Field(None, description="Display name, required and non-blank")
    email: Optional[str] = Field(None, description="Email address, unique across users")

class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    created_at: Optional[datetime] = None
