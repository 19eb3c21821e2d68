"""
Base service layer for database operations
"""

import logging
from typing import Dict, Any, List, Optional
from dataclasses import dataclass

from database.connection import Database, DatabaseError, DatabaseErrorKind
from models.enums import ErrorType

logger = logging.getLogger(__name__)

_ERROR_TYPES = {
    DatabaseErrorKind.CONFLICT: ErrorType.CONFLICT,
    DatabaseErrorKind.UNAVAILABLE: ErrorType.UNAVAILABLE,
    DatabaseErrorKind.QUERY: ErrorType.DATABASE_ERROR,
}

@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[ErrorType] = None

    @classmethod
    def ok(cls, rows: List[Dict[str, Any]]) -> "ServiceResult":
        return cls(success=True, data=rows, count=len(rows))

    @classmethod
    def failure(cls, error_type: ErrorType, error: str) -> "ServiceResult":
        return cls(success=False, error=error, error_type=error_type)

class BaseService:
    """Base service running statements against one table through the pool"""

    def __init__(self, db: Database, resource_name: str):
        self.db = db
        self.resource_name = resource_name

    async def run(self, statement: str, *params: Any) -> ServiceResult:
        """
        Execute a statement and wrap the outcome

        Args:
            statement: Parameterized SQL
            *params: Values bound to $1..$n

        Returns:
            ServiceResult with the returned rows, or the classified failure
        """
        try:
            rows = await self.db.query(statement, *params)
        except DatabaseError as e:
            logger.error(f"Database operation failed for {self.resource_name} ({e.kind.value}): {e.message}")
            return ServiceResult.failure(_ERROR_TYPES[e.kind], e.message)

        return ServiceResult.ok(rows)
