"""
Enum definitions for the User Directory Backend
"""

from enum import Enum

class ErrorType(str, Enum):
    """
    Failure kinds a service operation can report to the route layer.

    - VALIDATION_ERROR: request rejected before touching the database
    - NOT_FOUND: no row matched
    - CONFLICT: unique constraint violated
    - UNAVAILABLE: database unreachable or pool exhausted
    - DATABASE_ERROR: any other database failure
    """
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UNAVAILABLE = "UNAVAILABLE"
    DATABASE_ERROR = "DATABASE_ERROR"

class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"

class DatabaseStatus(str, Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
