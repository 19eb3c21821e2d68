"""
Health check Pydantic models
"""

from typing import Optional
from pydantic import BaseModel

from models.enums import HealthStatus, DatabaseStatus

class MemoryUsage(BaseModel):
    rss: int
    vms: int

class HealthReport(BaseModel):
    status: HealthStatus
    timestamp: str
    database: DatabaseStatus
    uptime: Optional[float] = None
    memory: Optional[MemoryUsage] = None
    error: Optional[str] = None
