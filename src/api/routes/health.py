"""
Health check API route
"""

import logging
import time
from datetime import datetime, timezone

import psutil
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from database.connection import Database, DatabaseError, get_database
from models.enums import HealthStatus, DatabaseStatus
from models.health import HealthReport, MemoryUsage

router = APIRouter()
logger = logging.getLogger(__name__)

HEALTH_QUERY = "SELECT NOW() AS timestamp"

_process = psutil.Process()

def process_uptime() -> float:
    """Seconds since this process started"""
    return max(0.0, time.time() - _process.create_time())

def memory_usage() -> MemoryUsage:
    info = _process.memory_info()
    return MemoryUsage(rss=info.rss, vms=info.vms)

def _isoformat(value) -> str:
    return value.isoformat() if isinstance(value, datetime) else str(value)

@router.get("", response_model=HealthReport, response_model_exclude_none=True)
async def health_check(db: Database = Depends(get_database)):
    """
    Health check for monitors and deployment validation

    Single attempt against the database, no retry. Reports 503 when the
    database cannot be reached so external monitors can alert on it.
    """
    try:
        rows = await db.query(HEALTH_QUERY)
    except DatabaseError as e:
        logger.error(f"Health check failed: {e.message}")
        report = HealthReport(
            status=HealthStatus.UNHEALTHY,
            timestamp=datetime.now(timezone.utc).isoformat(),
            database=DatabaseStatus.DISCONNECTED,
            error=e.message
        )
        return JSONResponse(status_code=503, content=report.model_dump(mode="json", exclude_none=True))

    return HealthReport(
        status=HealthStatus.HEALTHY,
        timestamp=_isoformat(rows[0]["timestamp"]),
        database=DatabaseStatus.CONNECTED,
        uptime=process_uptime(),
        memory=memory_usage()
    )
