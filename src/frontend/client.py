"""
HTTP client used by the dashboard to read the API
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

HEALTH_UNAVAILABLE = "Backend service unavailable"
USERS_UNAVAILABLE = "Failed to load users"

class FetchStatus(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"

@dataclass
class PanelState:
    """Render state of one dashboard panel, derived from its latest fetch"""
    status: FetchStatus
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def loading(cls) -> "PanelState":
        return cls(status=FetchStatus.LOADING)

    @classmethod
    def success(cls, data: Any) -> "PanelState":
        return cls(status=FetchStatus.SUCCESS, data=data)

    @classmethod
    def failure(cls, error: str) -> "PanelState":
        return cls(status=FetchStatus.ERROR, error=error)

@dataclass
class DashboardState:
    health: PanelState
    users: PanelState

class UserDirectoryClient:
    """
    Reads the health and users endpoints

    Each fetch is a single attempt; nothing is cached between calls.
    """

    def __init__(
        self,
        base_url: str,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(base_url=self.base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "UserDirectoryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_health(self) -> PanelState:
        """GET /api/health; an unhealthy report (503) is still a report to render"""
        try:
            response = await self._client.get("/api/health")
        except httpx.HTTPError as e:
            logger.error(f"Health check failed: {e}")
            return PanelState.failure(HEALTH_UNAVAILABLE)

        if response.status_code not in (200, 503):
            logger.error(f"Health check failed: HTTP {response.status_code}")
            return PanelState.failure(HEALTH_UNAVAILABLE)

        try:
            report = response.json()
        except ValueError:
            logger.error("Health check returned a non-JSON body")
            return PanelState.failure(HEALTH_UNAVAILABLE)

        if not isinstance(report, dict):
            return PanelState.failure(HEALTH_UNAVAILABLE)
        return PanelState.success(report)

    async def fetch_users(self) -> PanelState:
        """GET /api/users"""
        try:
            response = await self._client.get("/api/users")
            response.raise_for_status()
            users = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to fetch users: {e}")
            return PanelState.failure(USERS_UNAVAILABLE)

        if not isinstance(users, list):
            logger.error("Users endpoint did not return a list")
            return PanelState.failure(USERS_UNAVAILABLE)
        return PanelState.success(users)

    async def refresh(self) -> DashboardState:
        """Issue both fetches concurrently"""
        health, users = await asyncio.gather(self.fetch_health(), self.fetch_users())
        return DashboardState(health=health, users=users)
