"""
Access logging middleware in Apache combined log format
"""

import logging
from datetime import datetime, timezone

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

access_logger = logging.getLogger("access")

def format_combined(request: Request, status_code: int, content_length: str, when: datetime) -> str:
    """Render one access line: host - - [time] "request" status length "referer" "user-agent" """
    client = request.client.host if request.client else "-"
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    http_version = request.scope.get("http_version", "1.1")
    referer = request.headers.get("referer", "-")
    user_agent = request.headers.get("user-agent", "-")
    timestamp = when.strftime("%d/%b/%Y:%H:%M:%S %z")
    return (
        f'{client} - - [{timestamp}] "{request.method} {path} HTTP/{http_version}" '
        f'{status_code} {content_length} "{referer}" "{user_agent}"'
    )

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every completed request on the access logger"""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        access_logger.info(format_combined(
            request,
            response.status_code,
            response.headers.get("content-length", "-"),
            datetime.now(timezone.utc),
        ))
        return response
