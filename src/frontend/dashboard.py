"""
Dashboard web app rendering the API's health and user directory
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from config import settings
from frontend.client import PanelState, UserDirectoryClient
from middleware.request_logging import RequestLoggingMiddleware
from middleware.security_headers import SecurityHeadersMiddleware

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent

def avatar_initial(name: Any) -> str:
    text = str(name or "").strip()
    return text[0].upper() if text else "?"

def format_timestamp(value: Any) -> str:
    if not value:
        return "-"
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return str(value)
    return parsed.strftime("%d %b %Y %H:%M:%S")

def _template_environment() -> Jinja2Templates:
    templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))
    templates.env.filters["initial"] = avatar_initial
    templates.env.filters["timestamp"] = format_timestamp
    return templates

def create_dashboard_app(
    api_base_url: str = settings.API_BASE_URL,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> FastAPI:
    """Build the dashboard; panels are fetched through one shared API client"""

    client = UserDirectoryClient(api_base_url, transport=transport)
    templates = _template_environment()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Dashboard reading API at {api_base_url}")
        yield
        await client.aclose()

    app = FastAPI(title="User Directory Dashboard", lifespan=lifespan, docs_url=None, redoc_url=None)
    app.state.client = client

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request):
        """Page shell with both panels loading; the browser fills them in"""
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {"health": PanelState.loading(), "users": PanelState.loading(), "live": True}
        )

    @app.get("/snapshot", response_class=HTMLResponse)
    async def snapshot(request: Request):
        """Whole page rendered server-side from one concurrent refresh"""
        state = await client.refresh()
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {"health": state.health, "users": state.users, "live": False}
        )

    @app.get("/panels/health", response_class=HTMLResponse)
    async def health_panel(request: Request):
        health = await client.fetch_health()
        return templates.TemplateResponse(request, "partials/health.html", {"health": health})

    @app.get("/panels/users", response_class=HTMLResponse)
    async def users_panel(request: Request):
        users = await client.fetch_users()
        return templates.TemplateResponse(request, "partials/users.html", {"users": users})

    return app
