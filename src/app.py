"""
User Directory Backend API Server
Core functionality: user directory CRUD and health reporting
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from database.connection import Database
from api.routes import health, users
from middleware.request_logging import RequestLoggingMiddleware
from middleware.security_headers import SecurityHeadersMiddleware
from utils.error_handling import RequestContextMiddleware, setup_error_handling

logger = logging.getLogger(__name__)

def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the API application around a database that the lifespan opens and closes"""

    if database is None:
        database = Database(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        await database.connect()
        if settings.DB_INIT_SCHEMA:
            await database.init_schema()
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Database: {'Configured' if database.is_configured else 'Not configured'}")
        yield
        logger.info("Shutdown signal received: closing database pool")
        await database.close()

    app = FastAPI(
        title=settings.API_TITLE,
        description="User directory and health-check API",
        version=settings.API_VERSION,
        lifespan=lifespan
    )
    app.state.database = database

    # Added innermost first: security headers end up outermost
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials="*" not in settings.ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)

    setup_error_handling(app)

    app.include_router(health.router, prefix="/api/health", tags=["Health"])
    app.include_router(users.router, prefix="/api/users", tags=["Users"])

    @app.get("/", tags=["Root"])
    async def root():
        return {
            "message": settings.API_TITLE,
            "version": settings.API_VERSION,
            "endpoints": {
                "health": "/api/health",
                "users": "/api/users"
            }
        }

    return app

# FastAPI app instance is exported for use by uvicorn
# Server startup is handled by main.py at the project root
app = create_app()
