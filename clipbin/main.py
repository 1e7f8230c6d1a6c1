"""
FastAPI Application Entry Point

This module initializes the FastAPI application and configures:
- API routes
- Middleware (logging, CORS)
- Database engine lifecycle (created on startup, disposed on shutdown)

Run with: uvicorn clipbin.main:app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clipbin.api import endpoints
from clipbin.core.logging_config import setup_logging
from clipbin.core.setting import settings
from clipbin.db.session import create_session_maker, init_models
from clipbin.middleware.logging import add_logging_middleware

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Clipbin",
    description="Short-lived text clip sharing service",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

add_logging_middleware(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Health"])
async def root():
    return {
        "message": "Clipbin",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "healthy"}


app.include_router(endpoints.router, tags=["Clips"])


@app.on_event("startup")
async def startup_event():
    """Create the connection pool shared by every request."""
    engine, session_maker = create_session_maker()
    if settings.CREATE_TABLES_ON_STARTUP:
        await init_models(engine)
    app.state.engine = engine
    app.state.session_maker = session_maker
    logger.info(f"Database ready ({settings.ENV_SETTING.value})")


@app.on_event("shutdown")
async def shutdown_event():
    """Release pooled connections."""
    engine = getattr(app.state, "engine", None)
    if engine is not None:
        await engine.dispose()
        logger.info("Database engine disposed")
