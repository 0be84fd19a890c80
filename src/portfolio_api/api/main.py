"""FastAPI application entry point for the Portfolio API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio_api.api.errors import register_exception_handlers
from portfolio_api.api.middleware import authenticate
from portfolio_api.api.routes import (
    auth,
    certifications,
    education,
    experience,
    health,
    projects,
    skills,
    upload,
    user,
)
from portfolio_api.config import get_cors_origins, get_port

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize resources on startup and clean up on shutdown."""
    from portfolio_api.data.db import dispose_db, init_db

    init_db()
    logger.info("Database ready")
    yield
    dispose_db()


app = FastAPI(
    title="Portfolio API",
    description="API for managing a personal portfolio: profile, skills, experience, "
    "education, certifications and projects",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(authenticate)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(user.router)
app.include_router(skills.router)
app.include_router(experience.router)
app.include_router(education.router)
app.include_router(certifications.router)
app.include_router(projects.router)
app.include_router(upload.router)


def main() -> None:
    """Start the server."""
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(
        "portfolio_api.api.main:app",
        host="0.0.0.0",
        port=get_port(),
    )


if __name__ == "__main__":
    main()
