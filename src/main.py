"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from src.api.config import settings
from src.api.routes import render
from src.utils.metrics import configure_logging

logger = logging.getLogger(__name__)

SERVICE_NAME = "HTML-to-PDF Render Service"
SERVICE_VERSION = "1.0.0"


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Handle rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={"detail": "Rate limit exceeded. Please try again later."},
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan events."""
    configure_logging(log_level=settings.log_level, log_format=settings.log_format)
    logger.info(
        f"Application started (browser executable: "
        f"{settings.browser_executable_path or 'bundled'})"
    )

    yield

    logger.info("Application shut down successfully")


app = FastAPI(
    title=SERVICE_NAME,
    description="Renders HTML documents to A4 PDF with headless Chromium",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

app.state.limiter = render.limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(render.router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
