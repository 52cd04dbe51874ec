"""PDF render API endpoint."""

import asyncio
import logging
import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from slowapi import Limiter
from slowapi.util import get_remote_address

from src.api.config import PAGE_FORMAT, PDF_FILENAME, PDF_MEDIA_TYPE, settings
from src.api.models import ErrorResponse, RenderRequest
from src.core.browser import PlaywrightBackend
from src.core.renderer import PdfRenderer

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

router = APIRouter(prefix="/api")


def get_pdf_renderer() -> PdfRenderer:
    """Get PDF renderer backed by headless Chromium."""
    backend = PlaywrightBackend(
        executable_path=settings.browser_executable_path,
        args=settings.browser_args_list,
        headless=settings.browser_headless,
        chromium_sandbox=settings.browser_chromium_sandbox,
        timeout_ms=settings.browser_timeout_ms,
    )
    return PdfRenderer(backend)


async def process_render_request(request: Request, renderer: PdfRenderer) -> bytes:
    """Parse the request body and render it."""
    body = await request.json()
    render_request = RenderRequest.model_validate(body)

    logger.info(
        f"Rendering PDF: {len(render_request.content)} chars, "
        f"margin={render_request.margin}px"
    )

    return await renderer.render(render_request.content, render_request.margin)


@router.post("/generate-pdf")
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
@limiter.limit(f"{settings.rate_limit_per_hour}/hour")
async def generate_pdf(
    request: Request,
    renderer: PdfRenderer = Depends(get_pdf_renderer),
) -> Response:
    """
    Render an HTML document to an A4 PDF.

    Any failure, including a malformed body, yields a 500 with an error payload.
    """
    start_time = time.time()

    try:
        pdf_bytes = await asyncio.wait_for(
            process_render_request(request, renderer),
            timeout=settings.render_timeout_seconds,
        )

    except asyncio.TimeoutError:
        logger.error(f"Render timeout after {settings.render_timeout_seconds}s")
        return _error_response(
            f"Render timeout: processing took longer than "
            f"{settings.render_timeout_seconds}s"
        )

    except Exception as e:
        logger.error(f"PDF generation failed: {e}", exc_info=True)
        return _error_response(str(e) or e.__class__.__name__)

    processing_ms = int((time.time() - start_time) * 1000)

    return Response(
        content=pdf_bytes,
        media_type=PDF_MEDIA_TYPE,
        headers={
            "Content-Disposition": f"attachment; filename={PDF_FILENAME}",
            "Content-Length": str(len(pdf_bytes)),
            "X-Render-Time-Ms": str(processing_ms),
        },
    )


def _error_response(message: str) -> JSONResponse:
    """Build the generic failure response."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.get("/health")
async def health_check() -> JSONResponse:
    """
    Health check endpoint.

    Reports the configured rendering engine without launching it.
    """
    return JSONResponse(
        content={
            "status": "healthy",
            "checks": {
                "renderer": {
                    "status": "healthy",
                    "engine": "chromium",
                    "headless": settings.browser_headless,
                    "executable": settings.browser_executable_path or "bundled",
                    "page_format": PAGE_FORMAT,
                },
            },
        }
    )
