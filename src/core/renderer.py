"""HTML to PDF rendering."""

import logging

from src.api.config import PAGE_FORMAT
from src.core.browser import AutomationBackend, LoadOptions, PageMargins, PdfOptions
from src.utils.metrics import RenderTimer

logger = logging.getLogger(__name__)

BOTTOM_MARGIN = "0px"

CONTENT_LOAD_OPTIONS = LoadOptions(
    wait_until=("domcontentloaded", "networkidle"),
    wait_for_fonts=True,
)


class PdfRenderError(Exception):
    """Raised when any step of PDF rendering fails."""

    pass


def to_px(value: float) -> str:
    """Format a pixel count as a CSS length, dropping a zero fraction."""
    if float(value).is_integer():
        return f"{int(value)}px"
    return f"{value}px"


def build_pdf_options(margin: float) -> PdfOptions:
    """
    Build A4 print options for the requested margin.

    The bottom margin is always zero; top, right and left use ``margin``.
    """
    margin_px = to_px(margin)
    return PdfOptions(
        format=PAGE_FORMAT,
        print_background=True,
        margin=PageMargins(
            top=margin_px,
            right=margin_px,
            bottom=BOTTOM_MARGIN,
            left=margin_px,
        ),
    )


class PdfRenderer:
    """Drives one browser session per render call."""

    def __init__(self, backend: AutomationBackend):
        self.backend = backend

    async def render(self, content: str, margin: float) -> bytes:
        """
        Render HTML content to PDF bytes.

        Args:
            content: HTML markup
            margin: Top, right and left margin in CSS pixels

        Returns:
            PDF bytes

        Raises:
            PdfRenderError: If launching, loading or printing fails
        """
        options = build_pdf_options(margin)
        timer = RenderTimer(logger)

        try:
            async with self.backend.session() as session:
                timer.mark("launch")

                page = await session.open_page()
                await page.set_content(content, CONTENT_LOAD_OPTIONS)
                timer.mark("load")

                pdf_bytes = await page.render_pdf(options)
                timer.mark("print")

        except Exception as e:
            logger.error(f"Error rendering PDF: {e}")
            raise PdfRenderError(f"Failed to render PDF: {e}") from e

        if not pdf_bytes:
            raise PdfRenderError("Browser returned an empty PDF")

        logger.info(f"Rendered PDF: {len(pdf_bytes) / 1024:.1f}KB ({timer.summary()})")
        return pdf_bytes
