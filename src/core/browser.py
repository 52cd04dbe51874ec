"""Headless browser automation backends."""

import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from src.api.config import BROWSER_TIMEOUT_MS, PAGE_FORMAT

logger = logging.getLogger(__name__)

FONTS_READY_SCRIPT = "() => document.fonts.ready.then(() => true)"


@dataclass(frozen=True)
class PageMargins:
    """Page margins as CSS length strings."""

    top: str
    right: str
    bottom: str
    left: str

    def as_dict(self) -> dict[str, str]:
        return {
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
            "left": self.left,
        }


@dataclass(frozen=True)
class PdfOptions:
    """Print-to-PDF settings."""

    margin: PageMargins
    format: str = PAGE_FORMAT
    print_background: bool = True


@dataclass(frozen=True)
class LoadOptions:
    """
    Conditions to wait for after content is set.

    ``wait_until`` lifecycle states are awaited in order; ``wait_for_fonts``
    additionally blocks until ``document.fonts.ready`` resolves.
    """

    wait_until: tuple[str, ...] = ("load",)
    wait_for_fonts: bool = False


class AutomationPage(ABC):
    """A single document-rendering context."""

    @abstractmethod
    async def set_content(self, html: str, options: LoadOptions) -> None:
        """Load HTML markup into the page."""

    @abstractmethod
    async def render_pdf(self, options: PdfOptions) -> bytes:
        """Print the current page to PDF bytes."""


class AutomationSession(ABC):
    """A running browser process."""

    @abstractmethod
    async def open_page(self) -> AutomationPage:
        """Open a new isolated page."""

    @abstractmethod
    async def close(self) -> None:
        """Release the browser. Safe to call more than once."""


class AutomationBackend(ABC):
    """Factory for browser sessions."""

    @abstractmethod
    async def open_session(self) -> AutomationSession:
        """Launch a new browser session."""

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AutomationSession]:
        """Open a session and close it on every exit path."""
        session = await self.open_session()
        try:
            yield session
        finally:
            await session.close()


class PlaywrightPage(AutomationPage):
    """Playwright page living in its own browser context."""

    def __init__(self, page: Page, timeout_ms: int = BROWSER_TIMEOUT_MS):
        self.page = page
        self.timeout_ms = timeout_ms

    async def set_content(self, html: str, options: LoadOptions) -> None:
        states = options.wait_until or ("load",)
        await self.page.set_content(html, wait_until=states[0], timeout=self.timeout_ms)

        for state in states[1:]:
            await self.page.wait_for_load_state(state, timeout=self.timeout_ms)

        if options.wait_for_fonts:
            await self.page.evaluate(FONTS_READY_SCRIPT)

        logger.debug(f"Content loaded ({len(html)} chars), waited for {list(states)}")

    async def render_pdf(self, options: PdfOptions) -> bytes:
        pdf_bytes: bytes = await self.page.pdf(
            format=options.format,
            print_background=options.print_background,
            margin=options.margin.as_dict(),
        )
        return pdf_bytes


class PlaywrightSession(AutomationSession):
    """Chromium process owned by a dedicated Playwright driver."""

    def __init__(self, playwright: Playwright, browser: Browser, timeout_ms: int):
        self.playwright = playwright
        self.browser = browser
        self.timeout_ms = timeout_ms
        self.contexts: list[BrowserContext] = []
        self.closed = False

    async def open_page(self) -> AutomationPage:
        context = await self.browser.new_context()
        self.contexts.append(context)
        page = await context.new_page()
        page.set_default_timeout(self.timeout_ms)
        return PlaywrightPage(page, timeout_ms=self.timeout_ms)

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True

        try:
            await self.browser.close()
        finally:
            await self.playwright.stop()
        logger.debug("Browser session closed")


@dataclass
class PlaywrightBackend(AutomationBackend):
    """Launches headless Chromium through Playwright, one process per session."""

    executable_path: Optional[str] = None
    args: list[str] = field(default_factory=list)
    headless: bool = True
    chromium_sandbox: bool = False
    timeout_ms: int = BROWSER_TIMEOUT_MS

    async def open_session(self) -> AutomationSession:
        playwright = await async_playwright().start()

        try:
            browser = await playwright.chromium.launch(
                executable_path=self.executable_path,
                args=self.args,
                headless=self.headless,
                chromium_sandbox=self.chromium_sandbox,
                timeout=self.timeout_ms,
            )
        except BaseException:
            await playwright.stop()
            raise

        logger.info(
            f"Launched Chromium (headless={self.headless}, "
            f"executable={self.executable_path or 'bundled'}, {len(self.args)} flags)"
        )
        return PlaywrightSession(playwright, browser, timeout_ms=self.timeout_ms)
