"""Pytest configuration and fixtures."""

from typing import Optional

import pytest

from src.core.browser import (
    AutomationBackend,
    AutomationPage,
    AutomationSession,
    LoadOptions,
    PdfOptions,
)
from src.core.renderer import PdfRenderer

SAMPLE_PDF = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\n%%EOF\n"


class FakePage(AutomationPage):
    """Records calls in the order the renderer makes them."""

    def __init__(self, session: "FakeSession") -> None:
        self.session = session
        self.storage: dict[str, str] = {}

    async def set_content(self, html: str, options: LoadOptions) -> None:
        self.session.calls.append("set_content")
        self.session.loaded.append((html, options))
        if self.session.backend.fail_on == "set_content":
            raise RuntimeError("Page crashed while loading content")

    async def render_pdf(self, options: PdfOptions) -> bytes:
        self.session.calls.append("render_pdf")
        self.session.pdf_options.append(options)
        if self.session.backend.fail_on == "render_pdf":
            raise RuntimeError("Printing failed")
        return self.session.backend.pdf_bytes


class FakeSession(AutomationSession):
    def __init__(self, backend: "FakeBackend") -> None:
        self.backend = backend
        self.calls: list[str] = []
        self.loaded: list[tuple[str, LoadOptions]] = []
        self.pdf_options: list[PdfOptions] = []
        self.pages: list[FakePage] = []
        self.closed = False

    async def open_page(self) -> AutomationPage:
        self.calls.append("open_page")
        if self.backend.fail_on == "open_page":
            raise RuntimeError("Target closed")
        page = FakePage(self)
        self.pages.append(page)
        return page

    async def close(self) -> None:
        self.calls.append("close")
        self.closed = True


class FakeBackend(AutomationBackend):
    """In-memory automation backend."""

    def __init__(self, pdf_bytes: bytes = SAMPLE_PDF, fail_on: Optional[str] = None):
        self.pdf_bytes = pdf_bytes
        self.fail_on = fail_on
        self.sessions: list[FakeSession] = []

    async def open_session(self) -> AutomationSession:
        if self.fail_on == "open_session":
            raise RuntimeError("Failed to launch browser")
        session = FakeSession(self)
        self.sessions.append(session)
        return session


@pytest.fixture
def fake_backend() -> FakeBackend:
    """Create fake automation backend."""
    return FakeBackend()


@pytest.fixture
def make_backend() -> type[FakeBackend]:
    """Factory for fake backends with custom failure points."""
    return FakeBackend


@pytest.fixture
def pdf_renderer(fake_backend: FakeBackend) -> PdfRenderer:
    """Create PDF renderer backed by the fake backend."""
    return PdfRenderer(fake_backend)


@pytest.fixture
def sample_html() -> str:
    """Minimal HTML document."""
    return "<p>hi</p>"
