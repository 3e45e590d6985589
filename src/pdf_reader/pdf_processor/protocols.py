"""Contract of the external document engine.

Every operation that may touch the underlying library is a coroutine, so the
pipeline can launch per-page work without waiting for each other.
"""

from typing import Protocol, Sequence

from ..models.domain import Canvas, TextFragment, Viewport


class PageHandle(Protocol):
    """One page of an open document, indexed from 1."""

    number: int

    async def get_text_fragments(self) -> Sequence[TextFragment]:
        """Positioned text runs of the page, in content order."""
        ...

    def get_viewport(self, scale: float) -> Viewport:
        """Page size at the given zoom."""
        ...

    async def render_to(self, canvas: Canvas, viewport: Viewport) -> None:
        """Rasterize the page into the canvas using the viewport."""
        ...


class DocumentHandle(Protocol):
    """An open document, owned by the invocation that opened it."""

    page_count: int

    async def get_page(self, index: int) -> PageHandle:
        """Get page by its 1-based index."""
        ...

    async def close(self) -> None:
        """Release the engine resources held by the document."""
        ...


class DocumentEngine(Protocol):
    """Parses PDF byte streams and exposes page-level primitives."""

    async def open_document(self, data: bytes) -> DocumentHandle:
        """Parse the buffer and return a document handle."""
        ...
