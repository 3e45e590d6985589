"""Mode-driven extraction pipeline.

Per-page work is launched concurrently where the order of completion does not
matter; results are always read back by page index, never appended on
completion.
"""

import asyncio
from typing import Any, Awaitable, Callable, List

from aws_lambda_powertools.logging import Logger

from ..middleware.exceptions import ExtractionError
from ..models.domain import (
    Canvas,
    CanvasSet,
    CanvasSlot,
    ExtractionResult,
    ImageSet,
    Mode,
    PlainText,
    StructuredHtml,
    TextFragment,
)
from .markup import page_html
from .protocols import DocumentHandle, PageHandle

logger = Logger()

DEFAULT_SCALE = 1.5
PAGE_SEPARATOR = "\n\n"
FRAGMENT_SEPARATOR = " "

type PageTask = Callable[[DocumentHandle, int], Awaitable[Any]]


def page_text(fragments: List[TextFragment]) -> str:
    """Join the fragment strings of one page."""
    return FRAGMENT_SEPARATOR.join(fragment.text for fragment in fragments)


class ExtractionPipeline:
    """Turns an open document into the result of one mode."""

    def __init__(self, scale: float = DEFAULT_SCALE) -> None:
        self.scale = scale
        self._handlers = {
            Mode.CANVAS: self.to_canvas,
            Mode.TEXT: self.to_text,
            Mode.HTML: self.to_html,
            Mode.IMAGE: self.to_image,
        }

    async def run(self, doc: DocumentHandle, mode: Mode) -> ExtractionResult:
        """Run the extraction for a mode.

        Args:
            doc: The open document
            mode: The selected output mode

        Returns:
            The result variant of the mode

        Raises:
            ExtractionError: If a per-page operation failed; text, html and image
                runs deliver no partial results
        """
        logger.info(
            "Running extraction",
            extra={"mode": mode.value, "page_count": doc.page_count},
        )
        return await self._handlers[mode](doc)

    async def _gather_pages(self, doc: DocumentHandle, task: PageTask) -> List[Any]:
        """Launch the task for every page and return the results in page order."""
        results = await asyncio.gather(
            *(task(doc, number) for number in range(1, doc.page_count + 1)),
            return_exceptions=True,
        )
        for number, result in enumerate(results, start=1):
            if isinstance(result, BaseException):
                raise ExtractionError(
                    f"Failed to process page {number}: {result}",
                    details={"page": number, "error": str(result)},
                ) from result
        return results

    async def _fetch_page(self, doc: DocumentHandle, number: int) -> PageHandle:
        return await doc.get_page(number)

    async def _fetch_fragments(
        self, doc: DocumentHandle, number: int
    ) -> List[TextFragment]:
        page = await doc.get_page(number)
        return list(await page.get_text_fragments())

    async def _render_image(self, doc: DocumentHandle, number: int) -> str:
        page = await doc.get_page(number)
        viewport = page.get_viewport(self.scale)
        canvas = Canvas.from_viewport(viewport)
        await page.render_to(canvas, viewport)
        if not canvas.is_rendered:
            raise ExtractionError(
                f"Page {number} produced no image", details={"page": number}
            )
        return canvas.to_data_url()

    async def _render_slot(self, page: PageHandle, slot: CanvasSlot) -> None:
        # failures stay in the slot; sibling pages keep rendering
        try:
            viewport = page.get_viewport(self.scale)
            slot.canvas = Canvas.from_viewport(viewport)
            await page.render_to(slot.canvas, viewport)
            if not slot.is_rendered:
                raise ExtractionError(f"Page {slot.page_id} produced no image")
        except Exception as e:
            logger.exception("Error rendering page", extra={"page": slot.page_id})
            slot.error = str(e)
            return
        logger.debug("Page rendered on canvas.", extra={"page": slot.page_id})

    async def to_canvas(self, doc: DocumentHandle) -> CanvasSet:
        """Render every page into its own slot."""
        pages = await self._gather_pages(doc, self._fetch_page)
        slots = [CanvasSlot(page_id=number) for number in range(1, len(pages) + 1)]

        await asyncio.gather(
            *(self._render_slot(page, slot) for page, slot in zip(pages, slots))
        )
        result = CanvasSet(slots=slots)
        if result.failed_pages:
            logger.warning(
                "Some pages could not be rendered",
                extra={"failed_pages": result.failed_pages},
            )
        return result

    async def to_text(self, doc: DocumentHandle) -> PlainText:
        """Extract plain text, pages separated by a blank line."""
        per_page = await self._gather_pages(doc, self._fetch_fragments)
        return PlainText(
            text=PAGE_SEPARATOR.join(page_text(fragments) for fragments in per_page)
        )

    async def to_html(self, doc: DocumentHandle) -> StructuredHtml:
        """Extract positioned HTML, one page block at a time."""
        blocks = []
        for number in range(1, doc.page_count + 1):
            try:
                fragments = await self._fetch_fragments(doc, number)
            except Exception as e:
                raise ExtractionError(
                    f"Failed to process page {number}: {e}",
                    details={"page": number, "error": str(e)},
                ) from e
            blocks.append(page_html(fragments))
        return StructuredHtml(html="".join(blocks))

    async def to_image(self, doc: DocumentHandle) -> ImageSet:
        """Render every page to a PNG data URL."""
        images = await self._gather_pages(doc, self._render_image)
        return ImageSet(images=images)
