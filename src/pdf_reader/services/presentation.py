"""Presentation state for extraction results."""

from typing import List

from aws_lambda_powertools.logging import Logger

from ..models.domain import (
    CanvasSet,
    CanvasSlot,
    ExtractionResult,
    ImageSet,
    Mode,
    PlainText,
    StructuredHtml,
)
from ..pdf_processor.bootstrap import EngineBootstrap
from ..pdf_processor.markup import container_html
from ..pdf_processor.protocols import DocumentEngine

NO_TEXT_PLACEHOLDER = "No text extracted yet."


class PresentationAdapter:
    """Holds one output slot per mode and the engine readiness.

    Applying a result only touches the slot of the result's mode; the other
    slots keep whatever an earlier run put there.
    """

    def __init__(self, bootstrap: EngineBootstrap, logger: Logger):
        """Initialize the presentation adapter.

        Args:
            bootstrap: The process-wide engine bootstrap
            logger: Logger instance
        """
        self.bootstrap = bootstrap
        self.logger = logger
        self.pages: List[CanvasSlot] = []
        self.extracted_text = ""
        self.extracted_html = ""
        self.images: List[str] = []

    @property
    def is_ready(self) -> bool:
        """Whether the document engine may be used."""
        return self.bootstrap.is_ready

    @property
    def engine(self) -> DocumentEngine:
        return self.bootstrap.engine

    async def bootstrap_engine(self) -> DocumentEngine:
        """Load the engine, or attach to a bootstrap already in flight.

        Raises:
            EngineBootstrapError: If loading the engine failed
        """
        return await self.bootstrap.ensure_ready()

    @property
    def extracted_text_preview(self) -> str:
        return self.extracted_text or NO_TEXT_PLACEHOLDER

    @property
    def html_container(self) -> str:
        """The extracted HTML inside its container element."""
        return container_html(self.extracted_html)

    def apply(self, result: ExtractionResult) -> None:
        """Push a result into the slot of its mode."""
        if isinstance(result, CanvasSet):
            self.pages = result.slots
        elif isinstance(result, PlainText):
            self.extracted_text = result.text
        elif isinstance(result, StructuredHtml):
            self.extracted_html = result.html
        elif isinstance(result, ImageSet):
            self.images = result.images
        else:
            raise TypeError(f"Unsupported extraction result: {type(result).__name__}")

        self.logger.debug("Presentation updated", extra={"mode": result.mode.value})

    def slot(self, mode: Mode):
        """Current content of the slot for a mode."""
        return {
            Mode.CANVAS: self.pages,
            Mode.TEXT: self.extracted_text,
            Mode.HTML: self.extracted_html,
            Mode.IMAGE: self.images,
        }[mode]
