"""Domain models for the PDF reader service."""

from .canvas import Canvas, CanvasSlot, Viewport
from .enums import BootstrapState, Mode, Severity
from .fragment import TextFragment
from .notification import Notification
from .result import CanvasSet, ExtractionResult, ImageSet, PlainText, StructuredHtml
from .source_file import SourceFile

__all__ = [
    "BootstrapState",
    "Mode",
    "Severity",
    "SourceFile",
    "TextFragment",
    "Viewport",
    "Canvas",
    "CanvasSlot",
    "CanvasSet",
    "PlainText",
    "StructuredHtml",
    "ImageSet",
    "ExtractionResult",
    "Notification",
]
