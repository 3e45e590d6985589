"""Extraction result domain models.

An extraction run produces exactly one of the variants below; the ``mode``
field is the tag.
"""

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .canvas import CanvasSlot
from .enums import Mode


class CanvasSet(BaseModel):
    """Ordered page slots, rendered independently of each other."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    mode: Literal[Mode.CANVAS] = Mode.CANVAS
    slots: List[CanvasSlot] = Field(default_factory=list)

    @property
    def failed_pages(self) -> List[int]:
        return [slot.page_id for slot in self.slots if slot.error]


class PlainText(BaseModel):
    """Page texts joined by a blank line."""

    mode: Literal[Mode.TEXT] = Mode.TEXT
    text: str = ""


class StructuredHtml(BaseModel):
    """One positioned markup block per page."""

    mode: Literal[Mode.HTML] = Mode.HTML
    html: str = ""


class ImageSet(BaseModel):
    """PNG data URLs, one per page, in page order."""

    mode: Literal[Mode.IMAGE] = Mode.IMAGE
    images: List[str] = Field(default_factory=list)


ExtractionResult = Annotated[
    Union[CanvasSet, PlainText, StructuredHtml, ImageSet],
    Field(discriminator="mode"),
]
