"""Raster surface domain models."""

from typing import Optional

from PIL.Image import Image
from pydantic import BaseModel, ConfigDict, Field

from ...utils.images import png_data_url


class Viewport(BaseModel):
    """The scaled coordinate frame used to rasterize a page.

    Attributes:
        width: Width in pixels at the given scale
        height: Height in pixels at the given scale
        scale: Zoom factor relative to the page size in points
    """

    width: float = Field(..., ge=0, description="Width in pixels")
    height: float = Field(..., ge=0, description="Height in pixels")
    scale: float = Field(1.0, gt=0, description="Zoom factor")


class Canvas(BaseModel):
    """A raster surface a page can be rendered into."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    width: int = Field(0, ge=0, description="Surface width in pixels")
    height: int = Field(0, ge=0, description="Surface height in pixels")
    image: Optional[Image] = Field(None, description="Rendered bitmap")

    @classmethod
    def from_viewport(cls, viewport: Viewport) -> "Canvas":
        """Create a blank canvas sized to the viewport."""
        return cls(width=int(viewport.width), height=int(viewport.height))

    @property
    def is_rendered(self) -> bool:
        return self.image is not None

    def to_data_url(self) -> Optional[str]:
        """PNG data URL of the rendered bitmap, None while blank."""
        if self.image is None:
            return None
        return png_data_url(self.image)


class CanvasSlot(BaseModel):
    """A per-page placeholder in canvas mode.

    Attributes:
        page_id: Page number (1-based)
        canvas: Surface the page was rendered into
        error: Render failure message, if the page could not be rendered
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    page_id: int = Field(..., gt=0, description="Page number (1-based)")
    canvas: Canvas = Field(default_factory=Canvas, description="Page surface")
    error: Optional[str] = Field(None, description="Render failure message")

    @property
    def is_rendered(self) -> bool:
        return self.canvas.is_rendered
