"""Response models for API endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..domain import CanvasSlot, Mode, Notification


class APIErrorResponse(BaseModel):
    """Standardized error response for API endpoints.

    Attributes:
        message: Human-readable error message
        code: Error code string (e.g., from ErrorCode enum)
        details: Additional error context or details
    """

    message: str
    code: str
    details: Optional[Dict[str, Any]] = None


class VersionResponse(BaseModel):
    """Response containing the API version.

    Attributes:
        version: The version string
    """

    version: str


class CanvasPage(BaseModel):
    """A canvas slot as returned to API clients."""

    page_id: int = Field(..., ge=1)
    width: int
    height: int
    image: Optional[str] = Field(None, description="PNG data URL of the rendered page")
    error: Optional[str] = None

    @classmethod
    def from_slot(cls, slot: CanvasSlot) -> "CanvasPage":
        return cls(
            page_id=slot.page_id,
            width=slot.canvas.width,
            height=slot.canvas.height,
            image=slot.canvas.to_data_url(),
            error=slot.error,
        )


class ConvertResponse(BaseModel):
    """Response for POST /convert/<mode>.

    Only the field of the requested mode is filled.
    """

    mode: Mode
    mode_flags: Dict[str, bool]
    page_count: int = Field(..., ge=0)
    pages: Optional[List[CanvasPage]] = None
    text: Optional[str] = None
    html: Optional[str] = None
    images: Optional[List[str]] = None
    preview_url: Optional[str] = None
    notifications: List[Notification] = Field(default_factory=list)
