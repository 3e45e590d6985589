"""Source file domain model."""

import base64
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class SourceFile(BaseModel):
    """An uploaded file as selected by the user.

    Attributes:
        content: Raw file bytes
        content_type: Declared content (MIME) type
        size_in_bytes: Size of the file; defaults to the length of the content
        file_name: Original file name, if known
    """

    content: bytes = Field(default=b"", description="Raw file bytes")
    content_type: str = Field(..., description="Declared content type")
    size_in_bytes: Optional[int] = Field(
        default=None, ge=0, description="Size of the file in bytes"
    )
    file_name: Optional[str] = Field(None, description="Original file name")

    @model_validator(mode="after")
    def _default_size(self) -> "SourceFile":
        if self.size_in_bytes is None:
            self.size_in_bytes = len(self.content)
        return self

    @property
    def size_in_mb(self) -> float:
        """Size in MiB."""
        return self.size_in_bytes / (1024 * 1024)

    @property
    def base64_body(self) -> str:
        """Base64 encoded content, without any data URL prefix."""
        return base64.b64encode(self.content).decode("ascii")

    @property
    def preview_url(self) -> str:
        """In-memory data URL for previewing the original upload."""
        return f"data:{self.content_type};base64,{self.base64_body}"
