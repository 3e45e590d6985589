"""Request models for API endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from ..domain import Mode, SourceFile


# File upload model matching what the multipart parser returns for files
class FileContent(BaseModel):
    """Model for representing an uploaded file in multipart/form-data."""

    content: bytes = Field(..., description="The file content")
    content_type: str = Field(..., description="Content type of the file")
    file_name: str = Field(..., description="Original filename")

    def to_source_file(self) -> SourceFile:
        return SourceFile(
            content=self.content,
            content_type=self.content_type,
            file_name=self.file_name,
        )


class ConvertForm(BaseModel):
    """Model representing the expected fields in a POST /convert/<mode> request."""

    file: Optional[FileContent] = Field(None, description="PDF file upload")


class ConvertQuery(BaseModel):
    """Query parameters for POST /convert/<mode>."""

    include_preview: bool = Field(
        False, description="Return a data URL of the original upload"
    )


class ConvertRequest(BaseModel):
    """Validated conversion request."""

    mode: Mode = Field(..., description="Output mode")
    file: Optional[SourceFile] = Field(None, description="Uploaded file")
    include_preview: bool = Field(False, description="Return the upload preview")
