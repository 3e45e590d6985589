"""Upload validation exceptions.

Raised by the file validator before any engine call is made. The message is
the one shown to the user in the error notification.
"""

from typing import Any, Dict, Optional

from . import PDFReaderError


class FileValidationError(PDFReaderError):
    """Base class for rejected uploads."""

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code=code,
            details=details,
            status_code=400,
        )


class NoFileSelectedError(FileValidationError):
    """No file was provided."""

    def __init__(
        self,
        message: str = "No file selected.",
        code: str = "NO_FILE_SELECTED",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class UnsupportedTypeError(FileValidationError):
    """The declared content type is not the accepted one."""

    def __init__(
        self,
        content_type: Optional[str],
        message: str = "Invalid file type. Please upload a PDF file.",
        code: str = "UNSUPPORTED_TYPE",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message, code, {"content_type": content_type, **(details or {})}
        )


class TooLargeError(FileValidationError):
    """The file is above the configured size ceiling."""

    def __init__(
        self,
        size_mb: float,
        max_size_mb: float,
        message: Optional[str] = None,
        code: str = "FILE_TOO_LARGE",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message
            or f"File size exceeds {max_size_mb:g} MB. Please select a smaller file.",
            code,
            {"size_mb": size_mb, "max_size_mb": max_size_mb, **(details or {})},
        )
