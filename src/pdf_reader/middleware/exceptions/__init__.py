"""Exception handling for the PDF reader service."""

from typing import Any, Dict, Optional


class PDFReaderError(Exception):
    """Base exception for all PDF reader service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.status_code = status_code


from .api import BadRequestError
from .processing import (
    DocumentProcessingError,
    EngineBootstrapError,
    EngineError,
    EngineNotReadyError,
    ExtractionError,
    ExtractionInProgressError,
    LoadError,
    ProcessingError,
)
from .validation import (
    FileValidationError,
    NoFileSelectedError,
    TooLargeError,
    UnsupportedTypeError,
)

__all__ = [
    # Base
    "PDFReaderError",
    # API Errors
    "BadRequestError",
    # Validation Errors
    "FileValidationError",
    "NoFileSelectedError",
    "UnsupportedTypeError",
    "TooLargeError",
    # Processing Errors
    "ProcessingError",
    "LoadError",
    "ExtractionError",
    "DocumentProcessingError",
    "ExtractionInProgressError",
    # Engine Errors
    "EngineError",
    "EngineNotReadyError",
    "EngineBootstrapError",
]
