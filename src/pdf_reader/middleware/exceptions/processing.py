"""Document loading, extraction and engine exceptions."""

from typing import Any, Dict, Optional

from . import PDFReaderError


class ProcessingError(PDFReaderError):
    """Base class for document processing errors."""

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 422,  # Unprocessable Entity
    ):
        super().__init__(
            message=message,
            code=code,
            details=details,
            status_code=status_code,
        )


class LoadError(ProcessingError):
    """The engine could not open the document (malformed, encrypted, ...)."""

    def __init__(
        self,
        message: str = "Failed to load document",
        code: str = "LOAD_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class ExtractionError(ProcessingError):
    """A per-page engine operation failed during extraction."""

    def __init__(
        self,
        message: str = "Failed to extract document content",
        code: str = "EXTRACTION_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class DocumentProcessingError(ProcessingError):
    """Generic failure reported to API clients for load or extraction errors."""

    def __init__(
        self,
        message: str = "Failed to process document",
        code: str = "PROCESSING_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class ExtractionInProgressError(ProcessingError):
    """A session was asked to run while a previous run is still in flight."""

    def __init__(
        self,
        message: str = "An extraction is already in progress",
        code: str = "EXTRACTION_IN_PROGRESS",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details, status_code=409)


class EngineError(PDFReaderError):
    """Base class for document engine lifecycle errors."""

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
            status_code=503,  # Service Unavailable
        )


class EngineNotReadyError(EngineError):
    """The engine bootstrap has not completed."""

    def __init__(
        self,
        message: str = "Document engine not initialized",
        code: str = "ENGINE_NOT_READY",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class EngineBootstrapError(EngineError):
    """Loading or configuring the document engine failed."""

    def __init__(
        self,
        message: str = "Failed to initialize document engine",
        code: str = "ENGINE_BOOTSTRAP_FAILED",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
