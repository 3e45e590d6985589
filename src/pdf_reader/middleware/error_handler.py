"""Mapping of exceptions to JSON error responses."""

from enum import Enum
from http import HTTPStatus
from typing import Any, Dict, Optional

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.middleware_factory import lambda_handler_decorator
from pydantic import BaseModel, ValidationError

from ..models.api.responses import APIErrorResponse
from .exceptions import (
    BadRequestError,
    EngineError,
    ExtractionInProgressError,
    FileValidationError,
    PDFReaderError,
    ProcessingError,
)

logger = Logger()


class ErrorCode(Enum):
    """Public error codes, each with a default message and HTTP status."""

    VALIDATION_INVALID_INPUT = ("Invalid input", HTTPStatus.BAD_REQUEST)
    INVALID_FILE = ("Invalid file", HTTPStatus.BAD_REQUEST)
    BAD_REQUEST = ("Bad request", HTTPStatus.BAD_REQUEST)
    PROCESSING_ERROR = ("Failed to process document", HTTPStatus.UNPROCESSABLE_ENTITY)
    EXTRACTION_IN_PROGRESS = (
        "An extraction is already in progress",
        HTTPStatus.CONFLICT,
    )
    ENGINE_UNAVAILABLE = ("Document engine unavailable", HTTPStatus.SERVICE_UNAVAILABLE)
    SYSTEM_INTERNAL_ERROR = (
        "An unexpected error occurred",
        HTTPStatus.INTERNAL_SERVER_ERROR,
    )

    def __init__(self, default_message: str, status: HTTPStatus):
        self.default_message = default_message
        self.status = status

    @classmethod
    def from_exception(cls, e: Exception) -> "ErrorCode":
        """Map an exception to its code; the most derived known class wins."""
        for exc_type in type(e).__mro__:
            if exc_type in _EXCEPTION_CODES:
                return _EXCEPTION_CODES[exc_type]
        return cls.SYSTEM_INTERNAL_ERROR


_EXCEPTION_CODES: Dict[type, ErrorCode] = {
    ValidationError: ErrorCode.VALIDATION_INVALID_INPUT,
    FileValidationError: ErrorCode.INVALID_FILE,
    BadRequestError: ErrorCode.BAD_REQUEST,
    ProcessingError: ErrorCode.PROCESSING_ERROR,
    ExtractionInProgressError: ErrorCode.EXTRACTION_IN_PROGRESS,
    EngineError: ErrorCode.ENGINE_UNAVAILABLE,
}


class ErrorResponse(BaseModel):
    message: str
    code: ErrorCode
    details: Optional[Dict[str, Any]] = None

    @classmethod
    def from_code(
        cls, code: ErrorCode, details: Optional[Dict[str, Any]] = None
    ) -> "ErrorResponse":
        return cls(message=code.default_message, code=code, details=details)

    @classmethod
    def from_exception(cls, e: Exception) -> "ErrorResponse":
        """Build the response of a service exception.

        The exception's own code (e.g. FILE_TOO_LARGE) is kept as
        ``details["reason"]``; ``code`` is the public error code.
        """
        code = ErrorCode.from_exception(e)
        details = dict(getattr(e, "details", None) or {})
        if isinstance(e, PDFReaderError):
            details.setdefault("reason", e.code)

        return cls(
            message=str(e) or code.default_message,
            code=code,
            details=details or None,
        )

    def to_api_response(self, status_code: HTTPStatus) -> Dict[str, Any]:
        """Lambda proxy response carrying this error as JSON."""
        body = APIErrorResponse(
            message=self.message, code=self.code.name, details=self.details
        )
        return {
            "statusCode": status_code,
            "body": body.model_dump_json(),
            "headers": {"Content-Type": "application/json"},
        }


def handle_exception(e: Exception) -> Dict[str, Any]:
    """Log an exception at a level matching its status and build the response."""
    if isinstance(e, PDFReaderError):
        log = logger.warning if e.status_code < 500 else logger.error
        log(
            f"{e.__class__.__name__}: {e}",
            extra={"code": e.code, "details": e.details},
        )
        return ErrorResponse.from_exception(e).to_api_response(HTTPStatus(e.status_code))

    if isinstance(e, ValidationError):
        logger.warning(f"Input validation failed: {e}", exc_info=True)
        code = ErrorCode.VALIDATION_INVALID_INPUT
        details = {"errors": str(e)}
    else:
        logger.exception(f"Unhandled error: {e.__class__.__name__}: {e}")
        code = ErrorCode.SYSTEM_INTERNAL_ERROR
        details = {"error": str(e)}

    return ErrorResponse.from_code(code, details).to_api_response(code.status)


@lambda_handler_decorator
def error_handler_middleware(handler, event, context):
    """Turn exceptions escaping the handler into JSON error responses."""
    try:
        return handler(event, context)
    except Exception as e:
        return handle_exception(e)
