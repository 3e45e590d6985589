"""Handler for document conversion (POST /convert/{mode}).

This module runs one reader session per request: the uploaded PDF is
validated, the document engine is bootstrapped if needed, and the slot of
the requested mode is returned.
"""

import asyncio

from aws_lambda_powertools.event_handler import APIGatewayHttpResolver
from aws_lambda_powertools.logging import Logger

from ..config.app import AppConfig
from ..middleware.exceptions import DocumentProcessingError, ProcessingError
from ..models.api import CanvasPage, ConvertRequest, ConvertResponse
from ..models.domain import Mode
from ..pdf_processor.bootstrap import EngineBootstrap
from ..services.notifications import CollectingNotifier
from ..services.reader import ReaderSession
from ..services.request_parser import RequestParsingService


async def run_session(session: ReaderSession, request: ConvertRequest) -> None:
    """Select the upload, connect the engine and run the requested mode.

    Raises:
        FileValidationError: If the upload is rejected
        EngineError: If the document engine is not available
        DocumentProcessingError: If loading or extraction failed
        ExtractionInProgressError: If the session is already running
    """
    if not session.select_file(request.file):
        raise session.last_error

    if not await session.connect():
        raise session.last_error

    result = await session.run(request.mode)
    if result is not None:
        return

    error = session.last_error
    if isinstance(error, ProcessingError):
        raise DocumentProcessingError(
            details={"reason": error.code, **error.details}
        ) from error
    raise error


def build_response(
    session: ReaderSession, notifier: CollectingNotifier, include_preview: bool
) -> ConvertResponse:
    """Map the session's presentation state to the API response."""
    presentation = session.presentation
    mode = session.active_mode

    response = ConvertResponse(
        mode=mode,
        mode_flags={m.value: active for m, active in session.mode_flags.items()},
        page_count=session.page_count or 0,
        preview_url=session.preview_url if include_preview else None,
        notifications=notifier.notifications,
    )
    if mode is Mode.CANVAS:
        response.pages = [CanvasPage.from_slot(slot) for slot in presentation.pages]
    elif mode is Mode.TEXT:
        response.text = presentation.extracted_text
    elif mode is Mode.HTML:
        response.html = presentation.html_container
    elif mode is Mode.IMAGE:
        response.images = presentation.images
    return response


def handle_convert(
    app: APIGatewayHttpResolver,
    app_config: AppConfig,
    bootstrap: EngineBootstrap,
    logger: Logger,
    mode: str,
) -> ConvertResponse:
    """Handle POST /convert/{mode} requests.

    Args:
        app: The API Gateway resolver instance
        app_config: Application configuration
        bootstrap: The process-wide engine bootstrap
        logger: Logger instance
        mode: The requested output mode (canvas, text, html or image)

    Returns:
        ConvertResponse with the output of the requested mode

    Raises:
        BadRequestError: If the request cannot be parsed or the mode is unknown
        FileValidationError: If the upload is rejected
        EngineError: If the document engine is not available
        DocumentProcessingError: If loading or extraction failed
    """
    parser_service = RequestParsingService(app, logger)
    request = parser_service.parse_convert_request(mode)

    notifier = CollectingNotifier(logger)
    session = ReaderSession(app_config, bootstrap, notifier, logger)

    logger.info(
        "Converting document",
        extra={
            "mode": request.mode.value,
            "file_name": request.file.file_name if request.file else None,
        },
    )
    asyncio.run(run_session(session, request))

    logger.info(
        "Document converted",
        extra={"mode": request.mode.value, "page_count": session.page_count},
    )
    return build_response(session, notifier, request.include_preview)
