"""Request parsing service for conversion requests."""

import base64
from typing import Any, Tuple

from aws_lambda_powertools.event_handler import APIGatewayHttpResolver
from aws_lambda_powertools.logging import Logger
from pydantic import ValidationError

from ..middleware.exceptions import BadRequestError
from ..models.api.requests import ConvertForm, ConvertQuery, ConvertRequest
from ..models.domain import Mode
from ..utils.multipart import MultipartParser


class RequestParsingService:
    """Service for parsing HTTP request data."""

    def __init__(self, app: APIGatewayHttpResolver, logger: Logger):
        """Initialize request parsing service.

        Args:
            app: The API Gateway resolver instance
            logger: Logger instance
        """
        self.app = app
        self.logger = logger

    def get_multipart_content(self) -> Tuple[Any, str]:
        """Extract and prepare multipart request body and content type.

        Returns:
            Tuple of (body, content_type)

        Raises:
            BadRequestError: If content type is invalid or body can't be decoded
        """
        body = self.app.current_event.body
        headers = self.app.current_event.headers or {}
        content_type = headers.get("content-type", headers.get("Content-Type", ""))

        if not content_type or "multipart/form-data" not in content_type:
            raise BadRequestError(
                f"Content-Type must be multipart/form-data, got: {content_type}"
            )

        if self.app.current_event.is_base64_encoded:
            try:
                body = base64.b64decode(body)
                self.logger.debug("Decoded base64 body for multipart parsing")
            except Exception as e:
                self.logger.error(f"Error decoding base64 body: {e}", exc_info=True)
                raise BadRequestError("Invalid base64 encoding in request body")

        return body, content_type

    def parse_convert_form(self, body: Any, content_type: str) -> ConvertForm:
        """Parse the multipart form of a conversion request.

        Raises:
            BadRequestError: If the body is not valid multipart data
        """
        try:
            parsed_form = MultipartParser(content_type, body).parse()
            self.logger.debug(
                "Multipart form parsed",
                extra={"parsed_form_keys": list(parsed_form.keys())},
            )
            return ConvertForm(**parsed_form)
        except (ValueError, ValidationError) as e:
            self.logger.warning(f"Multipart parsing failed: {e}", exc_info=True)
            raise BadRequestError(f"Failed to parse multipart form data: {e}")

    def parse_mode(self, mode: str) -> Mode:
        """Map the path parameter to a mode.

        Raises:
            BadRequestError: If the mode is unknown
        """
        try:
            return Mode(mode.lower())
        except ValueError:
            raise BadRequestError(
                f"Unknown mode: {mode}",
                details={"allowed": [m.value for m in Mode]},
            )

    def parse_convert_request(self, mode: str) -> ConvertRequest:
        """Parse mode, query parameters and upload of a conversion request."""
        parsed_mode = self.parse_mode(mode)

        query = ConvertQuery(**(self.app.current_event.query_string_parameters or {}))

        body, content_type = self.get_multipart_content()
        form_data = self.parse_convert_form(body, content_type)

        return ConvertRequest(
            mode=parsed_mode,
            file=form_data.file.to_source_file() if form_data.file else None,
            include_preview=query.include_preview,
        )
