"""Reader session: one upload, one active mode, one run at a time."""

from typing import Dict, Optional

from aws_lambda_powertools.logging import Logger

from ..config.app import AppConfig
from ..middleware.exceptions import (
    EngineBootstrapError,
    EngineNotReadyError,
    ExtractionInProgressError,
    FileValidationError,
    PDFReaderError,
    ProcessingError,
)
from ..models.domain import ExtractionResult, Mode, Severity, SourceFile
from ..pdf_processor import (
    DocumentLoader,
    EngineBootstrap,
    ExtractionPipeline,
    FileValidator,
)
from .notifications import Notifier
from .presentation import PresentationAdapter

GENERIC_FAILURE_MESSAGE = "Unable to process the PDF file."


class ReaderSession:
    """The reader component.

    Wires file selection, validation, the engine bootstrap, the extraction
    pipeline and the presentation slots together. A session never raises for
    validation, load or extraction failures: they are logged, recorded in
    ``last_error``, and leave the session idle and re-triggerable.
    """

    def __init__(
        self,
        config: AppConfig,
        bootstrap: EngineBootstrap,
        notifier: Notifier,
        logger: Logger,
    ):
        """Initialize the reader session.

        Args:
            config: Application configuration
            bootstrap: The process-wide engine bootstrap
            notifier: Sink for user notifications
            logger: Logger instance
        """
        self.config = config
        self.notifier = notifier
        self.logger = logger
        self.validator = FileValidator(
            accepted_mime_type=config.accepted_mime_type,
            max_file_size_mb=config.max_file_size_mb,
        )
        self.pipeline = ExtractionPipeline(scale=config.render_scale)
        self.presentation = PresentationAdapter(bootstrap, logger)

        self.source: Optional[SourceFile] = None
        self.active_mode: Optional[Mode] = None
        self.is_loading = False
        self.last_error: Optional[PDFReaderError] = None
        self.page_count: Optional[int] = None

    # --- Mode selection ---

    def activate(self, mode: Mode) -> None:
        """Make a mode the only active one."""
        self.active_mode = Mode(mode)

    @property
    def mode_flags(self) -> Dict[Mode, bool]:
        return {mode: mode is self.active_mode for mode in Mode}

    # --- File selection ---

    def select_file(self, file: Optional[SourceFile]) -> bool:
        """Replace the selected file and check it.

        Returns:
            True if the file passed validation
        """
        self.source = file
        return self.check_file()

    def check_file(self) -> bool:
        """Validate the selected file, notifying the user on failure."""
        try:
            self.validator.validate(self.source)
        except FileValidationError as e:
            self.logger.error(
                f"{e.__class__.__name__}: {e.message}",
                extra={"code": e.code, "details": e.details},
            )
            self.notifier.notify("Error", e.message, Severity.ERROR)
            self.last_error = e
            return False

        self.logger.debug(
            "File accepted",
            extra={
                "file_name": self.source.file_name,
                "size_mb": self.source.size_in_mb,
            },
        )
        return True

    @property
    def preview_url(self) -> Optional[str]:
        """Data URL of the selected upload, for previewing the original."""
        return self.source.preview_url if self.source is not None else None

    # --- Engine ---

    async def connect(self) -> bool:
        """Bootstrap the document engine, if not done yet.

        Returns:
            True if the engine is ready
        """
        try:
            await self.presentation.bootstrap_engine()
        except EngineBootstrapError as e:
            self.logger.error(
                "Document engine is unavailable", extra={"details": e.details}
            )
            self.last_error = e
            return False
        return True

    # --- Extraction ---

    async def run(self, mode: Mode) -> Optional[ExtractionResult]:
        """Run an extraction for a mode on the selected file.

        Args:
            mode: The output mode to activate and run

        Returns:
            The result pushed to the presentation, or None if the run did not
            start or failed

        Raises:
            ExtractionInProgressError: If a previous run is still in flight
        """
        mode = Mode(mode)
        if self.is_loading:
            # the running extraction keeps its mode
            raise ExtractionInProgressError(
                details={"mode": mode.value, "active_mode": self.active_mode.value}
            )
        self.activate(mode)

        self.last_error = None
        if not self.check_file():
            return None

        if not self.presentation.is_ready:
            self.logger.error("Document engine not initialized.")
            self.last_error = EngineNotReadyError(
                details={"state": self.presentation.bootstrap.state.value}
            )
            return None

        self.is_loading = True
        doc = None
        try:
            loader = DocumentLoader(self.presentation.engine)
            doc = await loader.open(self.source.content)
            self.page_count = doc.page_count

            result = await self.pipeline.run(doc, mode)
            self.presentation.apply(result)
            return result

        except ProcessingError as e:
            self.logger.exception(
                f"Error processing PDF: {e.message}",
                extra={"mode": mode.value, "code": e.code},
            )
            self.last_error = e
            if mode.notifies_on_failure:
                self.notifier.notify("Error", GENERIC_FAILURE_MESSAGE, Severity.ERROR)
            return None

        finally:
            if doc is not None:
                await doc.close()
            self.is_loading = False
