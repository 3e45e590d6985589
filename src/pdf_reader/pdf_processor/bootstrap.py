"""Process-wide, one-time initialization of the document engine.

Concurrent callers that arrive while the engine is loading attach to the
in-flight initialization instead of starting another one. A failed bootstrap
is retried by the next caller; a successful one is never repeated.
"""

import asyncio
from typing import Callable, Optional

from aws_lambda_powertools.logging import Logger

from ..middleware.exceptions import EngineBootstrapError, EngineNotReadyError
from ..models.domain import BootstrapState
from .protocols import DocumentEngine

logger = Logger()


def load_pdfium_engine() -> DocumentEngine:
    """Import and configure the PDFium engine."""
    from .engine import PdfiumEngine

    return PdfiumEngine.create()


class EngineBootstrap:
    """State machine around the engine factory.

    States: uninitialized -> initializing -> ready | failed. While initializing,
    ``pending_waiters`` counts the callers attached to the in-flight task.
    """

    def __init__(self, factory: Callable[[], DocumentEngine]) -> None:
        self._factory = factory
        self._engine: Optional[DocumentEngine] = None
        self._task: Optional[asyncio.Future] = None
        self.state = BootstrapState.UNINITIALIZED
        self.pending_waiters = 0
        self.error: Optional[Exception] = None

    @property
    def is_ready(self) -> bool:
        return self.state is BootstrapState.READY

    @property
    def engine(self) -> DocumentEngine:
        """The loaded engine.

        Raises:
            EngineNotReadyError: If the bootstrap has not completed
        """
        if not self.is_ready:
            raise EngineNotReadyError(details={"state": self.state.value})
        return self._engine

    def _transition(self, new_state: BootstrapState) -> None:
        if not self.state.can_transition_to(new_state):
            raise ValueError(
                f"Invalid bootstrap transition from {self.state} to {new_state}"
            )
        logger.debug(
            "Engine bootstrap state changed",
            extra={"from": self.state.value, "to": new_state.value},
        )
        self.state = new_state

    async def ensure_ready(self) -> DocumentEngine:
        """Load the engine once and return it.

        Returns:
            The ready document engine

        Raises:
            EngineBootstrapError: If loading the engine failed
        """
        if self.state is BootstrapState.READY:
            return self._engine

        if self.state is not BootstrapState.INITIALIZING:
            self._transition(BootstrapState.INITIALIZING)
            self.error = None
            self._task = asyncio.ensure_future(self._initialize())

        self.pending_waiters += 1
        try:
            # shield: a cancelled waiter must not cancel the shared initialization
            return await asyncio.shield(self._task)
        finally:
            self.pending_waiters -= 1

    async def _initialize(self) -> DocumentEngine:
        try:
            engine = await asyncio.to_thread(self._factory)
        except Exception as e:
            logger.exception("Error loading document engine")
            self.error = e
            self._transition(BootstrapState.FAILED)
            raise EngineBootstrapError(details={"error": str(e)}) from e

        self._engine = engine
        self._transition(BootstrapState.READY)
        logger.info("Document engine loaded successfully.")
        return engine

    def reset(self) -> None:
        """Drop the loaded engine and return to the uninitialized state."""
        if self.state is BootstrapState.UNINITIALIZED:
            return
        if self.state is BootstrapState.INITIALIZING:
            raise ValueError("Cannot reset while the engine is initializing")

        shutdown = getattr(self._engine, "shutdown", None)
        if shutdown is not None:
            shutdown()
        self._engine = None
        self._task = None
        self.error = None
        self._transition(BootstrapState.UNINITIALIZED)


engine_bootstrap = EngineBootstrap(load_pdfium_engine)
