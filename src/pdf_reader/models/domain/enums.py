"""Domain enums for the PDF reader service."""

from enum import Enum


class Mode(str, Enum):
    """Output mode of an extraction run.

    Inherits from str to ensure JSON serialization works correctly.
    """

    CANVAS = "canvas"
    TEXT = "text"
    HTML = "html"
    IMAGE = "image"

    @property
    def notifies_on_failure(self) -> bool:
        """Whether a failed run of this mode sends a user notification."""
        return self in (Mode.CANVAS, Mode.IMAGE)


class BootstrapState(str, Enum):
    """Lifecycle of the process-wide document engine bootstrap."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"

    def can_transition_to(self, new_state: "BootstrapState") -> bool:
        """Check if current state can transition to new state."""
        valid_transitions = {
            BootstrapState.UNINITIALIZED: {BootstrapState.INITIALIZING},
            BootstrapState.INITIALIZING: {
                BootstrapState.READY,
                BootstrapState.FAILED,
            },
            BootstrapState.READY: {BootstrapState.UNINITIALIZED},
            # a failed bootstrap is retried on the next request
            BootstrapState.FAILED: {
                BootstrapState.INITIALIZING,
                BootstrapState.UNINITIALIZED,
            },
        }
        return new_state in valid_transitions.get(self, set())


class Severity(str, Enum):
    """Severity (variant) of a user notification."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
