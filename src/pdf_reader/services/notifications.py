"""Notification sinks for user-facing messages."""

from typing import List, Protocol

from aws_lambda_powertools.logging import Logger

from ..models.domain import Notification, Severity


class Notifier(Protocol):
    """Fire-and-forget sink for user notifications."""

    def notify(self, title: str, message: str, severity: Severity) -> None: ...


class LoggingNotifier:
    """Writes notifications to the structured log."""

    def __init__(self, logger: Logger):
        self.logger = logger

    def notify(self, title: str, message: str, severity: Severity) -> None:
        log = self.logger.warning if severity is Severity.ERROR else self.logger.info
        log(
            "User notification",
            extra={"title": title, "message": message, "severity": severity.value},
        )


class CollectingNotifier(LoggingNotifier):
    """Logs notifications and keeps them to be returned to the caller."""

    def __init__(self, logger: Logger):
        super().__init__(logger)
        self.notifications: List[Notification] = []

    def notify(self, title: str, message: str, severity: Severity) -> None:
        super().notify(title, message, severity)
        self.notifications.append(
            Notification(title=title, message=message, severity=severity)
        )
