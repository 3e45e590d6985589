"""Notification domain model."""

from pydantic import BaseModel, Field

from .enums import Severity


class Notification(BaseModel):
    """A message for the user, e.g. a toast."""

    title: str = Field(..., description="Short title")
    message: str = Field(..., description="Message body")
    severity: Severity = Field(Severity.INFO, description="Notification variant")
