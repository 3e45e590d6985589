"""API models for request/response handling."""

from .requests import ConvertForm, ConvertQuery, ConvertRequest, FileContent
from .responses import (
    APIErrorResponse,
    CanvasPage,
    ConvertResponse,
    VersionResponse,
)

__all__ = [
    # Requests
    'ConvertForm',
    'ConvertQuery',
    'ConvertRequest',
    'FileContent',

    # Responses
    'APIErrorResponse',
    'CanvasPage',
    'ConvertResponse',
    'VersionResponse',
]
