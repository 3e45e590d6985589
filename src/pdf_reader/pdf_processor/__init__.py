"""PDF processing: validation, engine lifecycle and the extraction pipeline."""

from .bootstrap import EngineBootstrap, engine_bootstrap
from .loader import DocumentLoader
from .pipeline import ExtractionPipeline
from .validator import FileValidator

__all__ = [
    "DocumentLoader",
    "EngineBootstrap",
    "ExtractionPipeline",
    "FileValidator",
    "engine_bootstrap",
]
