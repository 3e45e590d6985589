from aws_lambda_powertools.logging import Logger

from ..middleware.exceptions import LoadError
from .protocols import DocumentEngine, DocumentHandle

logger = Logger()


class DocumentLoader:
    """Opens byte buffers with the document engine."""

    def __init__(self, engine: DocumentEngine) -> None:
        self.engine = engine

    async def open(self, data: bytes) -> DocumentHandle:
        """
        Parse a PDF buffer.

        Args:
            data (bytes): The PDF file content.

        Returns:
            DocumentHandle: The open document; a zero-page document is valid.

        Raises:
            LoadError: If the engine rejects the buffer, for whatever reason.
        """
        try:
            doc = await self.engine.open_document(data)
        except Exception as e:
            raise LoadError(
                f"Failed to load document: {e}",
                details={"error": str(e), "error_type": e.__class__.__name__},
            ) from e

        logger.info(f"PDF loaded with {doc.page_count} pages.")
        return doc
