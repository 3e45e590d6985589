"""Upload checks made before any file reaches the document engine."""

from typing import Optional

from ..middleware.exceptions import (
    NoFileSelectedError,
    TooLargeError,
    UnsupportedTypeError,
)
from ..models.domain import SourceFile

PDF_MIME_TYPE = "application/pdf"
DEFAULT_MAX_FILE_SIZE_MB = 1


class FileValidator:
    """Rejects missing files, wrong content types and oversized files."""

    def __init__(
        self,
        accepted_mime_type: str = PDF_MIME_TYPE,
        max_file_size_mb: float = DEFAULT_MAX_FILE_SIZE_MB,
    ) -> None:
        self.accepted_mime_type = accepted_mime_type
        self.max_file_size_mb = max_file_size_mb

    def validate(self, file: Optional[SourceFile]) -> SourceFile:
        """Check a selected file.

        Args:
            file: The selected file, None if nothing was selected

        Returns:
            The same file, if it passes every check

        Raises:
            NoFileSelectedError: If no file is present
            UnsupportedTypeError: If the content type is not the accepted one
            TooLargeError: If the size in MiB exceeds the ceiling
        """
        if file is None:
            raise NoFileSelectedError()

        if file.content_type != self.accepted_mime_type:
            raise UnsupportedTypeError(file.content_type)

        if file.size_in_mb > self.max_file_size_mb:
            raise TooLargeError(file.size_in_mb, self.max_file_size_mb)

        return file
