"""Multipart form data parsing.

API Gateway hands the raw request body to the function; this module splits a
multipart/form-data body into text fields and uploaded files.
"""

import io
from typing import Any, BinaryIO, Dict, List, Optional, Tuple, Union

CRLF = b"\r\n"
HEADER_SEPARATOR = b"\r\n\r\n"


class MultipartParser:
    """Parse multipart/form-data content with support for both text fields and binary files."""

    def __init__(
        self, content_type: str, body_data: Union[bytes, BinaryIO, io.BytesIO]
    ):
        """Initialize the parser with content type and body data.

        Args:
            content_type: The Content-Type header with boundary information
            body_data: The raw request body as bytes or file-like object

        Raises:
            ValueError: If boundary is missing from Content-Type
        """
        self.content_type = content_type
        self.boundary = self._extract_boundary(content_type)
        self.body_bytes = self._ensure_bytes(body_data)

    @staticmethod
    def _extract_boundary(content_type: str) -> str:
        for param in content_type.split(";")[1:]:
            name, _, value = param.strip().partition("=")
            if name.lower() == "boundary" and value:
                return value.strip('"')
        raise ValueError("Content-Type missing boundary parameter")

    @staticmethod
    def _ensure_bytes(data: Union[bytes, str, BinaryIO, io.BytesIO]) -> bytes:
        if hasattr(data, "read"):
            data.seek(0)
            data = data.read()
        if isinstance(data, str):
            # latin-1 maps code points 0-255 back to the original bytes
            return data.encode("latin-1")
        return data or b""

    def parse(self) -> Dict[str, Any]:
        """Parse multipart form data into dictionary format.

        Returns:
            Dict with text fields as str and files as dicts with
            file_name, content and content_type
        """
        result = {}
        for part in self._split_parts():
            name, value = self._process_part(part)
            if name:
                result[name] = value
        return result

    def _split_parts(self) -> List[bytes]:
        """Extract the parts between boundary markers."""
        delimiter = b"--" + self.boundary.encode("latin-1")
        parts = []
        for chunk in self.body_bytes.split(delimiter)[1:]:
            if chunk.startswith(b"--"):
                # closing delimiter
                break
            if chunk.startswith(CRLF):
                chunk = chunk[len(CRLF) :]
            if chunk.endswith(CRLF):
                chunk = chunk[: -len(CRLF)]
            if chunk:
                parts.append(chunk)
        return parts

    def _process_part(self, part: bytes) -> Tuple[Optional[str], Any]:
        header_end = part.find(HEADER_SEPARATOR)
        if header_end == -1:
            return None, None

        headers = self._parse_headers(part[:header_end])
        content = part[header_end + len(HEADER_SEPARATOR) :]

        disposition = headers.get("content-disposition")
        if not disposition:
            return None, None

        name, filename = self._parse_content_disposition(disposition)
        if not name:
            return None, None

        if filename is not None:
            return name, {
                "file_name": filename,
                "content": content,
                "content_type": headers.get("content-type", "application/octet-stream"),
            }
        return name, content.decode("utf-8", errors="replace").strip()

    @staticmethod
    def _parse_headers(headers_bytes: bytes) -> Dict[str, str]:
        headers = {}
        for line in headers_bytes.split(CRLF):
            name, sep, value = line.partition(b":")
            if not sep:
                continue
            headers[name.decode("latin-1").strip().lower()] = value.decode(
                "utf-8", errors="replace"
            ).strip()
        return headers

    @staticmethod
    def _parse_content_disposition(
        content_disp: str,
    ) -> Tuple[Optional[str], Optional[str]]:
        """Parse Content-Disposition header to extract name and filename."""
        name = None
        filename = None
        for param in content_disp.split(";"):
            param = param.strip()
            if param.startswith("name="):
                name = param[5:].strip("\"'")
            elif param.startswith("filename="):
                filename = param[9:].strip("\"'")
        return name, filename
