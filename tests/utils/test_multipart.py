"""Unit tests for the multipart parser."""

import io
import unittest

from http_fixtures import BOUNDARY, MULTIPART_CONTENT_TYPE, multipart_body

from pdf_reader.utils.multipart import MultipartParser


class TestMultipartParser(unittest.TestCase):
    """Test cases for MultipartParser."""

    def test_file_part(self):
        """Binary file content is kept byte for byte."""
        content = b"%PDF-1.7\r\n\x00\xff binary \r\n%%EOF"
        body = multipart_body(content, file_name="report.pdf")

        parsed = MultipartParser(MULTIPART_CONTENT_TYPE, body).parse()

        self.assertEqual(
            {
                "file_name": "report.pdf",
                "content": content,
                "content_type": "application/pdf",
            },
            parsed["file"],
        )

    def test_text_fields(self):
        body = multipart_body(fields={"name": "  My document  ", "note": "x"})

        parsed = MultipartParser(MULTIPART_CONTENT_TYPE, body).parse()

        self.assertEqual({"name": "My document", "note": "x"}, parsed)

    def test_quoted_boundary(self):
        content_type = f'multipart/form-data; boundary="{BOUNDARY}"'

        parsed = MultipartParser(content_type, multipart_body(b"abc")).parse()

        self.assertEqual(b"abc", parsed["file"]["content"])

    def test_file_like_and_str_bodies(self):
        body = multipart_body(b"\xe9\x00data")

        from_stream = MultipartParser(MULTIPART_CONTENT_TYPE, io.BytesIO(body)).parse()
        from_str = MultipartParser(MULTIPART_CONTENT_TYPE, body.decode("latin-1")).parse()

        self.assertEqual(b"\xe9\x00data", from_stream["file"]["content"])
        self.assertEqual(b"\xe9\x00data", from_str["file"]["content"])

    def test_missing_content_type_defaults(self):
        body = (
            f"--{BOUNDARY}\r\n"
            'Content-Disposition: form-data; name="file"; filename="a.bin"\r\n'
            "\r\n"
            "raw\r\n"
            f"--{BOUNDARY}--\r\n"
        ).encode()

        parsed = MultipartParser(MULTIPART_CONTENT_TYPE, body).parse()

        self.assertEqual("application/octet-stream", parsed["file"]["content_type"])

    def test_empty_body(self):
        self.assertEqual({}, MultipartParser(MULTIPART_CONTENT_TYPE, b"").parse())

    def test_missing_boundary(self):
        with self.assertRaises(ValueError):
            MultipartParser("multipart/form-data", b"")
