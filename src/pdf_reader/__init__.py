"""PDF reader service: canvas, text, HTML and image output for uploaded PDFs."""

__version__ = "0.1.0"
