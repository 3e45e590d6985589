"""Document engine backed by PDFium (pypdfium2).

PDFium is not thread-safe, so every call into the library goes through one
dedicated worker thread. The handles below only expose coroutines.
"""

import asyncio
import ctypes
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, List, Optional

import pypdfium2 as pdfium
import pypdfium2.raw as pdfium_c
from aws_lambda_powertools.logging import Logger
from PIL.Image import Image
from pypdfium2.version import PDFIUM_INFO

from ..models.domain import Canvas, TextFragment, Viewport
from ..models.domain.fragment import Transform

logger = Logger()

# nesting limit when descending into form XObjects
MAX_FORM_DEPTH = 15


def get_object_text(obj: pdfium.PdfObject, textpage: pdfium.PdfTextPage) -> str:
    """
    Get the text of a text page object.

    Args:
        obj (pdfium.PdfObject): A text page object.
        textpage (pdfium.PdfTextPage): The text page of the object's page.

    Returns:
        str: The decoded text, empty if the object has none.
    """
    # the returned length is in bytes and includes the UTF-16 terminator
    n_bytes = pdfium_c.FPDFTextObj_GetText(obj.raw, textpage.raw, None, 0)
    if n_bytes <= 2:
        return ""

    buffer = ctypes.create_string_buffer(n_bytes)
    buffer_ptr = ctypes.cast(buffer, ctypes.POINTER(pdfium_c.FPDF_WCHAR))
    pdfium_c.FPDFTextObj_GetText(obj.raw, textpage.raw, buffer_ptr, n_bytes)
    return buffer.raw[: n_bytes - 2].decode("utf-16-le", errors="ignore")


def get_object_transform(obj: pdfium.PdfObject, matrix: pdfium.PdfMatrix) -> Transform:
    """
    Combine a page-space matrix and the font size into a text-space transform.

    Args:
        obj (pdfium.PdfObject): A text page object.
        matrix (pdfium.PdfMatrix): The object's matrix in page space.

    Returns:
        Transform: (a, b, c, d, e, f) where a is the effective font size.
    """
    size = ctypes.c_float(1.0)
    if not pdfium_c.FPDFTextObj_GetFontSize(obj.raw, ctypes.byref(size)):
        size.value = 1.0

    font_size = size.value
    return (
        matrix.a * font_size,
        matrix.b * font_size,
        matrix.c * font_size,
        matrix.d * font_size,
        matrix.e,
        matrix.f,
    )


def extract_fragments(page: pdfium.PdfPage) -> List[TextFragment]:
    """
    Extract positioned text runs from a PDF page, in content stream order.

    Text inside form XObjects is included. Object matrices are relative to
    the enclosing form, so they are composed with the form matrices down to
    page space.

    Args:
        page (pdfium.PdfPage): The PDF page object.

    Returns:
        list[TextFragment]: One fragment per text object.
    """
    textpage = page.get_textpage()
    fragments = []
    # page-space matrices of the forms enclosing the current object
    forms: List[pdfium.PdfMatrix] = []
    try:
        for obj in page.get_objects(max_depth=MAX_FORM_DEPTH):
            del forms[obj.level:]
            matrix = obj.get_matrix()
            if forms:
                matrix = matrix.multiply(forms[-1])

            if obj.type == pdfium_c.FPDF_PAGEOBJ_FORM:
                forms.append(matrix)
            elif obj.type == pdfium_c.FPDF_PAGEOBJ_TEXT:
                fragments.append(
                    TextFragment(
                        text=get_object_text(obj, textpage),
                        transform=get_object_transform(obj, matrix),
                    )
                )
    finally:
        textpage.close()
    return fragments


def render_page(page: pdfium.PdfPage, scale: float) -> Image:
    """
    Renders a PDF page to an image.

    Args:
        page (pdfium.PdfPage): The PDF page object.
        scale (float): The scale factor for rendering.

    Returns:
        Image: The rendered PIL image of the page.
    """
    bitmap = page.render(
        scale=scale,
        draw_annots=True,
        prefer_bgrx=True,
    )
    return bitmap.to_pil().convert("RGBA")


class PdfiumPage:
    """Page handle over a pypdfium2 page."""

    def __init__(
        self, engine: "PdfiumEngine", page: pdfium.PdfPage, number: int
    ) -> None:
        self._engine = engine
        self._page = page
        self.number = number
        self.width, self.height = page.get_size()

    async def get_text_fragments(self) -> List[TextFragment]:
        return await self._engine.call(extract_fragments, self._page)

    def get_viewport(self, scale: float) -> Viewport:
        return Viewport(width=self.width * scale, height=self.height * scale, scale=scale)

    async def render_to(self, canvas: Canvas, viewport: Viewport) -> None:
        image = await self._engine.call(render_page, self._page, viewport.scale)
        canvas.image = image
        canvas.width, canvas.height = image.size


class PdfiumDocument:
    """Document handle over a pypdfium2 document."""

    def __init__(
        self, engine: "PdfiumEngine", pdf: pdfium.PdfDocument, page_count: int
    ) -> None:
        self._engine = engine
        self._pdf: Optional[pdfium.PdfDocument] = pdf
        self.page_count = page_count

    def _load_page(self, index: int) -> PdfiumPage:
        return PdfiumPage(self._engine, self._pdf[index - 1], index)

    async def get_page(self, index: int) -> PdfiumPage:
        if not 1 <= index <= self.page_count:
            raise IndexError(
                f"Page {index} is out of range (1-{self.page_count})"
            )
        if self._pdf is None:
            raise ValueError("Document is closed.")
        return await self._engine.call(self._load_page, index)

    async def close(self) -> None:
        if self._pdf is None:
            return
        pdf, self._pdf = self._pdf, None
        # closing the document also closes its pages
        await self._engine.call(pdf.close)


class PdfiumEngine:
    """Document engine running pypdfium2 on a single worker thread."""

    def __init__(self, executor: Optional[ThreadPoolExecutor] = None) -> None:
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="pdfium"
        )

    @classmethod
    def create(cls) -> "PdfiumEngine":
        """Engine factory used by the bootstrap."""
        logger.info("Loading PDFium engine", extra={"pdfium": str(PDFIUM_INFO)})
        return cls()

    async def call(self, func: Callable[..., Any], *args, **kwargs) -> Any:
        """Run a library call on the engine thread."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, partial(func, *args, **kwargs))

    async def open_document(self, data: bytes) -> PdfiumDocument:
        pdf = await self.call(pdfium.PdfDocument, data)
        page_count = await self.call(len, pdf)
        return PdfiumDocument(self, pdf, page_count)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)
