"""Tests for the PDFium document engine, run against real documents."""

import ctypes
import io
import unittest

import pypdfium2 as pdfium
import pypdfium2.raw as pdfium_c

from pdf_reader.middleware.exceptions import LoadError
from pdf_reader.models.domain import Canvas, Mode
from pdf_reader.pdf_processor.engine import PdfiumEngine
from pdf_reader.pdf_processor.loader import DocumentLoader
from pdf_reader.pdf_processor.pipeline import ExtractionPipeline


def add_text(pdf: pdfium.PdfDocument, page: pdfium.PdfPage, text: str, x: float, y: float):
    """Place a Helvetica 12pt text object on the page."""
    font = pdfium_c.FPDFText_LoadStandardFont(pdf.raw, b"Helvetica")
    obj = pdfium_c.FPDFPageObj_CreateTextObj(pdf.raw, font, 12)
    buffer = ctypes.create_string_buffer((text + "\x00").encode("utf-16-le"))
    pdfium_c.FPDFText_SetText(obj, ctypes.cast(buffer, ctypes.POINTER(pdfium_c.FPDF_WCHAR)))
    pdfium_c.FPDFPageObj_Transform(obj, 1, 0, 0, 1, x, y)
    pdfium_c.FPDFPage_InsertObject(page.raw, obj)


def build_pdf(sizes, texts=None) -> bytes:
    """Create a PDF with one page per (width, height) pair."""
    pdf = pdfium.PdfDocument.new()
    for index, (width, height) in enumerate(sizes):
        page = pdf.new_page(width, height)
        for text, x, y in (texts or {}).get(index, []):
            add_text(pdf, page, text, x, y)
        pdfium_c.FPDFPage_GenerateContent(page.raw)
        page.close()
    buffer = io.BytesIO()
    pdf.save(buffer)
    pdf.close()
    return buffer.getvalue()


def build_form_pdf(text: str, x: float, y: float, offset) -> bytes:
    """Create a one-page PDF whose text sits inside a form XObject moved by offset."""
    src = pdfium.PdfDocument(build_pdf([(200, 100)], texts={0: [(text, x, y)]}))
    pdf = pdfium.PdfDocument.new()
    page = pdf.new_page(600, 600)

    xobject = pdfium_c.FPDF_NewXObjectFromPage(pdf.raw, src.raw, 0)
    form = pdfium_c.FPDF_NewFormObjectFromXObject(xobject)
    pdfium_c.FPDFPageObj_Transform(form, 1, 0, 0, 1, *offset)
    pdfium_c.FPDFPage_InsertObject(page.raw, form)
    pdfium_c.FPDF_CloseXObject(xobject)
    pdfium_c.FPDFPage_GenerateContent(page.raw)
    page.close()

    buffer = io.BytesIO()
    pdf.save(buffer)
    pdf.close()
    src.close()
    return buffer.getvalue()


class TestPdfiumEngine(unittest.IsolatedAsyncioTestCase):
    """Test cases for PdfiumEngine."""

    def setUp(self):
        self.engine = PdfiumEngine()

    def tearDown(self):
        self.engine.shutdown()

    async def test_open_document(self):
        doc = await self.engine.open_document(build_pdf([(200, 100), (300, 400)]))

        self.assertEqual(2, doc.page_count)
        await doc.close()

    async def test_page_size_and_render(self):
        """Rendering at 1.5x yields a bitmap of the scaled page size."""
        doc = await self.engine.open_document(build_pdf([(200, 100)]))
        page = await doc.get_page(1)

        viewport = page.get_viewport(1.5)
        canvas = Canvas.from_viewport(viewport)
        await page.render_to(canvas, viewport)

        self.assertEqual((300.0, 150.0), (viewport.width, viewport.height))
        self.assertEqual((300, 150), canvas.image.size)
        self.assertEqual("RGBA", canvas.image.mode)
        await doc.close()

    async def test_text_fragments(self):
        data = build_pdf([(200, 100)], texts={0: [("Hello", 20, 50)]})
        doc = await self.engine.open_document(data)
        page = await doc.get_page(1)

        fragments = await page.get_text_fragments()

        self.assertEqual(1, len(fragments))
        self.assertEqual("Hello", fragments[0].text)
        self.assertAlmostEqual(12.0, fragments[0].font_size, places=3)
        self.assertAlmostEqual(20.0, fragments[0].position[0], places=3)
        self.assertAlmostEqual(50.0, fragments[0].position[1], places=3)
        await doc.close()

    async def test_text_inside_form_is_in_page_space(self):
        """Form matrices are applied to the text they contain."""
        doc = await self.engine.open_document(build_form_pdf("Hello", 10, 10, (200, 300)))
        page = await doc.get_page(1)

        fragments = await page.get_text_fragments()

        self.assertEqual(1, len(fragments))
        self.assertAlmostEqual(12.0, fragments[0].font_size, places=3)
        self.assertAlmostEqual(210.0, fragments[0].position[0], places=3)
        self.assertAlmostEqual(310.0, fragments[0].position[1], places=3)
        await doc.close()

    async def test_blank_page_has_no_fragments(self):
        doc = await self.engine.open_document(build_pdf([(200, 100)]))
        page = await doc.get_page(1)

        self.assertEqual([], await page.get_text_fragments())
        await doc.close()

    async def test_page_out_of_range(self):
        doc = await self.engine.open_document(build_pdf([(200, 100)]))

        with self.assertRaises(IndexError):
            await doc.get_page(2)
        with self.assertRaises(IndexError):
            await doc.get_page(0)
        await doc.close()

    async def test_closed_document(self):
        doc = await self.engine.open_document(build_pdf([(200, 100)]))
        await doc.close()
        await doc.close()

        with self.assertRaises(ValueError):
            await doc.get_page(1)

    async def test_invalid_bytes(self):
        """Garbage is rejected with a LoadError through the loader."""
        with self.assertRaises(LoadError):
            await DocumentLoader(self.engine).open(b"this is not a pdf")

    async def test_text_pipeline_end_to_end(self):
        data = build_pdf(
            [(200, 100), (200, 100)],
            texts={0: [("First", 10, 80)], 1: [("Second", 10, 80)]},
        )
        doc = await DocumentLoader(self.engine).open(data)

        result = await ExtractionPipeline().run(doc, Mode.TEXT)

        self.assertEqual("First\n\nSecond", result.text)
        await doc.close()
