"""Unit tests for the extraction pipeline."""

import re
import unittest

from fake_engine import FakeDocument, FakePage, fragment, image_size, text_pages

from pdf_reader.middleware.exceptions import ExtractionError
from pdf_reader.models.domain import (
    CanvasSet,
    ImageSet,
    Mode,
    PlainText,
    StructuredHtml,
)
from pdf_reader.pdf_processor.pipeline import ExtractionPipeline

SPAN = re.compile(r"<span style=\"[^\"]*\">")


class TestTextMode(unittest.IsolatedAsyncioTestCase):
    """Test cases for plain text extraction."""

    def setUp(self):
        self.pipeline = ExtractionPipeline()

    async def test_three_pages(self):
        """Fragments are space-joined, pages joined by a blank line."""
        doc = FakeDocument(
            text_pages(["Hello", "world"], ["Second", "page"], ["Third"])
        )

        result = await self.pipeline.run(doc, Mode.TEXT)

        self.assertIsInstance(result, PlainText)
        self.assertEqual("Hello world\n\nSecond page\n\nThird", result.text)

    async def test_segment_count_equals_page_count(self):
        """One blank-line separated segment per page."""
        doc = FakeDocument(text_pages(["a"], ["b"], ["c"], ["d"]))

        result = await self.pipeline.run(doc, Mode.TEXT)

        self.assertEqual(doc.page_count, len(result.text.split("\n\n")))

    async def test_order_independent_of_completion(self):
        """Later pages finishing first do not reorder the text."""
        pages = [
            FakePage(1, [fragment("one")], delay=0.03),
            FakePage(2, [fragment("two")], delay=0.02),
            FakePage(3, [fragment("three")], delay=0.0),
        ]

        result = await self.pipeline.run(FakeDocument(pages), Mode.TEXT)

        self.assertEqual("one\n\ntwo\n\nthree", result.text)

    async def test_zero_pages(self):
        """A document without pages yields empty text."""
        result = await self.pipeline.run(FakeDocument([]), Mode.TEXT)

        self.assertEqual("", result.text)

    async def test_page_failure_aborts(self):
        """A failed page aborts the run with ExtractionError."""
        pages = text_pages(["ok"], ["broken"])
        pages[1].fail_text = True

        with self.assertRaises(ExtractionError) as ctx:
            await self.pipeline.run(FakeDocument(pages), Mode.TEXT)

        self.assertEqual(2, ctx.exception.details["page"])

    async def test_idempotent(self):
        """Re-running on the same document yields identical output."""
        doc = FakeDocument(text_pages(["a", "b"], ["c"]))

        first = await self.pipeline.run(doc, Mode.TEXT)
        second = await self.pipeline.run(doc, Mode.TEXT)

        self.assertEqual(first.text, second.text)


class TestHtmlMode(unittest.IsolatedAsyncioTestCase):
    """Test cases for positioned HTML extraction."""

    def setUp(self):
        self.pipeline = ExtractionPipeline()

    async def test_one_span_per_fragment(self):
        """Every fragment becomes exactly one positioned span."""
        doc = FakeDocument(text_pages(["a", "b", "c"], [], ["d"]))

        result = await self.pipeline.run(doc, Mode.HTML)

        self.assertIsInstance(result, StructuredHtml)
        self.assertEqual(4, len(SPAN.findall(result.html)))
        self.assertEqual(3, result.html.count('<div class="pdf-page">'))

    async def test_style_from_transform(self):
        """Font size, left and top come from a, e and f."""
        doc = FakeDocument([FakePage(1, [fragment("Title", size=24, x=72, y=700.5)])])

        result = await self.pipeline.run(doc, Mode.HTML)

        self.assertEqual(
            '<div class="pdf-page">'
            '<span style="font-size:24px; left:72px; top:700.5px;">Title</span>'
            "</div>",
            result.html,
        )

    async def test_pages_in_ascending_order(self):
        """Pages appear in index order whatever their fetch time."""
        pages = [
            FakePage(1, [fragment("first")], delay=0.02),
            FakePage(2, [fragment("second")], delay=0.0),
        ]

        result = await self.pipeline.run(FakeDocument(pages), Mode.HTML)

        self.assertLess(result.html.index("first"), result.html.index("second"))

    async def test_text_is_escaped(self):
        """Markup characters in the text are escaped."""
        doc = FakeDocument([FakePage(1, [fragment("a < b & c")])])

        result = await self.pipeline.run(doc, Mode.HTML)

        self.assertIn(">a &lt; b &amp; c</span>", result.html)

    async def test_zero_pages(self):
        """A document without pages yields no page blocks."""
        result = await self.pipeline.run(FakeDocument([]), Mode.HTML)

        self.assertEqual("", result.html)

    async def test_page_failure_aborts(self):
        """A failed page aborts the run."""
        pages = text_pages(["ok"], ["broken"])
        pages[1].fail_text = True

        with self.assertRaises(ExtractionError):
            await self.pipeline.run(FakeDocument(pages), Mode.HTML)

    async def test_idempotent(self):
        doc = FakeDocument(text_pages(["a", "b"], ["c"]))

        first = await self.pipeline.run(doc, Mode.HTML)
        second = await self.pipeline.run(doc, Mode.HTML)

        self.assertEqual(first.html, second.html)


class TestImageMode(unittest.IsolatedAsyncioTestCase):
    """Test cases for per-page image export."""

    def setUp(self):
        self.pipeline = ExtractionPipeline(scale=1.5)

    async def test_images_in_page_order(self):
        """images[i] is page i+1 even when later pages render first."""
        pages = [
            FakePage(1, width=100, delay=0.03),
            FakePage(2, width=200, delay=0.02),
            FakePage(3, width=300, delay=0.0),
        ]

        result = await self.pipeline.run(FakeDocument(pages), Mode.IMAGE)

        self.assertIsInstance(result, ImageSet)
        self.assertEqual(3, len(result.images))
        self.assertEqual(
            [(150, 75), (300, 75), (450, 75)],
            [image_size(url) for url in result.images],
        )

    async def test_zero_pages(self):
        result = await self.pipeline.run(FakeDocument([]), Mode.IMAGE)

        self.assertEqual([], result.images)

    async def test_render_failure_aborts(self):
        """No partial image list is delivered."""
        pages = [FakePage(1), FakePage(2, fail_render=True)]

        with self.assertRaises(ExtractionError):
            await self.pipeline.run(FakeDocument(pages), Mode.IMAGE)

    async def test_all_pages_finish_before_failure_is_raised(self):
        """Sibling renders are awaited, not left running."""
        pages = [FakePage(1, fail_render=True), FakePage(2, delay=0.02)]

        with self.assertRaises(ExtractionError):
            await self.pipeline.run(FakeDocument(pages), Mode.IMAGE)

        self.assertEqual(1, pages[1].render_calls)

    async def test_blank_render_is_an_error(self):
        """A page that leaves the canvas empty fails the export."""
        pages = [FakePage(1), FakePage(2, blank_render=True)]

        with self.assertRaisesRegex(ExtractionError, "Page 2 produced no image"):
            await self.pipeline.run(FakeDocument(pages), Mode.IMAGE)


class TestCanvasMode(unittest.IsolatedAsyncioTestCase):
    """Test cases for canvas rendering."""

    def setUp(self):
        self.pipeline = ExtractionPipeline(scale=1.5)

    async def test_one_slot_per_page(self):
        """Slots are numbered from 1 and rendered at 1.5x."""
        pages = [FakePage(1, width=100, height=50), FakePage(2, width=200, height=100)]

        result = await self.pipeline.run(FakeDocument(pages), Mode.CANVAS)

        self.assertIsInstance(result, CanvasSet)
        self.assertEqual([1, 2], [slot.page_id for slot in result.slots])
        self.assertEqual((150, 75), (result.slots[0].canvas.width, result.slots[0].canvas.height))
        self.assertEqual((300, 150), (result.slots[1].canvas.width, result.slots[1].canvas.height))
        self.assertTrue(all(slot.is_rendered for slot in result.slots))

    async def test_failed_page_does_not_abort_siblings(self):
        """A render failure stays in its slot."""
        pages = [FakePage(1), FakePage(2, fail_render=True), FakePage(3)]

        result = await self.pipeline.run(FakeDocument(pages), Mode.CANVAS)

        self.assertEqual([2], result.failed_pages)
        self.assertTrue(result.slots[0].is_rendered)
        self.assertFalse(result.slots[1].is_rendered)
        self.assertIn("cannot render page 2", result.slots[1].error)
        self.assertTrue(result.slots[2].is_rendered)

    async def test_blank_render_marks_slot_failed(self):
        pages = [FakePage(1, blank_render=True), FakePage(2)]

        result = await self.pipeline.run(FakeDocument(pages), Mode.CANVAS)

        self.assertEqual([1], result.failed_pages)
        self.assertIn("produced no image", result.slots[0].error)
        self.assertTrue(result.slots[1].is_rendered)

    async def test_zero_pages(self):
        result = await self.pipeline.run(FakeDocument([]), Mode.CANVAS)

        self.assertEqual([], result.slots)
