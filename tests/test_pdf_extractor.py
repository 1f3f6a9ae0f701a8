import unittest

from pdf_fixtures import build_pdf, sample_pdf
from services.pdf_extractor import (
    MIN_TEXT_LENGTH,
    clean_extracted_text,
    extract_text_from_pdf,
    is_pdf_upload,
)
from utils.exceptions import ExtractionError


class TestExtractTextFromPdf(unittest.TestCase):

    def test_extracts_text_from_every_page(self):
        text = extract_text_from_pdf(sample_pdf())

        self.assertIn("Photosynthesis", text)
        self.assertIn("Cellular respiration", text)
        self.assertGreaterEqual(len(text), MIN_TEXT_LENGTH)

    def test_output_has_no_newlines_or_double_spaces(self):
        text = extract_text_from_pdf(sample_pdf())

        self.assertNotIn("\n", text)
        self.assertNotIn("  ", text)
        self.assertEqual(text, text.strip())

    def test_invalid_bytes_raise_extraction_error(self):
        with self.assertRaises(ExtractionError) as ctx:
            extract_text_from_pdf(b"this is definitely not a pdf file")

        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.error_code, "PDF_EXTRACTION_FAILED")

    def test_empty_bytes_raise_extraction_error(self):
        with self.assertRaises(ExtractionError):
            extract_text_from_pdf(b"")

    def test_blank_page_is_treated_as_scanned(self):
        with self.assertRaises(ExtractionError) as ctx:
            extract_text_from_pdf(build_pdf([[]]))

        self.assertEqual(ctx.exception.error_code, "PDF_NO_TEXT")

    def test_short_text_is_rejected(self):
        with self.assertRaises(ExtractionError) as ctx:
            extract_text_from_pdf(build_pdf([["Too short."]]))

        self.assertEqual(ctx.exception.error_code, "PDF_NO_TEXT")


class TestHelpers(unittest.TestCase):

    def test_clean_extracted_text_collapses_whitespace(self):
        raw = "  Intro\n\n\n  to   biology\t\tand\n chemistry  "
        self.assertEqual(clean_extracted_text(raw), "Intro to biology and chemistry")

    def test_is_pdf_upload(self):
        self.assertTrue(is_pdf_upload("application/pdf", "notes.pdf"))
        self.assertTrue(is_pdf_upload("application/pdf; charset=binary"))
        self.assertTrue(is_pdf_upload(None, "Notes.PDF"))
        self.assertFalse(is_pdf_upload("text/plain", "notes.pdf"))
        self.assertFalse(is_pdf_upload(None, "notes.docx"))
        self.assertFalse(is_pdf_upload(None, None))


if __name__ == "__main__":
    unittest.main()
