import io
import re
import logging
from typing import Optional

from pypdf import PdfReader

from utils.exceptions import ExtractionError

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
MIN_TEXT_LENGTH = 50


def is_pdf_upload(content_type: Optional[str], filename: Optional[str] = None) -> bool:
    """True when an upload declares itself a PDF."""
    if content_type:
        return content_type.split(";")[0].strip().lower() == PDF_CONTENT_TYPE
    # Some clients omit the part content type entirely
    return bool(filename and filename.lower().endswith(".pdf"))


def clean_extracted_text(text: str) -> str:
    """Collapse blank-line runs, then every whitespace run, to single separators."""
    text = re.sub(r"\n\s*\n", "\n", text)
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def extract_text_from_pdf(data: bytes) -> str:
    """
    Extract plain text from an in-memory PDF.

    Args:
        data: Raw bytes of the uploaded file

    Returns:
        Text of every page with whitespace collapsed

    Raises:
        ExtractionError: If the PDF cannot be parsed or yields under
            MIN_TEXT_LENGTH characters (typically a scanned document)
    """
    try:
        reader = PdfReader(io.BytesIO(data))
        page_texts = [page.extract_text() or "" for page in reader.pages]
    except Exception as e:
        logger.error(f"Failed to parse PDF: {e}")
        raise ExtractionError(
            f"Failed to read PDF file: {e}",
            context={"size_bytes": len(data)},
        ) from e

    logger.info(f"PDF loaded successfully. Pages: {len(page_texts)}")

    clean_text = clean_extracted_text("\n".join(page_texts))

    if len(clean_text) < MIN_TEXT_LENGTH:
        logger.warning(f"Extracted text too short: {len(clean_text)} chars")
        raise ExtractionError(
            "PDF content is empty or too short. If this is a scanned document, "
            "please use a text-based PDF.",
            error_code="PDF_NO_TEXT",
            context={"pages": len(page_texts), "chars": len(clean_text)},
        )

    logger.info(f"Extracted {len(clean_text)} characters from {len(page_texts)} pages")
    return clean_text
