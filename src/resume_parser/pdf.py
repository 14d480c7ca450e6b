"""
PDF upload validation and text extraction.
Uses pdfplumber, falling back to pypdf for files it cannot read.
"""

import io
from typing import Optional

import pdfplumber
import pypdf
from loguru import logger

from shared.errors import ValidationError

PDF_CONTENT_TYPE = "application/pdf"
PDF_MAGIC = b"%PDF"


def validate_pdf_upload(
    content: Optional[bytes],
    content_type: Optional[str],
    filename: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,
) -> bytes:
    """
    Check an uploaded file is a PDF within the size limit.

    Raises:
        ValidationError: Missing, non-PDF or oversized file
    """
    if not content:
        raise ValidationError("No file uploaded. Please upload a PDF resume.")

    is_pdf_type = content_type == PDF_CONTENT_TYPE
    is_pdf_name = bool(filename) and filename.lower().endswith(".pdf")
    if not (is_pdf_type or (is_pdf_name and content.startswith(PDF_MAGIC))):
        raise ValidationError("Only PDF files are allowed.")

    if len(content) > max_bytes:
        raise ValidationError(
            f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB."
        )

    return content


def extract_text_from_pdf(pdf_bytes: bytes) -> str:
    """
    Extract plain text from PDF bytes.

    Raises:
        ValidationError: The PDF cannot be read or holds no text
    """
    text = ""

    try:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            for page in pdf.pages:
                page_text = page.extract_text()
                if page_text:
                    text += page_text + "\n"
    except Exception as e:
        logger.warning(f"pdfplumber failed: {e}")

        try:
            reader = pypdf.PdfReader(io.BytesIO(pdf_bytes))
            for page in reader.pages:
                text += (page.extract_text() or "") + "\n"
        except Exception as e2:
            logger.error(f"pypdf also failed: {e2}")
            raise ValidationError(
                "Could not read the PDF file. Please upload a valid PDF."
            ) from e2

    if not text.strip():
        raise ValidationError(
            "Could not extract text from PDF. "
            "Please ensure the PDF contains readable text."
        )

    logger.debug(f"Extracted {len(text)} characters from PDF")
    return text.strip()
