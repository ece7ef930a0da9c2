import io
import logging
from typing import Optional

import docx
import PyPDF2

logger = logging.getLogger(__name__)

DOCX_SUFFIX = ".docx"
DOCX_MAGIC = b"PK\x03\x04"

PDF_SUFFIX = ".pdf"
PDF_MAGIC = b"%PDF"


def _is_docx(data: bytes, filename: Optional[str]) -> bool:
    if filename and filename.lower().endswith(DOCX_SUFFIX):
        return True
    return filename is None and data.startswith(DOCX_MAGIC)


def _is_pdf(data: bytes, filename: Optional[str]) -> bool:
    # PDFs are binary whatever they are called
    if filename and filename.lower().endswith(PDF_SUFFIX):
        return True
    return data.startswith(PDF_MAGIC)


def _docx_text(data: bytes) -> str:
    document = docx.Document(io.BytesIO(data))
    return "\n".join(p.text for p in document.paragraphs)


def _pdf_text(data: bytes) -> str:
    reader = PyPDF2.PdfReader(io.BytesIO(data))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def _plain_text(data: bytes) -> str:
    # utf-8-sig drops a leading BOM
    return data.decode("utf-8-sig", errors="replace")


def extract_text(data: bytes, filename: Optional[str] = None) -> str:
    """
    Best-effort plain text from an uploaded file.
    PDFs go through PyPDF2, Word documents through python-docx, everything
    else is decoded as UTF-8.
    Never raises: a parser failure is reported inside the returned text.
    """
    logger.info("[STAGE: PARSE] Parsing document: %s (%d bytes)", filename, len(data), extra={"stage": "parse"})

    try:
        if _is_pdf(data, filename):
            content = _pdf_text(data)
        elif _is_docx(data, filename):
            content = _docx_text(data)
        else:
            content = _plain_text(data)
    except Exception as e:
        logger.error("[STAGE: ERROR] Failed to parse document: %s", e, extra={"stage": "parse"})
        return f"Error parsing document: {e}"

    if not content or not content.strip():
        logger.warning("[STAGE: PARSE] Document parsed but returned empty content.", extra={"stage": "parse"})
        return ""

    logger.info("[STAGE: PARSE] Successfully extracted %d characters.", len(content), extra={"stage": "parse"})
    return content.strip()
