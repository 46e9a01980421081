from __future__ import annotations

from io import BytesIO
import logging
from zipfile import ZipFile

import defusedxml.ElementTree as ET
from docx import Document
from docx.oxml.ns import qn
from docx.text.paragraph import Paragraph
from pypdf import PdfReader

from resume_reviewer.core.config import settings
from resume_reviewer.core.errors import NoExtractableTextError
from resume_reviewer.services.file_security import (
    detect_kind,
    extension_from_filename,
    normalize_mime,
    validate_upload_signature,
)
from resume_reviewer.services.ocr import ocr_pdf_text

logger = logging.getLogger(__name__)

NO_TEXT_MESSAGE = "No extractable text found in this file."
OCR_DISABLED_HINT = (
    "This looks like a scanned or image-only document. Enable OCR on the server "
    "(OCR_ENABLED=1 with OCR_API_KEY) or upload a text-based PDF/DOCX, or paste the resume text."
)
OCR_EMPTY_HINT = (
    "OCR could not read any text from this document. Upload a text-based PDF/DOCX "
    "or paste the resume text."
)
EMPTY_DOCUMENT_HINT = "The document appears to be empty. Upload a text-based PDF/DOCX or paste the resume text."


def _extract_pdf_text(content: bytes) -> str:
    reader = PdfReader(BytesIO(content))
    page_chunks: list[str] = []
    for page in reader.pages:
        page_text = page.extract_text() or ""
        if page_text.strip():
            page_chunks.append(page_text)
    return "\n\n".join(page_chunks)


def _extract_docx_text_fallback(content: bytes) -> str:
    with ZipFile(BytesIO(content)) as archive:
        raw = archive.read("word/document.xml")
    root = ET.fromstring(raw)
    paragraphs: list[str] = []
    for paragraph in root.iter():
        if not paragraph.tag.endswith("}p"):
            continue
        texts = [node.text for node in paragraph.iter() if node.tag.endswith("}t") and node.text]
        if texts:
            paragraphs.append("".join(texts))
    return "\n".join(paragraphs)


def _extract_docx_text(content: bytes) -> str:
    try:
        doc = Document(BytesIO(content))
    except Exception as exc:  # noqa: BLE001 - python-docx rejects packages missing optional parts
        logger.info("docx_parser_fallback reason=%s", exc)
        return _extract_docx_text_fallback(content)
    # Every body paragraph in document order, table cells included.
    paragraphs = (Paragraph(element, doc) for element in doc.element.body.iter(qn("w:p")))
    return "\n".join(paragraph.text for paragraph in paragraphs)


def _decode_text(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


def strip_nul(text: str) -> str:
    return text.replace("\x00", "")


def extract_text(*, content: bytes, mime: str, filename: str) -> str:
    """Return the plain text of an uploaded resume.

    Dispatches on the declared MIME type, falling back to the extension when
    the MIME type is generic. Scanned PDFs go through OCR when it is enabled.
    Raises ``UnsupportedFileTypeError`` for formats or signatures we do not
    accept and ``NoExtractableTextError`` when nothing readable comes out.
    """
    kind = detect_kind(mime=mime, filename=filename)
    validate_upload_signature(kind=kind, content=content)

    if kind == "pdf":
        text = _extract_pdf_text(content)
    elif kind == "docx":
        text = _extract_docx_text(content)
    else:
        text = _decode_text(content)

    text = strip_nul(text)
    if text.strip():
        return text

    hint = EMPTY_DOCUMENT_HINT
    if kind == "pdf":
        if settings.ocr_enabled:
            logger.info("pdf_text_layer_empty file=%s bytes=%s running_ocr=true", filename, len(content))
            ocr_text = strip_nul(ocr_pdf_text(content=content, filename=filename))
            if ocr_text.strip():
                return ocr_text
            hint = OCR_EMPTY_HINT
        else:
            hint = OCR_DISABLED_HINT

    logger.warning(
        "no_extractable_text file=%s bytes=%s kind=%s mime=%s ocr_enabled=%s",
        filename,
        len(content),
        kind,
        mime,
        settings.ocr_enabled,
    )
    raise NoExtractableTextError(
        NO_TEXT_MESSAGE,
        hint=hint,
        size=len(content),
        name=filename,
        ext=extension_from_filename(filename),
        mime=normalize_mime(mime),
    )
