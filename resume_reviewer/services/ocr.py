from __future__ import annotations

import logging
from typing import Any

import httpx

from resume_reviewer.core.config import settings
from resume_reviewer.core.errors import OCRServiceError

logger = logging.getLogger(__name__)


def _page_texts(payload: dict[str, Any]) -> list[str]:
    results = payload.get("ParsedResults") or []
    if not isinstance(results, list):
        return []
    texts: list[str] = []
    for result in results:
        if not isinstance(result, dict):
            continue
        value = result.get("ParsedText")
        if isinstance(value, str) and value.strip():
            texts.append(value.strip())
    return texts


def ocr_pdf_text(*, content: bytes, filename: str) -> str:
    """Run a scanned PDF through the OCR service and join the per-page text.

    Returns an empty string when the service finds no text. Transport and
    service failures raise ``OCRServiceError``; nothing is retried.
    """
    data = {
        "filetype": "PDF",
        "OCREngine": str(settings.ocr_engine),
        "isOverlayRequired": "false",
        "scale": "true",
    }
    headers = {"apikey": settings.ocr_api_key or ""}
    files = {"file": (filename or "document.pdf", content, "application/pdf")}

    try:
        with httpx.Client(timeout=settings.ocr_timeout_s) as client:
            response = client.post(settings.ocr_api_url, data=data, files=files, headers=headers)
    except httpx.HTTPError as exc:
        raise OCRServiceError(f"OCR request failed: {exc}") from exc

    if response.status_code >= 400:
        raise OCRServiceError(f"OCR request failed status={response.status_code}")

    try:
        payload = response.json()
    except ValueError as exc:
        raise OCRServiceError("OCR service returned a non-JSON body") from exc
    if not isinstance(payload, dict):
        raise OCRServiceError("OCR service returned an unexpected payload")

    if payload.get("IsErroredOnProcessing"):
        message = payload.get("ErrorMessage") or "unknown error"
        if isinstance(message, list):
            message = "; ".join(str(item) for item in message)
        raise OCRServiceError(f"OCR processing failed: {message}")

    pages = _page_texts(payload)
    logger.info("ocr_completed file=%s bytes=%s pages_with_text=%s", filename, len(content), len(pages))
    return "\n".join(pages)
