from __future__ import annotations

from typing import Any

from fastapi import status


class ReviewAPIError(RuntimeError):
    """Failure that maps onto a client-visible status code and JSON payload."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def payload(self) -> dict[str, Any]:
        return {"error": self.message}


class BadRequestError(ReviewAPIError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnsupportedFileTypeError(BadRequestError):
    pass


class PayloadTooLargeError(ReviewAPIError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


class NoExtractableTextError(ReviewAPIError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(
        self,
        message: str,
        *,
        hint: str,
        size: int,
        name: str,
        ext: str,
        mime: str,
    ):
        super().__init__(message)
        self.hint = hint
        self.size = size
        self.name = name
        self.ext = ext
        self.mime = mime

    def payload(self) -> dict[str, Any]:
        return {
            "error": self.message,
            "hint": self.hint,
            "bytes": self.size,
            "name": self.name,
            "ext": self.ext,
            "mime": self.mime,
        }


class LLMResponseError(ReviewAPIError):
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, message: str, *, raw: str):
        super().__init__(message)
        self.raw = raw

    def payload(self) -> dict[str, Any]:
        return {"error": self.message, "raw": self.raw}


class OCRServiceError(RuntimeError):
    """OCR upstream failed; clients only ever see the generic upload failure."""


class InternalServiceError(ReviewAPIError):
    pass
