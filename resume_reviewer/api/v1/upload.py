import logging

from fastapi import APIRouter, File, Request, UploadFile
from starlette.concurrency import run_in_threadpool

from resume_reviewer.core.config import settings
from resume_reviewer.core.errors import (
    BadRequestError,
    InternalServiceError,
    PayloadTooLargeError,
    ReviewAPIError,
)
from resume_reviewer.core.rate_limit import rate_limit
from resume_reviewer.schemas.review import UploadResponse
from resume_reviewer.services.extraction import extract_text

logger = logging.getLogger(__name__)

router = APIRouter()

READ_CHUNK_BYTES = 1024 * 64


async def _read_limited(file: UploadFile, limit: int) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(READ_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            raise PayloadTooLargeError(
                f"File too large. Maximum allowed size is {limit // (1024 * 1024)} MB."
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/upload", response_model=UploadResponse)
@rate_limit()
async def upload_resume(request: Request, file: UploadFile | None = File(default=None)):
    _ = request
    if file is None:
        raise BadRequestError("No file uploaded")

    filename = file.filename or "uploaded-file"
    mime = file.content_type or ""
    content = await _read_limited(file, settings.max_upload_bytes)

    try:
        text = await run_in_threadpool(extract_text, content=content, mime=mime, filename=filename)
    except ReviewAPIError:
        raise
    except Exception as exc:
        logger.exception("upload_parse_failed file=%s mime=%s bytes=%s", filename, mime, len(content))
        raise InternalServiceError("Failed to parse file") from exc

    logger.info("upload_extracted file=%s mime=%s bytes=%s chars=%s", filename, mime, len(content), len(text))
    return UploadResponse(text=text)
