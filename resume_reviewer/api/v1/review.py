import logging

from fastapi import APIRouter, Depends, Request

from resume_reviewer.ai.factory import get_ai_client
from resume_reviewer.ai.types import AIClient
from resume_reviewer.core.errors import InternalServiceError, ReviewAPIError
from resume_reviewer.core.rate_limit import rate_limit
from resume_reviewer.schemas.review import ReviewRequest, ReviewResult
from resume_reviewer.services.review_service import run_review

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/review", response_model=ReviewResult)
@rate_limit()
async def review_resume(
    request: Request,
    payload: ReviewRequest,
    client: AIClient = Depends(get_ai_client),
):
    _ = request
    try:
        return await run_review(payload, client)
    except ReviewAPIError:
        raise
    except Exception as exc:
        logger.exception("review_failed resume_chars=%s", len(payload.resume))
        raise InternalServiceError("Failed to review resume") from exc
