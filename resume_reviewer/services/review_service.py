from __future__ import annotations

import hashlib
import logging
import time

from resume_reviewer.ai.types import AIClient
from resume_reviewer.schemas.review import ReviewRequest, ReviewResult
from resume_reviewer.services.normalizer import normalize_review
from resume_reviewer.services.prompting import build_review_prompt

logger = logging.getLogger(__name__)


def _short_hash(value: str | None) -> str:
    normalized = (value or "").strip()
    if not normalized:
        return ""
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:12]


async def run_review(payload: ReviewRequest, client: AIClient) -> ReviewResult:
    started = time.perf_counter()
    prompt = build_review_prompt(payload.resume, payload.job_description)
    raw = await client.generate(prompt)
    latency_ms = int((time.perf_counter() - started) * 1000)
    logger.info(
        "review_llm_completed resume_hash=%s resume_chars=%s jd_chars=%s response_chars=%s latency_ms=%s",
        _short_hash(payload.resume),
        len(payload.resume),
        len(payload.job_description),
        len(raw or ""),
        latency_ms,
    )
    return normalize_review(raw)
