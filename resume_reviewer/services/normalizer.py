from __future__ import annotations

import json
import logging
import math
import re
from decimal import Decimal
from typing import Any

from resume_reviewer.core.errors import LLMResponseError
from resume_reviewer.schemas.review import ReviewResult

logger = logging.getLogger(__name__)

NON_JSON_MESSAGE = "LLM returned non-JSON response"

_LEADING_FENCE_RE = re.compile(r"^```(?:json)?", re.IGNORECASE)
_TRAILING_FENCE_RE = re.compile(r"```$")
_TRAILING_OBJECT_RE = re.compile(r"\{[\s\S]*\}$")
_NON_NUMERIC_RE = re.compile(r"[^\d.]")


def strip_code_fences(raw: str) -> str:
    cleaned = (raw or "").strip()
    cleaned = _LEADING_FENCE_RE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE_RE.sub("", cleaned, count=1)
    return cleaned.strip()


def _loads_object(candidate: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(candidate)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_llm_json(raw: str) -> dict[str, Any]:
    """Recover the JSON object from a chatty or fenced model response.

    Raises ``LLMResponseError`` with the untouched text when no object can be
    recovered.
    """
    cleaned = strip_code_fences(raw)

    payload = _loads_object(cleaned)
    if payload is None:
        match = _TRAILING_OBJECT_RE.search(cleaned)
        if match:
            payload = _loads_object(match.group(0))

    if payload is None:
        logger.warning("llm_non_json_response chars=%s preview=%r", len(raw or ""), (raw or "")[:200])
        raise LLMResponseError(NON_JSON_MESSAGE, raw=raw or "")
    return payload


def _float_text(value: float) -> str:
    # Same digits as JavaScript String(n): plain notation for 1e-6 <= |n| < 1e21.
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    mantissa, _, exponent = text.partition("e")
    if not exponent:
        return text
    power = int(exponent)
    if -7 < power < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def _score_text(value: Any) -> str:
    if value is None or isinstance(value, dict):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _float_text(value)
    if isinstance(value, (list, tuple)):
        return ",".join(_score_text(item) for item in value)
    return str(value)


def normalize_score(value: Any) -> int:
    """Coerce a model-provided ATS score onto an integer 0-100 scale.

    A value whose text has a decimal point and is at most 1 is read as a
    fraction, so "0.85" becomes 85. This also turns "1.0" into 100.
    """
    text = _score_text(value).strip()
    cleaned = _NON_NUMERIC_RE.sub("", text)
    try:
        number = float(cleaned) if cleaned else 0.0
    except ValueError:
        number = 0.0
    if not math.isfinite(number):
        number = 0.0
    if number <= 1 and "." in text:
        number *= 100
    rounded = math.floor(number + 0.5)
    return max(0, min(100, rounded))


def shape_review_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Fill in defaults the UI relies on. Safe to apply more than once."""
    shaped = dict(payload)

    keywords = shaped.get("keywords")
    keywords = dict(keywords) if isinstance(keywords, dict) else {"missing": [], "score": 0}
    if not isinstance(keywords.get("missing"), list):
        keywords["missing"] = []
    keywords["score"] = normalize_score(keywords.get("score"))
    shaped["keywords"] = keywords

    if not isinstance(shaped.get("bulletPoints"), list):
        shaped["bulletPoints"] = []
    return shaped


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def to_review_result(shaped: dict[str, Any]) -> ReviewResult:
    keywords = shaped.get("keywords") or {}
    missing = [_as_text(item) for item in keywords.get("missing", []) if item is not None]
    bullets = [
        {"original": _as_text(item.get("original")), "improved": _as_text(item.get("improved"))}
        for item in shaped.get("bulletPoints", [])
        if isinstance(item, dict)
    ]
    return ReviewResult.model_validate(
        {
            "grammar": _as_text(shaped.get("grammar")),
            "keywords": {"missing": missing, "score": normalize_score(keywords.get("score"))},
            "bulletPoints": bullets,
            "jobFit": _as_text(shaped.get("jobFit")),
            "tone": _as_text(shaped.get("tone")),
        }
    )


def normalize_review(raw: str) -> ReviewResult:
    return to_review_result(shape_review_payload(parse_llm_json(raw)))
