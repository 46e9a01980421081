import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "gemini": "gemini-2.5-flash",
}

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str
    base_url: Optional[str] = None
    timeout_s: Optional[float] = None
    response_format: str = ""


def _optional_float(name: str) -> Optional[float]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def load_ai_config() -> AIConfig:
    provider = (os.getenv("AI_PROVIDER") or "openai").strip().lower()
    model = (os.getenv("AI_MODEL") or DEFAULT_MODELS.get(provider, "")).strip()
    if provider == "gemini":
        api_key = (os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY") or "").strip()
        base_url = (os.getenv("GEMINI_BASE_URL") or GEMINI_OPENAI_BASE_URL).strip()
    else:
        api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
        base_url = (os.getenv("OPENAI_BASE_URL") or "").strip() or None
    return AIConfig(
        provider=provider,
        model=model,
        api_key=api_key,
        base_url=base_url,
        timeout_s=_optional_float("LLM_TIMEOUT_S"),
        response_format=(os.getenv("OPENAI_RESPONSE_FORMAT") or "").strip().lower(),
    )
