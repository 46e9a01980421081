from functools import lru_cache

from resume_reviewer.ai.config import load_ai_config
from resume_reviewer.ai.types import AIClient

from resume_reviewer.ai.providers.openai_provider import OpenAIProvider
from resume_reviewer.ai.providers.gemini_provider import GeminiProvider


@lru_cache(maxsize=1)
def get_ai_client() -> AIClient:
    cfg = load_ai_config()
    options = {
        "api_key": cfg.api_key,
        "base_url": cfg.base_url,
        "timeout_s": cfg.timeout_s,
        "response_format": cfg.response_format,
    }

    if cfg.provider == "openai":
        return OpenAIProvider(model=cfg.model, **options)

    if cfg.provider == "gemini":
        return GeminiProvider(model=cfg.model, **options)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
