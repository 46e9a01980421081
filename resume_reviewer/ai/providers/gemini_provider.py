from resume_reviewer.ai.config import GEMINI_OPENAI_BASE_URL
from resume_reviewer.ai.providers.openai_provider import OpenAIProvider


class GeminiProvider(OpenAIProvider):
    """Gemini through Google's OpenAI-compatible endpoint."""

    key_env = "GOOGLE_API_KEY"

    def __init__(self, model: str, **kwargs):
        kwargs["base_url"] = kwargs.get("base_url") or GEMINI_OPENAI_BASE_URL
        super().__init__(model=model, **kwargs)
