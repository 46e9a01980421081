from contextlib import asynccontextmanager
import logging

from resume_reviewer.ai.config import load_ai_config
from resume_reviewer.core.config import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    ai_config = load_ai_config()
    if not ai_config.api_key:
        logger.warning("llm_credential_missing provider=%s reviews_will_fail=true", ai_config.provider)
    logger.info(
        "startup env=%s provider=%s model=%s ocr_enabled=%s max_upload_bytes=%s rate_limit=%s",
        settings.app_env,
        ai_config.provider,
        ai_config.model,
        settings.ocr_enabled,
        settings.max_upload_bytes,
        settings.rate_limit if settings.rate_limit_enabled else "off",
    )
    yield
    logger.info("shutdown")
