import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from resume_reviewer.api.v1.health import router as health_router
from resume_reviewer.api.v1.upload import router as upload_router
from resume_reviewer.api.v1.review import router as review_router
from resume_reviewer.core.cors import cors_allow_credentials, cors_allowed_origins
from resume_reviewer.core.errors import ReviewAPIError
from resume_reviewer.core.rate_limit import limiter
from resume_reviewer.core.config import settings
from resume_reviewer.core.lifespan import lifespan
from resume_reviewer.core.static import mount_client

logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for error in exc.errors():
        loc = [str(item) for item in error.get("loc", ()) if item not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


async def review_api_error_handler(request: Request, exc: ReviewAPIError):
    level = logging.INFO if exc.status_code < 500 else logging.ERROR
    logger.log(
        level,
        "request_failed method=%s path=%s status=%s error=%s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.payload())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = _validation_message(exc)
    logger.info("request_validation_failed path=%s errors=%s", request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("unhandled_error path=%s", request.url.path, exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Internal server error"})


app = FastAPI(title="Resume Reviewer API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_credentials=cors_allow_credentials(),
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(ReviewAPIError, review_api_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, prefix="/api", tags=["Health"])
app.include_router(upload_router, prefix="/api", tags=["Upload"])
app.include_router(review_router, prefix="/api", tags=["Review"])

if settings.is_production:
    mount_client(app, settings.client_dist_dir)
