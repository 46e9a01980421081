from fastapi import APIRouter

from resume_reviewer.schemas.review import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Health Check", description="Report that the service is alive.")
async def health_check():
    return HealthResponse(ok=True)
