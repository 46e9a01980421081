from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ReviewRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resume: str = Field(min_length=10)
    job_description: str = Field(default="", alias="jobDescription")


class KeywordReport(BaseModel):
    missing: list[str] = Field(default_factory=list)
    score: int = Field(default=0, ge=0, le=100)


class BulletPoint(BaseModel):
    original: str = ""
    improved: str = ""


class ReviewResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    grammar: str = ""
    keywords: KeywordReport = Field(default_factory=KeywordReport)
    bullet_points: list[BulletPoint] = Field(default_factory=list, alias="bulletPoints")
    job_fit: str = Field(default="", alias="jobFit")
    tone: str = ""


class UploadResponse(BaseModel):
    text: str


class HealthResponse(BaseModel):
    ok: bool = True
