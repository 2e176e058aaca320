from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SectionKind = Literal["skills", "experience", "education"]
SECTION_KINDS: tuple[SectionKind, ...] = ("skills", "experience", "education")


class SectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: str
    recommendations: str
    score: int = Field(ge=0, le=100)


class AnalysisReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    job_role: str
    skills: SectionResult
    experience: SectionResult
    education: SectionResult
    overall_score: int = Field(ge=0, le=100)
    generated_at: datetime

    def section(self, kind: SectionKind) -> SectionResult:
        return getattr(self, kind)


class ExtractedSkill(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    context: str | None = None


class SectionInsights(BaseModel):
    score: int
    key_points: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class ReportView(BaseModel):
    job_role: str
    overall_score: int
    generated_at: datetime
    skills: SectionInsights
    experience: SectionInsights
    education: SectionInsights
    technical_skills: list[ExtractedSkill] = Field(default_factory=list)


MIN_JOB_ROLE_CHARS = 2


def normalize_job_role(value: str) -> str:
    stripped = value.strip()
    if len(stripped) < MIN_JOB_ROLE_CHARS:
        raise ValueError(f"job_role must have at least {MIN_JOB_ROLE_CHARS} non-blank characters")
    return stripped


class AnalyzeRequest(BaseModel):
    document_text: str = Field(min_length=1)
    job_role: str = Field(min_length=2, max_length=200)

    @field_validator("job_role")
    @classmethod
    def _strip_job_role(cls, value: str) -> str:
        return normalize_job_role(value)


class AnalyzeResponse(BaseModel):
    success: bool = True
    analysis: AnalysisReport
