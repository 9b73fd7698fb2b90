from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

Score = int


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class AnalysisInput(FrozenCamelModel):
    job_description: str = Field(min_length=1)
    keywords: list[str] | None = None
    resume_text: str = ""


class KeywordMatchResult(FrozenCamelModel):
    matched: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    match_percentage: int = Field(default=0, ge=0, le=100)


class ScoredItem(FrozenCamelModel):
    """Common contract of every category and section score."""

    score: Score = Field(ge=0, le=100)
    suggestions: list[str] = Field(min_length=1)


class IssueScore(ScoredItem):
    issues: list[str] = Field(default_factory=list)


class FeedbackScore(ScoredItem):
    feedback: str


SectionScore = FeedbackScore


class ImprovementCategories(FrozenCamelModel):
    spelling: IssueScore
    grammar: IssueScore
    quantifiable_achievements: FeedbackScore
    readability: FeedbackScore
    formatting: IssueScore


class SectionAnalysis(FrozenCamelModel):
    contact_info: SectionScore
    summary: SectionScore
    experience: SectionScore
    education: SectionScore
    skills: SectionScore


class AnalysisResult(FrozenCamelModel):
    ats_score: Score = Field(ge=0, le=100)
    improvements: ImprovementCategories
    section_analysis: SectionAnalysis
    overall_suggestions: list[str]
    keyword_matches: KeywordMatchResult
    analysis_id: str
    created_at: datetime

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class AnalysisRecord(CamelModel):
    id: int
    analysis_id: str
    job_description: str
    keywords: list[str] | None = None
    resume_file_name: str | None = None
    ats_score: float
    analysis_result: dict[str, Any]
    created_at: datetime
    updated_at: datetime


class AnalyzeRequest(CamelModel):
    job_description: str = Field(min_length=1, max_length=50000)
    keywords: list[str] | None = Field(default=None, max_length=200)
    resume_text: str | None = None
    resume_file: str | None = None
    resume_file_name: str | None = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def _require_single_resume_source(self) -> "AnalyzeRequest":
        has_text = self.resume_text is not None
        has_file = bool(self.resume_file)
        if has_text == has_file:
            raise ValueError("Provide exactly one of resumeText or resumeFile.")
        return self


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
