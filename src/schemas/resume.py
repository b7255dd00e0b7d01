"""Schemas for resume-to-job match analysis."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ScoreBreakdown(BaseModel):
    strengths: float = 0
    gaps: float = 0
    analysis: float = 0
    potential: float = 0


class ResumeReport(BaseModel):
    """Readable analysis report plus the scores the workflow reported."""

    report: str
    total_score: float = 0
    scores: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    status: str = Field(
        default="complete", description="complete | empty | incomplete"
    )


class JobOptionsResponse(BaseModel):
    options: list[str]
