"""Schemas for the single-shot resume analysis completion."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class QuickAnalysisRequest(BaseModel):
    resume: str = Field(..., min_length=1, max_length=20000)

    model_config = ConfigDict(extra="forbid")


class QuickAnalysisResult(BaseModel):
    result: str
