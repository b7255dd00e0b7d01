"""Schemas for job-description parsing."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ParsedJD(BaseModel):
    """Structured job-description record.

    Key names are stable: the export and rendering layers read them as-is.
    Scalar fields always hold a value (extraction fills documented defaults);
    list fields keep the order in which items appeared in the source text.
    """

    title: str
    company: str
    location: str
    salary: str
    experience: str
    education: str
    responsibilities: list[str] = Field(default_factory=list)
    requirements: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="forbid")


class JDParseRequest(BaseModel):
    """Request payload for parsing a pasted job description."""

    text: str = Field(..., min_length=1, max_length=20000)

    model_config = ConfigDict(extra="forbid")


class JDParseResult(BaseModel):
    parsed: ParsedJD
    raw: str = Field(..., description="The job description text that was parsed")
