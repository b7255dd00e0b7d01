"""Schemas for the recruiting knowledge-base query."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RecruitQueryRequest(BaseModel):
    """Request payload for a recruiting query.

    Unknown fields (older clients send a type hint and top_k) are ignored.
    """

    query: str = Field(..., min_length=1, max_length=2000)


class JobListing(BaseModel):
    """One job row returned by the workflow's lookup tool."""

    id: str
    title: str
    company: str
    location: str
    type: str
    apply_url: str | None = None
    referral_code: str | None = None
    update_date: str | None = None


class SourceDocument(BaseModel):
    """A knowledge-base excerpt the answer was grounded on."""

    doc_id: str
    excerpt: str
    score: float = 0.0


class RecruitQueryResult(BaseModel):
    answer: str
    jobs: list[JobListing] = Field(default_factory=list)
    sources: list[SourceDocument] = Field(default_factory=list)
    status: str = Field(
        default="complete", description="complete | empty | incomplete"
    )
