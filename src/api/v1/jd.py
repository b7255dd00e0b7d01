"""API endpoint for job-description parsing."""

from __future__ import annotations

from fastapi import APIRouter

from schemas.api import ApiResponse
from schemas.jd import JDParseRequest, JDParseResult
from services.jd_parser import parse_job_description


router = APIRouter(prefix="/jd", tags=["jd"])


@router.post("/parse", response_model=ApiResponse[JDParseResult])
async def parse_jd(payload: JDParseRequest) -> ApiResponse[JDParseResult]:
    """Structure a pasted job description into title, company, lists and tags."""
    result = await parse_job_description(payload.text)
    return ApiResponse(success=True, data=result, message="Job description parsed")
