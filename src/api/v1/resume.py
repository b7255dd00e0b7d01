"""API endpoints for resume-to-job match analysis."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from schemas.api import ApiResponse
from schemas.resume import JobOptionsResponse, ResumeReport
from services.resume_analysis import JOB_OPTIONS, analyze_resume


router = APIRouter(prefix="/resume", tags=["resume"])

logger = logging.getLogger(__name__)


@router.get("/job-options", response_model=ApiResponse[JobOptionsResponse])
def job_options() -> ApiResponse[JobOptionsResponse]:
    return ApiResponse(
        success=True,
        data=JobOptionsResponse(options=list(JOB_OPTIONS)),
        message="Job options loaded",
    )


@router.post("/analyze", response_model=ApiResponse[ResumeReport])
async def analyze(
    file: Annotated[UploadFile, File(description="Resume document")],
    job_selection: Annotated[str, Form(min_length=1)],
) -> ApiResponse[ResumeReport]:
    """Evaluate an uploaded resume against the selected job."""
    content = await file.read()
    report = await analyze_resume(
        filename=file.filename or "",
        content=content,
        content_type=file.content_type,
        job_selection=job_selection,
    )
    logger.info("Resume analysis for '%s' ended %s", job_selection, report.status)
    return ApiResponse(success=True, data=report, message="Resume analyzed")
