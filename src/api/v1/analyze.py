from fastapi import APIRouter

from schemas.analysis import QuickAnalysisRequest, QuickAnalysisResult
from schemas.api import ApiResponse
from services.quick_analysis import run_quick_analysis


router = APIRouter(tags=["analysis"])


@router.post("/analyze", response_model=ApiResponse[QuickAnalysisResult])
async def quick_analyze(
    payload: QuickAnalysisRequest,
) -> ApiResponse[QuickAnalysisResult]:
    """Single-shot resume analysis without a job selection or file upload."""
    result = await run_quick_analysis(payload.resume)
    return ApiResponse(success=True, data=result, message="Analysis complete")
