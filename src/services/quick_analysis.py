"""Single-shot resume analysis through the completion app."""

from __future__ import annotations

import logging

from core.config import get_settings
from schemas.analysis import QuickAnalysisResult
from services.workflow import WorkflowClient, new_user_id


logger = logging.getLogger(__name__)

NO_RESULT = "未获取到分析结果"


async def run_quick_analysis(
    resume: str, client: WorkflowClient | None = None
) -> QuickAnalysisResult:
    if client is None:
        client = WorkflowClient.for_app(
            get_settings().completion_api_key, "quick analysis"
        )
    body = await client.create_completion({"resume": resume}, new_user_id())
    result = body.get("answer") or body.get("result")
    if not isinstance(result, str) or not result:
        logger.warning("Completion returned no answer (keys: %s)", sorted(body))
        result = NO_RESULT
    return QuickAnalysisResult(result=result)
