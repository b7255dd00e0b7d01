"""Job-description parsing via the JD workflow."""

from __future__ import annotations

import json
import logging
from typing import Any

from core.config import get_settings
from schemas.jd import JDParseResult
from services.extraction import extract_jd
from services.workflow import WorkflowClient, new_user_id


logger = logging.getLogger(__name__)


def _answer_from_outputs(outputs: dict[str, Any]) -> str:
    """Pick the workflow answer: ``text`` first, then ``result``."""
    answer = outputs.get("text") or outputs.get("result") or ""
    if isinstance(answer, str):
        return answer
    return json.dumps(answer, ensure_ascii=False)


async def parse_job_description(
    text: str, client: WorkflowClient | None = None
) -> JDParseResult:
    """Run the JD workflow in blocking mode and structure its answer."""
    if client is None:
        client = WorkflowClient.for_app(get_settings().DIFY_JD_API_KEY, "JD parsing")

    outputs = await client.run_workflow({"jd_text": text}, new_user_id())
    answer = _answer_from_outputs(outputs)
    logger.debug(
        "JD workflow answered with %d chars (output keys: %s)",
        len(answer),
        sorted(outputs),
    )
    parsed = extract_jd(answer, source_text=text)
    return JDParseResult(parsed=parsed, raw=text)
