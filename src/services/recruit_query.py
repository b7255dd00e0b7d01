"""Recruiting knowledge-base query over the streaming RAG workflow."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import aclosing
from typing import Any

from core.config import get_settings
from schemas.recruit import JobListing, RecruitQueryResult, SourceDocument
from schemas.streaming import WorkflowSseEvent
from services.workflow import (
    AccumulationPolicy,
    ResultAggregator,
    SourceExcerpt,
    StreamOutcome,
    WorkflowClient,
    classify_snapshot,
    collect_stream,
    iter_snapshots,
    new_user_id,
)
from services.workflow.exceptions import WorkflowError


logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "未能获取到相关信息，请尝试其他查询。"

# JobListing field -> (keys tried in order on the tool's job rows, default)
JOB_FIELDS: dict[str, tuple[tuple[str, ...], str | None]] = {
    "title": (("岗位名称", "title"), "未知岗位"),
    "company": (("公司", "company"), "未知公司"),
    "location": (("地点", "location"), "未知"),
    "type": (("类型", "type"), "校招"),
    "apply_url": (("申请链接", "url", "applyUrl"), None),
    "referral_code": (("内推码", "referralCode"), None),
    "update_date": (("更新时间", "updateDate"), None),
}


def _first_present(row: dict[str, Any], keys: Sequence[str]) -> str | None:
    for key in keys:
        value = row.get(key)
        if value not in (None, ""):
            return value if isinstance(value, str) else str(value)
    return None


def format_jobs(payload: list[Any] | None) -> list[JobListing]:
    """Map the lookup tool's job rows (Chinese or English keys) to listings."""
    jobs: list[JobListing] = []
    for idx, row in enumerate(payload or []):
        if not isinstance(row, dict):
            logger.debug("Skipping non-object job row at index %d", idx)
            continue
        fields: dict[str, Any] = {"id": _first_present(row, ("id",)) or f"job_{idx}"}
        for name, (keys, default) in JOB_FIELDS.items():
            fields[name] = _first_present(row, keys) or default
        jobs.append(JobListing(**fields))
    return jobs


def format_sources(excerpts: Sequence[SourceExcerpt]) -> list[SourceDocument]:
    return [
        SourceDocument(doc_id=e.id, excerpt=e.excerpt, score=e.score) for e in excerpts
    ]


def build_result(outcome: StreamOutcome) -> RecruitQueryResult:
    snapshot = outcome.snapshot
    return RecruitQueryResult(
        answer=snapshot.text or snapshot.evaluation or FALLBACK_ANSWER,
        jobs=format_jobs(snapshot.structured_payload),
        sources=format_sources(snapshot.source_excerpts),
        status=outcome.status,
    )


def get_recruit_client() -> WorkflowClient:
    return WorkflowClient.for_app(get_settings().DIFY_RECRUIT_API_KEY, "recruit query")


async def run_recruit_query(
    query: str, client: WorkflowClient | None = None
) -> RecruitQueryResult:
    """Run the query workflow to completion and return the assembled answer."""
    client = client or get_recruit_client()
    aggregator = ResultAggregator(AccumulationPolicy.APPEND)
    stream = client.stream_workflow({"query": query}, new_user_id())
    async with aclosing(stream) as chunks:
        outcome = await collect_stream(chunks, aggregator)
    logger.info(
        "Recruit query finished: status=%s events=%d jobs=%d",
        outcome.status,
        outcome.events,
        len(outcome.snapshot.structured_payload or []),
    )
    return build_result(outcome)


async def iter_recruit_events(
    query: str, client: WorkflowClient | None = None
) -> AsyncIterator[WorkflowSseEvent]:
    """Relay the query workflow as SSE events: snapshots, then done or error.

    Generator bodies only run once the response has started, so callers that
    want configuration errors as a regular HTTP error resolve ``client`` first.
    """
    client = client or get_recruit_client()
    aggregator = ResultAggregator(AccumulationPolicy.APPEND)
    stream = client.stream_workflow({"query": query}, new_user_id())
    try:
        async with aclosing(stream) as chunks:
            async for snapshot in iter_snapshots(chunks, aggregator):
                yield WorkflowSseEvent(event="snapshot", data=snapshot.to_dict())
    except WorkflowError as exc:
        logger.warning("Recruit query stream failed: %s", exc.error_code)
        yield WorkflowSseEvent(
            event="error",
            data={"error_code": exc.error_code, "message": exc.message},
        )
        return

    final = aggregator.snapshot()
    outcome = StreamOutcome(snapshot=final, status=classify_snapshot(final))
    yield WorkflowSseEvent(event="done", data=build_result(outcome).model_dump())
