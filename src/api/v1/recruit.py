"""API endpoints for the recruiting knowledge-base query."""

from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from schemas.api import ApiResponse
from schemas.recruit import RecruitQueryRequest, RecruitQueryResult
from services.recruit_query import (
    get_recruit_client,
    iter_recruit_events,
    run_recruit_query,
)


router = APIRouter(prefix="/recruit", tags=["recruit"])


@router.post("/query", response_model=ApiResponse[RecruitQueryResult])
async def recruit_query(
    payload: RecruitQueryRequest,
) -> ApiResponse[RecruitQueryResult]:
    result = await run_recruit_query(payload.query)
    return ApiResponse(success=True, data=result, message="Query complete")


@router.post(
    "/query/stream",
    response_class=StreamingResponse,
    summary="Stream recruit query progress via Server-Sent Events",
)
async def recruit_query_stream(payload: RecruitQueryRequest) -> StreamingResponse:
    """Relay the query workflow as it runs.

    Event JSON schema (sent in `data:` lines):
      event: snapshot|done|error
      data: aggregated result so far (snapshot), the final query result
        (done) or ``error_code`` and ``message`` (error)
    """
    # Resolved here so a missing key is a regular 503, not a stream error
    client = get_recruit_client()

    async def event_stream() -> AsyncGenerator[str, None]:
        async for event in iter_recruit_events(payload.query, client):
            yield event.to_sse()

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
