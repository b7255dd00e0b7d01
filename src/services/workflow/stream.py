"""Drive the chunk buffer, event decoder and aggregator over a byte stream."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, AsyncIterator
from dataclasses import dataclass
from typing import Literal

from services.workflow.aggregator import ResultAggregator, Snapshot
from services.workflow.chunk_buffer import ChunkBuffer
from services.workflow.events import DecodeSkip, decode_record


logger = logging.getLogger(__name__)

StreamStatus = Literal["complete", "empty", "incomplete"]


@dataclass(frozen=True, slots=True)
class StreamOutcome:
    """Final result of one stream.

    ``incomplete`` means the byte source ended before the terminal event; the
    snapshot is a best-effort partial and must not be presented as finished.
    """

    snapshot: Snapshot
    status: StreamStatus
    events: int = 0

    @property
    def is_complete(self) -> bool:
        return self.status == "complete"


def classify_snapshot(snapshot: Snapshot) -> StreamStatus:
    """Tell a clean finish apart from an empty one and from a cut-off stream."""
    if not snapshot.done:
        return "incomplete"
    if snapshot.is_empty:
        return "empty"
    return "complete"


async def iter_snapshots(
    chunks: AsyncIterable[bytes], aggregator: ResultAggregator
) -> AsyncIterator[Snapshot]:
    """Yield the aggregator snapshot after every decoded event.

    Reading stops once the terminal event has been folded. Errors raised by
    the byte source propagate to the caller untouched.
    """
    buffer = ChunkBuffer()
    async for chunk in chunks:
        for record in buffer.feed(chunk):
            event = decode_record(record)
            if isinstance(event, DecodeSkip):
                continue
            yield aggregator.apply(event)
            if aggregator.terminated:
                return
    buffer.close()


async def collect_stream(
    chunks: AsyncIterable[bytes], aggregator: ResultAggregator
) -> StreamOutcome:
    """Consume the whole stream and classify the final snapshot."""
    events = 0
    async for _ in iter_snapshots(chunks, aggregator):
        events += 1

    snapshot = aggregator.snapshot()
    status = classify_snapshot(snapshot)
    if status == "incomplete":
        logger.warning(
            "Workflow stream ended before completion after %d events", events
        )
    return StreamOutcome(snapshot=snapshot, status=status, events=events)
