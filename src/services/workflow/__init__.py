"""Streaming workflow client and event aggregation."""

from .aggregator import AccumulationPolicy, ResultAggregator, Snapshot, SourceExcerpt
from .client import WorkflowClient, document_input, new_user_id
from .stream import StreamOutcome, classify_snapshot, collect_stream, iter_snapshots


__all__ = [
    "AccumulationPolicy",
    "ResultAggregator",
    "Snapshot",
    "SourceExcerpt",
    "StreamOutcome",
    "WorkflowClient",
    "classify_snapshot",
    "collect_stream",
    "document_input",
    "iter_snapshots",
    "new_user_id",
]
