"""Fold decoded workflow events into one accumulated result.

The aggregation state is an explicit immutable value threaded through
``ResultAggregator.fold``; nothing is module-level, so concurrent requests
each get their own aggregator and never see each other's output.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

from services.workflow.events import (
    DecodeSkip,
    Message,
    NodeFinished,
    StreamEvent,
    WorkflowFinished,
)


logger = logging.getLogger(__name__)

# Output slot names emitted by workflow nodes, in priority order
PRIMARY_TEXT_KEY = "text"
SECONDARY_TEXT_KEY = "text_1"
RESULT_KEY = "result"
OUTPUT_KEYS: tuple[str, ...] = (PRIMARY_TEXT_KEY, SECONDARY_TEXT_KEY, RESULT_KEY)

# Title of the knowledge-retrieval node; its `result` holds retrieved chunks
KNOWLEDGE_RETRIEVAL_TITLE = "知识检索"


class AccumulationPolicy(StrEnum):
    """How Message events combine with the primary text slot."""

    APPEND = "append"  # each Message carries a delta
    REPLACE = "replace"  # each Message carries the full answer so far


@dataclass(frozen=True, slots=True)
class SourceExcerpt:
    id: str
    excerpt: str
    score: float = 0.0


@dataclass(frozen=True, slots=True)
class AggregationState:
    primary_text: str = ""
    secondary_text: str = ""
    structured_payload: list[Any] | None = None
    source_excerpts: tuple[SourceExcerpt, ...] = ()
    terminated: bool = False


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Externally observable aggregation state at one point of the stream."""

    text: str
    evaluation: str
    structured_payload: list[Any] | None
    source_excerpts: tuple[SourceExcerpt, ...]
    done: bool

    @classmethod
    def from_state(cls, state: AggregationState) -> Snapshot:
        return cls(
            text=state.primary_text,
            evaluation=state.secondary_text,
            structured_payload=state.structured_payload,
            source_excerpts=state.source_excerpts,
            done=state.terminated,
        )

    @property
    def is_empty(self) -> bool:
        return not (
            self.text.strip()
            or self.evaluation.strip()
            or self.structured_payload
            or self.source_excerpts
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "evaluation": self.evaluation,
            "structured_payload": self.structured_payload,
            "source_excerpts": [
                {"id": e.id, "excerpt": e.excerpt, "score": e.score}
                for e in self.source_excerpts
            ],
            "done": self.done,
        }


def _decode_array(value: Any) -> list[Any] | None:
    """Return ``value`` as a list if it is one, or a JSON string encoding one."""
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except (ValueError, RecursionError):
            logger.debug("Node result is not JSON; leaving structured payload as is")
            return None
        if isinstance(decoded, list):
            return decoded
    return None


def _to_score(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def _to_excerpts(items: list[Any]) -> tuple[SourceExcerpt, ...]:
    excerpts: list[SourceExcerpt] = []
    for idx, item in enumerate(items):
        item = item if isinstance(item, dict) else {}
        content = item.get("content") or item.get("text") or ""
        excerpts.append(
            SourceExcerpt(
                id=f"doc_{idx}",
                excerpt=content if isinstance(content, str) else str(content),
                score=_to_score(item.get("score")),
            )
        )
    return tuple(excerpts)


class ResultAggregator:
    """Fold stream events into an ``AggregationState``.

    ``fold`` is pure. ``apply`` is the stateful convenience used by the stream
    driver: it keeps one private state and returns a snapshot per event.
    """

    def __init__(self, policy: AccumulationPolicy = AccumulationPolicy.APPEND) -> None:
        self.policy = policy
        self._state = AggregationState()

    @property
    def state(self) -> AggregationState:
        return self._state

    @property
    def terminated(self) -> bool:
        return self._state.terminated

    def snapshot(self) -> Snapshot:
        return Snapshot.from_state(self._state)

    def apply(self, event: StreamEvent | DecodeSkip) -> Snapshot:
        self._state = self.fold(self._state, event)
        return self.snapshot()

    def fold(
        self, state: AggregationState, event: StreamEvent | DecodeSkip
    ) -> AggregationState:
        if state.terminated:
            return state
        if isinstance(event, NodeFinished):
            return self._fold_node(state, event)
        if isinstance(event, WorkflowFinished):
            return replace(state, terminated=True)
        if isinstance(event, Message):
            return self._fold_message(state, event)
        # UnknownEvent / DecodeSkip
        return state

    def _fold_node(
        self, state: AggregationState, event: NodeFinished
    ) -> AggregationState:
        outputs = event.outputs
        if event.title == KNOWLEDGE_RETRIEVAL_TITLE:
            items = _decode_array(outputs.get(RESULT_KEY))
            if items is None:
                return state
            return replace(state, source_excerpts=_to_excerpts(items))

        changes: dict[str, Any] = {}
        for key in OUTPUT_KEYS:
            value = outputs.get(key)
            if key == RESULT_KEY:
                items = _decode_array(value)
                if items is not None:
                    changes["structured_payload"] = items
            elif isinstance(value, str) and value:
                slot = "primary_text" if key == PRIMARY_TEXT_KEY else "secondary_text"
                changes[slot] = value
        return replace(state, **changes) if changes else state

    def _fold_message(
        self, state: AggregationState, event: Message
    ) -> AggregationState:
        if self.policy is AccumulationPolicy.REPLACE:
            if not event.answer or event.answer == state.primary_text:
                return state
            return replace(state, primary_text=event.answer)
        if not event.answer:
            return state
        return replace(state, primary_text=state.primary_text + event.answer)
