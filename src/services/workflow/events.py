"""Typed events decoded from the upstream streaming wire format.

Each logical record of a workflow stream looks like::

    data: {"event": "node_finished", "data": {"title": "...", "outputs": {...}}}

``decode_record`` turns one record into exactly one event or a ``DecodeSkip``.
It never raises: blank lines, keep-alives, comments and malformed JSON all
come back as skips so a single bad record cannot abort the stream. Every
optional field gets its default here and nowhere else.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any


logger = logging.getLogger(__name__)

DATA_PREFIX = "data:"
_DATA_PREFIX_RE = re.compile(r"^data:\s*")

NODE_FINISHED = "node_finished"
WORKFLOW_FINISHED = "workflow_finished"
MESSAGE_EVENTS = frozenset({"message", "agent_message"})


@dataclass(frozen=True, slots=True)
class NodeFinished:
    """One workflow node completed; ``outputs`` holds its named output slots."""

    title: str | None = None
    outputs: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class WorkflowFinished:
    """Terminal event for the whole workflow run."""


@dataclass(frozen=True, slots=True)
class Message:
    """A chunk of the model answer (delta or full-so-far, see AccumulationPolicy)."""

    answer: str = ""


@dataclass(frozen=True, slots=True)
class UnknownEvent:
    """A well-formed event of a kind we do not fold (node_started, ping, ...)."""

    name: str | None = None


@dataclass(frozen=True, slots=True)
class DecodeSkip:
    """A record that produced no event."""

    reason: str


StreamEvent = NodeFinished | WorkflowFinished | Message | UnknownEvent


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def decode_record(record: str) -> StreamEvent | DecodeSkip:
    """Decode one logical record into a stream event or a skip."""
    line = record.strip()
    if not line:
        return DecodeSkip("blank")
    if not line.startswith(DATA_PREFIX):
        return DecodeSkip("not a data record")

    payload_text = _DATA_PREFIX_RE.sub("", line, count=1)
    try:
        payload = json.loads(payload_text)
    except (ValueError, RecursionError):
        logger.debug("Skipping malformed data record (%d chars)", len(payload_text))
        return DecodeSkip("malformed json")
    if not isinstance(payload, dict):
        logger.debug("Skipping data record with non-object payload")
        return DecodeSkip("payload is not an object")

    name = payload.get("event")
    data = _as_dict(payload.get("data"))

    if name == NODE_FINISHED:
        return NodeFinished(
            title=_optional_str(data.get("title")),
            outputs=_as_dict(data.get("outputs")),
        )
    if name == WORKFLOW_FINISHED:
        return WorkflowFinished()
    if name in MESSAGE_EVENTS:
        return Message(answer=_optional_str(payload.get("answer")) or "")
    return UnknownEvent(name=_optional_str(name))
