"""Schemas for workflow SSE streaming."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class WorkflowSseEvent(BaseModel):
    """Canonical SSE envelope for relayed workflow progress.

    ``snapshot`` events carry the aggregated result so far, ``done`` carries
    the final classification and ``error`` the error code of a failure that
    happened after the response had started.
    """

    event: Literal["snapshot", "done", "error"]
    data: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")

    def to_sse(self) -> str:
        """Serialize event to SSE wire format."""
        return f"data: {self.model_dump_json()}\n\n"
