"""HTTP client for the upstream workflow backend (Dify-compatible API)."""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import AsyncIterator
from typing import Any, Literal

import httpx

from core.config import get_settings
from services.workflow.exceptions import (
    UpstreamRejected,
    UpstreamUnauthorized,
    UpstreamUnavailable,
    WorkflowError,
    WorkflowNotConfigured,
)


logger = logging.getLogger(__name__)

ResponseMode = Literal["blocking", "streaming"]


def new_user_id() -> str:
    """Opaque per-request end-user id expected by the backend."""
    return f"user-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


def document_input(file_id: str) -> dict[str, str]:
    """Workflow input referencing a previously uploaded file."""
    return {
        "type": "document",
        "transfer_method": "local_file",
        "upload_file_id": file_id,
    }


def _error_from_response(response: httpx.Response, action: str) -> WorkflowError:
    status_code = response.status_code
    if status_code in (401, 403):
        return UpstreamUnauthorized(f"{action} rejected credentials ({status_code})")
    message: str | None = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        message = body["message"]
    return UpstreamRejected(
        message or f"{action} failed ({status_code})", status_code=status_code
    )


class WorkflowClient:
    """Thin async wrapper over the workflow, completion and upload endpoints.

    The API key is a static bearer credential. Pass ``transport`` to route
    requests somewhere other than the network (tests use
    ``httpx.MockTransport``).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key
        self.base_url = (base_url or settings.DIFY_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.DIFY_TIMEOUT_SECONDS
        self._transport = transport

    @classmethod
    def for_app(cls, api_key: str | None, app_name: str) -> WorkflowClient:
        """Build a client for one app, failing fast when its key is missing."""
        if not api_key:
            raise WorkflowNotConfigured(f"API key for the {app_name} app is not set")
        return cls(api_key)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )

    async def _post_json(
        self, path: str, payload: dict[str, Any], action: str
    ) -> dict[str, Any]:
        try:
            async with self._client() as client:
                response = await client.post(path, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("%s request failed: %s", action, type(exc).__name__)
            raise UpstreamUnavailable(f"{action} request failed: {exc}") from exc

        if response.is_error:
            raise _error_from_response(response, action)
        try:
            body = response.json()
        except ValueError as exc:
            raise UpstreamRejected(
                f"{action} returned a non-JSON body", status_code=response.status_code
            ) from exc
        return body if isinstance(body, dict) else {}

    async def run_workflow(self, inputs: dict[str, Any], user: str) -> dict[str, Any]:
        """Run a workflow in blocking mode and return ``data.outputs``."""
        body = await self._post_json(
            "/workflows/run",
            {"inputs": inputs, "response_mode": "blocking", "user": user},
            "Workflow run",
        )
        data = body.get("data")
        outputs = data.get("outputs") if isinstance(data, dict) else None
        return outputs if isinstance(outputs, dict) else {}

    async def stream_workflow(
        self, inputs: dict[str, Any], user: str
    ) -> AsyncIterator[bytes]:
        """Run a workflow in streaming mode and yield raw response bytes.

        Callers that stop early should close the generator (``aclosing``) so
        the underlying connection is released promptly.
        """
        payload = {"inputs": inputs, "response_mode": "streaming", "user": user}
        try:
            async with self._client() as client:
                async with client.stream(
                    "POST", "/workflows/run", json=payload
                ) as response:
                    if response.is_error:
                        await response.aread()
                        raise _error_from_response(response, "Workflow run")
                    async for chunk in response.aiter_bytes():
                        yield chunk
        except httpx.HTTPError as exc:
            logger.warning("Workflow stream failed: %s", type(exc).__name__)
            raise UpstreamUnavailable(f"Workflow stream failed: {exc}") from exc

    async def create_completion(
        self, inputs: dict[str, Any], user: str
    ) -> dict[str, Any]:
        """Blocking completion-message call; returns the raw response body."""
        return await self._post_json(
            "/completion-messages",
            {"inputs": inputs, "response_mode": "blocking", "user": user},
            "Completion",
        )

    async def upload_file(
        self, filename: str, content: bytes, content_type: str | None, user: str
    ) -> str:
        """Upload a document and return the backend's opaque file id."""
        files = {
            "file": (filename, content, content_type or "application/octet-stream")
        }
        try:
            async with self._client() as client:
                response = await client.post(
                    "/files/upload", files=files, data={"user": user}
                )
        except httpx.HTTPError as exc:
            logger.warning("File upload failed: %s", type(exc).__name__)
            raise UpstreamUnavailable(f"File upload failed: {exc}") from exc

        if response.is_error:
            raise _error_from_response(response, "File upload")
        try:
            file_id = response.json().get("id")
        except (ValueError, AttributeError) as exc:
            raise UpstreamRejected("File upload returned an unexpected body") from exc
        if not file_id:
            raise UpstreamRejected("File upload response carried no file id")
        return str(file_id)
