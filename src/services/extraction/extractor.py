"""Best-effort structured extraction from a model's free-form answer.

Used when the upstream workflow was asked for JSON but answered in prose.
The whole input is first tried as a JSON object; only when that fails do the
keyword-anchored text heuristics run. Both paths are driven by the same
``FieldSpec`` schema so every field can be tested on its own.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Sequence
from functools import lru_cache
from typing import Any

from schemas.jd import ParsedJD
from services.extraction.schema import JD_SCHEMA, FieldKind, FieldSpec
from services.extraction.tags import TagClassifier


logger = logging.getLogger(__name__)

# Items shorter than this are stray fragments of the split, not entries
MIN_ITEM_LENGTH = 5

_ITEM_SPLIT_RE = re.compile(r"\n|\d+\.(?!\d)|•|-")
_TAG_SPLIT_RE = re.compile(r"[,，、;；\s]+")
_CODE_FENCE_RE = re.compile(r"```(?:json)?[\s\S]*?```")


@lru_cache(maxsize=256)
def _scalar_pattern(synonym: str) -> re.Pattern[str]:
    return re.compile(rf"{re.escape(synonym)}[：:]\s*(.+)", re.IGNORECASE)


@lru_cache(maxsize=256)
def _list_pattern(synonym: str) -> re.Pattern[str]:
    return re.compile(rf"{re.escape(synonym)}[：:]([\s\S]*?)(?=\n\n|$)", re.IGNORECASE)


def parse_json_object(text: str) -> dict[str, Any] | None:
    """Return ``text`` decoded as a JSON object, or None for anything else."""
    try:
        value = json.loads(text)
    except (TypeError, ValueError, RecursionError):
        return None
    return value if isinstance(value, dict) else None


def is_json_only(text: str | None) -> bool:
    """True when ``text`` is bare structured data rather than a readable report.

    Blank text, a JSON object (trimmed text starts with ``{``, ends with ``}``
    and parses) and text that is nothing but fenced code blocks all count.
    """
    if not text or not text.strip():
        return True
    trimmed = text.strip()
    if trimmed.startswith("{") and trimmed.endswith("}"):
        try:
            json.loads(trimmed)
        except (ValueError, RecursionError):
            return False
        return True
    without_code = _CODE_FENCE_RE.sub("", trimmed).strip()
    return "```" in trimmed and len(without_code) < 10


def split_items(block: str) -> list[str]:
    """Split a captured list block on line breaks, numbering and bullets."""
    items = (item.strip() for item in _ITEM_SPLIT_RE.split(block))
    return [item for item in items if len(item) >= MIN_ITEM_LENGTH]


def _scalar_from_json(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, dict | list):
        return json.dumps(value, ensure_ascii=False) if value else None
    return str(value)


def _list_from_json(value: Any) -> list[str] | None:
    if isinstance(value, list):
        items = (str(item).strip() for item in value if item is not None)
        return [item for item in items if item]
    if isinstance(value, str):
        return split_items(value)
    return None


def _tags_from_json(value: Any) -> list[str] | None:
    if isinstance(value, str):
        value = _TAG_SPLIT_RE.split(value)
    items = _list_from_json(value)
    return items or None


class StructuredTextExtractor:
    """Extract a record described by ``schema`` from text."""

    def __init__(
        self,
        schema: Sequence[FieldSpec] = JD_SCHEMA,
        classifier: TagClassifier | None = None,
    ) -> None:
        self.schema = tuple(schema)
        self.classifier = classifier or TagClassifier()

    def extract(self, text: str, source_text: str = "") -> dict[str, Any]:
        """Return one value per schema field, defaults filled in."""
        data = parse_json_object(text.strip()) if text else None
        if data is not None and self._matches_schema(data):
            return {
                spec.name: self._from_json(data, spec, text, source_text)
                for spec in self.schema
            }

        # Not JSON, or JSON of an unexpected shape
        logger.debug("Answer is not schema JSON; falling back to text extraction")
        normalized = (text or "").replace("\r\n", "\n")
        return {
            spec.name: self._from_text(normalized, spec, source_text)
            for spec in self.schema
        }

    def _matches_schema(self, data: dict[str, Any]) -> bool:
        keys = {str(key).lower() for key in data}
        return any(
            label.lower() in keys for spec in self.schema for label in spec.labels
        )

    # JSON-first path ---------------------------------------------------------

    def _from_json(
        self, data: dict[str, Any], spec: FieldSpec, text: str, source_text: str
    ) -> Any:
        lowered: dict[str, Any] = {}
        for key, value in data.items():
            lowered.setdefault(str(key).lower(), value)
        raw = next(
            (
                lowered[label.lower()]
                for label in spec.labels
                if label.lower() in lowered
            ),
            None,
        )

        if spec.kind is FieldKind.SCALAR:
            value = _scalar_from_json(raw)
        elif spec.kind is FieldKind.LIST:
            value = _list_from_json(raw)
        else:
            value = _tags_from_json(raw)
            if value is None:
                return self._tags(text, source_text, spec)
        return spec.default_value() if value is None else value

    # Text fallback path ------------------------------------------------------

    def _from_text(self, text: str, spec: FieldSpec, source_text: str) -> Any:
        if spec.kind is FieldKind.SCALAR:
            return self.extract_scalar(text, spec)
        if spec.kind is FieldKind.LIST:
            return self.extract_list(text, spec)
        return self._tags(text, source_text, spec)

    def extract_scalar(self, text: str, spec: FieldSpec) -> str:
        for synonym in spec.synonyms:
            for match in _scalar_pattern(synonym).finditer(text):
                value = match.group(1).strip()
                if value:
                    return value
        return spec.default_value()

    def extract_list(self, text: str, spec: FieldSpec) -> list[str]:
        for synonym in spec.synonyms:
            match = _list_pattern(synonym).search(text)
            if match:
                return split_items(match.group(1))
        return spec.default_value()

    def _tags(self, text: str, source_text: str, spec: FieldSpec) -> list[str]:
        tags = self.classifier.classify(f"{text} {source_text}")
        return tags or spec.default_value()


_default_extractor = StructuredTextExtractor()


def extract_jd(text: str, source_text: str = "") -> ParsedJD:
    """Parse a job description answer into the fixed JD record."""
    return ParsedJD(**_default_extractor.extract(text, source_text))
