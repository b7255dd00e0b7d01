"""Declarative field schemas for structured-text extraction.

Extraction heuristics live here as data: each field names its synonyms (the
labels, in any language, that may introduce it in free text), its kind and
the default used when nothing matches. Defaults are part of the output
contract, the rendering layer relies on them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class FieldKind(StrEnum):
    SCALAR = "scalar"
    LIST = "list"
    TAGS = "tags"


@dataclass(frozen=True, slots=True)
class FieldSpec:
    name: str
    synonyms: tuple[str, ...] = ()
    kind: FieldKind = FieldKind.SCALAR
    default: Any = ""

    @property
    def labels(self) -> tuple[str, ...]:
        """Canonical name followed by synonyms, used for JSON key matching."""
        return (self.name, *self.synonyms)

    def default_value(self) -> Any:
        # Lists are copied so callers never share a mutable default
        if isinstance(self.default, list | tuple):
            return list(self.default)
        return self.default


DEFAULT_TAG = "技术岗位"

JD_SCHEMA: tuple[FieldSpec, ...] = (
    FieldSpec(
        "title", ("岗位名称", "职位名称", "title", "岗位"), default="未知岗位"
    ),
    FieldSpec("company", ("公司", "company", "企业"), default="未知公司"),
    FieldSpec(
        "location", ("地点", "工作地点", "location", "城市"), default="未知"
    ),
    FieldSpec("salary", ("薪资", "薪酬", "salary", "待遇"), default="面议"),
    FieldSpec("experience", ("经验", "工作经验", "experience"), default="不限"),
    FieldSpec("education", ("学历", "education"), default="不限"),
    FieldSpec(
        "responsibilities",
        ("岗位职责", "工作职责", "职责", "responsibilities"),
        kind=FieldKind.LIST,
        default=(),
    ),
    FieldSpec(
        "requirements",
        ("任职要求", "岗位要求", "要求", "requirements"),
        kind=FieldKind.LIST,
        default=(),
    ),
    FieldSpec("tags", kind=FieldKind.TAGS, default=(DEFAULT_TAG,)),
    FieldSpec(
        "benefits",
        ("福利", "待遇", "benefits"),
        kind=FieldKind.LIST,
        default=(),
    ),
)
