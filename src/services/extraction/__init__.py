"""Structured-text extraction for answers that were not valid JSON."""

from .extractor import StructuredTextExtractor, extract_jd, is_json_only
from .schema import JD_SCHEMA, FieldKind, FieldSpec
from .tags import TagClassifier


__all__ = [
    "JD_SCHEMA",
    "FieldKind",
    "FieldSpec",
    "StructuredTextExtractor",
    "TagClassifier",
    "extract_jd",
    "is_json_only",
]
