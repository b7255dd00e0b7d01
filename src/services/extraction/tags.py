"""Closed-vocabulary tag matching."""

from __future__ import annotations

from collections.abc import Sequence


# Mixed-case technology names; matching is case-sensitive on purpose
DEFAULT_TAG_VOCABULARY: tuple[str, ...] = (
    "Java",
    "Python",
    "Go",
    "JavaScript",
    "TypeScript",
    "React",
    "Vue",
    "MySQL",
    "Redis",
    "Kafka",
    "Docker",
    "Kubernetes",
    "AWS",
    "Git",
)


class TagClassifier:
    """Report which vocabulary tokens occur verbatim in a text.

    Exact substring matching only (no stemming, no case folding). Results are
    returned in vocabulary order, not in order of appearance.
    """

    def __init__(self, vocabulary: Sequence[str] = DEFAULT_TAG_VOCABULARY) -> None:
        self.vocabulary = tuple(dict.fromkeys(vocabulary))

    def classify(self, text: str) -> list[str]:
        if not text:
            return []
        return [tag for tag in self.vocabulary if tag in text]
