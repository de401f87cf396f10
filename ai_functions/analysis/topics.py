from __future__ import annotations

import re
from dataclasses import dataclass

# Topic label -> keywords. Insertion order is the order topics are reported in.
# Keywords match anywhere in the input, case-insensitively (e.g. "ip" also matches "zip").
TOPIC_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Networking": ("network", "protocol", "dns", "tcp", "ip", "routing", "vlan", "osi"),
    "Security": ("security", "ssl", "tls", "firewall", "encryption", "hash"),
}


def _compile(keywords: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile("|".join(re.escape(k) for k in keywords), re.IGNORECASE)


TOPIC_PATTERNS: dict[str, re.Pattern[str]] = {
    label: _compile(keywords) for label, keywords in TOPIC_KEYWORDS.items()
}


@dataclass(frozen=True)
class TextAnalysis:
    word_count: int
    topics: tuple[str, ...]

    @property
    def summary(self) -> str:
        if self.topics:
            return (
                f"Detected {len(self.topics)} topic(s): {', '.join(self.topics)}. "
                f"Input has {self.word_count} word(s)."
            )
        return (
            f"Generic input with {self.word_count} word(s). "
            "No networking/security keywords detected."
        )


def count_words(text: str) -> int:
    return len(text.split())


def detect_topics(text: str) -> tuple[str, ...]:
    """Return every topic whose pattern matches `text`, in declaration order."""

    return tuple(label for label, pattern in TOPIC_PATTERNS.items() if pattern.search(text))


def analyze_text(text: str) -> TextAnalysis:
    """Analyze non-blank `text`: words are counted on the trimmed text, topics on the raw text."""

    return TextAnalysis(word_count=count_words(text.strip()), topics=detect_topics(text))
