from __future__ import annotations

import re
from typing import Iterable

_EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
_PHONE_RE = re.compile(
    r"(?:\+\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}"
    r"|\+(?=(?:[-.\s]?\d){8})\d{1,3}[-.\s]?\d{2,5}(?:[-.\s]?\d{2,5}){1,3}"
)
_METRIC_RE = re.compile(
    r"\d+%|\$\d+|increased by \d+|reduced by \d+|\d+ (?:users|customers|team|projects)",
    re.IGNORECASE,
)
_BULLET_LINE_RE = re.compile(r"^[ \t]*[-•*][ \t]", re.MULTILINE)


def tokens(text: str) -> list[str]:
    return text.split()


def word_count(text: str) -> int:
    return len(tokens(text))


def has_email(text: str) -> bool:
    return bool(_EMAIL_RE.search(text))


def has_phone(text: str) -> bool:
    return bool(_PHONE_RE.search(text))


def has_metrics(text: str) -> bool:
    return bool(_METRIC_RE.search(text))


def has_action_verb(text: str, verbs: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(verb.lower() in lowered for verb in verbs)


def looks_like_name(line: str, min_chars: int = 5, max_chars: int = 50) -> bool:
    return min_chars < len(line) < max_chars


def count_bullet_points(text: str) -> int:
    return len(_BULLET_LINE_RE.findall(text))


def count_complex_words(text: str, min_chars: int = 12) -> int:
    return sum(1 for token in tokens(text) if len(token) >= min_chars)


def average_word_length(text: str) -> float:
    words = tokens(text)
    if not words:
        return 0.0
    return sum(len(word) for word in words) / len(words)
