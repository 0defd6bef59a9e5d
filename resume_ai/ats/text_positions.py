from __future__ import annotations

import re
from typing import Iterable

from resume_ai.schemas.analysis import TextPosition

PHRASE_CONFIDENCE = 0.95
GLYPH_CONFIDENCE = 1.0

WEAK_ACTION_VERBS = ("responsible for", "involved in", "helped", "worked on", "did")
UNPARSABLE_GLYPHS = "®™©§¶†‡•★○●◐◑▲▼◄►✓✗❌🔥💡"
_UNPARSABLE_RE = re.compile(f"[{re.escape(UNPARSABLE_GLYPHS)}]")


def _line_number(text: str, index: int) -> int:
    return text.count("\n", 0, index) + 1


def find_text_positions(text: str, phrase: str) -> list[TextPosition]:
    """Case-insensitive search that restarts one character after each hit, so overlaps are kept."""
    if not phrase:
        return []
    # offsets index the original text; lowercasing can change its length
    pattern = re.compile(re.escape(phrase), re.IGNORECASE)
    positions: list[TextPosition] = []
    start = 0
    while True:
        match = pattern.search(text, start)
        if match is None:
            break
        positions.append(
            TextPosition(
                phrase=phrase,
                start_index=match.start(),
                end_index=match.end(),
                line_number=_line_number(text, match.start()),
                confidence=PHRASE_CONFIDENCE,
            )
        )
        start = match.start() + 1
    return positions


def find_all_text_positions(text: str, phrases: Iterable[str]) -> list[TextPosition]:
    positions: list[TextPosition] = []
    for phrase in phrases:
        positions.extend(find_text_positions(text, phrase))
    # sorted() is stable: phrase order survives for equal starts
    return sorted(positions, key=lambda position: position.start_index)


def find_unparsable_characters(text: str) -> list[TextPosition]:
    return [
        TextPosition(
            phrase=match.group(0),
            start_index=match.start(),
            end_index=match.end(),
            line_number=_line_number(text, match.start()),
            confidence=GLYPH_CONFIDENCE,
        )
        for match in _UNPARSABLE_RE.finditer(text)
    ]


def find_weak_action_verbs(text: str) -> list[TextPosition]:
    return find_all_text_positions(text, WEAK_ACTION_VERBS)


def extract_lines(text: str) -> list[str]:
    return [line for line in text.split("\n") if line.strip()]


def char_to_line_col(text: str, char_pos: int) -> tuple[int, int]:
    """Map an offset to a 1-based line and 0-based column; each newline counts as one character."""
    lines = text.split("\n")
    current = 0
    for index, line in enumerate(lines):
        line_length = len(line) + 1
        if current + line_length > char_pos:
            return index + 1, char_pos - current
        current += line_length
    return len(lines), len(lines[-1])


def line_col_to_char(text: str, line: int, col: int) -> int:
    lines = text.split("\n")
    position = 0
    for index in range(line - 1):
        position += (len(lines[index]) if index < len(lines) else 0) + 1
    return position + col
