from .scorer import ATSScorer, score_resume
from .text_positions import (
    char_to_line_col,
    extract_lines,
    find_all_text_positions,
    find_text_positions,
    find_unparsable_characters,
    find_weak_action_verbs,
    line_col_to_char,
)

__all__ = [
    "ATSScorer",
    "score_resume",
    "char_to_line_col",
    "extract_lines",
    "find_all_text_positions",
    "find_text_positions",
    "find_unparsable_characters",
    "find_weak_action_verbs",
    "line_col_to_char",
]
