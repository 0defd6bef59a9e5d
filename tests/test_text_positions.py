import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_ai.ats.text_positions import (  # noqa: E402
    char_to_line_col,
    extract_lines,
    find_all_text_positions,
    find_text_positions,
    find_unparsable_characters,
    find_weak_action_verbs,
    line_col_to_char,
)


class FindTextPositionsTests(unittest.TestCase):
    def test_overlapping_matches_are_reported(self):
        positions = find_text_positions("aaa", "aa")
        self.assertEqual([p.start_index for p in positions], [0, 1])
        self.assertEqual([p.end_index for p in positions], [2, 3])

    def test_search_is_case_insensitive_and_keeps_query_phrase(self):
        positions = find_text_positions("Led a team.\nLED migrations", "led")
        self.assertEqual([p.start_index for p in positions], [0, 12])
        self.assertEqual([p.line_number for p in positions], [1, 2])
        self.assertTrue(all(p.phrase == "led" for p in positions))
        self.assertTrue(all(p.confidence == 0.95 for p in positions))

    def test_positions_respect_text_bounds(self):
        text = "helped\nhelped"
        for position in find_text_positions(text, "helped"):
            self.assertLess(position.start_index, position.end_index)
            self.assertLessEqual(position.end_index, len(text))
            self.assertEqual(position.line_number, text.count("\n", 0, position.start_index) + 1)

    def test_offsets_point_into_original_text_when_lowercase_grows(self):
        text = "İstanbul\nhelped"
        positions = find_weak_action_verbs(text)

        self.assertEqual(len(positions), 1)
        position = positions[0]
        self.assertEqual((position.start_index, position.end_index), (9, 15))
        self.assertLessEqual(position.end_index, len(text))
        self.assertEqual(text[position.start_index:position.end_index], "helped")
        self.assertEqual(position.line_number, 2)

    def test_missing_and_empty_phrases_yield_nothing(self):
        self.assertEqual(find_text_positions("resume text", "python"), [])
        self.assertEqual(find_text_positions("resume text", ""), [])

    def test_find_all_sorts_by_start_and_keeps_phrase_order_for_ties(self):
        positions = find_all_text_positions("worked on it", ["on", "worked", "worked on"])
        self.assertEqual(
            [(p.phrase, p.start_index) for p in positions],
            [("worked", 0), ("worked on", 0), ("on", 7)],
        )


class WeakVerbAndGlyphTests(unittest.TestCase):
    def test_weak_action_verbs_found_with_lines(self):
        text = "Summary\nResponsible for billing\nHelped the team"
        positions = find_weak_action_verbs(text)
        self.assertEqual([p.phrase for p in positions], ["responsible for", "helped"])
        self.assertEqual([p.line_number for p in positions], [2, 3])

    def test_unparsable_characters_have_full_confidence(self):
        text = "Skills ★ Python\n• SQL ™"
        positions = find_unparsable_characters(text)
        self.assertEqual([p.phrase for p in positions], ["★", "•", "™"])
        self.assertTrue(all(p.confidence == 1.0 for p in positions))
        self.assertEqual(positions[1].line_number, 2)

    def test_plain_ascii_has_no_unparsable_characters(self):
        self.assertEqual(find_unparsable_characters("- Built APIs | Python / SQL"), [])

    def test_extract_lines_drops_blank_lines(self):
        self.assertEqual(extract_lines("Jane\n\n  \nEngineer\n"), ["Jane", "Engineer"])


class LineColumnTests(unittest.TestCase):
    TEXT = "Jane Doe\njane@example.com\n\nExperience\n- Led the platform team"

    def test_round_trip_for_every_offset(self):
        for offset in range(len(self.TEXT)):
            line, col = char_to_line_col(self.TEXT, offset)
            self.assertEqual(line_col_to_char(self.TEXT, line, col), offset)

    def test_newline_counts_as_one_character(self):
        self.assertEqual(char_to_line_col(self.TEXT, 0), (1, 0))
        self.assertEqual(char_to_line_col(self.TEXT, 8), (1, 8))
        self.assertEqual(char_to_line_col(self.TEXT, 9), (2, 0))
        self.assertEqual(line_col_to_char(self.TEXT, 3, 0), 26)

    def test_offset_past_end_maps_to_last_line_end(self):
        text = "ab\ncd"
        self.assertEqual(char_to_line_col(text, 99), (2, 2))


if __name__ == "__main__":
    unittest.main()
