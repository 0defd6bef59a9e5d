import json
import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_ai.taxonomy import LocalKeywordTable, get_default_keyword_table  # noqa: E402


class KeywordTableTests(unittest.TestCase):
    def setUp(self):
        self.table = LocalKeywordTable()

    def test_role_lookup_ignores_case_and_spacing(self):
        keywords = self.table.role_keywords("  Software   ENGINEER ")
        self.assertEqual(keywords[:3], ["Python", "Java", "JavaScript"])
        self.assertEqual(len(keywords), 12)

    def test_alias_resolves_to_canonical_role(self):
        self.assertEqual(self.table.role_keywords("SWE"), self.table.role_keywords("software engineer"))
        self.assertEqual(self.table.role_ats_keywords("sre"), self.table.role_ats_keywords("devops engineer"))

    def test_ats_keywords_are_separate_from_skill_keywords(self):
        ats = self.table.role_ats_keywords("software engineer")
        self.assertIn("CI/CD", ats)
        self.assertNotIn("Python", ats)

    def test_company_lookup(self):
        self.assertIn("Distributed Systems", self.table.company_keywords("Google"))
        self.assertEqual(self.table.company_keywords("Unknown Startup"), [])

    def test_unknown_role_yields_empty_lists(self):
        self.assertEqual(self.table.role_keywords("Astronaut"), [])
        self.assertEqual(self.table.role_ats_keywords("Astronaut"), [])

    def test_default_table_is_shared(self):
        self.assertIs(get_default_keyword_table(), get_default_keyword_table())


class CustomKeywordFileTests(unittest.TestCase):
    def test_custom_file_and_non_string_entries(self):
        payload = {
            "roles": {"Chef": {"keywords": ["Knife Skills", 3, "", "Plating"], "ats_keywords": "not-a-list"}},
            "companies": {},
        }
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "maps.json"
            path.write_text(json.dumps(payload), encoding="utf-8")
            table = LocalKeywordTable(path)

        self.assertEqual(table.role_keywords("chef"), ["Knife Skills", "Plating"])
        self.assertEqual(table.role_ats_keywords("chef"), [])

    def test_non_object_file_is_rejected(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "maps.json"
            path.write_text("[1, 2, 3]", encoding="utf-8")
            with self.assertRaises(RuntimeError):
                LocalKeywordTable(path)


if __name__ == "__main__":
    unittest.main()
