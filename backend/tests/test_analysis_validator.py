import unittest

from spoon.dtos.github import RepoReference
from spoon.dtos.insight import StructuredAnalysis
from spoon.services.analysis.validator import (
    DEFAULT_FEATURE_DESCRIPTION,
    DEFAULT_FEATURE_TITLE,
    DEFAULT_SUMMARY,
    DEFAULT_USE_CASE_TITLE,
    fallback,
    validate,
)


def _items(n):
    return [{"title": f"T{i}", "description": f"D{i}"} for i in range(n)]


class TestValidate(unittest.TestCase):
    def test_well_formed_payload_passes_through(self):
        raw = {
            "summary": "  A web framework.  ",
            "keyFeatures": _items(4),
            "technologies": ["Python", "FastAPI"],
            "useCases": _items(4),
        }
        result = validate(raw)
        self.assertEqual(result.summary, "A web framework.")
        self.assertEqual([f.title for f in result.key_features], ["T0", "T1", "T2", "T3"])
        self.assertEqual(result.technologies, ["Python", "FastAPI"])
        self.assertEqual(len(result.use_cases), 4)

    def test_cardinality_bounds(self):
        for n in (0, 3, 4, 10):
            with self.subTest(n=n):
                result = validate(
                    {
                        "keyFeatures": _items(n),
                        "technologies": [f"tech{i}" for i in range(n)],
                        "useCases": _items(n),
                    }
                )
                self.assertEqual(len(result.key_features), min(n, 4))
                self.assertEqual(len(result.use_cases), min(n, 4))
                self.assertEqual(len(result.technologies), min(n, 8))

    def test_non_list_fields_become_empty(self):
        result = validate({"keyFeatures": "lots", "technologies": {"a": 1}, "useCases": 7})
        self.assertEqual(result.key_features, [])
        self.assertEqual(result.technologies, [])
        self.assertEqual(result.use_cases, [])

    def test_missing_text_gets_defaults(self):
        result = validate(
            {
                "summary": "   ",
                "keyFeatures": [{"title": ""}, "not an object"],
                "useCases": [{"description": "Only a description"}],
            }
        )
        self.assertEqual(result.summary, DEFAULT_SUMMARY)
        self.assertEqual(result.key_features[0].title, DEFAULT_FEATURE_TITLE)
        self.assertEqual(result.key_features[0].description, DEFAULT_FEATURE_DESCRIPTION)
        self.assertEqual(result.key_features[1].title, DEFAULT_FEATURE_TITLE)
        self.assertEqual(result.use_cases[0].title, DEFAULT_USE_CASE_TITLE)
        self.assertEqual(result.use_cases[0].description, "Only a description")

    def test_junk_input(self):
        for raw in (None, "text", 42, [], {}):
            with self.subTest(raw=raw):
                result = validate(raw)
                self.assertIsInstance(result, StructuredAnalysis)
                self.assertEqual(result.summary, DEFAULT_SUMMARY)

    def test_technologies_drop_nulls_and_stringify(self):
        result = validate({"technologies": ["Go", None, 3, "  ", " Rust "]})
        self.assertEqual(result.technologies, ["Go", "3", "Rust"])

    def test_idempotent(self):
        samples = [
            None,
            {"summary": "x", "keyFeatures": _items(10), "technologies": list("abcdefghijk")},
            {"keyFeatures": [{"title": " spaced "}], "useCases": "nope"},
        ]
        for raw in samples:
            with self.subTest(raw=raw):
                once = validate(raw)
                self.assertEqual(validate(once), once)
                self.assertEqual(validate(once.model_dump(by_alias=True)), once)


class TestFallback(unittest.TestCase):
    def test_deterministic_and_mentions_repo(self):
        ref = RepoReference(owner="octocat", repo="Hello-World")
        first = fallback(ref)
        self.assertEqual(first, fallback(ref))
        self.assertIn("octocat/Hello-World", first.summary)
        self.assertEqual(len(first.key_features), 4)
        self.assertEqual(len(first.use_cases), 4)
        self.assertEqual(validate(first), first)


if __name__ == "__main__":
    unittest.main()
