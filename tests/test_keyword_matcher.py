import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.features.keywords import match_keywords  # noqa: E402
from app.scoring.rounding import round_half_up  # noqa: E402


class KeywordMatcherTests(unittest.TestCase):
    RESUME_LOWER = "skills: javascript, typescript, react, node.js, python, sql, git"

    def test_partitions_keywords_preserving_order_and_casing(self):
        result = match_keywords(self.RESUME_LOWER, ["JavaScript", "React", "Node.js", "AWS", "Docker"])
        self.assertEqual(result.matched, ["JavaScript", "React", "Node.js"])
        self.assertEqual(result.missing, ["AWS", "Docker"])
        self.assertEqual(result.match_percentage, 60)

    def test_absent_or_empty_keywords_yield_zero_result(self):
        for keywords in (None, []):
            result = match_keywords(self.RESUME_LOWER, keywords)
            self.assertEqual(result.matched, [])
            self.assertEqual(result.missing, [])
            self.assertEqual(result.match_percentage, 0)

    def test_no_fuzzy_matching(self):
        result = match_keywords("nodejs and k8s", ["Node.js", "Kubernetes"])
        self.assertEqual(result.matched, [])
        self.assertEqual(result.match_percentage, 0)

    def test_percentage_rounds_half_up(self):
        keywords = ["python", "a1", "a2", "a3", "a4", "a5", "a6", "a7"]
        result = match_keywords("python", keywords)
        self.assertEqual(result.match_percentage, 13)

    def test_partition_covers_all_keywords(self):
        keywords = ["SQL", "Go", "Rust", "git", "Python"]
        result = match_keywords(self.RESUME_LOWER, keywords)
        self.assertEqual(set(result.matched) | set(result.missing), set(keywords))
        self.assertFalse(set(result.matched) & set(result.missing))
        self.assertEqual(result.match_percentage, round_half_up(100 * len(result.matched) / len(keywords)))


class RoundingTests(unittest.TestCase):
    def test_round_half_up(self):
        self.assertEqual(round_half_up(12.5), 13)
        self.assertEqual(round_half_up(50.625), 51)
        self.assertEqual(round_half_up(86.415), 86)
        self.assertEqual(round_half_up(0.0), 0)


if __name__ == "__main__":
    unittest.main()
