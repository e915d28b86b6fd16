#!/usr/bin/env python3
"""
Unit tests for lexical similarity signals (trigrams and full-text matching).
"""

import unittest

from core.ranking import text_similarity as lexical


class TestTrigrams(unittest.TestCase):

    def test_trigrams_pad_words(self):
        self.assertEqual(lexical.trigrams("cat"), {"  c", " ca", "cat", "at "})

    def test_trigrams_case_insensitive(self):
        self.assertEqual(lexical.trigrams("React"), lexical.trigrams("react"))

    def test_identical_strings_score_one(self):
        self.assertEqual(lexical.trigram_similarity("search module", "search module"), 1.0)

    def test_disjoint_strings_score_zero(self):
        self.assertEqual(lexical.trigram_similarity("abc", "xyz"), 0.0)

    def test_empty_string_scores_zero(self):
        self.assertEqual(lexical.trigram_similarity("", "anything"), 0.0)
        self.assertEqual(lexical.trigram_similarity("anything", None), 0.0)

    def test_partial_overlap_between_zero_and_one(self):
        score = lexical.trigram_similarity("typescript errors", "typescript")
        self.assertGreater(score, 0.0)
        self.assertLess(score, 1.0)

    def test_similarity_is_symmetric(self):
        a, b = "Fix TypeScript type errors", "TypeScript type errors"
        self.assertAlmostEqual(lexical.trigram_similarity(a, b), lexical.trigram_similarity(b, a))


class TestFullTextMatch(unittest.TestCase):

    def test_all_terms_present(self):
        self.assertTrue(lexical.full_text_match(
            "Fix TypeScript type errors in search module", "TypeScript type errors"
        ))

    def test_missing_term(self):
        self.assertFalse(lexical.full_text_match("Fix TypeScript errors", "TypeScript performance"))

    def test_suffixes_are_stripped(self):
        self.assertTrue(lexical.full_text_match("Adding tests for the parser", "add test"))

    def test_stop_words_ignored(self):
        self.assertTrue(lexical.full_text_match("Improve documentation", "the documentation"))

    def test_only_stop_words_never_match(self):
        self.assertFalse(lexical.full_text_match("the and of", "the of"))

    def test_stem_keeps_three_characters(self):
        self.assertEqual(lexical.stem("uses"), "use")
        self.assertEqual(lexical.stem("bus"), "bus")

    def test_any_term_in(self):
        self.assertTrue(lexical.any_term_in(["python", "etl"], "Python pipelines"))
        self.assertFalse(lexical.any_term_in(["python"], "pythonic code"))
        self.assertFalse(lexical.any_term_in([], "python"))


if __name__ == '__main__':
    unittest.main()
