from __future__ import annotations

import unittest

from bookmark_cd.candidates import Candidate
from bookmark_cd.fuzzy import NEUTRAL_RANK, RankedCandidate, filter_candidates, fuzzy_score

PROJECTS = Candidate(name="Projects", path="/home/u/Projects")
PHOTOS = Candidate(name="Photos", path="/home/u/Photos")
DOWNLOADS = Candidate(name="Downloads", path="/home/u/Downloads")


def _is_subsequence(query: str, text: str) -> bool:
    remaining = iter(text.casefold())
    return all(ch in remaining for ch in query.casefold())


class FuzzyScoreTests(unittest.TestCase):
    def test_fuzzy_score_prefers_contiguous_matches_and_rejects_missing(self) -> None:
        contiguous = fuzzy_score("abc", "abc-notes")
        gapped = fuzzy_score("abc", "a_x_b_x_c-notes")

        self.assertIsNotNone(contiguous)
        self.assertIsNotNone(gapped)
        self.assertGreater(contiguous, gapped)
        self.assertIsNone(fuzzy_score("zzz", "abc"))

    def test_fuzzy_score_is_case_insensitive(self) -> None:
        self.assertEqual(fuzzy_score("PRO", "projects"), fuzzy_score("pro", "Projects"))

    def test_fuzzy_score_rewards_word_starts(self) -> None:
        boundary = fuzzy_score("w", "old-work")
        inner = fuzzy_score("w", "oldxwork")

        self.assertGreater(boundary, inner)

    def test_typing_the_start_of_a_name_beats_a_later_word(self) -> None:
        self.assertGreater(fuzzy_score("doc", "Documents"), fuzzy_score("doc", "old-docs"))

    def test_name_start_beats_later_word_start(self) -> None:
        self.assertGreater(fuzzy_score("w", "work-old"), fuzzy_score("w", "old-work"))

    def test_order_of_characters_matters(self) -> None:
        self.assertIsNone(fuzzy_score("orp", "Projects"))


class FilterCandidatesTests(unittest.TestCase):
    def test_empty_query_keeps_order_with_neutral_rank(self) -> None:
        candidates = [PROJECTS, PHOTOS, DOWNLOADS]

        ranked = filter_candidates(candidates, "")

        self.assertEqual([item.candidate for item in ranked], candidates)
        self.assertTrue(all(item.rank == NEUTRAL_RANK for item in ranked))

    def test_pro_matches_projects_but_not_photos(self) -> None:
        ranked = filter_candidates([PROJECTS, PHOTOS], "pro")

        self.assertEqual([item.candidate for item in ranked], [PROJECTS])

    def test_every_result_contains_query_as_subsequence(self) -> None:
        candidates = [PROJECTS, PHOTOS, DOWNLOADS, Candidate(name="dotfiles", path="/d")]

        for query in ("o", "ds", "PHT", "do", "xyz"):
            with self.subTest(query=query):
                ranked = filter_candidates(candidates, query)
                expected = [c for c in candidates if _is_subsequence(query, c.name)]
                self.assertCountEqual([item.candidate for item in ranked], expected)

    def test_results_are_sorted_best_first_with_stable_ties(self) -> None:
        first = Candidate(name="alpha", path="/a/1")
        twin = Candidate(name="alpha", path="/a/2")
        weak = Candidate(name="xaxlxpxhxa", path="/a/3")

        ranked = filter_candidates([weak, first, twin], "alpha")

        self.assertEqual([item.candidate for item in ranked], [first, twin, weak])
        self.assertEqual(ranked[0].rank, ranked[1].rank)
        self.assertGreater(ranked[1].rank, ranked[2].rank)

    def test_prefix_match_ranks_above_inner_match(self) -> None:
        archive = Candidate(name="old-docs", path="/o")
        documents = Candidate(name="Documents", path="/d")

        ranked = filter_candidates([archive, documents], "doc")

        self.assertEqual([item.candidate for item in ranked], [documents, archive])

    def test_filter_is_idempotent(self) -> None:
        candidates = [PROJECTS, PHOTOS, DOWNLOADS]

        self.assertEqual(filter_candidates(candidates, "o"), filter_candidates(candidates, "o"))

    def test_unmatched_query_returns_empty_list(self) -> None:
        self.assertEqual(filter_candidates([PROJECTS, PHOTOS], "qqq"), [])

    def test_ranked_candidate_is_immutable(self) -> None:
        item = RankedCandidate(candidate=PROJECTS, rank=3)

        with self.assertRaises(AttributeError):
            item.rank = 4  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
