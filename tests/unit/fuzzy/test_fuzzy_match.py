from __future__ import annotations

import unittest

from fuzzyfind.fuzzy import GAP_PENALTY_CAP, ScoredMatch, filter_projects, fuzzy_match, leaf_segment


class FuzzyMatchTests(unittest.TestCase):
    def test_subsequence_found_from_tail_matches(self) -> None:
        matched, score = fuzzy_match("br", "library")

        self.assertTrue(matched)
        # Greedy from the tail pairs "r" with the final "r", two chars after "b".
        self.assertEqual(score, 2)

    def test_missing_characters_do_not_match(self) -> None:
        self.assertEqual(fuzzy_match("xq", "library"), (False, 0))

    def test_order_matters(self) -> None:
        self.assertEqual(fuzzy_match("rb", "library"), (False, 0))
        self.assertEqual(fuzzy_match("yl", "library"), (False, 0))

    def test_adjacent_matches_score_lower_than_spread_matches(self) -> None:
        adjacent = fuzzy_match("abc", "xxabc")
        spread = fuzzy_match("abc", "a_x_b_x_c")

        self.assertEqual(adjacent, (True, 0))
        self.assertTrue(spread[0])
        self.assertLess(adjacent[1], spread[1])

    def test_gap_penalty_is_capped(self) -> None:
        self.assertEqual(fuzzy_match("ab", "a" + "-" * 20 + "b"), (True, GAP_PENALTY_CAP))
        self.assertEqual(fuzzy_match("ab", "a--b"), (True, 2))

    def test_match_is_case_insensitive(self) -> None:
        self.assertEqual(fuzzy_match("FOO", "myFoo"), (True, 0))
        self.assertEqual(fuzzy_match("foo", "MYFOO"), (True, 0))

    def test_empty_query_matches_with_zero_score(self) -> None:
        self.assertEqual(fuzzy_match("", "anything"), (True, 0))

    def test_query_longer_than_candidate_does_not_match(self) -> None:
        self.assertEqual(fuzzy_match("abcd", "abc"), (False, 0))


class FilterProjectsTests(unittest.TestCase):
    def test_filter_keeps_only_matching_projects(self) -> None:
        paths, matches = filter_projects(["/a/foo", "/a/bar", "/a/foobar"], "foo")

        self.assertEqual(set(paths), {"/a/foo", "/a/foobar"})
        self.assertEqual(len(matches), 2)

    def test_empty_query_returns_all_projects_unscored(self) -> None:
        projects = ["/z/last", "/a/first"]

        paths, matches = filter_projects(projects, "")

        self.assertEqual(paths, projects)
        self.assertEqual(matches, [])

    def test_tighter_clusters_rank_first(self) -> None:
        paths, matches = filter_projects(["/p/f_o_o", "/p/fxxxxoxxxxo", "/p/foo"], "foo")

        self.assertEqual(paths, ["/p/foo", "/p/f_o_o", "/p/fxxxxoxxxxo"])
        self.assertEqual([match.score for match in matches], [0, 2, 6])

    def test_ties_keep_input_order(self) -> None:
        paths, _ = filter_projects(["/x/foobar", "/y/foo", "/z/foo"], "foo")

        self.assertEqual(paths, ["/x/foobar", "/y/foo", "/z/foo"])

    def test_matching_uses_leaf_segment_by_default(self) -> None:
        paths, _ = filter_projects(["/work/foo/bar"], "foo")

        self.assertEqual(paths, [])

    def test_full_path_fallback_matches_parent_segments(self) -> None:
        paths, matches = filter_projects(["/work/foo/bar", "/work/baz"], "foo", full_path_fallback=True)

        self.assertEqual(paths, ["/work/foo/bar"])
        self.assertEqual(matches, [ScoredMatch(project="/work/foo/bar", score=matches[0].score)])

    def test_leaf_score_wins_over_fallback_when_leaf_matches(self) -> None:
        _, matches = filter_projects(["/f/o/o/foo"], "foo", full_path_fallback=True)

        self.assertEqual(matches, [ScoredMatch(project="/f/o/o/foo", score=0)])

    def test_leaf_segment_ignores_trailing_slash(self) -> None:
        self.assertEqual(leaf_segment("/a/foo/"), "foo")
        self.assertEqual(leaf_segment("/a/foo"), "foo")


if __name__ == "__main__":
    unittest.main()
