"""
Unit tests for clustering strategies.
Covers the pairwise score cache, transitive closure and content tiers.
"""
import pytest

from filesim.core.models import Algorithm, ClusteringParams, ClusterMode, File, SimilarityTier
from filesim.core.strategies import PairwiseScoreCache, TransitiveStrategy, TieredStrategy


def make_file(path, size=None, digest=None):
    file = File(path=path, size=size)
    if digest is not None:
        file.signature.mark_computed(digest)
    return file


class TestPairwiseScoreCache:

    def test_evaluates_each_unordered_pair_once(self):
        calls = []

        def score(i, j):
            calls.append((i, j))
            return 0.5

        cache = PairwiseScoreCache(score)
        assert cache.score(3, 1) == 0.5
        assert cache.score(1, 3) == 0.5
        assert cache.score(1, 3) == 0.5

        assert calls == [(1, 3)]
        assert cache.evaluations == 1


class TestTransitiveStrategy:

    params = ClusteringParams(threshold=75, algorithm=Algorithm.LEVENSHTEIN)

    def test_chain_is_closed_transitively(self):
        """aaaa~aaab and aaab~aabb put aabb in the group even though aaaa≁aabb."""
        files = [File("aaaa"), File("aaab"), File("aabb"), File("zzzz")]
        groups, processed = TransitiveStrategy().process(files, self.params)

        assert len(groups) == 1
        assert groups[0].paths == ["aaaa", "aaab", "aabb"]
        assert groups[0].similarity == pytest.approx(0.75)
        assert groups[0].tier is None
        assert processed == [True, True, True, False]

    def test_closure_adds_files_matching_any_member(self):
        """A file joins if it matches any member, not only the anchor."""
        files = [File("aabb"), File("zzzz"), File("aaaa"), File("aaab")]
        groups, _ = TransitiveStrategy().process(files, self.params)

        # anchor 0 (aabb) seeds aaab, closure then adds aaaa
        assert len(groups) == 1
        assert set(groups[0].paths) == {"aabb", "aaab", "aaaa"}
        assert groups[0].paths[0] == "aabb"

    def test_rejected_candidate_leaves_members_available(self):
        files = [File("aaaa"), File("aaab"), File("zzzz")]
        params = ClusteringParams(threshold=75, algorithm=Algorithm.LEVENSHTEIN, min_group_size=3)
        groups, processed = TransitiveStrategy().process(files, params)

        assert groups == []
        assert processed == [False, False, False]

    def test_counts_distinct_comparisons(self):
        files = [File("a1"), File("b2"), File("c3")]
        strategy = TransitiveStrategy()
        strategy.process(files, self.params)
        assert strategy.comparisons <= 3

    def test_reports_progress_per_anchor(self):
        files = [File("x"), File("y")]
        events = []
        TransitiveStrategy().process(files, self.params, lambda *args: events.append(args))
        assert events == [("Clustering", 1, 2), ("Clustering", 2, 2)]


class TestTieredCompare:
    """Tier rules for a single pair, highest priority first."""

    def test_identical_digest(self):
        match = TieredStrategy.compare(
            make_file("a/one.bin", 10, b"d1"), make_file("b/two.bin", 10, b"d1"))
        assert match.tier == SimilarityTier.IDENTICAL
        assert match.score == 1.0

    def test_same_size_and_similar_name(self):
        match = TieredStrategy.compare(
            make_file("quarterly_report_final.pdf", 100, b"d1"),
            make_file("quarterly_report_final2.pdf", 100, b"d2"))
        assert match.tier == SimilarityTier.CONTENT
        assert match.score == pytest.approx(1 - 1 / 24)

    def test_content_tier_needs_equal_size(self):
        # normalized names differ by 2 of 13 characters: above 0.8, below 0.9
        first = make_file("abcdefghij.txt", 100, b"d1")
        assert TieredStrategy.compare(first, make_file("abcdefxyij.txt", 100, b"d2")).tier == \
               SimilarityTier.CONTENT
        assert TieredStrategy.compare(first, make_file("abcdefxyij.txt", 200, b"d2")) is None

    def test_very_similar_name_with_different_size(self):
        match = TieredStrategy.compare(
            make_file("quarterly_report_final.pdf", 100, b"d1"),
            make_file("quarterly_report_final2.pdf", 999, b"d2"))
        assert match.tier == SimilarityTier.NAME

    def test_unrelated_pair(self):
        assert TieredStrategy.compare(
            make_file("report.pdf", 10, b"d1"), make_file("budget.xls", 20, b"d2")) is None

    def test_missing_digests_never_count_as_identical(self):
        match = TieredStrategy.compare(make_file("alpha.bin", 1), make_file("omega.bin", 2))
        assert match is None


class TestTieredStrategy:

    params = ClusteringParams(mode=ClusterMode.CONTENT)

    def test_first_match_sets_tier_and_minimum_sets_score(self):
        files = [
            make_file("quarterly_report_final.pdf", 10, b"d1"),
            make_file("copy.pdf", 10, b"d1"),
            make_file("quarterly_report_final2.pdf", 20, b"d2"),
        ]
        groups, processed = TieredStrategy().process(files, self.params)

        assert len(groups) == 1
        assert groups[0].tier == SimilarityTier.IDENTICAL
        assert groups[0].similarity == pytest.approx(1 - 1 / 24)
        assert processed == [True, True, True]

    def test_matching_is_anchor_only(self):
        """omega.bin copies match each other by name but only one matches the anchor."""
        files = [
            make_file("alpha.bin", 5, b"d1"),
            make_file("x/omega.bin", 5, b"d1"),
            make_file("y/omega.bin", 7, b"d3"),
        ]
        groups, processed = TieredStrategy().process(files, self.params)

        assert [g.paths for g in groups] == [["alpha.bin", "x/omega.bin"]]
        assert processed == [True, True, False]

    def test_identical_pair_grouped_regardless_of_min_group_size(self):
        """Content mode keeps any anchor with a match, even below min_group_size."""
        files = [
            make_file("holiday.jpg", 1024, b"d1"),
            make_file("zz_backup.jpg", 1024, b"d1"),
            make_file("notes.txt", 1500, b"d2"),
        ]
        params = ClusteringParams(mode=ClusterMode.CONTENT, min_group_size=3)
        groups, processed = TieredStrategy().process(files, params)

        assert [g.paths for g in groups] == [["holiday.jpg", "zz_backup.jpg"]]
        assert groups[0].tier == SimilarityTier.IDENTICAL
        assert processed == [True, True, False]

    def test_threshold_does_not_affect_tiers(self):
        files = [make_file("a.bin", 5, b"d1"), make_file("b.bin", 5, b"d1")]
        strict = ClusteringParams(threshold=100, mode=ClusterMode.CONTENT)
        groups, _ = TieredStrategy().process(files, strict)
        assert len(groups) == 1
