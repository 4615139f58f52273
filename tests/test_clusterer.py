"""
End-to-end tests for ClusteringEngine and group_files().
Verifies partitioning, ordering, min-group policy and determinism.
"""
import pytest

from filesim.core.clusterer import ClusteringEngine, group_files
from filesim.core.models import Algorithm, ClusteringParams, ClusterMode, File, SimilarityTier


def assert_partition(result, names):
    """Every input is in exactly one group or in leftover."""
    grouped = [path for group in result.groups for path in group.paths]
    placed = grouped + result.ungrouped
    assert sorted(placed) == sorted(names)
    assert len(placed) == len(set(placed))


class TestGroupFiles:

    def test_groups_versioned_names(self):
        names = ["report_v1.pdf", "report_v2.pdf", "image001.jpg"]
        result = group_files(names, 70, Algorithm.LEVENSHTEIN)

        assert len(result.groups) == 1
        assert result.groups[0].paths == ["report_v1.pdf", "report_v2.pdf"]
        assert result.groups[0].similarity == pytest.approx(1 - 1 / 13)
        assert result.ungrouped == ["image001.jpg"]
        assert_partition(result, names)

    def test_summary_counts(self):
        names = ["aaaa", "aaab", "zzzz"]
        result = group_files(names, 75, "levenshtein")

        assert result.summary.total_files == 3
        assert result.summary.groups_found == 1
        assert result.summary.ungrouped_files == 1
        assert result.summary.threshold_used == pytest.approx(0.75)

    def test_empty_input(self):
        result = group_files([], 70)
        assert result.groups == []
        assert result.leftover == []
        assert result.summary.total_files == 0

    def test_single_file_is_left_over(self):
        result = group_files(["lonely.txt"], 0)
        assert result.groups == []
        assert result.ungrouped == ["lonely.txt"]

    def test_threshold_zero_groups_everything(self):
        names = ["a.txt", "completely_different.bin", "xyz"]
        result = group_files(names, 0, Algorithm.LEVENSHTEIN)
        assert len(result.groups) == 1
        assert result.groups[0].file_count == 3

    def test_threshold_hundred_groups_only_equal_names(self):
        names = ["File.txt", "file.txt", "file1.txt"]
        result = group_files(names, 100)

        assert len(result.groups) == 1
        assert result.groups[0].paths == ["File.txt", "file.txt"]
        assert result.groups[0].similarity == 1.0
        assert result.ungrouped == ["file1.txt"]

    def test_case_sensitive_at_hundred(self):
        result = group_files(["File.txt", "file.txt"], 100, case_sensitive=True)
        assert result.groups == []

    def test_min_group_size_rejects_pairs(self):
        names = ["aaaa", "aaab", "zzzz", "zzzy", "qqqq", "qqqr", "qqrr"]
        result = group_files(names, 75, Algorithm.LEVENSHTEIN, min_group_size=3)

        assert [g.paths for g in result.groups] == [["qqqq", "qqqr", "qqrr"]]
        assert result.ungrouped == ["aaaa", "aaab", "zzzz", "zzzy"]
        assert_partition(result, names)

    def test_groups_sorted_by_descending_similarity(self):
        names = ["aaaa", "aaab", "qwertyuiop", "qwertyuiox"]
        result = group_files(names, 70, Algorithm.LEVENSHTEIN)

        assert [g.id for g in result.groups] == [2, 1]
        assert result.groups[0].similarity == pytest.approx(0.9)
        assert result.groups[1].similarity == pytest.approx(0.75)

    def test_ties_keep_creation_order(self):
        names = ["aaaa", "aaab", "zzzz", "zzzy"]
        result = group_files(names, 75, Algorithm.LEVENSHTEIN)
        assert [g.id for g in result.groups] == [1, 2]

    def test_repeated_runs_are_identical(self):
        names = ["IMG_001.jpg", "IMG_002.jpg", "img_003.JPG", "notes.txt", "notes_old.txt", "z"]
        first = group_files(names, 60)
        second = group_files(names, 60)
        assert first.to_dict() == second.to_dict()

    def test_token_grouping_of_reports(self):
        names = ["report_v1.pdf", "report_v2.pdf", "image001.jpg", "readme.txt"]
        result = group_files(names, 50, Algorithm.TOKEN)

        assert [g.paths for g in result.groups] == [["report_v1.pdf", "report_v2.pdf"]]
        assert result.ungrouped == ["image001.jpg", "readme.txt"]

    def test_pair_below_min_group_size_is_not_grouped(self):
        names = ["file1.txt", "file2.txt", "different.doc"]
        result = group_files(names, 70, Algorithm.LEVENSHTEIN, min_group_size=3)

        assert result.groups == []
        assert result.ungrouped == names

    @pytest.mark.parametrize("low, high", [(30, 60), (60, 80), (50, 95)])
    def test_raising_threshold_only_splits_groups(self, low, high):
        names = ["IMG_001.jpg", "IMG_002.jpg", "img_0003.jpeg", "notes.txt", "notes_old.txt",
                 "notes_2020.txt", "budget.xlsx", "budget_final.xlsx", "z"]
        loose = group_files(names, low)
        strict = group_files(names, high)

        loose_group_of = {p: g.id for g in loose.groups for p in g.paths}
        for group in strict.groups:
            assert len({loose_group_of.get(p) for p in group.paths}) == 1
            assert None not in {loose_group_of.get(p) for p in group.paths}

    def test_rejects_invalid_threshold(self):
        with pytest.raises(ValueError):
            group_files(["a", "b"], 120)


class TestClusteringEngine:

    def test_uses_tiered_strategy_in_content_mode(self):
        files = [File("a/one.bin", size=3), File("b/two.bin", size=3), File("c/other.txt", size=9)]
        files[0].signature.mark_computed(b"same")
        files[1].signature.mark_computed(b"same")
        files[2].signature.mark_computed(b"diff")

        engine = ClusteringEngine()
        result = engine.cluster(files, ClusteringParams(mode=ClusterMode.CONTENT))

        assert len(result.groups) == 1
        assert result.groups[0].tier == SimilarityTier.IDENTICAL
        assert result.ungrouped == ["c/other.txt"]
        assert engine.last_comparisons > 0

    def test_content_mode_ignores_min_group_size(self):
        files = [File("holiday.jpg", size=1024), File("zz_backup.jpg", size=1024), File("notes.txt", size=1500)]
        files[0].signature.mark_computed(b"d1")
        files[1].signature.mark_computed(b"d1")
        files[2].signature.mark_computed(b"d2")

        result = ClusteringEngine().cluster(files, ClusteringParams(mode=ClusterMode.CONTENT, min_group_size=3))

        assert [g.paths for g in result.groups] == [["holiday.jpg", "zz_backup.jpg"]]
        assert result.ungrouped == ["notes.txt"]

    def test_cluster_names_wraps_strings(self):
        result = ClusteringEngine().cluster_names(["x_1", "x_2"], ClusteringParams(threshold=40))
        assert len(result.groups) == 1
        assert result.groups[0].tier is None

    def test_to_dict_shape(self):
        result = group_files(["aaaa", "aaab", "zzzz"], 75, Algorithm.LEVENSHTEIN)
        data = result.to_dict()
        assert set(data) == {"groups", "ungrouped", "summary"}
        assert data["groups"][0] == {"id": 1, "files": ["aaaa", "aaab"], "similarity": 0.75}
        assert data["ungrouped"] == ["zzzz"]
