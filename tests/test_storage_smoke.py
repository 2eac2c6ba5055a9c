"""Smoke tests for storage modules."""

from datetime import datetime

import pytest

from reading_assessment.models.assessment import (
    Benchmark,
    ReadingLevel,
    ScoreVersion,
    ScoringResult,
)
from reading_assessment.storage.benchmarks import BenchmarkTable
from reading_assessment.storage.results import append_result, read_results


def _result(composite: int = 92) -> ScoringResult:
    return ScoringResult(
        score_version=ScoreVersion.V2,
        wpm=150,
        accuracy_percent=98.0,
        fluency_score=98,
        comp_vocab_score=85.0,
        composite_score=composite,
        reading_level_label=ReadingLevel.AT,
    )


class TestReadResults:
    def test_returns_empty_when_no_file(self, tmp_path):
        assert read_results(tmp_path) == {"results": []}

    def test_filters_by_assessment(self, tmp_path):
        append_result(tmp_path, "a-1", _result())
        append_result(tmp_path, "a-2", _result())
        results = read_results(tmp_path, "a-2")["results"]
        assert len(results) == 1
        assert results[0]["assessment_id"] == "a-2"


class TestAppendResult:
    def test_creates_results_file(self, tmp_path):
        append_result(tmp_path, "a-1", _result())
        assert (tmp_path / "results.json").exists()

    def test_entry_content(self, tmp_path):
        entry = append_result(
            tmp_path, "a-1", _result(), submitted_at=datetime(2026, 2, 28, 10, 0, 0)
        )
        assert entry["timestamp"] == "2026-02-28T10:00:00"
        assert entry["score_version"] == "v2"

        stored = read_results(tmp_path)["results"][0]
        assert stored["result"]["composite_score"] == 92
        assert stored["result"]["reading_level_label"] == "At Grade Level"
        assert stored["result"]["floors_met"] is None

    def test_resubmission_keeps_earlier_entries(self, tmp_path):
        append_result(tmp_path, "a-1", _result(composite=80))
        append_result(tmp_path, "a-1", _result(composite=92))
        results = read_results(tmp_path, "a-1")["results"]
        assert [r["result"]["composite_score"] for r in results] == [80, 92]


class TestBenchmarkTable:
    def test_lookup(self):
        table = BenchmarkTable([Benchmark(grade=5, expected_wpm=150)])
        assert table.get_expected_wpm(5) == 150
        assert table.get_expected_wpm(6) is None
        assert table.grades == frozenset({5})

    def test_duplicate_grade_rejected(self):
        with pytest.raises(ValueError):
            BenchmarkTable(
                [Benchmark(grade=5, expected_wpm=150), Benchmark(grade=5, expected_wpm=140)]
            )

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "benchmarks.yaml"
        path.write_text("benchmarks:\n  - {grade: 2, wpm: 100}\n  - {grade: 1, wpm: 75}\n")
        table = BenchmarkTable.from_yaml(path)
        assert [b.grade for b in table.benchmarks] == [1, 2]
        assert table.get_expected_wpm(1) == 75

    def test_missing_yaml(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            BenchmarkTable.from_yaml(tmp_path / "missing.yaml")

    def test_shipped_table_covers_all_grades(self):
        from reading_assessment.config import _find_project_root

        table = BenchmarkTable.from_yaml(_find_project_root() / "config" / "benchmarks.yaml")
        assert table.grades == frozenset(range(1, 13))
        assert table.get_expected_wpm(5) == 150
