"""Grade benchmark lookup backed by benchmarks.yaml."""

import functools
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

import structlog

from reading_assessment.config import get_settings, load_benchmark_rows
from reading_assessment.models.assessment import Benchmark

logger = structlog.get_logger()


class BenchmarkProvider(Protocol):
    """Anything that can answer expected WPM by grade."""

    @property
    def grades(self) -> frozenset[int]: ...

    def get_expected_wpm(self, grade: int) -> int | None: ...


class BenchmarkTable:
    """Read-only grade to expected-WPM table.

    Args:
        benchmarks: One row per grade; duplicate grades are rejected.
    """

    def __init__(self, benchmarks: Iterable[Benchmark]):
        self._by_grade: dict[int, Benchmark] = {}
        for benchmark in benchmarks:
            if benchmark.grade in self._by_grade:
                raise ValueError(f"Duplicate benchmark for grade {benchmark.grade}")
            self._by_grade[benchmark.grade] = benchmark

    @classmethod
    def from_yaml(cls, path: Path) -> "BenchmarkTable":
        rows = load_benchmark_rows(path)
        table = cls(Benchmark(grade=row["grade"], expected_wpm=row["wpm"]) for row in rows)
        logger.info("benchmarks_loaded", path=str(path), grades=len(table.grades))
        return table

    @property
    def grades(self) -> frozenset[int]:
        return frozenset(self._by_grade)

    @property
    def benchmarks(self) -> list[Benchmark]:
        return [self._by_grade[g] for g in sorted(self._by_grade)]

    def get_expected_wpm(self, grade: int) -> int | None:
        """Return expected WPM for a grade, or None if there is no row."""
        benchmark = self._by_grade.get(grade)
        return benchmark.expected_wpm if benchmark else None


@functools.lru_cache
def get_benchmark_table() -> BenchmarkTable:
    """Get the benchmark table singleton."""
    return BenchmarkTable.from_yaml(get_settings().benchmarks_path)
