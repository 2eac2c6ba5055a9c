"""Attempt validation run before any metric is computed."""

from collections.abc import Collection

from reading_assessment.errors import InvalidAttemptError, InvalidGradeLevelError
from reading_assessment.models.assessment import AttemptInput

MIN_READING_MINUTES = 0.5
MIN_WORD_COUNT = 50
MIN_GRADE = 1
MAX_GRADE = 12


def validate_attempt(attempt: AttemptInput, benchmark_grades: Collection[int]) -> None:
    """Reject attempts that cannot be scored.

    The length check runs first, so a too-short attempt with a bad grade is
    reported as INVALID_ATTEMPT.

    Args:
        attempt: Raw attempt data.
        benchmark_grades: Grades that have a benchmark row.

    Raises:
        InvalidAttemptError: Read shorter than 30 seconds or fewer than 50 words.
        InvalidGradeLevelError: Grade outside 1-12 or without a benchmark.
    """
    if attempt.minutes < MIN_READING_MINUTES or attempt.word_count < MIN_WORD_COUNT:
        raise InvalidAttemptError(
            f"Attempt too short to score: {attempt.word_count} words "
            f"in {attempt.reading_time_seconds:g} seconds"
        )

    grade = attempt.student_grade
    if not MIN_GRADE <= grade <= MAX_GRADE or grade not in benchmark_grades:
        raise InvalidGradeLevelError(f"No benchmark for grade {grade}")
