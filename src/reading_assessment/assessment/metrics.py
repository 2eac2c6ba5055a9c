"""Reading metrics computation shared by both scorers."""

import math
from collections.abc import Mapping, Sequence

from reading_assessment.models.assessment import (
    DEFAULT_FLUENCY_CAP,
    AttemptInput,
    Question,
    QuestionType,
    ReadingMetrics,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up.

    Built-in round() rounds half to even, which would put 112.5 at 112.
    """
    return math.floor(value + 0.5)


def count_words(passage: str) -> int:
    """Count whitespace-separated words in a passage."""
    return len(passage.split())


def compute_wpm(word_count: int, reading_time_seconds: float) -> int:
    """Compute words per minute, rounded to an integer.

    Args:
        word_count: Words in the passage.
        reading_time_seconds: Time taken to read it.

    Returns:
        Rounded WPM, or 0 when no time was recorded.
    """
    minutes = reading_time_seconds / 60
    if minutes <= 0:
        return 0
    return round_half_up(word_count / minutes)


def compute_accuracy(word_count: int, error_count: int) -> float:
    """Compute oral reading accuracy percent (0-100), unrounded."""
    if word_count <= 0:
        return 0.0
    correct = max(0, word_count - max(0, error_count))
    percent = correct / word_count * 100
    return max(0.0, min(100.0, percent))


def compute_comp_vocab(
    questions: Sequence[Question], answers: Mapping[int, str]
) -> float:
    """Compute the combined comprehension/vocabulary percent.

    Each question type present contributes its own percent-correct; the two are
    averaged when both are present. Unanswered questions count as wrong.

    Args:
        questions: Ordered questions for the passage.
        answers: Selected letter keyed by question index.

    Returns:
        Percent 0-100, or 0 when there are no questions.
    """
    totals = {QuestionType.COMPREHENSION: 0, QuestionType.VOCABULARY: 0}
    correct = {QuestionType.COMPREHENSION: 0, QuestionType.VOCABULARY: 0}

    for idx, question in enumerate(questions):
        totals[question.type] += 1
        if answers.get(idx) == question.correct_answer:
            correct[question.type] += 1

    percents = [
        correct[kind] / totals[kind] * 100
        for kind in (QuestionType.COMPREHENSION, QuestionType.VOCABULARY)
        if totals[kind] > 0
    ]
    if not percents:
        return 0.0

    score = sum(percents) / len(percents)
    return max(0.0, min(100.0, score))


def compute_metrics(
    attempt: AttemptInput,
    expected_wpm: float,
    fluency_cap: float = DEFAULT_FLUENCY_CAP,
) -> ReadingMetrics:
    """Compute all metrics for a validated attempt.

    Accuracy and comp/vocab percents keep full precision; each scorer decides
    where to round.

    Args:
        attempt: Validated attempt.
        expected_wpm: Benchmark WPM for the student's grade.
        fluency_cap: Ceiling applied to the normalized fluency ratio.

    Returns:
        ReadingMetrics for the scorers.
    """
    wpm = compute_wpm(attempt.word_count, attempt.reading_time_seconds)
    fluency_normalized = wpm / expected_wpm * 100

    return ReadingMetrics(
        wpm=wpm,
        accuracy_percent=compute_accuracy(attempt.word_count, attempt.error_count),
        comp_vocab_score=compute_comp_vocab(attempt.questions, attempt.answers),
        fluency_normalized=fluency_normalized,
        capped_fluency_normalized=min(fluency_normalized, fluency_cap),
        cap_engaged=fluency_normalized > fluency_cap,
    )
