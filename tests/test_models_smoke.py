"""Smoke tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from reading_assessment.models.assessment import (
    MAX_WORD_COUNT,
    AttemptInput,
    Benchmark,
    Question,
    QuestionType,
    ReadingLevel,
    ScoreVersion,
    ScoringResult,
    SubmissionResponse,
    Tunables,
)


def _result(**overrides) -> ScoringResult:
    data = dict(
        score_version=ScoreVersion.V1,
        wpm=150,
        accuracy_percent=98.0,
        fluency_score=98.0,
        comp_vocab_score=85.0,
        composite_score=92,
        reading_level_label=ReadingLevel.SLIGHTLY_BELOW,
    )
    data.update(overrides)
    return ScoringResult(**data)


class TestAttemptInput:
    def test_camel_case_aliases(self):
        attempt = AttemptInput.model_validate(
            {
                "wordCount": 300,
                "readingTimeSeconds": 120,
                "errorCount": 2,
                "answers": {"0": "B"},
                "questions": [{"type": "vocabulary", "correctAnswer": "B"}],
                "studentGrade": 4,
            }
        )
        assert attempt.word_count == 300
        assert attempt.minutes == 2
        assert attempt.answers == {0: "B"}
        assert attempt.questions[0].type is QuestionType.VOCABULARY

    def test_negative_counts_rejected(self):
        with pytest.raises(ValidationError):
            AttemptInput(word_count=-1, reading_time_seconds=60, student_grade=3)
        with pytest.raises(ValidationError):
            AttemptInput(word_count=100, reading_time_seconds=60, error_count=-1, student_grade=3)

    def test_infinite_reading_time_rejected(self):
        with pytest.raises(ValidationError):
            AttemptInput(word_count=300, reading_time_seconds=float("inf"), student_grade=5)

    def test_word_count_upper_bound(self):
        AttemptInput(word_count=MAX_WORD_COUNT, reading_time_seconds=60, student_grade=5)
        with pytest.raises(ValidationError):
            AttemptInput(word_count=10**400, reading_time_seconds=60, student_grade=5)

    def test_unknown_question_type(self):
        with pytest.raises(ValidationError):
            Question(type="grammar", correct_answer="A")

    def test_immutable(self):
        attempt = AttemptInput(word_count=100, reading_time_seconds=60, student_grade=3)
        with pytest.raises(ValidationError):
            attempt.word_count = 200


class TestBenchmark:
    def test_grade_range(self):
        with pytest.raises(ValidationError):
            Benchmark(grade=13, expected_wpm=230)

    def test_positive_wpm(self):
        with pytest.raises(ValidationError):
            Benchmark(grade=1, expected_wpm=0)


class TestTunables:
    def test_defaults(self):
        tunables = Tunables()
        assert tunables.fluency_cap == 150
        assert tunables.accuracy_hard_floor is None
        assert tunables.score_version == "v1"


class TestScoringResult:
    def test_immutable(self):
        result = _result()
        with pytest.raises(ValidationError):
            result.composite_score = 100

    def test_v1_defaults(self):
        result = _result()
        assert result.floors_met is None
        assert result.cap_engaged is False
        assert result.accuracy_hard_floor_applied is False


class TestSubmissionResponse:
    def test_field_names(self):
        response = SubmissionResponse.from_result(_result())
        assert response.model_dump(by_alias=True) == {
            "wpm": 150,
            "accuracy": 98.0,
            "fluencyScore": 98.0,
            "compVocabScore": 85.0,
            "compositeScore": 92,
            "readingLevelLabel": ReadingLevel.SLIGHTLY_BELOW,
        }
