"""Reading assessment data models."""

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

AnswerLetter = Literal["A", "B", "C", "D"]

MAX_WORD_COUNT = 1_000_000


class QuestionType(StrEnum):
    """Multiple-choice question categories."""

    COMPREHENSION = "comprehension"
    VOCABULARY = "vocabulary"


class ReadingLevel(StrEnum):
    """Reading level labels, highest band first."""

    ABOVE = "Above Grade Level"
    AT = "At Grade Level"
    SLIGHTLY_BELOW = "Slightly Below Grade Level"
    BELOW = "Below Grade Level"


class ScoreVersion(StrEnum):
    """Scorer implementations selectable by feature flag."""

    V1 = "v1"
    V2 = "v2"


class Question(BaseModel):
    """A single multiple-choice question attached to a passage."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    type: QuestionType
    correct_answer: AnswerLetter


class AttemptInput(BaseModel):
    """Raw data from one reading attempt."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    word_count: int = Field(ge=0, le=MAX_WORD_COUNT)
    reading_time_seconds: float = Field(ge=0, allow_inf_nan=False)
    error_count: int = Field(default=0, ge=0)
    answers: dict[int, AnswerLetter] = Field(default_factory=dict)
    questions: list[Question] = Field(default_factory=list)
    student_grade: int

    @property
    def minutes(self) -> float:
        return self.reading_time_seconds / 60


class Benchmark(BaseModel):
    """Expected words-per-minute for a grade."""

    model_config = ConfigDict(frozen=True)

    grade: int = Field(ge=1, le=12)
    expected_wpm: int = Field(gt=0)


DEFAULT_FLUENCY_CAP = 150.0


class Tunables(BaseModel):
    """Scoring constants snapshot, taken once at the start of each call."""

    model_config = ConfigDict(frozen=True)

    fluency_cap: float = DEFAULT_FLUENCY_CAP
    accuracy_hard_floor: float | None = None
    score_version: str = ScoreVersion.V1


class ReadingMetrics(BaseModel):
    """Intermediate metrics shared by both scorers."""

    model_config = ConfigDict(frozen=True)

    wpm: int
    accuracy_percent: float
    comp_vocab_score: float
    fluency_normalized: float
    capped_fluency_normalized: float
    cap_engaged: bool


class FloorsMet(BaseModel):
    """Per-component floor checks recorded by the revised scorer."""

    model_config = ConfigDict(frozen=True)

    fluency: bool
    comprehension: bool


class ScoringResult(BaseModel):
    """Outcome of scoring one attempt. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    score_version: ScoreVersion
    wpm: int
    accuracy_percent: float
    fluency_score: float
    comp_vocab_score: float
    composite_score: int
    reading_level_label: ReadingLevel
    floors_met: FloorsMet | None = None
    cap_engaged: bool = False
    accuracy_hard_floor_applied: bool = False


class SubmissionResponse(BaseModel):
    """Client-facing result shape, identical across scorer versions."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    wpm: int
    accuracy: float
    fluency_score: float
    comp_vocab_score: float
    composite_score: int
    reading_level_label: ReadingLevel

    @classmethod
    def from_result(cls, result: ScoringResult) -> "SubmissionResponse":
        return cls(
            wpm=result.wpm,
            accuracy=result.accuracy_percent,
            fluency_score=result.fluency_score,
            comp_vocab_score=result.comp_vocab_score,
            composite_score=result.composite_score,
            reading_level_label=result.reading_level_label,
        )
