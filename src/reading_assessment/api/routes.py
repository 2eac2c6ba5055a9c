"""REST API routes for assessment submission, results and scoring config."""

import uuid

import structlog
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from reading_assessment.assessment.metrics import count_words
from reading_assessment.assessment.scorer import ReadingScorer
from reading_assessment.config import get_settings, load_tunables
from reading_assessment.errors import ErrorCode, ScoringError
from reading_assessment.models.assessment import (
    MAX_WORD_COUNT,
    AnswerLetter,
    AttemptInput,
    Question,
    SubmissionResponse,
)
from reading_assessment.storage.benchmarks import get_benchmark_table
from reading_assessment.storage.results import append_result, read_results

logger = structlog.get_logger()
router = APIRouter(prefix="/api")

_ERROR_STATUS = {
    ErrorCode.INVALID_ATTEMPT: 400,
    ErrorCode.INVALID_GRADE_LEVEL: 400,
    ErrorCode.INVALID_CONFIGURATION: 500,
}


class SubmissionRequest(BaseModel):
    """Submission body; the word count may come from the passage text."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    word_count: int | None = Field(default=None, ge=0, le=MAX_WORD_COUNT)
    passage: str | None = None
    reading_time: float = Field(ge=0, allow_inf_nan=False, description="Seconds")
    error_count: int = Field(default=0, ge=0)
    answers: dict[int, AnswerLetter] = Field(default_factory=dict)
    questions: list[Question] = Field(default_factory=list)
    student_grade: int

    @model_validator(mode="after")
    def _require_word_source(self) -> "SubmissionRequest":
        if self.word_count is None and self.passage is None:
            raise ValueError("Either wordCount or passage is required")
        return self

    def to_attempt(self) -> AttemptInput:
        word_count = self.word_count
        if word_count is None:
            word_count = count_words(self.passage or "")
        return AttemptInput(
            word_count=word_count,
            reading_time_seconds=self.reading_time,
            error_count=self.error_count,
            answers=self.answers,
            questions=self.questions,
            student_grade=self.student_grade,
        )


def validate_assessment_id(assessment_id: str) -> str:
    try:
        uuid.UUID(assessment_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid assessment ID format")
    return assessment_id


@router.post(
    "/assessments/{assessment_id}/submit",
    response_model=SubmissionResponse,
    response_model_by_alias=True,
)
def submit_assessment(assessment_id: str, body: SubmissionRequest) -> SubmissionResponse:
    """Score a reading attempt and store the result."""
    assessment_id = validate_assessment_id(assessment_id)
    scorer = ReadingScorer(get_benchmark_table(), tunables_loader=load_tunables)
    try:
        result = scorer.score(body.to_attempt())
    except ScoringError as e:
        if e.code is ErrorCode.INVALID_CONFIGURATION:
            logger.error("scoring_misconfigured", error=e.message)
        raise HTTPException(status_code=_ERROR_STATUS[e.code], detail=e.to_dict())

    append_result(get_settings().results_dir, assessment_id, result)
    return SubmissionResponse.from_result(result)


@router.get("/assessments/{assessment_id}/results")
def get_assessment_results(assessment_id: str) -> dict:
    """Return every stored result for an assessment."""
    assessment_id = validate_assessment_id(assessment_id)
    return read_results(get_settings().results_dir, assessment_id)


@router.get("/benchmarks")
async def list_benchmarks() -> list[dict]:
    """List expected WPM by grade."""
    return [b.model_dump() for b in get_benchmark_table().benchmarks]


@router.get("/scoring/config")
async def get_scoring_config() -> dict:
    """Return the tunables that the next submission will use."""
    return load_tunables().model_dump()


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}
