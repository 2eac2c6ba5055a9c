"""Legacy and revised scorers plus the per-call scoring pipeline."""

from collections.abc import Callable

import structlog

from reading_assessment.assessment.calibration import (
    apply_accuracy_hard_floor,
    check_floors,
    get_v1_label,
    get_v2_label,
)
from reading_assessment.assessment.metrics import compute_metrics, round_half_up
from reading_assessment.assessment.validation import validate_attempt
from reading_assessment.config import load_tunables
from reading_assessment.errors import (
    InvalidConfigurationError,
    InvalidGradeLevelError,
    ScoringError,
)
from reading_assessment.models.assessment import (
    AttemptInput,
    ReadingMetrics,
    ScoreVersion,
    ScoringResult,
    Tunables,
)
from reading_assessment.storage.benchmarks import BenchmarkProvider

logger = structlog.get_logger()

Scorer = Callable[[ReadingMetrics, Tunables], ScoringResult]


def score_v1(metrics: ReadingMetrics, tunables: Tunables | None = None) -> ScoringResult:
    """Legacy scorer: unconditional composite thresholds, no floors.

    Fluency stays unrounded until it is blended into the composite.
    """
    fluency_score = metrics.capped_fluency_normalized * (metrics.accuracy_percent / 100)
    composite_score = round_half_up(
        fluency_score * 0.5 + metrics.comp_vocab_score * 0.5
    )

    return ScoringResult(
        score_version=ScoreVersion.V1,
        wpm=metrics.wpm,
        accuracy_percent=metrics.accuracy_percent,
        fluency_score=fluency_score,
        comp_vocab_score=metrics.comp_vocab_score,
        composite_score=composite_score,
        reading_level_label=get_v1_label(composite_score),
        cap_engaged=metrics.cap_engaged,
    )


def score_v2(metrics: ReadingMetrics, tunables: Tunables) -> ScoringResult:
    """Revised scorer: floor-gated bands with optional accuracy downgrade.

    Fluency F is rounded before the composite is formed, unlike v1.

    Args:
        metrics: Metrics for the attempt.
        tunables: Snapshot supplying the accuracy hard floor.

    Returns:
        ScoringResult with floors_met populated.
    """
    fluency_score = round_half_up(
        metrics.capped_fluency_normalized * (metrics.accuracy_percent / 100)
    )
    comp_vocab_score = metrics.comp_vocab_score
    composite_score = round_half_up((fluency_score + comp_vocab_score) / 2)

    label = get_v2_label(composite_score, fluency_score, comp_vocab_score)
    label, downgraded = apply_accuracy_hard_floor(
        label, metrics.accuracy_percent, tunables.accuracy_hard_floor
    )

    return ScoringResult(
        score_version=ScoreVersion.V2,
        wpm=metrics.wpm,
        accuracy_percent=metrics.accuracy_percent,
        fluency_score=fluency_score,
        comp_vocab_score=comp_vocab_score,
        composite_score=composite_score,
        reading_level_label=label,
        floors_met=check_floors(composite_score, fluency_score, comp_vocab_score),
        cap_engaged=metrics.cap_engaged,
        accuracy_hard_floor_applied=downgraded,
    )


_SCORERS: dict[str, Scorer] = {
    ScoreVersion.V1: score_v1,
    ScoreVersion.V2: score_v2,
}


def select_scorer(flag: str) -> Scorer:
    """Return the scorer for a version flag.

    Raises:
        InvalidConfigurationError: The flag is not 'v1' or 'v2'.
    """
    try:
        return _SCORERS[flag]
    except KeyError:
        raise InvalidConfigurationError(
            f"Unknown score version {flag!r}, expected one of {sorted(_SCORERS)}"
        ) from None


class ReadingScorer:
    """Scores reading attempts: validate, compute metrics, dispatch, log.

    Holds no per-attempt state, so one instance can serve concurrent calls.

    Args:
        benchmarks: Grade benchmark provider.
        tunables_loader: Called once per attempt for a fresh tunables snapshot.
    """

    def __init__(
        self,
        benchmarks: BenchmarkProvider,
        tunables_loader: Callable[[], Tunables] = load_tunables,
    ):
        self.benchmarks = benchmarks
        self.tunables_loader = tunables_loader

    def score(self, attempt: AttemptInput, tunables: Tunables | None = None) -> ScoringResult:
        """Score one attempt.

        Args:
            attempt: Raw attempt data.
            tunables: Explicit snapshot; loaded from configuration when omitted.

        Returns:
            A new ScoringResult.

        Raises:
            InvalidAttemptError: Attempt too short.
            InvalidGradeLevelError: Unsupported grade.
            InvalidConfigurationError: Unknown score version.
        """
        if tunables is None:
            tunables = self.tunables_loader()

        try:
            validate_attempt(attempt, self.benchmarks.grades)
        except ScoringError as e:
            logger.warning(
                "assessment_rejected",
                code=e.code.value,
                word_count=attempt.word_count,
                reading_time_seconds=attempt.reading_time_seconds,
                student_grade=attempt.student_grade,
            )
            raise

        scorer = select_scorer(tunables.score_version)

        expected_wpm = self.benchmarks.get_expected_wpm(attempt.student_grade)
        if expected_wpm is None:
            raise InvalidGradeLevelError(f"No benchmark for grade {attempt.student_grade}")

        metrics = compute_metrics(attempt, expected_wpm, tunables.fluency_cap)
        result = scorer(metrics, tunables)

        logger.info(
            "assessment_scored",
            version=result.score_version.value,
            fluency=result.fluency_score,
            comp_vocab=result.comp_vocab_score,
            composite_score=result.composite_score,
            label=result.reading_level_label.value,
            floors_met=result.floors_met.model_dump() if result.floors_met else None,
            cap_engaged=result.cap_engaged,
            accuracy_hard_floor_applied=result.accuracy_hard_floor_applied,
        )
        return result
