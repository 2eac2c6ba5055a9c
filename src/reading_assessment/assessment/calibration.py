"""Reading level band thresholds and label selection."""

from reading_assessment.models.assessment import FloorsMet, ReadingLevel

# Legacy composite thresholds (inclusive lower bounds)
V1_ABOVE_THRESHOLD = 150
V1_AT_THRESHOLD = 120
V1_SLIGHTLY_BELOW_THRESHOLD = 90

# Revised composite ranges
V2_ABOVE_MIN = 105
V2_AT_MIN = 90
V2_AT_MAX = 104
V2_SLIGHTLY_BELOW_MIN = 75

# Revised component floors: (fluency, comp/vocab)
ABOVE_FLOORS = (100, 85)
AT_FLOORS = (85, 75)

_DOWNGRADES = {
    ReadingLevel.ABOVE: ReadingLevel.AT,
    ReadingLevel.AT: ReadingLevel.SLIGHTLY_BELOW,
}


def get_v1_label(composite_score: int) -> ReadingLevel:
    """Map a legacy composite to a label using composite thresholds only.

    Args:
        composite_score: Rounded composite score.

    Returns:
        Reading level label.
    """
    if composite_score >= V1_ABOVE_THRESHOLD:
        return ReadingLevel.ABOVE
    elif composite_score >= V1_AT_THRESHOLD:
        return ReadingLevel.AT
    elif composite_score >= V1_SLIGHTLY_BELOW_THRESHOLD:
        return ReadingLevel.SLIGHTLY_BELOW
    else:
        return ReadingLevel.BELOW


def check_floors(
    composite_score: int, fluency_score: float, comp_vocab_score: float
) -> FloorsMet:
    """Check the component floors that apply to a composite.

    Composites in the Above range are checked against the Above floors; every
    other composite is checked against the At floors.
    """
    fluency_floor, comp_floor = (
        ABOVE_FLOORS if composite_score >= V2_ABOVE_MIN else AT_FLOORS
    )
    return FloorsMet(
        fluency=fluency_score >= fluency_floor,
        comprehension=comp_vocab_score >= comp_floor,
    )


def get_v2_label(
    composite_score: int, fluency_score: float, comp_vocab_score: float
) -> ReadingLevel:
    """Select a revised band, first match wins.

    A composite in the Above or At range that misses a component floor is
    capped at Slightly Below.

    Args:
        composite_score: Rounded composite score.
        fluency_score: Rounded fluency score F.
        comp_vocab_score: Comp/vocab percent C.

    Returns:
        Reading level label.
    """
    above_f, above_c = ABOVE_FLOORS
    at_f, at_c = AT_FLOORS

    if (
        composite_score >= V2_ABOVE_MIN
        and fluency_score >= above_f
        and comp_vocab_score >= above_c
    ):
        return ReadingLevel.ABOVE
    elif (
        V2_AT_MIN <= composite_score <= V2_AT_MAX
        and fluency_score >= at_f
        and comp_vocab_score >= at_c
    ):
        return ReadingLevel.AT
    elif composite_score >= V2_SLIGHTLY_BELOW_MIN:
        # 75-89, or 90+ with a missed floor
        return ReadingLevel.SLIGHTLY_BELOW
    else:
        return ReadingLevel.BELOW


def apply_accuracy_hard_floor(
    label: ReadingLevel, accuracy_percent: float, accuracy_hard_floor: float | None
) -> tuple[ReadingLevel, bool]:
    """Downgrade a label one band when accuracy is under the hard floor.

    Only Above and At are downgraded; Slightly Below and Below are left as is.

    Returns:
        Tuple of (label, whether a downgrade happened).
    """
    if accuracy_hard_floor is None or accuracy_percent >= accuracy_hard_floor:
        return label, False
    downgraded = _DOWNGRADES.get(label)
    if downgraded is None:
        return label, False
    return downgraded, True
