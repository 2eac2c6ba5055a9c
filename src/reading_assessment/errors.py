"""Typed scoring failures."""

from enum import StrEnum


class ErrorCode(StrEnum):
    """Machine-readable failure kinds returned to callers."""

    INVALID_ATTEMPT = "INVALID_ATTEMPT"
    INVALID_GRADE_LEVEL = "INVALID_GRADE_LEVEL"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"


class ScoringError(Exception):
    """Base class for failures detected by the scoring engine."""

    code: ErrorCode

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code.value, "message": self.message}


class InvalidAttemptError(ScoringError):
    """Attempt too short to produce a meaningful score."""

    code = ErrorCode.INVALID_ATTEMPT


class InvalidGradeLevelError(ScoringError):
    """Grade outside 1-12 or missing its benchmark."""

    code = ErrorCode.INVALID_GRADE_LEVEL


class InvalidConfigurationError(ScoringError):
    """Unrecognised scorer version flag."""

    code = ErrorCode.INVALID_CONFIGURATION
