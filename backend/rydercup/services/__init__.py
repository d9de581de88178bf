"""Internal application services built on the scoring engines."""

from .validation import (
    ValidationError,
    validate_hole_number,
    validate_strokes,
    validate_total_holes,
    validate_winner,
)
from .scorecard import (
    HoleResultEdit,
    HoleResultRecord,
    MatchSummary,
    Scorecard,
    ScoringEvent,
    ScoringEventType,
    normalize_hole_results,
)

__all__ = [
    "ValidationError",
    "validate_hole_number",
    "validate_strokes",
    "validate_total_holes",
    "validate_winner",
    "HoleResultEdit",
    "HoleResultRecord",
    "MatchSummary",
    "Scorecard",
    "ScoringEvent",
    "ScoringEventType",
    "normalize_hole_results",
]
