from typing import Any

from ..scoring.match_play import HoleWinner


class ValidationError(Exception):
    """Raised when a submitted hole result or round setting is invalid."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def _as_int(value: Any, label: str) -> int:
    # Reject booleans explicitly (bool is a subclass of int in Python)
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be an integer (not a boolean).")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{label} must be a whole number.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be an integer.")


def validate_total_holes(value: Any, *, max_holes: int = 36) -> int:
    """Return ``value`` as a round length between 1 and ``max_holes``."""

    holes = _as_int(value, "Total holes")
    if holes < 1:
        raise ValidationError("Total holes must be >= 1.")
    if holes > max_holes:
        raise ValidationError(f"Total holes must be <= {max_holes}.")
    return holes


def validate_hole_number(value: Any, total_holes: int) -> int:
    hole = _as_int(value, "Hole number")
    if not 1 <= hole <= total_holes:
        raise ValidationError(f"Hole number must be between 1 and {total_holes}.")
    return hole


def validate_strokes(value: Any, label: str = "Strokes") -> int | None:
    if value is None:
        return None
    strokes = _as_int(value, label)
    if strokes < 1:
        raise ValidationError(f"{label} must be >= 1.")
    return strokes


def validate_winner(value: Any) -> HoleWinner:
    """Coerce ``value`` to a :class:`HoleWinner`.

    Accepts enum members or their string values (``teamA``, ``teamB``,
    ``halved``, ``none``).
    """

    try:
        return HoleWinner(value)
    except ValueError:
        allowed = ", ".join(w.value for w in HoleWinner)
        raise ValidationError(f"Hole winner must be one of: {allowed}.")
