"""Hole-by-hole scorecard for a single match.

Keeps the hole results of one match together with an append-only log of
scoring events so the last action can be undone. Storage is left to the
caller: a scorecard can be rebuilt from previously saved results and
events, and exposes both for saving again.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

import ulid

from .. import config
from ..exceptions import InvalidHoleResult
from ..scoring.match_play import (
    HoleOutcome,
    HoleWinner,
    MatchPoints,
    MatchResult,
    MatchState,
    MatchStatus,
    calculate_match_points,
    calculate_match_result,
    calculate_match_state,
)
from .validation import (
    ValidationError,
    validate_hole_number,
    validate_strokes,
    validate_total_holes,
    validate_winner,
)

logger = logging.getLogger(__name__)

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


class ScoringEventType(str, Enum):
    HOLE_SCORED = "hole_scored"
    HOLE_EDITED = "hole_edited"
    HOLE_UNDONE = "hole_undone"


@dataclass(frozen=True)
class HoleResultEdit:
    edited_at: datetime
    edited_by: str
    previous_winner: HoleWinner
    new_winner: HoleWinner
    reason: Optional[str] = None
    is_captain_override: bool = False


@dataclass(frozen=True)
class HoleResultRecord:
    id: str
    match_id: str
    hole_number: int
    winner: HoleWinner
    timestamp: datetime
    team_a_strokes: Optional[int] = None
    team_b_strokes: Optional[int] = None
    scored_by: Optional[str] = None
    last_edited_by: Optional[str] = None
    last_edited_at: Optional[datetime] = None
    edit_reason: Optional[str] = None
    edit_history: tuple[HoleResultEdit, ...] = ()

    def to_outcome(self) -> HoleOutcome:
        return HoleOutcome(self.hole_number, self.winner, self.timestamp)


@dataclass(frozen=True)
class ScoringEvent:
    id: str
    event_type: ScoringEventType
    match_id: str
    timestamp: datetime
    actor_name: str
    payload: dict[str, Any] = field(default_factory=dict)
    synced: bool = False


@dataclass(frozen=True)
class MatchSummary:
    """What gets written back onto a match once it is decided."""

    status: MatchStatus
    result: MatchResult
    margin: int
    holes_remaining: int
    points: MatchPoints


_R = TypeVar("_R", HoleOutcome, HoleResultRecord)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _sort_key(value: Optional[datetime]) -> datetime:
    if value is None:
        return _EARLIEST
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def normalize_hole_results(results: Iterable[_R], total_holes: int) -> list[_R]:
    """Keep one valid result per hole, ordered by hole number.

    Results whose hole number falls outside ``1..total_holes`` are dropped.
    When a hole appears more than once the entry with the latest timestamp
    wins; on equal (or missing) timestamps the later entry wins.
    """
    by_hole: dict[int, _R] = {}
    for result in results:
        hole = result.hole_number
        if isinstance(hole, bool) or not isinstance(hole, int):
            continue
        if not 1 <= hole <= total_holes:
            continue
        existing = by_hole.get(hole)
        if existing is None or _sort_key(result.timestamp) >= _sort_key(
            existing.timestamp
        ):
            by_hole[hole] = result
    return [by_hole[h] for h in sorted(by_hole)]


class Scorecard:
    """Event-sourced hole results for one match."""

    def __init__(
        self,
        match_id: str,
        total_holes: Optional[int] = None,
        *,
        results: Iterable[HoleResultRecord] = (),
        events: Iterable[ScoringEvent] = (),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.match_id = match_id
        self.total_holes = validate_total_holes(
            config.MATCH_TOTAL_HOLES if total_holes is None else total_holes
        )
        self._clock = clock
        self._results: dict[int, HoleResultRecord] = {
            r.hole_number: r for r in normalize_hole_results(results, self.total_holes)
        }
        self._events: list[ScoringEvent] = list(events)

    @property
    def results(self) -> list[HoleResultRecord]:
        return [self._results[h] for h in sorted(self._results)]

    @property
    def events(self) -> Sequence[ScoringEvent]:
        return tuple(self._events)

    def record_hole_result(
        self,
        hole_number: int,
        winner: HoleWinner | str,
        *,
        team_a_strokes: Optional[int] = None,
        team_b_strokes: Optional[int] = None,
        scored_by: Optional[str] = None,
        edit_reason: Optional[str] = None,
        is_captain_override: bool = False,
    ) -> HoleResultRecord:
        """Record (or correct) the result of a hole.

        A correction keeps the original scorer and timestamp, stamps who
        edited it and when, and adds an audit entry if the winner changed.
        Either way a scoring event is logged so the action can be undone.
        """
        try:
            hole = validate_hole_number(hole_number, self.total_holes)
            winner = validate_winner(winner)
            team_a_strokes = validate_strokes(team_a_strokes, "Team A strokes")
            team_b_strokes = validate_strokes(team_b_strokes, "Team B strokes")
        except ValidationError as exc:
            raise InvalidHoleResult(exc.detail) from exc

        now = self._clock()
        existing = self._results.get(hole)

        if existing is None:
            record = HoleResultRecord(
                id=str(ulid.new()),
                match_id=self.match_id,
                hole_number=hole,
                winner=winner,
                timestamp=now,
                team_a_strokes=team_a_strokes,
                team_b_strokes=team_b_strokes,
                scored_by=scored_by,
            )
            event_type = ScoringEventType.HOLE_SCORED
            payload = {
                "holeNumber": hole,
                "winner": winner.value,
                "teamAStrokes": team_a_strokes,
                "teamBStrokes": team_b_strokes,
            }
        else:
            history = existing.edit_history
            if existing.winner is not winner:
                history = history + (
                    HoleResultEdit(
                        edited_at=now,
                        edited_by=scored_by or "unknown",
                        previous_winner=existing.winner,
                        new_winner=winner,
                        reason=edit_reason,
                        is_captain_override=is_captain_override,
                    ),
                )
            record = replace(
                existing,
                winner=winner,
                team_a_strokes=team_a_strokes,
                team_b_strokes=team_b_strokes,
                last_edited_by=scored_by,
                last_edited_at=now,
                edit_reason=edit_reason,
                edit_history=history,
            )
            event_type = ScoringEventType.HOLE_EDITED
            payload = {
                "holeNumber": hole,
                "previousWinner": existing.winner.value,
                "newWinner": winner.value,
                "previousTeamAStrokes": existing.team_a_strokes,
                "previousTeamBStrokes": existing.team_b_strokes,
                "newTeamAStrokes": team_a_strokes,
                "newTeamBStrokes": team_b_strokes,
            }

        self._results[hole] = record
        self._events.append(
            ScoringEvent(
                id=str(ulid.new()),
                event_type=event_type,
                match_id=self.match_id,
                timestamp=now,
                actor_name=scored_by or "unknown",
                payload=payload,
            )
        )
        logger.info(
            "Score recorded match=%s hole=%d winner=%s edited=%s",
            self.match_id,
            hole,
            winner.value,
            existing is not None,
        )
        return record

    def undo_last_score(self) -> bool:
        """Revert the most recent scoring or edit action.

        The reverted event is replaced in the log by a ``hole_undone``
        event, so repeated calls walk further back. Returns ``False`` when
        there is nothing left to undo.
        """
        index = None
        for i in range(len(self._events) - 1, -1, -1):
            if self._events[i].event_type is not ScoringEventType.HOLE_UNDONE:
                index = i
                break
        if index is None:
            return False

        event = self._events[index]
        payload = event.payload
        hole = payload["holeNumber"]

        if event.event_type is ScoringEventType.HOLE_EDITED:
            previous_winner = HoleWinner(payload["previousWinner"])
            previous_a = payload.get("previousTeamAStrokes")
            previous_b = payload.get("previousTeamBStrokes")
            current = self._results.get(hole)
            if current is not None:
                self._results[hole] = replace(
                    current,
                    winner=previous_winner,
                    team_a_strokes=previous_a,
                    team_b_strokes=previous_b,
                )
        else:
            previous_winner = HoleWinner(payload["winner"])
            previous_a = payload.get("teamAStrokes")
            previous_b = payload.get("teamBStrokes")
            self._results.pop(hole, None)

        del self._events[index]
        self._events.append(
            ScoringEvent(
                id=str(ulid.new()),
                event_type=ScoringEventType.HOLE_UNDONE,
                match_id=self.match_id,
                timestamp=self._clock(),
                actor_name="user",
                payload={
                    "holeNumber": hole,
                    "previousWinner": previous_winner.value,
                    "previousTeamAStrokes": previous_a,
                    "previousTeamBStrokes": previous_b,
                },
            )
        )
        logger.info(
            "Score undone match=%s hole=%d previous_winner=%s",
            self.match_id,
            hole,
            previous_winner.value,
        )
        return True

    def current_hole(self) -> Optional[int]:
        """First hole still waiting for a result, or ``None`` when all are in."""
        for hole in range(1, self.total_holes + 1):
            record = self._results.get(hole)
            if record is None or record.winner is HoleWinner.NONE:
                return hole
        return None

    def state(self) -> MatchState:
        return calculate_match_state(
            self.total_holes, [r.to_outcome() for r in self.results]
        )

    def finalize(self) -> Optional[MatchSummary]:
        state = self.state()
        if not state.is_complete:
            return None
        summary = MatchSummary(
            status=state.status,
            result=calculate_match_result(state),
            margin=abs(state.current_score),
            holes_remaining=state.holes_remaining,
            points=calculate_match_points(state),
        )
        logger.info(
            "Match finalized match=%s result=%s display=%s",
            self.match_id,
            summary.result.value,
            state.display_score,
        )
        return summary
