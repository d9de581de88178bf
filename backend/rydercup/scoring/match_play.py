"""Match-play scoring engine.

Folds per-hole results of a two-team match into a running score, detects
dormie and closed-out positions, renders golf notation ("2&1", "3 UP",
"AS") and converts a finished match into Ryder Cup points.

Every function here is pure: state is rebuilt from the full list of hole
outcomes on each call and nothing is cached between calls.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, NamedTuple, Optional

DEFAULT_TOTAL_HOLES = 18


class HoleWinner(str, Enum):
    TEAM_A = "teamA"
    TEAM_B = "teamB"
    HALVED = "halved"
    NONE = "none"  # not scored yet


class MatchStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class MatchResult(str, Enum):
    INCOMPLETE = "incomplete"
    HALVED = "halved"
    ONE_UP = "oneUp"
    TWO_UP = "twoUp"
    TWO_AND_ONE = "twoAndOne"
    THREE_AND_TWO = "threeAndTwo"
    FOUR_AND_THREE = "fourAndThree"
    FIVE_AND_FOUR = "fiveAndFour"
    SIX_AND_FIVE = "sixAndFive"
    SEVEN_AND_SIX = "sevenAndSix"
    EIGHT_AND_SEVEN = "eightAndSeven"
    NINE_AND_EIGHT = "nineAndEight"
    TEN_AND_EIGHT = "tenAndEight"


# Closeout label by winning margin. 10&8 is the largest margin an 18-hole
# match can close out with.
_CLOSEOUT_RESULTS = {
    2: MatchResult.TWO_AND_ONE,
    3: MatchResult.THREE_AND_TWO,
    4: MatchResult.FOUR_AND_THREE,
    5: MatchResult.FIVE_AND_FOUR,
    6: MatchResult.SIX_AND_FIVE,
    7: MatchResult.SEVEN_AND_SIX,
    8: MatchResult.EIGHT_AND_SEVEN,
    9: MatchResult.NINE_AND_EIGHT,
    10: MatchResult.TEN_AND_EIGHT,
}


@dataclass(frozen=True)
class HoleOutcome:
    hole_number: int
    winner: HoleWinner
    timestamp: Optional[datetime] = None


class DormieStatus(NamedTuple):
    team_a_dormie: bool
    team_b_dormie: bool


class MatchPoints(NamedTuple):
    team_a_points: float
    team_b_points: float


@dataclass(frozen=True)
class MatchState:
    """Snapshot of a match computed from its hole outcomes."""

    total_holes: int
    current_score: int
    holes_played: int
    holes_remaining: int
    team_a_holes_won: int
    team_b_holes_won: int
    is_dormie: bool
    is_closed_out: bool
    winning_team: Optional[HoleWinner]
    leading_team: Optional[HoleWinner]
    display_score: str
    status: MatchStatus

    @property
    def is_complete(self) -> bool:
        return self.status is MatchStatus.COMPLETED


def _coerce_winner(value) -> Optional[HoleWinner]:
    try:
        return HoleWinner(value)
    except ValueError:
        return None


def _leader(score: int) -> Optional[HoleWinner]:
    if score > 0:
        return HoleWinner.TEAM_A
    if score < 0:
        return HoleWinner.TEAM_B
    return None


def calculate_match_state(
    total_holes: int, outcomes: Iterable[HoleOutcome]
) -> MatchState:
    """Fold ``outcomes`` into a :class:`MatchState`.

    Outcomes may arrive in any order and may include unscored holes
    (``HoleWinner.NONE``), which are ignored. Duplicate hole numbers are
    not deduplicated here; callers are expected to pass one outcome per
    hole. If more holes were played than ``total_holes`` the remaining
    count is clamped to zero and the match is treated as completed.
    """

    # Only counts, so input order is irrelevant.
    holes_played = team_a_won = team_b_won = 0
    for outcome in outcomes:
        winner = _coerce_winner(outcome.winner)
        if winner is None or winner is HoleWinner.NONE:
            continue
        holes_played += 1
        if winner is HoleWinner.TEAM_A:
            team_a_won += 1
        elif winner is HoleWinner.TEAM_B:
            team_b_won += 1

    current_score = team_a_won - team_b_won
    holes_remaining = max(total_holes - holes_played, 0)

    dormie = check_dormie(current_score, holes_remaining)
    is_dormie = dormie.team_a_dormie or dormie.team_b_dormie
    is_closed_out = abs(current_score) > holes_remaining

    if holes_played == 0:
        status = MatchStatus.SCHEDULED
    elif is_closed_out or holes_remaining == 0:
        status = MatchStatus.COMPLETED
    else:
        status = MatchStatus.IN_PROGRESS

    winning_team = None
    if status is MatchStatus.COMPLETED:
        winning_team = _leader(current_score)

    return MatchState(
        total_holes=total_holes,
        current_score=current_score,
        holes_played=holes_played,
        holes_remaining=holes_remaining,
        team_a_holes_won=team_a_won,
        team_b_holes_won=team_b_won,
        is_dormie=is_dormie,
        is_closed_out=is_closed_out,
        winning_team=winning_team,
        leading_team=_leader(current_score),
        display_score=format_match_score(
            current_score, holes_remaining, is_closed_out, holes_played
        ),
        status=status,
    )


def format_match_score(
    score: int, holes_remaining: int, is_closed_out: bool, holes_played: int
) -> str:
    """Render a score differential in match-play notation.

    ``"AS"`` when level, ``"3&2"`` once closed out, otherwise ``"2 UP"`` or
    ``"2 DN"`` from Team A's point of view. The closeout flag is taken as
    given rather than re-derived.
    """
    if holes_played == 0 or score == 0:
        return "AS"

    margin = abs(score)
    if is_closed_out:
        # "N&0" is not golf notation; a lead held to the last hole is "N UP".
        if holes_remaining == 0:
            return f"{margin} UP"
        return f"{margin}&{holes_remaining}"

    return f"{margin} {'UP' if score > 0 else 'DN'}"


def check_dormie(score: int, holes_remaining: int) -> DormieStatus:
    return DormieStatus(
        team_a_dormie=score > 0 and score == holes_remaining,
        team_b_dormie=score < 0 and -score == holes_remaining,
    )


def would_close_out(
    current_score: int, holes_remaining: int, hypothetical_winner: HoleWinner
) -> bool:
    """Return whether scoring one more hole would decide the match.

    ``holes_remaining`` counts the hole being previewed. An unscored
    (``NONE``) or unrecognised winner is treated like a halve, so the
    current margin is checked against the holes left after this one.
    """
    winner = _coerce_winner(hypothetical_winner)
    new_score = current_score
    if winner is HoleWinner.TEAM_A:
        new_score += 1
    elif winner is HoleWinner.TEAM_B:
        new_score -= 1
    return abs(new_score) > holes_remaining - 1


def calculate_match_result(state: MatchState) -> MatchResult:
    """Label a completed match.

    Closeouts are labelled by margin alone, using the canonical label for
    that margin. A state scored past its closeout, such as 4 up with one
    hole left (displayed "4&1"), still gets ``FOUR_AND_THREE``.
    """
    if not state.is_complete:
        return MatchResult.INCOMPLETE
    if state.current_score == 0:
        return MatchResult.HALVED

    margin = abs(state.current_score)
    if state.holes_remaining == 0:
        # Anything above 1 UP here means holes were recorded past the closeout.
        return MatchResult.ONE_UP if margin == 1 else MatchResult.TWO_UP

    return _CLOSEOUT_RESULTS.get(margin, MatchResult.TEN_AND_EIGHT)


def calculate_match_points(state: MatchState) -> MatchPoints:
    """Ryder Cup points: 1 for a win, half each for a halved match."""
    if not state.is_complete:
        return MatchPoints(0, 0)
    if state.current_score == 0:
        return MatchPoints(0.5, 0.5)
    if state.current_score > 0:
        return MatchPoints(1, 0)
    return MatchPoints(0, 1)


def format_final_result(
    state: MatchState, team_a_name: str, team_b_name: str
) -> str:
    """Result line for a completed match; in-progress states read as a win."""
    if state.is_complete and state.current_score == 0:
        return "Match Halved"
    winner = team_a_name if state.current_score > 0 else team_b_name
    return f"{winner} won {state.display_score}"
