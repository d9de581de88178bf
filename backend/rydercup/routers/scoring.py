# backend/rydercup/routers/scoring.py
from collections import Counter
from typing import Sequence

from fastapi import APIRouter, Query

from ..config import MATCH_TOTAL_HOLES
from ..exceptions import InvalidHoleResult, http_problem
from ..schemas import (
    CloseOutOut,
    DormieOut,
    HoleOutcomeIn,
    MatchHolesIn,
    MatchPointsOut,
    MatchResultIn,
    MatchResultOut,
    MatchStateOut,
)
from ..scoring import match_play

# Resource-only prefix; versioning is added in main.py
router = APIRouter(prefix="/scoring", tags=["scoring"])


def _outcomes(
    total_holes: int, holes: Sequence[HoleOutcomeIn]
) -> list[match_play.HoleOutcome]:
    out_of_range = sorted({h.hole_number for h in holes if h.hole_number > total_holes})
    if out_of_range:
        raise InvalidHoleResult(
            f"hole {out_of_range[0]} is outside a {total_holes}-hole round"
        )
    duplicates = sorted(n for n, c in Counter(h.hole_number for h in holes).items() if c > 1)
    if duplicates:
        raise http_problem(
            status_code=400,
            detail=f"hole {duplicates[0]} was submitted more than once",
            code="scoring_duplicate_holes",
        )
    return [match_play.HoleOutcome(h.hole_number, h.winner) for h in holes]


def _state(body: MatchHolesIn) -> match_play.MatchState:
    total_holes = body.total_holes or MATCH_TOTAL_HOLES
    return match_play.calculate_match_state(
        total_holes, _outcomes(total_holes, body.holes)
    )


@router.post("/state", response_model=MatchStateOut)
def match_state(body: MatchHolesIn):
    return MatchStateOut.from_state(_state(body))


@router.get("/dormie", response_model=DormieOut)
def dormie(
    score: int = Query(...),
    holes_remaining: int = Query(..., alias="holesRemaining", ge=0),
):
    status = match_play.check_dormie(score, holes_remaining)
    return DormieOut(
        team_a_dormie=status.team_a_dormie, team_b_dormie=status.team_b_dormie
    )


@router.get("/would-close-out", response_model=CloseOutOut)
def would_close_out(
    current_score: int = Query(..., alias="currentScore"),
    holes_remaining: int = Query(..., alias="holesRemaining", ge=0),
    winner: match_play.HoleWinner = Query(...),
):
    return CloseOutOut(
        closes_out=match_play.would_close_out(current_score, holes_remaining, winner)
    )


@router.post("/result", response_model=MatchResultOut)
def match_result(body: MatchResultIn):
    state = _state(body)
    points = match_play.calculate_match_points(state)
    return MatchResultOut(
        state=MatchStateOut.from_state(state),
        result=match_play.calculate_match_result(state),
        points=MatchPointsOut(
            team_a_points=points.team_a_points, team_b_points=points.team_b_points
        ),
        final_result=match_play.format_final_result(
            state, body.team_a_name, body.team_b_name
        ),
    )
