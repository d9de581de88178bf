from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .scoring.match_play import (
    HoleWinner,
    MatchResult,
    MatchState,
    MatchStatus,
)
from .services.validation import ValidationError, validate_total_holes


class HoleOutcomeIn(BaseModel):
    hole_number: int = Field(alias="holeNumber", ge=1)
    winner: HoleWinner

    model_config = ConfigDict(populate_by_name=True)


class MatchHolesIn(BaseModel):
    total_holes: Optional[int] = Field(default=None, alias="totalHoles")
    holes: List[HoleOutcomeIn] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("total_holes", mode="before")
    @classmethod
    def _validate_total_holes(cls, value):
        if value is None:
            return None
        try:
            return validate_total_holes(value)
        except ValidationError as exc:
            raise ValueError(exc.detail) from exc


class MatchResultIn(MatchHolesIn):
    team_a_name: str = Field(alias="teamAName", min_length=1, max_length=100)
    team_b_name: str = Field(alias="teamBName", min_length=1, max_length=100)

    @field_validator("team_a_name", "team_b_name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        if not isinstance(value, str):
            raise TypeError("team name must be a string")
        return value.strip()


class MatchStateOut(BaseModel):
    total_holes: int = Field(alias="totalHoles")
    current_score: int = Field(alias="currentScore")
    holes_played: int = Field(alias="holesPlayed")
    holes_remaining: int = Field(alias="holesRemaining")
    team_a_holes_won: int = Field(alias="teamAHolesWon")
    team_b_holes_won: int = Field(alias="teamBHolesWon")
    is_dormie: bool = Field(alias="isDormie")
    is_closed_out: bool = Field(alias="isClosedOut")
    winning_team: Optional[HoleWinner] = Field(default=None, alias="winningTeam")
    leading_team: Optional[HoleWinner] = Field(default=None, alias="leadingTeam")
    display_score: str = Field(alias="displayScore")
    status: MatchStatus

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_state(cls, state: MatchState) -> "MatchStateOut":
        return cls(
            total_holes=state.total_holes,
            current_score=state.current_score,
            holes_played=state.holes_played,
            holes_remaining=state.holes_remaining,
            team_a_holes_won=state.team_a_holes_won,
            team_b_holes_won=state.team_b_holes_won,
            is_dormie=state.is_dormie,
            is_closed_out=state.is_closed_out,
            winning_team=state.winning_team,
            leading_team=state.leading_team,
            display_score=state.display_score,
            status=state.status,
        )


class DormieOut(BaseModel):
    team_a_dormie: bool = Field(alias="teamADormie")
    team_b_dormie: bool = Field(alias="teamBDormie")

    model_config = ConfigDict(populate_by_name=True)


class CloseOutOut(BaseModel):
    closes_out: bool = Field(alias="closesOut")

    model_config = ConfigDict(populate_by_name=True)


class MatchPointsOut(BaseModel):
    team_a_points: float = Field(alias="teamAPoints")
    team_b_points: float = Field(alias="teamBPoints")

    model_config = ConfigDict(populate_by_name=True)


class MatchResultOut(BaseModel):
    state: MatchStateOut
    result: MatchResult
    points: MatchPointsOut
    final_result: str = Field(alias="finalResult")

    model_config = ConfigDict(populate_by_name=True)
