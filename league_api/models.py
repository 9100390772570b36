from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Literal


# -----------------------------
# Result semantics
# -----------------------------
MatchResult = Literal["HOME_WIN", "AWAY_WIN", "TIE", "NO_RESULT", "ABANDONED"]
Side = Literal["A", "B"]

# Structured (multi-day) entry
ResultType = Literal["OUTRIGHT_WIN", "OUTRIGHT_TIE", "ABANDONED", "NO_RESULT", "DRAW"]
WinnerSide = Literal["A", "B", "TIE", "NONE"]
FirstInningsResult = Literal["LEAD", "TIE", "LOSS"]

MATCH_RESULTS = ("HOME_WIN", "AWAY_WIN", "TIE", "NO_RESULT", "ABANDONED")


@dataclass(frozen=True)
class Team:
    id: str
    name: str


# -----------------------------
# Canonical completed fixture
# -----------------------------
@dataclass(frozen=True)
class CompletedMatch:
    match_id: str
    team_a_id: str
    team_b_id: str
    team_a_name: str
    team_b_name: str

    team_a_score: int
    team_a_wkts: int
    team_a_overs: float
    team_b_score: int
    team_b_wkts: int
    team_b_overs: float

    result: MatchResult
    margin: Optional[str] = None


@dataclass(frozen=True)
class MatchScoringPayload:
    """
    Result entry for one match under structured scoring.

    `first_innings_result` is always stated from side A's perspective.
    """
    result_type: ResultType = "OUTRIGHT_WIN"
    winner_side: WinnerSide = "NONE"
    first_innings_result: Optional[FirstInningsResult] = None
    is_incomplete: bool = False

    team_a_runs: int = 0
    team_b_runs: int = 0
    team_a_wickets: int = 0
    team_b_wickets: int = 0


@dataclass(frozen=True)
class PointsBreakdown:
    match_points: int
    inning_points: int
    batting_bonus: int
    bowling_bonus: int
    total: int
    is_valid: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class MatchPoints:
    side_a: PointsBreakdown
    side_b: PointsBreakdown

    @property
    def is_valid(self) -> bool:
        return self.side_a.is_valid and self.side_b.is_valid

    @property
    def error(self) -> Optional[str]:
        return self.side_a.error or self.side_b.error


# -----------------------------
# Canonical standings row
# -----------------------------
@dataclass
class StandingRow:
    team_id: str
    team_name: str

    played: int = 0
    won: int = 0
    lost: int = 0
    tied: int = 0
    no_result: int = 0

    points: int = 0
    bonus_points: int = 0

    runs_for: int = 0
    overs_for: float = 0.0
    runs_against: int = 0
    overs_against: float = 0.0

    nrr: float = 0.0
