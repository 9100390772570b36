# league_api/result_engine.py
from __future__ import annotations

from typing import Tuple

from league_api.models import MatchResult

PLAYERS_PER_SIDE = 11


def classify_result(
    team_a_score: int,
    team_a_overs: float,
    team_b_score: int,
    team_b_wickets: int,
    names: Tuple[str, str],
) -> Tuple[MatchResult, str]:
    """
    Outright result of a completed two-innings match, side A batting first.

    Returns (result, margin text). Side A wins by runs, side B (chasing)
    wins by wickets in hand. No-result and abandoned matches are decided
    by the caller from completion metadata, not here.
    """
    team_a_name, team_b_name = names

    if team_a_score == team_b_score:
        return "TIE", "Match Tied"

    if team_a_score > team_b_score:
        runs = team_a_score - team_b_score
        return "HOME_WIN", f"{team_a_name} won by {runs} runs"

    wickets_left = PLAYERS_PER_SIDE - team_b_wickets
    return "AWAY_WIN", f"{team_b_name} won by {wickets_left} wickets"
