"""Shared fixtures for standings and points tests."""

from __future__ import annotations

from typing import List

import pytest

from league_api.models import CompletedMatch, MatchScoringPayload, Team
from league_api.scoring_config import PRESET_LIMITED_OVERS, PRESET_MULTI_DAY, ScoringConfiguration


def make_match(
    team_a: str,
    team_b: str,
    team_a_score: int,
    team_b_score: int,
    result: str,
    *,
    team_a_overs: float = 20.0,
    team_b_overs: float = 20.0,
    team_a_wkts: int = 0,
    team_b_wkts: int = 0,
    match_id: str = "m1",
) -> CompletedMatch:
    return CompletedMatch(
        match_id=match_id,
        team_a_id=team_a,
        team_b_id=team_b,
        team_a_name=team_a,
        team_b_name=team_b,
        team_a_score=team_a_score,
        team_a_wkts=team_a_wkts,
        team_a_overs=team_a_overs,
        team_b_score=team_b_score,
        team_b_wkts=team_b_wkts,
        team_b_overs=team_b_overs,
        result=result,
    )


def make_payload(**kwargs) -> MatchScoringPayload:
    return MatchScoringPayload(**kwargs)


@pytest.fixture
def roster() -> List[Team]:
    return [Team("A", "Thunder"), Team("B", "Strikers")]


@pytest.fixture
def limited_overs() -> ScoringConfiguration:
    return PRESET_LIMITED_OVERS


@pytest.fixture
def multi_day() -> ScoringConfiguration:
    return PRESET_MULTI_DAY
