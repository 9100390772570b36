# league_api/points_engine.py
from __future__ import annotations

import logging
from typing import Iterable, Optional

from league_api.models import (
    FirstInningsResult,
    MatchPoints,
    MatchResult,
    MatchScoringPayload,
    PointsBreakdown,
    Side,
)
from league_api.scoring_config import BonusTier, ScoringConfiguration, default_scoring_config

logger = logging.getLogger(__name__)

_MIRROR = {"LEAD": "LOSS", "LOSS": "LEAD", "TIE": "TIE"}


# -----------------------------
# Simple mode (per result)
# -----------------------------
def calculate_points(
    result: MatchResult,
    side: Side,
    config: Optional[ScoringConfiguration] = None,
) -> int:
    """
    Points one side earns from a classified result:
    - TIE             -> tie
    - NO_RESULT / ABANDONED -> no_result
    - HOME_WIN        -> win for A, loss for B
    - AWAY_WIN        -> win for B, loss for A
    Anything else scores 0.
    """
    if config is None:
        config = default_scoring_config()

    if result == "TIE":
        return config.tie
    if result in ("NO_RESULT", "ABANDONED"):
        return config.no_result
    if result == "HOME_WIN":
        return config.win if side == "A" else config.loss
    if result == "AWAY_WIN":
        return config.win if side == "B" else config.loss
    return 0


points_for_outcome = calculate_points


# -----------------------------
# Structured mode (multi-day)
# -----------------------------
def calculate_bonus_points(value: int, tiers: Iterable[BonusTier], max_points: int) -> int:
    """
    Only the highest tier whose threshold is met counts (tiers are not
    cumulative), clamped to max_points.
    """
    earned = 0
    for tier in sorted(tiers, key=lambda t: t.threshold):
        if value >= tier.threshold:
            earned = tier.points
    return min(earned, max_points)


def resolve_first_innings_result(
    side: Side,
    first_innings_result: Optional[FirstInningsResult],
) -> Optional[FirstInningsResult]:
    """Translate the side-A first-innings result to `side`'s perspective."""
    if side == "A" or first_innings_result is None:
        return first_innings_result
    return _MIRROR.get(first_innings_result)


def _inning_points(result: Optional[FirstInningsResult], config: ScoringConfiguration) -> int:
    if result == "LEAD":
        return config.first_innings_lead
    if result == "TIE":
        return config.first_innings_tie
    if result == "LOSS":
        return config.first_innings_loss
    return 0


def calculate_points_for_side(
    side: Side,
    payload: MatchScoringPayload,
    config: Optional[ScoringConfiguration] = None,
) -> PointsBreakdown:
    if config is None:
        config = default_scoring_config()

    # Incomplete matches score on innings only
    match_points = 0
    if not payload.is_incomplete:
        if payload.winner_side == side:
            match_points = config.win_outright
        elif payload.winner_side == "TIE":
            match_points = config.tie_match

    inning_points = _inning_points(
        resolve_first_innings_result(side, payload.first_innings_result),
        config,
    )

    team_runs = payload.team_a_runs if side == "A" else payload.team_b_runs
    wickets_taken = payload.team_b_wickets if side == "A" else payload.team_a_wickets

    batting_bonus = calculate_bonus_points(team_runs, config.batting_bonus_tiers, config.bonus_batting_max)
    bowling_bonus = calculate_bonus_points(wickets_taken, config.bowling_bonus_tiers, config.bonus_bowling_max)

    total = match_points + inning_points + batting_bonus + bowling_bonus
    is_valid = total <= config.max_total_per_match

    error = None
    if not is_valid:
        error = f"Total points ({total}) exceeds maximum allowed per match ({config.max_total_per_match})"
        logger.warning("side %s: %s", side, error)

    return PointsBreakdown(
        match_points=match_points,
        inning_points=inning_points,
        batting_bonus=batting_bonus,
        bowling_bonus=bowling_bonus,
        total=total,
        is_valid=is_valid,
        error=error,
    )


points_for_side = calculate_points_for_side


def score_match(
    payload: MatchScoringPayload,
    config: Optional[ScoringConfiguration] = None,
) -> MatchPoints:
    """Both sides' breakdowns; the entry is acceptable only if both are within the cap."""
    if config is None:
        config = default_scoring_config()
    return MatchPoints(
        side_a=calculate_points_for_side("A", payload, config),
        side_b=calculate_points_for_side("B", payload, config),
    )
