# league_api/points_table.py
from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import asdict
from typing import Dict, Iterable, List, Optional

from league_api.models import CompletedMatch, StandingRow, Team
from league_api.nrr_math import net_run_rate
from league_api.points_engine import calculate_points
from league_api.scoring_config import ScoringConfiguration, default_scoring_config

logger = logging.getLogger(__name__)


def _init_table(roster: Iterable[Team]) -> Dict[str, StandingRow]:
    table: Dict[str, StandingRow] = OrderedDict()
    for team in roster:
        if team.id in table:
            continue
        table[team.id] = StandingRow(team_id=team.id, team_name=team.name)
    return table


def apply_match(
    row_a: StandingRow,
    row_b: StandingRow,
    match: CompletedMatch,
    config: ScoringConfiguration,
) -> None:
    """
    Folds one completed match into both rows.
    Points come from the simple per-result calculation only.
    """
    row_a.played += 1
    row_b.played += 1

    # NRR components
    row_a.runs_for += match.team_a_score
    row_a.overs_for += match.team_a_overs
    row_a.runs_against += match.team_b_score
    row_a.overs_against += match.team_b_overs

    row_b.runs_for += match.team_b_score
    row_b.overs_for += match.team_b_overs
    row_b.runs_against += match.team_a_score
    row_b.overs_against += match.team_a_overs

    row_a.points += calculate_points(match.result, "A", config)
    row_b.points += calculate_points(match.result, "B", config)

    if match.result == "TIE":
        row_a.tied += 1
        row_b.tied += 1
    elif match.result == "HOME_WIN":
        row_a.won += 1
        row_b.lost += 1
    elif match.result == "AWAY_WIN":
        row_b.won += 1
        row_a.lost += 1
    else:
        row_a.no_result += 1
        row_b.no_result += 1


def build_standings(
    matches: Iterable[CompletedMatch],
    roster: Iterable[Team],
    config: Optional[ScoringConfiguration] = None,
) -> List[StandingRow]:
    """
    Returns one row per roster team sorted by:
    1) Points (desc)
    2) NRR (desc)

    Matches involving a team outside the roster are skipped. Rows level on
    both keys keep roster order.
    """
    if config is None:
        config = default_scoring_config()

    table = _init_table(roster)

    skipped = 0
    for match in matches:
        row_a = table.get(match.team_a_id)
        row_b = table.get(match.team_b_id)
        if row_a is None or row_b is None:
            skipped += 1
            logger.debug(
                "skipping match %s: %s vs %s not both in roster",
                match.match_id, match.team_a_id, match.team_b_id,
            )
            continue
        apply_match(row_a, row_b, match, config)

    for row in table.values():
        row.nrr = net_run_rate(row.runs_for, row.overs_for, row.runs_against, row.overs_against)

    logger.debug("built standings for %d teams (%d matches skipped)", len(table), skipped)

    # sorted() is stable with reverse=True, so exact ties keep roster order
    return sorted(table.values(), key=lambda r: (r.points, r.nrr), reverse=True)


def standings_to_dicts(rows: List[StandingRow]) -> List[dict]:
    out: List[dict] = []
    for idx, r in enumerate(rows, start=1):
        item = {"pos": idx}
        item.update(asdict(r))
        out.append(item)
    return out
