# league_api/match_log.py
from __future__ import annotations

import logging
import re
from io import StringIO
from typing import Any, List, Optional, Union, IO

import pandas as pd

from league_api import config
from league_api.models import MATCH_RESULTS, CompletedMatch
from league_api.nrr_math import notation_to_overs
from league_api.result_engine import classify_result

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"team_a_id", "team_b_id", "team_a_score", "team_b_score"}

# Header spellings seen in exported scorebooks
_COLUMN_ALIASES = {
    "teamaid": "team_a_id",
    "teambid": "team_b_id",
    "teamaname": "team_a_name",
    "teambname": "team_b_name",
    "teamascore": "team_a_score",
    "teambscore": "team_b_score",
    "teamawkts": "team_a_wkts",
    "teamawickets": "team_a_wkts",
    "teambwkts": "team_b_wkts",
    "teambwickets": "team_b_wkts",
    "teamaovers": "team_a_overs",
    "teambovers": "team_b_overs",
    "matchid": "match_id",
    "result": "result",
    "margin": "margin",
}

MatchLogSource = Union[str, IO[str]]


class MatchLogError(ValueError):
    """Raised when a completed-match CSV cannot be read or is missing columns."""
    pass


def _normalize_column(c: Any) -> str:
    key = re.sub(r"[^a-z0-9]", "", str(c).strip().lower())
    return _COLUMN_ALIASES.get(key, str(c).strip().lower())


def _blank(x: Any) -> bool:
    if x is None:
        return True
    sx = str(x).strip()
    return not sx or sx.lower() == "nan"


def _safe_int(x: Any, default: int = 0) -> int:
    if _blank(x):
        return default
    try:
        return int(float(str(x).strip()))
    except ValueError:
        return default
    except OverflowError as e:
        raise MatchLogError(f"Value is not a finite number: {x!r}") from e


def _parse_overs(x: Any) -> float:
    """Numbers are taken as-is; text uses overs notation ("19.4" = 19 overs 4 balls)."""
    if _blank(x):
        return 0.0
    if isinstance(x, (int, float)):
        return float(x)
    try:
        return notation_to_overs(str(x).strip())
    except ValueError as e:
        raise MatchLogError(f"Invalid overs value: {x!r}") from e


def _text(x: Any) -> Optional[str]:
    return None if _blank(x) else str(x).strip()


def _read_frame(source: MatchLogSource) -> pd.DataFrame:
    # Plain strings containing a newline are CSV text, not a path
    if isinstance(source, str) and "\n" in source:
        source = StringIO(source)

    try:
        # overs stay text so "19.4" keeps its notation meaning
        return pd.read_csv(source, dtype=str, keep_default_na=False)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise MatchLogError(f"Unable to read match log: {e}") from e


def load_match_log(source: MatchLogSource) -> List[CompletedMatch]:
    """
    Read completed matches from CSV (path, file object or CSV text).

    Rows without a `result` are classified from the two scores, which also
    fills in a missing margin.
    """
    df = _read_frame(source)
    df = df.rename(columns={c: _normalize_column(c) for c in df.columns})

    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise MatchLogError(
            f"Match log is missing required columns: {sorted(missing)}. Parsed columns={list(df.columns)}"
        )

    if len(df) > config.MATCH_LOG_MAX_ROWS:
        raise MatchLogError(f"Match log has {len(df)} rows (limit {config.MATCH_LOG_MAX_ROWS})")

    matches: List[CompletedMatch] = []
    for idx, row in df.iterrows():
        team_a_id = _text(row.get("team_a_id"))
        team_b_id = _text(row.get("team_b_id"))
        if not team_a_id or not team_b_id:
            logger.debug("match log row %s has no team ids, skipped", idx)
            continue

        team_a_name = _text(row.get("team_a_name")) or team_a_id
        team_b_name = _text(row.get("team_b_name")) or team_b_id
        team_a_score = _safe_int(row.get("team_a_score"))
        team_b_score = _safe_int(row.get("team_b_score"))
        team_a_overs = _parse_overs(row.get("team_a_overs"))
        team_b_wkts = _safe_int(row.get("team_b_wkts"))

        result = (_text(row.get("result")) or "").upper()
        margin = _text(row.get("margin"))

        if not result:
            result, derived_margin = classify_result(
                team_a_score, team_a_overs, team_b_score, team_b_wkts,
                (team_a_name, team_b_name),
            )
            margin = margin or derived_margin
        elif result not in MATCH_RESULTS:
            raise MatchLogError(f"Row {idx}: unknown result {result!r}")

        matches.append(CompletedMatch(
            match_id=_text(row.get("match_id")) or str(idx + 1),
            team_a_id=team_a_id,
            team_b_id=team_b_id,
            team_a_name=team_a_name,
            team_b_name=team_b_name,
            team_a_score=team_a_score,
            team_a_wkts=_safe_int(row.get("team_a_wkts")),
            team_a_overs=team_a_overs,
            team_b_score=team_b_score,
            team_b_wkts=team_b_wkts,
            team_b_overs=_parse_overs(row.get("team_b_overs")),
            result=result,
            margin=margin,
        ))

    logger.debug("loaded %d matches from match log", len(matches))
    return matches
