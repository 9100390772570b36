# main.py
from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime
from io import StringIO
from typing import Any, Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from league_api.config import validate_config, LOG_LEVEL
from league_api.match_log import MatchLogError, load_match_log
from league_api.models import CompletedMatch, MatchScoringPayload, Team
from league_api.points_engine import calculate_points, score_match
from league_api.points_table import build_standings, standings_to_dicts
from league_api.result_engine import classify_result
from league_api.scoring_config import (
    PRESETS,
    ScoringConfigError,
    ScoringConfiguration,
    get_preset,
    merge_with_defaults,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# -----------------------
# App
# -----------------------
app = FastAPI(
    title="League Standings & Points API",
    version="0.1.0",
    description="Points tables, per-match point breakdowns and result classification for cricket competitions",
)


@app.on_event("startup")
def on_startup():
    validate_config()


@app.get("/health")
def health_check():
    return {"status": "ok", "time": datetime.utcnow().isoformat() + "Z"}


# -----------------------
# Helpers
# -----------------------
class ScoringIn(BaseModel):
    preset: Optional[str] = Field(None, description="limited-overs or multi-day; server default if omitted")
    overrides: Dict[str, Any] = Field(default_factory=dict, description="Fields to override on the preset")


def _resolve_config(scoring: Optional[ScoringIn]) -> ScoringConfiguration:
    if scoring is None:
        return merge_with_defaults(None)
    try:
        base = get_preset(scoring.preset) if scoring.preset else None
        return merge_with_defaults(scoring.overrides, base=base)
    except ScoringConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))


class TeamIn(BaseModel):
    id: str
    name: str


def _roster(teams: List[TeamIn]) -> List[Team]:
    return [Team(id=t.id, name=t.name) for t in teams]


# -----------------------
# Presets
# -----------------------
@app.get("/api/presets")
def list_presets():
    return {"presets": {name: cfg.to_dict() for name, cfg in PRESETS.items()}}


# -----------------------
# Result classification
# -----------------------
class ClassifyRequest(BaseModel):
    team_a_name: str
    team_b_name: str
    team_a_score: int = Field(..., ge=0)
    team_a_overs: float = Field(0.0, ge=0)
    team_b_score: int = Field(..., ge=0)
    team_b_wickets: int = Field(0, ge=0, le=11)


@app.post("/api/classify")
def classify(req: ClassifyRequest):
    result, margin = classify_result(
        req.team_a_score,
        req.team_a_overs,
        req.team_b_score,
        req.team_b_wickets,
        (req.team_a_name, req.team_b_name),
    )
    return {"result": result, "margin": margin}


# -----------------------
# Points
# -----------------------
MatchResultIn = Literal["HOME_WIN", "AWAY_WIN", "TIE", "NO_RESULT", "ABANDONED"]


class OutcomePointsRequest(BaseModel):
    result: MatchResultIn
    scoring: Optional[ScoringIn] = None


@app.post("/api/points/outcome")
def outcome_points(req: OutcomePointsRequest):
    cfg = _resolve_config(req.scoring)
    return {
        "result": req.result,
        "team_a_points": calculate_points(req.result, "A", cfg),
        "team_b_points": calculate_points(req.result, "B", cfg),
    }


class MatchPointsRequest(BaseModel):
    result_type: Literal["OUTRIGHT_WIN", "OUTRIGHT_TIE", "ABANDONED", "NO_RESULT", "DRAW"] = "OUTRIGHT_WIN"
    winner_side: Literal["A", "B", "TIE", "NONE"] = "NONE"
    first_innings_result: Optional[Literal["LEAD", "TIE", "LOSS"]] = Field(
        None, description="Side A's first-innings result"
    )
    is_incomplete: bool = False
    team_a_runs: int = Field(0, ge=0)
    team_b_runs: int = Field(0, ge=0)
    team_a_wickets: int = Field(0, ge=0)
    team_b_wickets: int = Field(0, ge=0)
    scoring: Optional[ScoringIn] = None


@app.post("/api/points/match")
def match_points(req: MatchPointsRequest):
    cfg = _resolve_config(req.scoring)
    payload = MatchScoringPayload(**req.model_dump(exclude={"scoring"}))
    points = score_match(payload, cfg)
    return {
        "is_valid": points.is_valid,
        "error": points.error,
        "side_a": asdict(points.side_a),
        "side_b": asdict(points.side_b),
    }


# -----------------------
# Standings
# -----------------------
class CompletedMatchIn(BaseModel):
    match_id: str
    team_a_id: str
    team_b_id: str
    team_a_name: str = ""
    team_b_name: str = ""
    team_a_score: int = Field(0, ge=0)
    team_a_wkts: int = Field(0, ge=0)
    team_a_overs: float = Field(0.0, ge=0)
    team_b_score: int = Field(0, ge=0)
    team_b_wkts: int = Field(0, ge=0)
    team_b_overs: float = Field(0.0, ge=0)
    result: Optional[MatchResultIn] = Field(None, description="Derived from the scores when omitted")
    margin: Optional[str] = None


def _to_completed(m: CompletedMatchIn) -> CompletedMatch:
    team_a_name = m.team_a_name or m.team_a_id
    team_b_name = m.team_b_name or m.team_b_id
    result, margin = m.result, m.margin
    if result is None:
        result, derived = classify_result(
            m.team_a_score, m.team_a_overs, m.team_b_score, m.team_b_wkts, (team_a_name, team_b_name)
        )
        margin = margin or derived
    return CompletedMatch(
        match_id=m.match_id,
        team_a_id=m.team_a_id,
        team_b_id=m.team_b_id,
        team_a_name=team_a_name,
        team_b_name=team_b_name,
        team_a_score=m.team_a_score,
        team_a_wkts=m.team_a_wkts,
        team_a_overs=m.team_a_overs,
        team_b_score=m.team_b_score,
        team_b_wkts=m.team_b_wkts,
        team_b_overs=m.team_b_overs,
        result=result,
        margin=margin,
    )


class StandingsRequest(BaseModel):
    teams: List[TeamIn] = Field(default_factory=list)
    matches: List[CompletedMatchIn] = Field(default_factory=list)
    scoring: Optional[ScoringIn] = None


@app.post("/api/standings")
def standings(req: StandingsRequest):
    cfg = _resolve_config(req.scoring)
    rows = build_standings([_to_completed(m) for m in req.matches], _roster(req.teams), cfg)
    logger.info("standings built: %d teams, %d matches", len(rows), len(req.matches))
    return {"teams_count": len(rows), "matches_count": len(req.matches), "table": standings_to_dicts(rows)}


class StandingsCsvRequest(BaseModel):
    teams: List[TeamIn] = Field(default_factory=list)
    csv: str = Field(..., description="Completed-match log, one row per match, with a header row")
    scoring: Optional[ScoringIn] = None


@app.post("/api/standings/csv")
def standings_from_csv(req: StandingsCsvRequest):
    cfg = _resolve_config(req.scoring)
    try:
        matches = load_match_log(StringIO(req.csv))
    except MatchLogError as e:
        raise HTTPException(status_code=400, detail=str(e))

    rows = build_standings(matches, _roster(req.teams), cfg)
    logger.info("standings built from match log: %d teams, %d matches", len(rows), len(matches))
    return {"teams_count": len(rows), "matches_count": len(matches), "table": standings_to_dicts(rows)}
