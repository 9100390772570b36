# league_api/nrr_math.py
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

NRR_DECIMALS = 3
_NRR_QUANTUM = Decimal(1).scaleb(-NRR_DECIMALS)
OversLike = Union[str, int, float]


def overs_to_balls(overs: OversLike) -> int:
    """Overs notation ("19.4", "20", 7) to balls; the part after the dot counts balls 0-5."""
    s = "" if overs is None else str(overs).strip()
    if not s:
        raise ValueError("Overs value is empty")

    whole, _, part = s.partition(".")
    completed = int(whole) if whole else 0
    balls = int(part) if part.strip() else 0

    if completed < 0:
        raise ValueError(f"Invalid overs: {overs}")
    if not 0 <= balls <= 5:
        raise ValueError(f"Invalid overs format: {overs} (balls part must be 0-5)")

    return completed * 6 + balls


def notation_to_overs(overs: OversLike) -> float:
    """
    "19.4" (19 overs and 4 balls) -> 19.666..., usable as a divisor.
    """
    return overs_to_balls(overs) / 6.0


def run_rate(runs: float, overs: float) -> float:
    if overs <= 0:
        return 0.0
    return runs / overs


def net_run_rate(runs_for: float, overs_for: float, runs_against: float, overs_against: float) -> float:
    """
    Net Run Rate = (runs_for / overs_for) - (runs_against / overs_against),
    rounded to NRR_DECIMALS. A side with no overs faced or bowled
    contributes 0 for that term.
    """
    rr_for = run_rate(runs_for, overs_for)
    rr_against = run_rate(runs_against, overs_against)
    # half-way values round away from zero, same for either sign
    return float(Decimal(rr_for - rr_against).quantize(_NRR_QUANTUM, rounding=ROUND_HALF_UP))
