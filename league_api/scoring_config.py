# league_api/scoring_config.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields, replace, asdict
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from league_api import config

logger = logging.getLogger(__name__)


class ScoringConfigError(ValueError):
    """Raised when a preset name or configuration override cannot be applied."""
    pass


@dataclass(frozen=True)
class BonusTier:
    threshold: int
    points: int


@dataclass(frozen=True)
class ScoringConfiguration:
    """
    Point values for one competition.

    win/loss/tie/no_result drive the simple per-result calculation used by
    the standings table. The remaining fields drive structured (multi-day)
    scoring: outright result, first-innings points and tiered bonuses,
    capped per side per match by max_total_per_match.
    """
    win: int = 0
    loss: int = 0
    tie: int = 0
    no_result: int = 0

    win_outright: int = 0
    tie_match: int = 0

    first_innings_lead: int = 0
    first_innings_tie: int = 0
    first_innings_loss: int = 0

    bonus_batting_max: int = 0
    bonus_bowling_max: int = 0
    max_total_per_match: int = 0

    batting_bonus_tiers: Tuple[BonusTier, ...] = field(default_factory=tuple)
    bowling_bonus_tiers: Tuple[BonusTier, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# -----------------------------
# Built-in presets
# -----------------------------
PRESET_LIMITED_OVERS = ScoringConfiguration(
    win=3,
    loss=0,
    tie=1,
    no_result=1,
    win_outright=3,
    tie_match=1,
    max_total_per_match=3,
)

PRESET_MULTI_DAY = ScoringConfiguration(
    win=12,
    loss=0,
    tie=6,
    no_result=4,
    win_outright=12,
    tie_match=6,
    first_innings_lead=8,
    first_innings_tie=4,
    first_innings_loss=2,
    bonus_batting_max=4,
    bonus_bowling_max=4,
    max_total_per_match=28,
    batting_bonus_tiers=(
        BonusTier(150, 1),
        BonusTier(200, 2),
        BonusTier(250, 3),
        BonusTier(300, 4),
    ),
    bowling_bonus_tiers=(
        BonusTier(3, 1),
        BonusTier(5, 2),
        BonusTier(7, 3),
        BonusTier(9, 4),
    ),
)

PRESETS: Dict[str, ScoringConfiguration] = {
    "limited-overs": PRESET_LIMITED_OVERS,
    "multi-day": PRESET_MULTI_DAY,
}

_TIER_FIELDS = {"batting_bonus_tiers", "bowling_bonus_tiers"}
_FIELD_NAMES = [f.name for f in fields(ScoringConfiguration)]


def _camel(name: str) -> str:
    return re.sub(r"_([a-z])", lambda m: m.group(1).upper(), name)


# Stored tournament configs use a mix of camelCase and older snake_case keys
_ALIASES: Dict[str, str] = {_camel(n): n for n in _FIELD_NAMES}
_ALIASES.update({
    "nr": "no_result",
    "first_inning_lead": "first_innings_lead",
    "first_inning_tie": "first_innings_tie",
    "first_inning_loss": "first_innings_loss",
})


def get_preset(name: str) -> ScoringConfiguration:
    key = (name or "").strip().lower()
    if key not in PRESETS:
        raise ScoringConfigError(f"Unknown scoring preset: {name!r} (expected one of {', '.join(PRESETS)})")
    return PRESETS[key]


def default_scoring_config() -> ScoringConfiguration:
    preset = PRESETS.get(config.DEFAULT_SCORING_PRESET)
    if preset is None:
        logger.warning(
            "unknown DEFAULT_SCORING_PRESET %r, using limited-overs", config.DEFAULT_SCORING_PRESET
        )
        return PRESET_LIMITED_OVERS
    return preset


def _coerce_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ScoringConfigError(f"{name} must be a number, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ScoringConfigError(f"{name} must be a whole number, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ScoringConfigError(f"{name} must be a number, got {value!r}") from e


def _coerce_tiers(name: str, value: Any) -> Tuple[BonusTier, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise ScoringConfigError(f"{name} must be a list of {{threshold, points}} entries")

    tiers = []
    for item in value:
        if isinstance(item, BonusTier):
            tiers.append(item)
        elif isinstance(item, Mapping):
            if "threshold" not in item or "points" not in item:
                raise ScoringConfigError(f"{name} entries need 'threshold' and 'points': {dict(item)!r}")
            tiers.append(BonusTier(
                threshold=_coerce_int(f"{name}.threshold", item["threshold"]),
                points=_coerce_int(f"{name}.points", item["points"]),
            ))
        elif isinstance(item, (tuple, list)) and len(item) == 2:
            tiers.append(BonusTier(
                threshold=_coerce_int(f"{name}.threshold", item[0]),
                points=_coerce_int(f"{name}.points", item[1]),
            ))
        else:
            raise ScoringConfigError(f"Invalid {name} entry: {item!r}")
    return tuple(tiers)


def merge_with_defaults(
    partial: Optional[Mapping[str, Any]] = None,
    base: Optional[ScoringConfiguration] = None,
) -> ScoringConfiguration:
    """
    Overlay caller-supplied values on a base configuration (the configured
    default preset unless `base` is given). Returns a new object; neither
    input is modified.

    Keys may be field names, their camelCase forms, or the older stored
    keys (`nr`, `first_inning_lead`, ...). Keys mapped to None are treated
    as missing.
    """
    if base is None:
        base = default_scoring_config()
    if not partial:
        return base

    updates: Dict[str, Any] = {}
    for raw_key, value in partial.items():
        key = raw_key if raw_key in _FIELD_NAMES else _ALIASES.get(raw_key)
        if key is None:
            raise ScoringConfigError(f"Unknown scoring field: {raw_key!r}")
        if value is None:
            continue

        if key in _TIER_FIELDS:
            updates[key] = _coerce_tiers(key, value)
        else:
            updates[key] = _coerce_int(key, value)

    return replace(base, **updates)
