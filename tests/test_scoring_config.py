"""Tests for scoring presets and configuration merging."""

from __future__ import annotations

import dataclasses

import pytest

from league_api import config
from league_api.models import MatchScoringPayload
from league_api.points_engine import calculate_points, calculate_points_for_side
from league_api.points_table import build_standings
from league_api.scoring_config import (
    default_scoring_config,
    PRESET_LIMITED_OVERS,
    PRESET_MULTI_DAY,
    BonusTier,
    ScoringConfigError,
    get_preset,
    merge_with_defaults,
)


class TestPresets:
    def test_limited_overs_values(self):
        cfg = get_preset("limited-overs")
        assert (cfg.win, cfg.loss, cfg.tie, cfg.no_result) == (3, 0, 1, 1)
        assert (cfg.win_outright, cfg.tie_match) == (3, 1)
        assert cfg.first_innings_lead == cfg.first_innings_tie == cfg.first_innings_loss == 0
        assert cfg.bonus_batting_max == cfg.bonus_bowling_max == 0
        assert cfg.batting_bonus_tiers == () and cfg.bowling_bonus_tiers == ()

    def test_multi_day_values(self):
        cfg = get_preset("multi-day")
        assert (cfg.win_outright, cfg.tie_match) == (12, 6)
        assert (cfg.first_innings_lead, cfg.first_innings_tie, cfg.first_innings_loss) == (8, 4, 2)
        assert (cfg.bonus_batting_max, cfg.bonus_bowling_max) == (4, 4)
        assert cfg.max_total_per_match == 28
        assert BonusTier(200, 2) in cfg.batting_bonus_tiers
        assert BonusTier(5, 2) in cfg.bowling_bonus_tiers

    def test_preset_lookup_is_case_insensitive(self):
        assert get_preset(" Multi-Day ") is PRESET_MULTI_DAY

    def test_unknown_preset(self):
        with pytest.raises(ScoringConfigError, match="Unknown scoring preset"):
            get_preset("t10")

    def test_presets_are_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            PRESET_LIMITED_OVERS.win = 5


class TestMergeWithDefaults:
    def test_empty_partial_returns_default(self):
        assert merge_with_defaults(None) == PRESET_LIMITED_OVERS
        assert merge_with_defaults({}) == PRESET_LIMITED_OVERS

    def test_override_does_not_touch_base(self):
        cfg = merge_with_defaults({"win": 4}, base=PRESET_MULTI_DAY)
        assert cfg.win == 4
        assert cfg.first_innings_lead == 8
        assert PRESET_MULTI_DAY.win == 12

    def test_camel_case_and_legacy_keys(self):
        cfg = merge_with_defaults({
            "noResult": 2,
            "winOutright": 5,
            "first_inning_lead": 6,
            "maxTotalPerMatch": 10,
        })
        assert cfg.no_result == 2
        assert cfg.win_outright == 5
        assert cfg.first_innings_lead == 6
        assert cfg.max_total_per_match == 10

    def test_none_values_are_ignored(self):
        cfg = merge_with_defaults({"tie": None}, base=PRESET_MULTI_DAY)
        assert cfg.tie == 6

    def test_tier_lists_accept_mappings_and_pairs(self):
        cfg = merge_with_defaults({
            "battingBonusTiers": [{"threshold": 300, "points": 4}, {"threshold": "150", "points": 1}],
            "bowling_bonus_tiers": [(5, 2)],
        })
        assert cfg.batting_bonus_tiers == (BonusTier(300, 4), BonusTier(150, 1))
        assert cfg.bowling_bonus_tiers == (BonusTier(5, 2),)

    def test_unknown_field(self):
        with pytest.raises(ScoringConfigError, match="Unknown scoring field"):
            merge_with_defaults({"sponsor_bonus": 1})

    @pytest.mark.parametrize("value", ["lots", True, [1]])
    def test_non_numeric_value(self, value):
        with pytest.raises(ScoringConfigError):
            merge_with_defaults({"win": value})

    @pytest.mark.parametrize("value", [2.7, float("nan"), float("inf")])
    def test_fractional_value_rejected(self, value):
        with pytest.raises(ScoringConfigError):
            merge_with_defaults({"win": value})

    def test_whole_float_accepted(self):
        assert merge_with_defaults({"win": 4.0}).win == 4

    def test_fractional_tier_rejected(self):
        with pytest.raises(ScoringConfigError, match="whole number"):
            merge_with_defaults({"batting_bonus_tiers": [{"threshold": 150.5, "points": 1}]})

    def test_tier_entry_missing_points(self):
        with pytest.raises(ScoringConfigError, match="threshold"):
            merge_with_defaults({"batting_bonus_tiers": [{"threshold": 100}]})


class TestDefaultConfig:
    def test_configured_preset(self, monkeypatch):
        monkeypatch.setattr(config, "DEFAULT_SCORING_PRESET", "multi-day")
        assert default_scoring_config() is PRESET_MULTI_DAY

    def test_unknown_preset_falls_back(self, monkeypatch):
        monkeypatch.setattr(config, "DEFAULT_SCORING_PRESET", "t10")
        assert default_scoring_config() is PRESET_LIMITED_OVERS

    def test_engine_does_not_raise_on_bad_default(self, monkeypatch, roster):
        monkeypatch.setattr(config, "DEFAULT_SCORING_PRESET", "t10")
        assert calculate_points("HOME_WIN", "A") == 3
        assert calculate_points_for_side("A", MatchScoringPayload(winner_side="A")).match_points == 3
        assert [r.team_id for r in build_standings([], roster)] == ["A", "B"]
