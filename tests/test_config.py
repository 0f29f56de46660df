"""Tests for option validation and YAML loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from learnscore import const
from learnscore.config import (
    load_options,
    validate_achievement_catalog,
    validate_badge_catalog,
    validate_options,
)
from learnscore.coordinator import GamificationCoordinator
from learnscore.data_builders import (
    build_achievement,
    build_badge,
    build_rule,
    default_achievement_catalog,
    default_badge_catalog,
)
from learnscore.exceptions import InvalidConfigError


class TestValidateOptions:
    """Tests for OPTIONS_SCHEMA."""

    def test_defaults(self) -> None:
        options = validate_options()
        assert options == {
            const.CONF_LEADERBOARD_SIZE: 100,
            const.CONF_STREAK_BONUS_FACTOR: 7.14,
            const.CONF_LEDGER_MAX_ENTRIES: 50,
            const.CONF_LEDGER_MAX_AGE_DAYS: None,
            const.CONF_DEFAULT_LEADERBOARD_PERIOD: "all_time",
        }

    def test_overrides(self) -> None:
        options = validate_options(
            {const.CONF_LEADERBOARD_SIZE: 10, const.CONF_STREAK_BONUS_FACTOR: 5}
        )
        assert options[const.CONF_LEADERBOARD_SIZE] == 10
        assert options[const.CONF_STREAK_BONUS_FACTOR] == 5.0

    @pytest.mark.parametrize(
        "options",
        [
            {const.CONF_LEADERBOARD_SIZE: 0},
            {const.CONF_LEADERBOARD_SIZE: 5000},
            {const.CONF_STREAK_BONUS_FACTOR: -1},
            {const.CONF_LEDGER_MAX_ENTRIES: 0},
            {const.CONF_DEFAULT_LEADERBOARD_PERIOD: ""},
            {"unknown_option": True},
        ],
    )
    def test_rejects_invalid(self, options: dict) -> None:
        with pytest.raises(InvalidConfigError):
            validate_options(options)

    def test_coordinator_rejects_invalid(self) -> None:
        with pytest.raises(InvalidConfigError):
            GamificationCoordinator(options={const.CONF_LEADERBOARD_SIZE: -3})


class TestLoadOptions:
    """Tests for YAML option files."""

    def test_load_file(self, tmp_path: Path) -> None:
        path = tmp_path / "learnscore.yaml"
        path.write_text("leaderboard_size: 25\nledger_max_age_days: 90\n", encoding="utf-8")
        options = load_options(path)
        assert options[const.CONF_LEADERBOARD_SIZE] == 25
        assert options[const.CONF_LEDGER_MAX_AGE_DAYS] == 90
        assert options[const.CONF_LEDGER_MAX_ENTRIES] == 50

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_options(path) == validate_options()

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(InvalidConfigError):
            load_options(path)

    def test_bad_yaml_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("leaderboard_size: [1, 2\n", encoding="utf-8")
        with pytest.raises(InvalidConfigError):
            load_options(path)


def make_achievement(**overrides):
    """Build a valid custom achievement, then apply overrides."""
    achievement = build_achievement(
        "early_bird",
        "Early Bird",
        "Earned 10 points",
        "sun",
        build_rule(const.RULE_KIND_POINTS_AT_LEAST, 10),
    )
    achievement.update(overrides)
    return achievement


class TestCatalogValidation:
    """Tests for custom achievement and badge catalogs."""

    def test_reference_catalogs_are_valid(self) -> None:
        assert validate_achievement_catalog(default_achievement_catalog()) == (
            default_achievement_catalog()
        )
        assert validate_badge_catalog(default_badge_catalog()) == default_badge_catalog()

    def test_points_threshold_defaults_to_zero(self) -> None:
        entry = make_achievement()
        del entry["points_threshold"]
        assert validate_achievement_catalog([entry])[0]["points_threshold"] == 0

    @pytest.mark.parametrize(
        "rule",
        [
            {"kind": const.RULE_KIND_POINTS_AT_LEAST, "value": "lots"},
            {"kind": const.RULE_KIND_POINTS_AT_LEAST, "value": -1},
            {"kind": const.RULE_KIND_POINTS_AT_LEAST, "value": True},
            {"kind": "xp_at_least", "value": 5},
            {"kind": const.RULE_KIND_STREAK_AT_LEAST},
        ],
    )
    def test_rejects_bad_rules(self, rule: dict) -> None:
        with pytest.raises(InvalidConfigError):
            validate_achievement_catalog([make_achievement(rule=rule)])

    @pytest.mark.parametrize("entry", [{"id": "x"}, "early_bird", 7])
    def test_rejects_malformed_entries(self, entry) -> None:
        with pytest.raises(InvalidConfigError):
            validate_badge_catalog([entry])

    def test_rejects_duplicate_ids(self) -> None:
        with pytest.raises(InvalidConfigError):
            validate_achievement_catalog([make_achievement(), make_achievement()])

    def test_badge_missing_icon(self) -> None:
        badge = build_badge(
            "night_owl",
            "Night Owl",
            "Studied late",
            "moon",
            build_rule(const.RULE_KIND_STREAK_AT_LEAST, 2),
        )
        del badge["icon"]
        with pytest.raises(InvalidConfigError):
            validate_badge_catalog([badge])

    def test_bad_catalog_rejected_before_any_write(self) -> None:
        bad = make_achievement(
            rule={"kind": const.RULE_KIND_POINTS_AT_LEAST, "value": "lots"}
        )
        with pytest.raises(InvalidConfigError):
            GamificationCoordinator(achievements=[bad])

    def test_custom_catalog_unlocks(self) -> None:
        coordinator = GamificationCoordinator(achievements=[make_achievement()], badges=[])
        coordinator.add_points("u1", 10)
        assert coordinator.get_user_achievements("u1") == ["early_bird"]
        assert coordinator.get_user_badges("u1") == []
