"""Engine options and catalogs: schemas, validation and YAML loading."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import voluptuous as vol
import yaml

from . import const
from .exceptions import InvalidConfigError
from .utils.math_utils import is_strict_int

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .type_defs import AchievementDefinition, BadgeDefinition, GamificationOptions


OPTIONS_SCHEMA = vol.Schema(
    {
        vol.Optional(
            const.CONF_LEADERBOARD_SIZE, default=const.DEFAULT_LEADERBOARD_SIZE
        ): vol.All(int, vol.Range(min=1, max=const.MAX_LEADERBOARD_SIZE)),
        vol.Optional(
            const.CONF_STREAK_BONUS_FACTOR, default=const.DEFAULT_STREAK_BONUS_FACTOR
        ): vol.All(vol.Coerce(float), vol.Range(min=0)),
        vol.Optional(
            const.CONF_LEDGER_MAX_ENTRIES, default=const.DEFAULT_LEDGER_MAX_ENTRIES
        ): vol.All(int, vol.Range(min=1)),
        vol.Optional(
            const.CONF_LEDGER_MAX_AGE_DAYS, default=const.DEFAULT_LEDGER_MAX_AGE_DAYS
        ): vol.Any(None, vol.All(int, vol.Range(min=1))),
        vol.Optional(
            const.CONF_DEFAULT_LEADERBOARD_PERIOD,
            default=const.LEADERBOARD_PERIOD_ALL_TIME,
        ): vol.All(str, vol.Length(min=1)),
    }
)


def validate_options(options: Mapping[str, Any] | None = None) -> GamificationOptions:
    """Validate options and fill in defaults.

    Raises:
        InvalidConfigError: If options is not a mapping or fails the schema
    """
    if options is None:
        options = {}
    try:
        return OPTIONS_SCHEMA(dict(options))
    except (vol.Invalid, TypeError, ValueError) as err:
        const.LOGGER.error("Invalid gamification options: %s", err)
        raise InvalidConfigError(
            f"Invalid gamification options: {err}",
            placeholders={"error": str(err)},
        ) from err


def load_options(path: str | Path) -> GamificationOptions:
    """Read options from a YAML file; an empty file yields the defaults.

    Raises:
        InvalidConfigError: If the file is not valid YAML, is not a mapping,
            or fails the schema
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as err:
        const.LOGGER.error("YAML parsing failed for %s: %s", path, err)
        raise InvalidConfigError(f"YAML parsing failed: {err}") from err

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidConfigError(
            f"Options file {path} must contain a mapping, got {type(data).__name__}"
        )
    return validate_options(data)


# ------------------------------------------------------------------------------------------------
# Catalogs
# ------------------------------------------------------------------------------------------------


def _count(value: Any) -> int:
    if not is_strict_int(value):
        raise vol.Invalid("expected an integer")
    return value


RULE_SCHEMA = vol.Schema(
    {
        vol.Required(const.RULE_KIND): vol.In(const.RULE_KINDS),
        vol.Required(const.RULE_VALUE): vol.All(_count, vol.Range(min=0)),
    }
)

ACHIEVEMENT_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_ACHIEVEMENT_ID): vol.All(str, vol.Length(min=1)),
        vol.Required(const.DATA_ACHIEVEMENT_NAME): str,
        vol.Required(const.DATA_ACHIEVEMENT_DESCRIPTION): str,
        vol.Required(const.DATA_ACHIEVEMENT_ICON): str,
        vol.Optional(const.DATA_ACHIEVEMENT_POINTS_THRESHOLD, default=0): vol.All(
            _count, vol.Range(min=0)
        ),
        vol.Required(const.DATA_ACHIEVEMENT_RULE): RULE_SCHEMA,
    },
    extra=vol.ALLOW_EXTRA,
)

BADGE_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_BADGE_ID): vol.All(str, vol.Length(min=1)),
        vol.Required(const.DATA_BADGE_NAME): str,
        vol.Required(const.DATA_BADGE_DESCRIPTION): str,
        vol.Required(const.DATA_BADGE_ICON): str,
        vol.Required(const.DATA_BADGE_RULE): RULE_SCHEMA,
    },
    extra=vol.ALLOW_EXTRA,
)


def _validate_catalog(
    entries: Iterable[Any], schema: vol.Schema, label: str
) -> list[Any]:
    validated: list[Any] = []
    seen: set[str] = set()
    for index, entry in enumerate(entries):
        try:
            item = schema(dict(entry))
        except (vol.Invalid, TypeError, ValueError) as err:
            const.LOGGER.error("Invalid %s catalog entry %d: %s", label, index, err)
            raise InvalidConfigError(
                f"Invalid {label} catalog entry {index}: {err}",
                placeholders={"error": str(err)},
            ) from err
        if item["id"] in seen:
            raise InvalidConfigError(
                f"Duplicate {label} id {item['id']!r}",
                placeholders={"error": f"duplicate id {item['id']}"},
            )
        seen.add(item["id"])
        validated.append(item)
    return validated


def validate_achievement_catalog(
    entries: Iterable[Any],
) -> list[AchievementDefinition]:
    """Validate achievement definitions; rules use the known kinds only.

    Raises:
        InvalidConfigError: If an entry fails ACHIEVEMENT_SCHEMA or an id repeats
    """
    return _validate_catalog(entries, ACHIEVEMENT_SCHEMA, "achievement")


def validate_badge_catalog(entries: Iterable[Any]) -> list[BadgeDefinition]:
    """Validate badge definitions.

    Raises:
        InvalidConfigError: If an entry fails BADGE_SCHEMA or an id repeats
    """
    return _validate_catalog(entries, BADGE_SCHEMA, "badge")
