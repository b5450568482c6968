"""
Configuration module for the engine.

Every tunable number of the combat and AI rules lives in ``CombatConfig`` so a
scenario can be replayed or rebalanced from a JSON file without code changes.
"""

import json
from pathlib import Path

from catchery import log_warning
from pydantic import BaseModel, Field, ValidationError


class CombatConfig(BaseModel):
    """Tunable parameters of the combat resolution and enemy AI."""

    # Damage.
    variance_min: int = Field(-2, description="Lowest damage variance roll.")
    variance_max: int = Field(2, description="Highest damage variance roll.")
    crit_threshold: float = Field(
        1.5,
        description="Dealt damage above this multiple of the reference damage is critical.",
    )
    crit_bleed_duration: int = Field(3, ge=1)
    crit_bleed_damage: int = Field(2, ge=0)
    vulnerable_multiplier: float = Field(1.25, ge=1.0)

    # AI.
    detection_radius: int = Field(10, ge=0, description="Chebyshev aggro radius.")
    aggressive_ability_chance: float = Field(0.3, ge=0.0, le=1.0)
    flanking_ability_chance: float = Field(0.4, ge=0.0, le=1.0)
    cautious_hp_ratio: float = Field(0.3, ge=0.0, le=1.0)
    ranged_min_distance: int = Field(3, ge=1)
    ranged_max_distance: int = Field(6, ge=1)

    # Boss.
    boss_summon_ratios: tuple[float, float] = (0.5, 0.25)
    boss_enrage_ratio: float = Field(0.25, ge=0.0, le=1.0)
    boss_enrage_speed_bonus: int = Field(4, ge=0)
    boss_summon_template: str = "dragon_whelp"
    boss_summon_batch: int = Field(2, ge=0)
    boss_summon_cap: int = Field(4, ge=0)
    boss_telegraph_ratio: float = Field(0.5, ge=0.0, le=1.0)
    boss_telegraph_chance: float = Field(0.25, ge=0.0, le=1.0)
    boss_heavy_strike_multiplier: int = Field(3, ge=1)
    boss_breath_radius: int = Field(2, ge=0)
    boss_breath_multiplier: float = Field(1.5, ge=0.0)
    boss_power_strike_chance: float = Field(0.5, ge=0.0, le=1.0)

    # Message log.
    max_messages: int = Field(200, ge=1)

    def model_post_init(self, _: object) -> None:
        if self.variance_min > self.variance_max:
            raise ValueError("variance_min must not exceed variance_max")
        if self.ranged_min_distance > self.ranged_max_distance:
            raise ValueError("ranged_min_distance must not exceed ranged_max_distance")


def load_config(path: Path | str | None) -> CombatConfig:
    """
    Loads a ``CombatConfig`` from a JSON file.

    Args:
        path (Path | str | None):
            The JSON file. None yields the defaults.

    Returns:
        CombatConfig:
            The loaded configuration, or the defaults when the file is missing
            or invalid.

    """
    if path is None:
        return CombatConfig()
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return CombatConfig(**data)
    except FileNotFoundError:
        log_warning(
            f"Config file not found, using defaults: {path}",
            {"path": str(path), "context": "config_load"},
        )
    except (json.JSONDecodeError, ValidationError, ValueError, TypeError) as e:
        log_warning(
            f"Invalid config file, using defaults: {path}",
            {"path": str(path), "error": str(e), "context": "config_load"},
        )
    return CombatConfig()
