"""
Status effects module.

The timed status effects an actor can carry. The engine that applies and ticks
them lives in ``effects.effect_manager``.
"""

from .status_effect import STATUS_DEFAULTS, StatusEffect, StatusEffects

__all__ = ["STATUS_DEFAULTS", "StatusEffect", "StatusEffects"]
