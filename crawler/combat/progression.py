"""
Progression hooks: kill resolution, experience, levelling and regeneration.
"""

from typing import TYPE_CHECKING

from core.constants import XP_PER_LEVEL, GamePhase, MessageCategory, Resource
from core.logging import log_debug
from entities.actor import Actor

if TYPE_CHECKING:
    from core.context import SimulationContext

# Per-turn regeneration while exploring, by player class.
REGEN_RATES: dict[str, dict[str, int]] = {
    "warrior": {"hp": 2, "mana": 0, "stamina": 3},
    "mage": {"hp": 1, "mana": 3, "stamina": 1},
    "rogue": {"hp": 1, "mana": 0, "stamina": 3},
    "cleric": {"hp": 2, "mana": 2, "stamina": 2},
}

# Gains per level.
LEVEL_HP_GAIN = 10
LEVEL_RESOURCE_GAIN = 3
LEVEL_ATTACK_GAIN = 1
LEVEL_DEFENSE_GAIN = 1


def on_kill(ctx: "SimulationContext", killer: Actor | None, victim: Actor) -> bool:
    """
    Resolves the death of ``victim``.

    Announces the death, awards the victim's xp to a player killer and hands
    the victim to the loot dropper. A death is resolved at most once, no
    matter how many effects of the same action could have killed.

    Args:
        ctx (SimulationContext):
            The running simulation.
        killer (Actor | None):
            Whoever dealt the final blow, None for anonymous deaths.
        victim (Actor):
            The dead actor.

    Returns:
        bool:
            True if this call resolved the death, False if it was already
            resolved.

    """
    if not ctx.mark_death_resolved(victim):
        log_debug(f"Death of {victim.name} already resolved", {"victim": victim.id})
        return False

    ctx.message(f"{victim.name} is slain!")
    if killer is not None and killer.is_player and victim.xp_value:
        killer.xp += victim.xp_value
        ctx.message(f"+{victim.xp_value} XP", MessageCategory.SYSTEM)
        check_level_up(ctx, killer)

    if ctx.loot_dropper is not None:
        ctx.loot_dropper(victim)
    return True


def check_level_up(ctx: "SimulationContext", actor: Actor) -> int:
    """
    Spends accumulated xp on as many levels as it covers.

    Returns:
        int:
            The number of levels gained.

    """
    gained = 0
    while actor.level < len(XP_PER_LEVEL):
        needed = XP_PER_LEVEL[actor.level - 1]
        if actor.xp < needed:
            break
        actor.xp -= needed
        actor.level += 1
        actor.max_hp += LEVEL_HP_GAIN
        actor.heal(LEVEL_HP_GAIN)
        actor.max_mana += LEVEL_RESOURCE_GAIN
        actor.adjust_resource(Resource.MANA, LEVEL_RESOURCE_GAIN)
        actor.max_stamina += LEVEL_RESOURCE_GAIN
        actor.adjust_resource(Resource.STAMINA, LEVEL_RESOURCE_GAIN)
        actor.attack += LEVEL_ATTACK_GAIN
        actor.defense += LEVEL_DEFENSE_GAIN
        ctx.message(f"{actor.name} reaches level {actor.level}!", MessageCategory.SYSTEM)
        gained += 1
    return gained


def regenerate(ctx: "SimulationContext", actor: Actor) -> dict[str, int]:
    """
    Applies one turn of class-based regeneration.

    Only living actors with a player class regenerate, and only while the game
    is in the exploring phase.

    Returns:
        dict[str, int]:
            The amount restored per pool; empty when nothing was restored.

    """
    if not actor.alive or ctx.phase != GamePhase.EXPLORING:
        return {}
    rates = REGEN_RATES.get(actor.class_key or "")
    if rates is None:
        return {}

    restored: dict[str, int] = {}
    if rates["hp"] > 0:
        gain = actor.heal(rates["hp"])
        if gain:
            restored["hp"] = gain
    for resource in (Resource.MANA, Resource.STAMINA):
        rate = rates[resource.value]
        if rate > 0:
            gain = actor.adjust_resource(resource, rate)
            if gain:
                restored[resource.value] = gain

    if restored:
        parts = [f"{amount} {'HP' if pool == 'hp' else pool}" for pool, amount in restored.items()]
        ctx.message(f"You regenerate {', '.join(parts)}.", MessageCategory.INFO)
    return restored
