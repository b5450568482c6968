"""
Boss phase controller.

A boss turn is a layered decision with strict precedence:

1. enrage at low health (one-shot, does not use the turn);
2. minion summons at two health thresholds (one-shot each, one per turn);
3. execution of the heavy attack announced last turn;
4. a chance, when hurt, to announce a heavy attack for next turn;
5. the regular action.

An enraged boss takes the regular action twice whenever steps 2 to 4 did not
use the turn.
"""

from typing import TYPE_CHECKING

from combat.abilities import ABILITIES, AbilityKey, use_ability
from combat.attacks import aoe_attack, melee_attack, resolve_hit
from combat.damage import calc_base_damage
from core.constants import BossTrigger, StatusKind, TelegraphKind
from core.logging import log_debug
from entities.actor import Actor, BossState
from world.geometry import all_neighbours, chebyshev
from world.los import has_line_of_sight
from world.pathfinding import move_toward

if TYPE_CHECKING:
    from core.context import SimulationContext


def _state(boss: Actor) -> BossState:
    if boss.boss is None:
        boss.boss = BossState()
    return boss.boss


def active_summons(ctx: "SimulationContext", boss: Actor, template_key: str) -> list[Actor]:
    """Living minions of kind ``template_key`` summoned by ``boss``."""
    return [
        a
        for a in ctx.actors
        if a.alive and a.summoned_by == boss.id and a.template_key == template_key
    ]


# =============================================================================
# Phase transitions
# =============================================================================


def check_enrage(ctx: "SimulationContext", boss: Actor) -> bool:
    """
    Enrages the boss the first time its health drops to the threshold.

    Returns:
        bool:
            True if the boss became enraged on this call.

    """
    cfg = ctx.config
    if boss.hp_ratio > cfg.boss_enrage_ratio:
        return False
    if not _state(boss).fire(BossTrigger.ENRAGE):
        return False
    boss.speed += cfg.boss_enrage_speed_bonus
    ctx.message(f"{boss.name} becomes ENRAGED!")
    return True


def summon_minions(ctx: "SimulationContext", boss: Actor) -> int:
    """
    Spawns minions on the free tiles around the boss, without exceeding the
    cap of active summoned minions.

    Returns:
        int:
            The number of minions spawned.

    """
    cfg = ctx.config
    template_key = cfg.boss_summon_template
    room = cfg.boss_summon_cap - len(active_summons(ctx, boss, template_key))
    wanted = min(cfg.boss_summon_batch, room)
    if ctx.grid is None:
        return 0

    spawned = 0
    for nx, ny in all_neighbours(boss.x, boss.y):
        if spawned >= wanted:
            break
        if not ctx.is_free(nx, ny, boss.floor):
            continue
        minion = ctx.monster_factory(ctx, template_key, boss.floor, nx, ny)
        if minion is None:
            continue
        minion.summoned_by = boss.id
        ctx.add_actor(minion)
        spawned += 1
    log_debug(
        f"{boss.name} summons {spawned} minion(s)",
        {"template": template_key, "room": room, "turn": ctx.turn},
    )
    return spawned


def try_summon(ctx: "SimulationContext", boss: Actor) -> bool:
    """
    Fires the first pending summon threshold the boss has crossed.

    Only one threshold fires per turn, even when a single hit crossed both.

    Returns:
        bool:
            True if a summon fired, which uses the turn.

    """
    state = _state(boss)
    thresholds = zip(
        (BossTrigger.SUMMON_HALF, BossTrigger.SUMMON_QUARTER),
        ctx.config.boss_summon_ratios,
    )
    for trigger, ratio in thresholds:
        if boss.hp_ratio > ratio or state.has_fired(trigger):
            continue
        state.fire(trigger)
        ctx.message(f"{boss.name} roars and summons minions!")
        if summon_minions(ctx, boss) == 0:
            ctx.message("No minions answer the call.")
        return True
    return False


# =============================================================================
# Telegraphed attacks
# =============================================================================


def execute_telegraph(ctx: "SimulationContext", boss: Actor, player: Actor) -> bool:
    """
    Unleashes the heavy attack announced last turn, if any.

    Returns:
        bool:
            True if an attack was pending, which uses the turn whether or not
            it connects.

    """
    state = _state(boss)
    kind = state.telegraph
    if kind is None:
        return False
    state.telegraph = None
    cfg = ctx.config

    if kind == TelegraphKind.HEAVY_STRIKE:
        if chebyshev(boss.x, boss.y, player.x, player.y) > 1:
            ctx.message(f"{boss.name}'s crushing blow hits only air!")
            return True
        raw = calc_base_damage(ctx, boss, player) * cfg.boss_heavy_strike_multiplier
        resolve_hit(
            ctx,
            boss,
            player,
            raw,
            "{attacker} brings down a crushing blow on {defender} for {dealt} damage!",
            report_misses=True,
        )
        return True

    if ctx.grid is None or not has_line_of_sight(boss.x, boss.y, player.x, player.y, ctx.grid):
        ctx.message(f"{boss.name}'s breath fizzles out of sight.")
        return True
    hits = aoe_attack(
        ctx,
        boss,
        player.x,
        player.y,
        cfg.boss_breath_radius,
        cfg.boss_breath_multiplier,
        boss.floor,
    )
    ctx.message(f"{boss.name} unleashes a torrent of flame! {hits} targets hit.")
    return True


def try_telegraph(ctx: "SimulationContext", boss: Actor, player: Actor) -> bool:
    """
    Possibly announces a heavy attack for next turn.

    Returns:
        bool:
            True if an attack was announced, which uses the turn.

    """
    cfg = ctx.config
    if boss.hp_ratio >= cfg.boss_telegraph_ratio:
        return False
    if not ctx.rng.chance(cfg.boss_telegraph_chance):
        return False
    state = _state(boss)
    if chebyshev(boss.x, boss.y, player.x, player.y) <= 1:
        state.telegraph = TelegraphKind.HEAVY_STRIKE
        ctx.message(f"{boss.name} rears back for a crushing blow!")
    else:
        state.telegraph = TelegraphKind.BREATH
        ctx.message(f"{boss.name} draws a deep breath... flames gather in its throat!")
    return True


# =============================================================================
# Regular action
# =============================================================================


def _can_use(boss: Actor, key: AbilityKey) -> bool:
    return boss.knows(key.value) and boss.can_afford(ABILITIES[key].cost)


def regular_action(ctx: "SimulationContext", boss: Actor, player: Actor) -> None:
    """Buffs, blasts, strikes or advances, in that order of preference."""
    cfg = ctx.config
    distance = chebyshev(boss.x, boss.y, player.x, player.y)

    if not boss.status_effects.has(StatusKind.BUFFED) and _can_use(boss, AbilityKey.WAR_CRY):
        if use_ability(ctx, AbilityKey.WAR_CRY, boss, boss):
            return

    if 2 <= distance <= 5 and _can_use(boss, AbilityKey.FIREBALL):
        if ctx.grid is not None and has_line_of_sight(boss.x, boss.y, player.x, player.y, ctx.grid):
            if use_ability(ctx, AbilityKey.FIREBALL, boss, player):
                return

    if distance <= 1:
        if _can_use(boss, AbilityKey.POWER_STRIKE) and ctx.rng.chance(cfg.boss_power_strike_chance):
            if use_ability(ctx, AbilityKey.POWER_STRIKE, boss, player):
                return
        melee_attack(ctx, boss, player)
        return

    move_toward(ctx, boss, player.x, player.y)


def behavior_boss(ctx: "SimulationContext", boss: Actor, player: Actor) -> None:
    """Runs one boss turn."""
    check_enrage(ctx, boss)

    if try_summon(ctx, boss):
        return
    if execute_telegraph(ctx, boss, player) or try_telegraph(ctx, boss, player):
        return

    regular_action(ctx, boss, player)
    if _state(boss).enraged and player.alive and boss.alive:
        log_debug(f"{boss.name} acts again in its rage", {"turn": ctx.turn})
        regular_action(ctx, boss, player)
