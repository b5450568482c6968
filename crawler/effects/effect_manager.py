"""
Status effect engine.

Applies, queries and ticks the timed status effects owned by an actor. Every
effect ticks once at the start of its owner's turn: damage-over-time effects
hurt first, then the duration counts down, and an effect that reaches zero is
removed and its stat delta reverted.
"""

from typing import TYPE_CHECKING, Any

from combat.progression import on_kill
from core.constants import Stat, StatusKind
from core.logging import log_debug
from entities.actor import Actor

from .status_effect import StatusEffect

if TYPE_CHECKING:
    from core.context import SimulationContext


def add_status_effect(
    ctx: "SimulationContext",
    actor: Actor,
    kind: StatusKind,
    **params: Any,
) -> StatusEffect:
    """
    Applies a status effect to ``actor``.

    Omitted parameters are taken from the per-kind defaults. An effect of the
    same kind is replaced, except bleed: a second bleed adds its damage to the
    existing one and keeps the longer of the two durations. A replaced buff
    has its stat delta reverted first.

    Args:
        ctx (SimulationContext):
            The running simulation.
        actor (Actor):
            The actor receiving the effect.
        kind (StatusKind):
            The kind of effect.
        **params:
            Payload overrides (duration, damage, absorb, stat, amount,
            reduction, source_id).

    Returns:
        StatusEffect:
            The effect now active on the actor.

    """
    effect = StatusEffect.create(kind, **params)
    if kind == StatusKind.BLEED:
        existing = actor.status_effects.get(StatusKind.BLEED)
        if existing is not None:
            existing.damage += effect.damage
            existing.duration = max(existing.duration, effect.duration)
            if effect.source_id is not None:
                existing.source_id = effect.source_id
            log_debug(
                f"{actor.name}'s bleed stacks",
                {"damage": existing.damage, "duration": existing.duration, "turn": ctx.turn},
            )
            return existing
    if kind == StatusKind.BUFFED:
        _revert_buff(actor, actor.status_effects.remove(StatusKind.BUFFED))
    actor.status_effects.put(effect)
    log_debug(
        f"{actor.name} gains {effect}",
        {"actor": actor.id, "turn": ctx.turn},
    )
    return effect


def has_status(actor: Actor, kind: StatusKind) -> bool:
    return actor.status_effects.has(kind)


def get_status(actor: Actor, kind: StatusKind) -> StatusEffect | None:
    return actor.status_effects.get(kind)


def remove_status(actor: Actor, kind: StatusKind) -> StatusEffect | None:
    """
    Removes an effect without reverting it.

    Returns:
        StatusEffect | None:
            The removed effect, if the actor had one of that kind.

    """
    return actor.status_effects.remove(kind)


def apply_buff(
    ctx: "SimulationContext",
    actor: Actor,
    stat: Stat,
    amount: int,
    duration: int,
) -> StatusEffect:
    """
    Raises ``stat`` by ``amount`` for ``duration`` turns.

    A buff already running is reverted before the new one replaces it, so its
    delta never outlives the effect.
    """
    effect = add_status_effect(
        ctx, actor, StatusKind.BUFFED, duration=duration, stat=stat, amount=amount
    )
    actor.adjust_stat(stat, amount)
    return effect


def _revert_buff(actor: Actor, effect: StatusEffect | None) -> bool:
    if effect is None or effect.kind != StatusKind.BUFFED or effect.stat is None:
        return False
    actor.adjust_stat(effect.stat, -effect.amount)
    return True


def _revert(ctx: "SimulationContext", actor: Actor, effect: StatusEffect) -> None:
    if _revert_buff(actor, effect):
        ctx.message(f"{actor.name}'s {effect.stat.value} buff fades.")


def _apply_tick_damage(ctx: "SimulationContext", actor: Actor, effect: StatusEffect) -> None:
    if not actor.alive or effect.damage <= 0:
        return
    noun = "poison" if effect.kind == StatusKind.POISONED else "bleed"
    actor.hp = max(0, actor.hp - effect.damage)
    ctx.message(f"{actor.name} takes {effect.damage} {noun} damage.")
    if actor.hp > 0:
        return
    actor.alive = False
    if effect.kind == StatusKind.POISONED:
        ctx.message(f"{actor.name} dies from poison!")
    else:
        ctx.message(f"{actor.name} bleeds out!")
    source = ctx.get_actor(effect.source_id) if effect.source_id is not None else None
    on_kill(ctx, source, actor)


def tick_status_effects(ctx: "SimulationContext", actor: Actor) -> None:
    """
    Advances every effect of ``actor`` by one turn, in application order.

    Args:
        ctx (SimulationContext):
            The running simulation.
        actor (Actor):
            The owner of the effects.

    """
    expired: list[StatusEffect] = []
    for effect in actor.status_effects:
        if effect.kind.deals_damage:
            _apply_tick_damage(ctx, actor, effect)
        effect.duration -= 1
        if effect.duration <= 0:
            actor.status_effects.remove(effect.kind)
            expired.append(effect)
        elif effect.duration == 1:
            ctx.message(f"{actor.name}'s {effect.label} is fading! (1 turn left)")

    for effect in expired:
        _revert(ctx, actor, effect)
