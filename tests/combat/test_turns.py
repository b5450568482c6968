"""
Tests for initiative ordering and turn gating.
"""

from core.constants import StatusKind
from combat.turns import get_initiative_order, is_slowed_skip, process_turn_start
from effects.effect_manager import add_status_effect, has_status
from entities.actor import Actor


def test_initiative_orders_by_speed_descending():
    actors = [Actor(id=1, speed=20), Actor(id=2, speed=2), Actor(id=3, speed=8)]
    assert [a.speed for a in get_initiative_order(actors)] == [20, 8, 2]


def test_initiative_breaks_ties_by_id():
    actors = [Actor(id=7, speed=10), Actor(id=3, speed=10), Actor(id=5, speed=12)]
    assert [a.id for a in get_initiative_order(actors)] == [5, 3, 7]


def test_initiative_is_stable_across_input_orders():
    actors = [Actor(id=i, speed=(i * 7) % 4) for i in range(1, 13)]
    expected = [a.id for a in get_initiative_order(actors)]
    assert [a.id for a in get_initiative_order(reversed(actors))] == expected


def test_initiative_skips_the_dead():
    actors = [Actor(id=1, speed=5), Actor(id=2, speed=9, alive=False)]
    assert [a.id for a in get_initiative_order(actors)] == [1]


def test_turn_start_lets_healthy_actor_act(ctx, make_actor):
    actor = make_actor()
    assert process_turn_start(ctx, actor)


def test_stunned_actor_skips_and_stun_wears_off(ctx, make_actor):
    actor = make_actor(name="Dazed")
    add_status_effect(ctx, actor, StatusKind.STUNNED, duration=1)
    assert not process_turn_start(ctx, actor)
    assert ctx.messages.contains("Dazed is stunned and skips their turn.")
    assert not has_status(actor, StatusKind.STUNNED)
    assert process_turn_start(ctx, actor)


def test_dead_actor_cannot_act(ctx, make_actor):
    actor = make_actor()
    actor.alive = False
    assert not process_turn_start(ctx, actor)


def test_poison_death_at_turn_start_prevents_action(ctx, make_actor):
    actor = make_actor(hp=2)
    add_status_effect(ctx, actor, StatusKind.POISONED, damage=3)
    assert not process_turn_start(ctx, actor)
    assert not actor.alive


def test_slowed_actor_skips_even_turns(ctx, make_actor):
    actor = make_actor()
    assert not is_slowed_skip(ctx, actor)
    add_status_effect(ctx, actor, StatusKind.SLOWED)
    ctx.turn = 4
    assert is_slowed_skip(ctx, actor)
    ctx.turn = 5
    assert not is_slowed_skip(ctx, actor)
