"""
Tests for kill resolution, levelling and regeneration.
"""

import pytest
from core.constants import XP_PER_LEVEL, ActorKind, GamePhase
from combat.progression import check_level_up, on_kill, regenerate


@pytest.fixture
def hero(make_actor):
    return make_actor(
        name="Hero",
        kind=ActorKind.PLAYER,
        hp=100,
        mana=20,
        max_mana=20,
        stamina=50,
        max_stamina=50,
        attack=10,
        defense=5,
        class_key="cleric",
    )


def test_xp_table():
    assert len(XP_PER_LEVEL) == 20
    assert XP_PER_LEVEL[:4] == (50, 62, 78, 97)


def test_on_kill_awards_xp_once(ctx, hero, make_actor):
    victim = make_actor(name="Orc", xp_value=30)
    victim.alive = False
    assert on_kill(ctx, hero, victim)
    assert not on_kill(ctx, hero, victim)
    assert hero.xp == 30
    assert ctx.messages.contains("Orc is slain!")
    assert ctx.messages.contains("+30 XP")


def test_monsters_earn_no_xp(ctx, make_actor):
    wolf = make_actor(name="Wolf")
    victim = make_actor(name="Victim", kind=ActorKind.NPC, xp_value=30)
    on_kill(ctx, wolf, victim)
    assert wolf.xp == 0


def test_on_kill_triggers_loot_drop(ctx, make_actor):
    dropped = []
    ctx.loot_dropper = dropped.append
    victim = make_actor(name="Goblin")
    on_kill(ctx, None, victim)
    on_kill(ctx, None, victim)
    assert dropped == [victim]


def test_level_up_grants_stats(ctx, hero):
    hero.hp = 95
    hero.xp = 55
    assert check_level_up(ctx, hero) == 1
    assert hero.level == 2
    assert hero.xp == 5
    assert (hero.max_hp, hero.hp) == (110, 105)
    assert (hero.max_mana, hero.mana) == (23, 23)
    assert (hero.max_stamina, hero.stamina) == (53, 53)
    assert (hero.attack, hero.defense) == (11, 6)
    assert ctx.messages.contains("Hero reaches level 2!")


def test_level_up_heal_is_capped(ctx, hero):
    hero.xp = 50
    check_level_up(ctx, hero)
    assert hero.hp == hero.max_hp == 110


def test_multiple_levels_at_once(ctx, hero):
    hero.xp = 50 + 62 + 1
    assert check_level_up(ctx, hero) == 2
    assert hero.level == 3
    assert hero.xp == 1


def test_level_cap(ctx, hero):
    hero.level = len(XP_PER_LEVEL)
    hero.xp = 10**6
    assert check_level_up(ctx, hero) == 0


def test_regeneration_only_while_exploring(ctx, hero):
    hero.hp = 50
    hero.mana = 0
    ctx.phase = GamePhase.COMBAT
    assert regenerate(ctx, hero) == {}
    assert hero.hp == 50

    ctx.phase = GamePhase.EXPLORING
    assert regenerate(ctx, hero) == {"hp": 2, "mana": 2}
    assert (hero.hp, hero.mana) == (52, 2)
    assert ctx.messages.contains("You regenerate 2 HP, 2 mana.")


def test_regeneration_needs_a_class(ctx, make_actor):
    ctx.phase = GamePhase.EXPLORING
    monster = make_actor(hp=5, max_hp=10)
    assert regenerate(ctx, monster) == {}
    assert monster.hp == 5
