"""
Tests for the ability catalog and ``use_ability``.
"""

import pytest
from core.constants import (
    ActionFailure,
    ActorKind,
    Archetype,
    Resource,
    StatusKind,
    TargetShape,
    TileType,
)
from combat.abilities import (
    ABILITIES,
    AbilityKey,
    get_ability_info,
    is_attacker_behind,
    use_ability,
)
from effects.effect_manager import add_status_effect, get_status, has_status


@pytest.fixture
def hero(make_flat_actor):
    return make_flat_actor(
        name="Hero",
        kind=ActorKind.PLAYER,
        hp=100,
        mana=100,
        max_mana=100,
        stamina=100,
        max_stamina=100,
        attack=10,
        x=5,
        y=5,
    )


@pytest.fixture
def goblin(make_flat_actor):
    return make_flat_actor(name="Goblin", hp=200, defense=4, x=6, y=5)


def test_catalog_is_complete():
    assert len(ABILITIES) == 15
    assert set(ABILITIES) == set(AbilityKey)
    archetypes = {ability.archetype for ability in ABILITIES.values()}
    assert {Archetype.WARRIOR, Archetype.MAGE, Archetype.ROGUE, Archetype.CLERIC} <= archetypes


def test_get_ability_info_accepts_strings():
    assert get_ability_info("fireball").key == AbilityKey.FIREBALL
    assert get_ability_info(AbilityKey.HEAL).cost == {Resource.MANA: 30}
    assert get_ability_info("dance") is None


def test_abilities_are_immutable():
    with pytest.raises(ValueError):
        ABILITIES[AbilityKey.HEAL].name = "Big Heal"


def test_unknown_ability_fails(flat_ctx, hero):
    assert not use_ability(flat_ctx, "dance", hero)
    assert flat_ctx.last_failure == ActionFailure.UNKNOWN_ABILITY


def test_stunned_user_pays_nothing(flat_ctx, hero, goblin):
    add_status_effect(flat_ctx, hero, StatusKind.STUNNED)
    assert not use_ability(flat_ctx, AbilityKey.POWER_STRIKE, hero, goblin)
    assert flat_ctx.last_failure == ActionFailure.INCAPACITATED
    assert hero.stamina == 100
    assert goblin.hp == 200


@pytest.mark.parametrize("key", list(AbilityKey))
def test_unaffordable_abilities_never_mutate_the_user(flat_ctx, make_flat_actor, goblin, key):
    pauper = make_flat_actor(
        name="Pauper", hp=40, max_hp=80, mana=0, max_mana=100, stamina=0, max_stamina=100,
        attack=10, x=5, y=5,
    )
    before = pauper.model_dump()
    assert not use_ability(flat_ctx, key, pauper, goblin)
    assert flat_ctx.last_failure == ActionFailure.INSUFFICIENT_RESOURCE
    assert pauper.model_dump() == before
    assert goblin.hp == 200


def test_multi_resource_cost_is_checked_atomically(flat_ctx, make_flat_actor, goblin):
    drake = make_flat_actor(
        name="Drake", mana=50, max_mana=50, stamina=5, max_stamina=50, x=5, y=5,
    )
    assert not use_ability(flat_ctx, AbilityKey.DRAGON_BREATH, drake, goblin)
    assert (drake.mana, drake.stamina) == (50, 5)


def test_out_of_range_pays_nothing(flat_ctx, hero, make_flat_actor):
    far = make_flat_actor(name="Far", hp=50, x=9, y=9)
    assert not use_ability(flat_ctx, AbilityKey.POWER_STRIKE, hero, far)
    assert flat_ctx.last_failure == ActionFailure.OUT_OF_RANGE
    assert hero.stamina == 100
    assert flat_ctx.messages.contains("Too far for Power Strike.")


def test_success_clears_the_previous_failure(flat_ctx, hero, goblin, make_flat_actor):
    far = make_flat_actor(name="Far", hp=50, x=9, y=9)
    assert not use_ability(flat_ctx, AbilityKey.POWER_STRIKE, hero, far)
    assert use_ability(flat_ctx, AbilityKey.POWER_STRIKE, hero, goblin)
    assert flat_ctx.last_failure is None


def test_missing_target_is_refused(flat_ctx, hero):
    assert not use_ability(flat_ctx, AbilityKey.ICE_SHARD, hero, None)
    assert hero.mana == 100


def test_power_strike_doubles_damage(flat_ctx, hero, goblin):
    assert use_ability(flat_ctx, AbilityKey.POWER_STRIKE, hero, goblin)
    assert hero.stamina == 80
    # (10 - 4 // 2) * 2
    assert goblin.hp == 200 - 16


def test_shield_bash_stuns(flat_ctx, hero, goblin):
    assert use_ability(flat_ctx, AbilityKey.SHIELD_BASH, hero, goblin)
    assert get_status(goblin, StatusKind.STUNNED).duration == 1
    assert hero.stamina == 85


def test_war_cry_buffs_attack(flat_ctx, hero):
    assert use_ability(flat_ctx, AbilityKey.WAR_CRY, hero)
    assert hero.attack == 17
    buff = get_status(hero, StatusKind.BUFFED)
    assert (buff.duration, buff.amount) == (3, 7)


def test_fireball_requires_line_of_sight(flat_ctx, hero, make_flat_actor):
    target = make_flat_actor(name="Target", hp=100, x=9, y=5)
    flat_ctx.grid.set_tile(7, 5, TileType.WALL)
    assert not use_ability(flat_ctx, AbilityKey.FIREBALL, hero, target)
    assert flat_ctx.last_failure == ActionFailure.NO_LINE_OF_SIGHT
    assert hero.mana == 100


def test_fireball_hits_around_target(flat_ctx, hero, make_flat_actor):
    target = make_flat_actor(name="Target", hp=100, x=9, y=5)
    bystander = make_flat_actor(name="Bystander", hp=100, x=10, y=7)
    assert use_ability(flat_ctx, AbilityKey.FIREBALL, hero, target)
    assert hero.mana == 70
    assert target.hp == 80
    assert bystander.hp == 80
    assert flat_ctx.messages.contains("Hero casts Fireball! 2 targets hit.")


def test_ice_shard_slows(flat_ctx, hero, make_flat_actor):
    target = make_flat_actor(name="Target", hp=100, x=10, y=5)
    assert use_ability(flat_ctx, AbilityKey.ICE_SHARD, hero, target)
    assert has_status(target, StatusKind.SLOWED)
    assert target.hp == 90


def test_ice_shard_range_limit(flat_ctx, hero, make_flat_actor):
    target = make_flat_actor(name="Target", hp=100, x=12, y=5)
    assert not use_ability(flat_ctx, AbilityKey.ICE_SHARD, hero, target)
    assert flat_ctx.messages.contains("Out of range for Ice Shard.")


def test_arcane_shield(flat_ctx, hero):
    assert use_ability(flat_ctx, AbilityKey.ARCANE_SHIELD, hero)
    shield = get_status(hero, StatusKind.SHIELDED)
    assert (shield.absorb, shield.duration) == (30, 99)


def test_backstab_from_behind_triples(flat_ctx, hero, make_flat_actor):
    rogue = make_flat_actor(name="Rogue", attack=10, stamina=50, max_stamina=50, x=7, y=5)
    goblin = make_flat_actor(name="Goblin", hp=200, x=6, y=5)
    # The goblin faces the hero at (5, 5); the rogue stands east of it.
    assert is_attacker_behind(flat_ctx, rogue, goblin)
    assert use_ability(flat_ctx, AbilityKey.BACKSTAB, rogue, goblin)
    assert goblin.hp == 200 - 30
    assert flat_ctx.messages.contains("Backstab (from behind)")


def test_backstab_from_front(flat_ctx, hero, goblin):
    assert not is_attacker_behind(flat_ctx, hero, goblin)
    assert use_ability(flat_ctx, AbilityKey.BACKSTAB, hero, goblin)
    # floor(8 * 1.5)
    assert goblin.hp == 200 - 12


def test_players_are_never_backstabbed(flat_ctx, hero, goblin):
    assert not is_attacker_behind(flat_ctx, goblin, hero)


def test_evade(flat_ctx, hero):
    assert use_ability(flat_ctx, AbilityKey.EVADE, hero)
    assert has_status(hero, StatusKind.EVADING)


def test_poison_blade(flat_ctx, hero, goblin):
    assert use_ability(flat_ctx, AbilityKey.POISON_BLADE, hero, goblin)
    poison = get_status(goblin, StatusKind.POISONED)
    assert (poison.duration, poison.damage, poison.source_id) == (5, 3, hero.id)


def test_heal_never_overheals(flat_ctx, hero):
    hero.hp = 90
    assert use_ability(flat_ctx, AbilityKey.HEAL, hero)
    assert hero.hp == 100
    assert flat_ctx.messages.contains("Hero heals for 10 HP.")
    hero.hp = 50
    use_ability(flat_ctx, AbilityKey.HEAL, hero)
    assert hero.hp == 75


def test_smite_doubles_against_undead(flat_ctx, hero, make_flat_actor):
    skeleton = make_flat_actor(name="Skeleton", hp=100, tags=["undead"], x=6, y=6)
    assert use_ability(flat_ctx, AbilityKey.SMITE, hero, skeleton)
    assert skeleton.hp == 80
    assert flat_ctx.messages.contains("holy damage vs undead")


def test_divine_shield_covers_the_party_only(flat_ctx, hero, goblin, make_flat_actor):
    ally = make_flat_actor(name="Ally", kind=ActorKind.NPC, x=1, y=1)
    assert use_ability(flat_ctx, AbilityKey.DIVINE_SHIELD, hero)
    assert has_status(hero, StatusKind.DIVINE_SHIELD)
    assert has_status(ally, StatusKind.DIVINE_SHIELD)
    assert not has_status(goblin, StatusKind.DIVINE_SHIELD)


def test_hex_makes_target_vulnerable(flat_ctx, make_flat_actor, hero):
    mage = make_flat_actor(name="Mage", mana=60, max_mana=60, x=9, y=5)
    assert use_ability(flat_ctx, AbilityKey.HEX, mage, hero)
    assert has_status(hero, StatusKind.VULNERABLE)
    assert mage.mana == 50


def test_venom_spit_poisons_at_range(flat_ctx, make_flat_actor, hero):
    spider = make_flat_actor(name="Spider", attack=8, stamina=50, max_stamina=50, x=9, y=5)
    assert use_ability(flat_ctx, AbilityKey.VENOM_SPIT, spider, hero)
    poison = get_status(hero, StatusKind.POISONED)
    assert (poison.duration, poison.damage) == (3, 2)


def test_dragon_breath_pays_both_costs(flat_ctx, make_flat_actor, hero):
    drake = make_flat_actor(
        name="Drake", attack=10, mana=50, max_mana=50, stamina=50, max_stamina=50, x=8, y=5,
    )
    assert use_ability(flat_ctx, AbilityKey.DRAGON_BREATH, drake, hero)
    assert (drake.mana, drake.stamina) == (30, 40)
    # floor(10 * 1.5)
    assert hero.hp == 100 - 15


def test_simultaneous_kills_resolve_once(flat_ctx, hero, make_flat_actor):
    rat = make_flat_actor(name="Rat", hp=1, xp_value=10, x=9, y=5)
    assert use_ability(flat_ctx, AbilityKey.FIREBALL, hero, rat)
    assert flat_ctx.messages.texts().count("Rat is slain!") == 1
    assert hero.xp == 10


def test_self_abilities_have_no_target_shape():
    for ability in ABILITIES.values():
        if ability.shape in (TargetShape.SELF, TargetShape.PARTY):
            assert ability.range is None
            assert not ability.needs_target
