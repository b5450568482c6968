"""
Tests for the monster templates and factory.
"""

import pytest
from core.constants import BehaviorTag, BossPhase
from entities.monsters import TEMPLATES, create_monster, scale_stats, templates_for_floor


def test_first_floor_stats_are_the_base_stats():
    goblin = TEMPLATES["goblin"]
    assert scale_stats(goblin, 0) == {
        "hp": 18,
        "max_hp": 18,
        "attack": 6,
        "defense": 2,
        "speed": 10,
    }


def test_deeper_floors_scale_everything_but_speed():
    orc = TEMPLATES["orc"]
    stats = scale_stats(orc, 4)
    assert stats["hp"] == 64
    assert stats["attack"] == 16
    assert stats["defense"] == 9
    assert stats["speed"] == orc.base_speed


def test_templates_are_immutable():
    with pytest.raises(ValueError):
        TEMPLATES["rat"].base_hp = 100


def test_templates_for_floor():
    assert set(templates_for_floor(0)) == {"rat", "bat", "goblin"}
    assert "dragon_lord" in templates_for_floor(9)
    assert templates_for_floor(42) == {}


def test_ability_references_exist():
    from combat.abilities import get_ability_info

    for template in TEMPLATES.values():
        for key in template.abilities:
            assert get_ability_info(key) is not None, key


def test_create_monster(ctx):
    mage = create_monster(ctx, "dark_mage", 3, 4, 7)
    assert mage.name == "Dark Mage"
    assert mage.position == (4, 7)
    assert mage.floor == 3
    assert mage.behavior == BehaviorTag.RANGED
    assert mage.mana == mage.max_mana == 60
    assert mage.abilities == ["ice_shard", "hex"]
    assert mage.template_key == "dark_mage"
    assert mage.boss is None


def test_create_monster_does_not_register(ctx):
    rat = create_monster(ctx, "rat", 0, 1, 1)
    assert ctx.actors == []
    assert ctx.next_id() == rat.id + 1


def test_xp_value_grows_with_depth(ctx):
    shallow = create_monster(ctx, "skeleton", 1, 0, 0)
    deep = create_monster(ctx, "skeleton", 3, 0, 0)
    assert shallow.xp_value == 23
    assert deep.xp_value > shallow.xp_value


def test_boss_gets_phase_state(ctx):
    dragon = create_monster(ctx, "dragon_lord", 0, 5, 5)
    assert dragon.boss is not None
    assert dragon.boss.phase == BossPhase.NORMAL
    assert dragon.has_tag("boss")


def test_unknown_template(ctx):
    assert create_monster(ctx, "beholder", 0, 0, 0) is None
