"""
Monster templates and factory.

Base stats are for the first floor; ``scale_stats`` ramps them up per floor.
"""

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from core.constants import ActorKind, BehaviorTag
from core.logging import log_debug

from .actor import Actor, BossState

if TYPE_CHECKING:
    from core.context import SimulationContext


class MonsterTemplate(BaseModel):
    """Immutable description of a monster kind."""

    model_config = {"frozen": True}

    name: str
    base_hp: int = Field(ge=1)
    base_attack: int = Field(ge=0)
    base_defense: int = Field(ge=0)
    base_speed: int = Field(ge=0)
    behavior: BehaviorTag
    xp_value: int = Field(ge=0)
    tags: tuple[str, ...] = ()
    abilities: tuple[str, ...] = ()
    floors: tuple[int, ...] = ()
    is_boss: bool = False


TEMPLATES: dict[str, MonsterTemplate] = {
    # Floors 1-3: basic creatures.
    "rat": MonsterTemplate(
        name="Giant Rat", base_hp=12, base_attack=4, base_defense=1, base_speed=12,
        behavior=BehaviorTag.AGGRESSIVE, xp_value=10, floors=(0, 1, 2),
    ),
    "bat": MonsterTemplate(
        name="Cave Bat", base_hp=8, base_attack=3, base_defense=0, base_speed=14,
        behavior=BehaviorTag.AGGRESSIVE, xp_value=8, floors=(0, 1, 2),
    ),
    "goblin": MonsterTemplate(
        name="Goblin", base_hp=18, base_attack=6, base_defense=2, base_speed=10,
        behavior=BehaviorTag.FLANKING, xp_value=15, floors=(0, 1, 2),
    ),
    "skeleton": MonsterTemplate(
        name="Skeleton", base_hp=22, base_attack=7, base_defense=4, base_speed=8,
        behavior=BehaviorTag.AGGRESSIVE, xp_value=18, tags=("undead",), floors=(1, 2, 3),
    ),
    # Floors 4-6: mid-tier threats.
    "orc": MonsterTemplate(
        name="Orc Warrior", base_hp=40, base_attack=10, base_defense=6, base_speed=8,
        behavior=BehaviorTag.AGGRESSIVE, xp_value=30, abilities=("power_strike",),
        floors=(3, 4, 5),
    ),
    "dark_mage": MonsterTemplate(
        name="Dark Mage", base_hp=25, base_attack=8, base_defense=3, base_speed=10,
        behavior=BehaviorTag.RANGED, xp_value=35, abilities=("ice_shard", "hex"),
        floors=(3, 4, 5),
    ),
    "wraith": MonsterTemplate(
        name="Wraith", base_hp=30, base_attack=9, base_defense=2, base_speed=12,
        behavior=BehaviorTag.FLANKING, xp_value=32, tags=("undead",), floors=(4, 5, 6),
    ),
    "spider": MonsterTemplate(
        name="Giant Spider", base_hp=28, base_attack=8, base_defense=3, base_speed=11,
        behavior=BehaviorTag.CAUTIOUS, xp_value=25, abilities=("poison_blade", "venom_spit"),
        floors=(3, 4, 5),
    ),
    # Floors 7-9: dangerous foes.
    "troll": MonsterTemplate(
        name="Cave Troll", base_hp=70, base_attack=14, base_defense=10, base_speed=6,
        behavior=BehaviorTag.AGGRESSIVE, xp_value=55, abilities=("power_strike", "war_cry"),
        floors=(6, 7, 8, 9),
    ),
    "demon": MonsterTemplate(
        name="Lesser Demon", base_hp=55, base_attack=13, base_defense=7, base_speed=10,
        behavior=BehaviorTag.FLANKING, xp_value=60, abilities=("fireball",),
        floors=(6, 7, 8, 9),
    ),
    "lich": MonsterTemplate(
        name="Lich", base_hp=45, base_attack=11, base_defense=5, base_speed=9,
        behavior=BehaviorTag.RANGED, xp_value=65, tags=("undead",),
        abilities=("ice_shard", "arcane_shield"), floors=(7, 8, 9),
    ),
    "dragon_whelp": MonsterTemplate(
        name="Dragon Whelp", base_hp=60, base_attack=15, base_defense=8, base_speed=11,
        behavior=BehaviorTag.CAUTIOUS, xp_value=70, abilities=("fireball",),
        floors=(7, 8, 9),
    ),
    # Floor 10: boss.
    "dragon_lord": MonsterTemplate(
        name="Dragon Lord", base_hp=200, base_attack=22, base_defense=14, base_speed=10,
        behavior=BehaviorTag.BOSS, xp_value=500, tags=("boss",),
        abilities=("fireball", "war_cry", "power_strike", "dragon_breath"),
        floors=(9,), is_boss=True,
    ),
}


def scale_stats(template: MonsterTemplate, floor: int) -> dict[str, int]:
    """
    Scales the template's base stats for ``floor``.

    Speed is never scaled.
    """
    scale = 1 + floor * 0.15
    hp = int(template.base_hp * scale)
    return {
        "hp": hp,
        "max_hp": hp,
        "attack": int(template.base_attack * scale),
        "defense": int(template.base_defense * scale),
        "speed": template.base_speed,
    }


def templates_for_floor(floor: int) -> dict[str, MonsterTemplate]:
    return {key: t for key, t in TEMPLATES.items() if floor in t.floors}


def create_monster(
    ctx: "SimulationContext",
    template_key: str,
    floor: int,
    x: int,
    y: int,
) -> Actor | None:
    """
    Instantiates a monster from its template.

    Args:
        ctx (SimulationContext):
            The context that hands out the actor id. The monster is NOT added
            to the context.
        template_key (str):
            Key into ``TEMPLATES``.
        floor (int):
            The floor index, which drives stat and xp scaling.
        x (int), y (int):
            The spawn position.

    Returns:
        Actor | None:
            The new monster, or None for an unknown template.

    """
    template = TEMPLATES.get(template_key)
    if template is None:
        log_debug(f"Unknown monster template '{template_key}'.")
        return None

    casts = template.behavior == BehaviorTag.RANGED or template.is_boss
    mana = 60 if casts else 0
    return Actor(
        id=ctx.next_id(),
        name=template.name,
        kind=ActorKind.MONSTER,
        x=x,
        y=y,
        floor=floor,
        **scale_stats(template, floor),
        mana=mana,
        max_mana=mana,
        stamina=50,
        max_stamina=50,
        abilities=list(template.abilities),
        behavior=template.behavior,
        tags=list(template.tags),
        xp_value=int(template.xp_value * (1 + floor * 0.3)),
        template_key=template_key,
        boss=BossState() if template.is_boss else None,
    )
