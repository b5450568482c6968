"""
Player archetypes.
"""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from core.constants import ActorKind

from .actor import Actor

if TYPE_CHECKING:
    from core.context import SimulationContext


class PlayerClass(BaseModel):
    """Base stats and starting abilities of a player archetype."""

    model_config = {"frozen": True}

    name: str = Field(description="Display name of the class.")
    description: str = ""
    hp: int = Field(ge=1)
    mana: int = Field(ge=0)
    stamina: int = Field(ge=0)
    attack: int
    defense: int
    speed: int
    abilities: tuple[str, ...] = ()

    def base_stats(self) -> dict[str, int]:
        return {
            "hp": self.hp,
            "max_hp": self.hp,
            "mana": self.mana,
            "max_mana": self.mana,
            "stamina": self.stamina,
            "max_stamina": self.stamina,
            "attack": self.attack,
            "defense": self.defense,
            "speed": self.speed,
        }


PLAYER_CLASSES: dict[str, PlayerClass] = {
    "warrior": PlayerClass(
        name="Warrior",
        description="A sturdy fighter with high HP and strong melee attacks.",
        hp=120, mana=20, stamina=100, attack=14, defense=12, speed=8,
        abilities=("power_strike", "shield_bash", "war_cry"),
    ),
    "mage": PlayerClass(
        name="Mage",
        description="A glass cannon with devastating spells but fragile body.",
        hp=60, mana=120, stamina=60, attack=6, defense=4, speed=10,
        abilities=("fireball", "ice_shard", "arcane_shield"),
    ),
    "rogue": PlayerClass(
        name="Rogue",
        description="Fast and deadly; relies on crits and evasion.",
        hp=80, mana=40, stamina=120, attack=12, defense=6, speed=14,
        abilities=("backstab", "evade", "poison_blade"),
    ),
    "cleric": PlayerClass(
        name="Cleric",
        description="Healer and buffer; survives through sustain.",
        hp=90, mana=80, stamina=80, attack=8, defense=10, speed=9,
        abilities=("heal", "smite", "divine_shield"),
    ),
}


def create_player(
    ctx: "SimulationContext",
    class_key: str,
    name: str | None = None,
    x: int = 0,
    y: int = 0,
    floor: int = 0,
    **overrides: Any,
) -> Actor:
    """
    Creates a player of the given class and registers it on the context.

    Args:
        ctx (SimulationContext):
            The context the player joins.
        class_key (str):
            Key into ``PLAYER_CLASSES``.
        name (str | None):
            The player's name, the class name when omitted.
        x (int), y (int), floor (int):
            The starting position.
        **overrides:
            Actor fields overriding the class defaults.

    Returns:
        Actor:
            The new player.

    Raises:
        KeyError:
            If ``class_key`` is not a known class.

    """
    player_class = PLAYER_CLASSES[class_key]
    fields: dict[str, Any] = {
        **player_class.base_stats(),
        "abilities": list(player_class.abilities),
        **overrides,
    }
    player = Actor(
        id=ctx.next_id(),
        name=name or player_class.name,
        kind=ActorKind.PLAYER,
        x=x,
        y=y,
        floor=floor,
        class_key=class_key,
        **fields,
    )
    return ctx.set_player(player)
