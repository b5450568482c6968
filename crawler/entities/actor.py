"""
Actor module for the engine.

Defines the Actor record shared by players, monsters and NPCs. Actors are
plain serializable records: all combat rules live in the combat and effects
packages, which mutate actors in place.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.constants import (
    ActorKind,
    BehaviorTag,
    BossPhase,
    BossTrigger,
    Resource,
    Stat,
    TelegraphKind,
)
from core.utils import clamp
from effects.status_effect import StatusEffects


class BossState(BaseModel):
    """
    Phase bookkeeping of a boss: which one-shot triggers already fired and
    which heavy attack, if any, was announced last turn.
    """

    fired: set[BossTrigger] = Field(
        default_factory=set,
        description="One-shot transitions that already happened.",
    )
    telegraph: TelegraphKind | None = Field(
        None,
        description="The heavy attack announced last turn, if any.",
    )

    @property
    def phase(self) -> BossPhase:
        if BossTrigger.ENRAGE in self.fired:
            return BossPhase.ENRAGED
        if self.fired & {BossTrigger.SUMMON_HALF, BossTrigger.SUMMON_QUARTER}:
            return BossPhase.PHASE_TWO
        return BossPhase.NORMAL

    @property
    def enraged(self) -> bool:
        return self.phase == BossPhase.ENRAGED

    def has_fired(self, trigger: BossTrigger) -> bool:
        return trigger in self.fired

    def fire(self, trigger: BossTrigger) -> bool:
        """
        Marks ``trigger`` as fired.

        Returns:
            bool:
                True the first time, False if it had already fired.

        """
        if trigger in self.fired:
            return False
        self.fired.add(trigger)
        return True


class Actor(BaseModel):
    """
    A player, monster or NPC living on the dungeon grid.

    ``alive`` is not derived from ``hp``: death is an explicit transition made
    by the damage resolver or the status tick, which also clamp hp to 0.
    """

    id: int = Field(description="Stable unique id, also the initiative tie-break.")
    name: str = "Unknown"
    kind: ActorKind = ActorKind.MONSTER

    # Position.
    x: int = 0
    y: int = 0
    floor: int = 0

    alive: bool = True

    # Core stats.
    hp: int = Field(10, ge=0)
    max_hp: int = Field(10, ge=1)
    mana: int = Field(0, ge=0)
    max_mana: int = Field(0, ge=0)
    stamina: int = Field(10, ge=0)
    max_stamina: int = Field(10, ge=0)
    attack: int = 2
    defense: int = 0
    speed: int = 10

    # Progression.
    level: int = Field(1, ge=1)
    xp: int = Field(0, ge=0)
    xp_value: int = Field(0, ge=0, description="XP awarded to whoever kills this actor.")

    status_effects: StatusEffects = Field(default_factory=StatusEffects)
    abilities: list[str] = Field(default_factory=list)
    behavior: BehaviorTag | None = None
    tags: list[str] = Field(default_factory=list)

    template_key: str | None = None
    class_key: str | None = None
    summoned_by: int | None = None
    boss: BossState | None = None

    def model_post_init(self, _: Any) -> None:
        if self.hp > self.max_hp:
            raise ValueError(f"hp ({self.hp}) cannot exceed max_hp ({self.max_hp})")
        self.mana = clamp(self.mana, 0, self.max_mana)
        self.stamina = clamp(self.stamina, 0, self.max_stamina)

    # === Queries ===

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def hp_ratio(self) -> float:
        return self.hp / self.max_hp if self.max_hp > 0 else 0.0

    @property
    def is_player(self) -> bool:
        return self.kind == ActorKind.PLAYER

    @property
    def is_monster(self) -> bool:
        return self.kind == ActorKind.MONSTER

    @property
    def colored_name(self) -> str:
        return self.kind.colorize(self.name)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def knows(self, ability_key: str) -> bool:
        return ability_key in self.abilities

    # === Resources ===

    def resource(self, resource: Resource) -> int:
        return getattr(self, resource.value)

    def max_resource(self, resource: Resource) -> int:
        return getattr(self, f"max_{resource.value}")

    def adjust_resource(self, resource: Resource, amount: int) -> int:
        """
        Adjusts mana or stamina, clamped to [0, max].

        Args:
            resource (Resource):
                The resource to adjust.
            amount (int):
                The signed delta.

        Returns:
            int:
                The delta actually applied.

        """
        before = self.resource(resource)
        after = clamp(before + amount, 0, self.max_resource(resource))
        setattr(self, resource.value, after)
        return after - before

    def can_afford(self, cost: dict[Resource, int]) -> bool:
        """Whether every resource in ``cost`` is available."""
        return all(self.resource(res) >= amount for res, amount in cost.items())

    def heal(self, amount: int) -> int:
        """Restores up to ``amount`` hp without exceeding max_hp, returns the gain."""
        gain = clamp(amount, 0, self.max_hp - self.hp)
        self.hp += gain
        return gain

    # === Stats ===

    def adjust_stat(self, stat: Stat, amount: int) -> None:
        setattr(self, stat.value, getattr(self, stat.value) + amount)

    def move_to(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id}, name='{self.name}', kind={self.kind})"

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Actor) and self.id == other.id
