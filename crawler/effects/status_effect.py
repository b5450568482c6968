"""
Status effect module for the engine.

Defines the timed status effect record and the per-actor collection that owns
them. An actor holds at most one effect of each kind, so the collection is
indexed by ``StatusKind``.
"""

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, Field, RootModel

from core.constants import Stat, StatusKind

# Payload used when an application leaves a parameter out.
STATUS_DEFAULTS: dict[StatusKind, dict[str, Any]] = {
    StatusKind.STUNNED: {"duration": 1},
    StatusKind.SLOWED: {"duration": 3},
    StatusKind.POISONED: {"duration": 5, "damage": 3},
    StatusKind.SHIELDED: {"duration": 0, "absorb": 0},
    StatusKind.BUFFED: {"duration": 3, "stat": Stat.ATTACK, "amount": 0},
    StatusKind.EVADING: {"duration": 1},
    StatusKind.DIVINE_SHIELD: {"duration": 2, "reduction": 0.5},
    StatusKind.BLEED: {"duration": 3, "damage": 2},
    StatusKind.VULNERABLE: {"duration": 3},
}


class StatusEffect(BaseModel):
    """
    A timed modifier attached to a single actor.

    Only the payload fields relevant to ``kind`` are meaningful: ``damage`` for
    poisoned and bleed, ``absorb`` for shielded, ``stat`` and ``amount`` for
    buffed, ``reduction`` for divine_shield.
    """

    kind: StatusKind = Field(
        description="The kind of the effect.",
    )
    duration: int = Field(
        description="Remaining turns. The effect expires when it reaches 0.",
    )
    damage: int = Field(
        0,
        ge=0,
        description="Damage dealt every tick (poisoned, bleed).",
    )
    absorb: int = Field(
        0,
        ge=0,
        description="Damage the shield can still absorb (shielded).",
    )
    stat: Stat | None = Field(
        None,
        description="The stat modified by the buff (buffed).",
    )
    amount: int = Field(
        0,
        description="The stat delta applied by the buff (buffed).",
    )
    reduction: float = Field(
        0.0,
        ge=0.0,
        le=1.0,
        description="Fraction of incoming damage removed (divine_shield).",
    )
    source_id: int | None = Field(
        None,
        description="The actor that inflicted the effect, if known.",
    )

    @property
    def label(self) -> str:
        return self.kind.display_name

    @classmethod
    def create(cls, kind: StatusKind, **params: Any) -> "StatusEffect":
        """
        Builds an effect of ``kind``, filling omitted parameters from the
        per-kind defaults.
        """
        merged = {**STATUS_DEFAULTS[kind], **params}
        return cls(kind=kind, **merged)

    def __str__(self) -> str:
        return f"{self.label} ({self.duration})"


class StatusEffects(RootModel[list[StatusEffect]]):
    """
    The status effects owned by one actor, at most one per kind, in
    application order.
    """

    root: list[StatusEffect] = Field(default_factory=list)

    def get(self, kind: StatusKind) -> StatusEffect | None:
        for effect in self.root:
            if effect.kind == kind:
                return effect
        return None

    def has(self, kind: StatusKind) -> bool:
        return self.get(kind) is not None

    def put(self, effect: StatusEffect) -> None:
        """Replaces any effect of the same kind and appends ``effect``."""
        self.remove(effect.kind)
        self.root.append(effect)

    def remove(self, kind: StatusKind) -> StatusEffect | None:
        """Removes and returns the effect of ``kind``, if any."""
        effect = self.get(kind)
        if effect is not None:
            self.root.remove(effect)
        return effect

    def kinds(self) -> list[StatusKind]:
        return [effect.kind for effect in self.root]

    def clear(self) -> None:
        self.root.clear()

    def __iter__(self) -> Iterator[StatusEffect]:  # type: ignore[override]
        return iter(list(self.root))

    def __len__(self) -> int:
        return len(self.root)

    def __contains__(self, kind: object) -> bool:
        return isinstance(kind, StatusKind) and self.has(kind)
