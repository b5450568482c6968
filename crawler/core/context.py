"""
Simulation context module.

The simulation context owns everything the engine shares between components:
the actor table, the tile grid of the current floor, the seeded random
stream, the message log, the turn counter and the configuration. It is passed
explicitly to every component call instead of living in module globals.
"""

from collections.abc import Callable, Iterable

from core.config import CombatConfig
from core.constants import ActionFailure, GamePhase, MessageCategory
from core.messages import MessageLog
from core.rng import RNG, new_rng
from entities.actor import Actor
from world.grid import TileGrid

MonsterFactory = Callable[["SimulationContext", str, int, int, int], Actor | None]
LootDropper = Callable[[Actor], None]


class SimulationContext:
    """
    Shared state of one running simulation.

    Attributes:
        grid (TileGrid | None):
            The tile grid of the current floor.
        floor (int):
            The current floor index.
        rng (RNG):
            The single seeded random stream; every draw of the engine uses it.
        config (CombatConfig):
            Tunable combat and AI parameters.
        messages (MessageLog):
            The sink for user-visible events.
        turn (int):
            The global turn counter.
        phase (GamePhase):
            The phase of the surrounding game loop.
        last_failure (ActionFailure | None):
            Why the last action primitive was refused. Every primitive
            resets it when called, so it is None after a success.

    """

    def __init__(
        self,
        grid: TileGrid | None = None,
        seed: int | None = 0,
        config: CombatConfig | None = None,
        floor: int = 0,
        monster_factory: MonsterFactory | None = None,
        loot_dropper: LootDropper | None = None,
    ) -> None:
        self.grid = grid
        self.floor = floor
        self.seed = seed
        self.rng: RNG = new_rng(seed)
        self.config = config or CombatConfig()
        self.messages = MessageLog(self.config.max_messages)
        self.turn = 0
        self.phase = GamePhase.COMBAT
        self.last_failure: ActionFailure | None = None
        self.monster_factory = monster_factory or _default_monster_factory
        self.loot_dropper = loot_dropper
        self.player: Actor | None = None
        self._actors: list[Actor] = []
        self._next_id = 1
        self._resolved_deaths: set[int] = set()

    # === Ids and actors ===

    def next_id(self) -> int:
        actor_id = self._next_id
        self._next_id += 1
        return actor_id

    def add_actor(self, actor: Actor) -> Actor:
        self._actors.append(actor)
        self._next_id = max(self._next_id, actor.id + 1)
        return actor

    def add_actors(self, actors: Iterable[Actor]) -> None:
        for actor in actors:
            self.add_actor(actor)

    def remove_actor(self, actor_id: int) -> None:
        self._actors = [a for a in self._actors if a.id != actor_id]

    def set_player(self, actor: Actor) -> Actor:
        """Registers ``actor`` as the player, adding it to the table if needed."""
        if actor not in self._actors:
            self.add_actor(actor)
        self.player = actor
        return actor

    @property
    def actors(self) -> list[Actor]:
        return list(self._actors)

    def get_actor(self, actor_id: int) -> Actor | None:
        for actor in self._actors:
            if actor.id == actor_id:
                return actor
        return None

    def get_actor_at(self, x: int, y: int, floor: int) -> Actor | None:
        """Returns the living actor standing on (x, y) of ``floor``, if any."""
        for actor in self._actors:
            if actor.alive and actor.x == x and actor.y == y and actor.floor == floor:
                return actor
        return None

    def actors_on_floor(self, floor: int) -> list[Actor]:
        """Living actors on ``floor``, in insertion order."""
        return [a for a in self._actors if a.alive and a.floor == floor]

    def is_free(self, x: int, y: int, floor: int) -> bool:
        """Whether (x, y) is walkable and no living actor stands there."""
        if self.grid is None or not self.grid.is_walkable(x, y):
            return False
        return self.get_actor_at(x, y, floor) is None

    # === Turns and messages ===

    def advance_turn(self) -> int:
        self.turn += 1
        self.messages.turn = self.turn
        return self.turn

    def message(self, text: str, category: MessageCategory = MessageCategory.COMBAT) -> None:
        self.messages.add(text, category)

    def fail(self, reason: ActionFailure, text: str) -> bool:
        """
        Records a refused action and logs why.

        Returns:
            bool:
                Always False, so primitives can ``return ctx.fail(...)``.

        """
        self.last_failure = reason
        category = (
            MessageCategory.SYSTEM
            if reason == ActionFailure.UNKNOWN_ABILITY
            else MessageCategory.COMBAT
        )
        self.messages.add(text, category)
        return False

    # === Deaths ===

    def mark_death_resolved(self, actor: Actor) -> bool:
        """
        Marks the death of ``actor`` as resolved.

        Returns:
            bool:
                True the first time for this actor, False afterwards.

        """
        if actor.id in self._resolved_deaths:
            return False
        self._resolved_deaths.add(actor.id)
        return True


def _default_monster_factory(
    ctx: SimulationContext, template_key: str, floor: int, x: int, y: int
) -> Actor | None:
    from entities.monsters import create_monster

    return create_monster(ctx, template_key, floor, x, y)
