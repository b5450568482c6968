"""
Shared fixtures for the engine tests.
"""

from collections.abc import Callable
from typing import Any

import pytest
from core.config import CombatConfig
from core.constants import ActorKind
from core.context import SimulationContext
from entities.actor import Actor
from world.grid import TileGrid

ActorFactory = Callable[..., Actor]


@pytest.fixture
def grid() -> TileGrid:
    return TileGrid.filled(20, 20)


@pytest.fixture
def flat_config() -> CombatConfig:
    """A configuration without damage variance."""
    return CombatConfig(variance_min=0, variance_max=0)


@pytest.fixture
def ctx(grid: TileGrid) -> SimulationContext:
    return SimulationContext(grid=grid, seed=1234)


@pytest.fixture
def flat_ctx(grid: TileGrid, flat_config: CombatConfig) -> SimulationContext:
    return SimulationContext(grid=grid, seed=1234, config=flat_config)


def _spawn(context: SimulationContext, **fields: Any) -> Actor:
    fields.setdefault("max_hp", max(fields.get("hp", 50), 1))
    fields.setdefault("hp", fields["max_hp"])
    actor = Actor(id=context.next_id(), **fields)
    context.add_actor(actor)
    if actor.kind == ActorKind.PLAYER:
        context.set_player(actor)
    return actor


@pytest.fixture
def make_actor(ctx: SimulationContext) -> ActorFactory:
    """Creates actors registered on ``ctx``."""

    def factory(**fields: Any) -> Actor:
        return _spawn(ctx, **fields)

    return factory


@pytest.fixture
def make_flat_actor(flat_ctx: SimulationContext) -> ActorFactory:
    """Creates actors registered on ``flat_ctx``."""

    def factory(**fields: Any) -> Actor:
        return _spawn(flat_ctx, **fields)

    return factory
