"""
Demo runner for the dungeon crawl engine.

Builds a small arena, drops a player and a handful of monsters in it and plays
a few seeded rounds, printing the combat log and the health of every actor
after each round. The same seed always replays the same fight.
"""

import logging
import sys

from ai.dispatcher import process_all_monsters
from combat.abilities import ABILITIES, AbilityKey, use_ability
from combat.attacks import melee_attack
from combat.turns import process_turn_start
from core.config import load_config
from core.constants import GamePhase, MessageCategory
from core.context import SimulationContext
from core.logging import setup_logging
from core.utils import cprint, crule, make_bar
from entities.actor import Actor
from entities.classes import create_player
from entities.monsters import create_monster
from world.geometry import chebyshev
from world.grid import TileGrid
from world.pathfinding import move_toward

ARENA = [
    "####################",
    "#..................#",
    "#..................#",
    "#....#.......#.....#",
    "#....#.......#.....#",
    "#..................#",
    "#.......####.......#",
    "#..................#",
    "#..................#",
    "####################",
]

# (template, x, y)
SPAWNS = [
    ("goblin", 14, 2),
    ("skeleton", 16, 7),
    ("dark_mage", 17, 4),
    ("rat", 10, 8),
]


def build_arena(seed: int, config_path: str | None = None) -> SimulationContext:
    """Creates a context holding the arena, a warrior and the spawns."""
    ctx = SimulationContext(
        grid=TileGrid.from_strings(ARENA),
        seed=seed,
        config=load_config(config_path),
        floor=1,
    )
    create_player(ctx, "warrior", name="Hero", x=2, y=4, floor=1)
    for template_key, x, y in SPAWNS:
        monster = create_monster(ctx, template_key, 1, x, y)
        if monster is not None:
            ctx.add_actor(monster)
    return ctx


def player_turn(ctx: SimulationContext, player: Actor) -> None:
    """A simple scripted player: strike the nearest monster or walk to it."""
    if not process_turn_start(ctx, player):
        return
    monsters = [a for a in ctx.actors_on_floor(player.floor) if a.is_monster]
    if not monsters:
        return
    target = min(monsters, key=lambda m: (chebyshev(player.x, player.y, m.x, m.y), m.id))
    if chebyshev(player.x, player.y, target.x, target.y) > 1:
        move_toward(ctx, player, target.x, target.y)
        return
    power_strike = ABILITIES[AbilityKey.POWER_STRIKE]
    if player.can_afford(power_strike.cost) and ctx.rng.chance(0.4):
        if use_ability(ctx, power_strike.key, player, target):
            return
    melee_attack(ctx, player, target)


def print_status(ctx: SimulationContext) -> None:
    for actor in sorted(ctx.actors, key=lambda a: a.id):
        if not actor.alive:
            cprint(f"  {actor.colored_name:<40} [dim]dead[/]")
            continue
        effects = ", ".join(str(e) for e in actor.status_effects) or "-"
        cprint(
            f"  {actor.colored_name:<40} "
            f"{make_bar(actor.hp, actor.max_hp, color='green')} "
            f"{actor.hp:>3}/{actor.max_hp:<3} {effects}"
        )


def print_turn_messages(ctx: SimulationContext) -> None:
    """Prints the messages of the current turn, oldest first."""
    for message in reversed(ctx.messages.recent(ctx.config.max_messages)):
        if message.turn == ctx.turn:
            cprint(f"  [{message.category.color}]{message.text}[/]")


def run(seed: int = 7, rounds: int = 12) -> SimulationContext:
    ctx = build_arena(seed)
    player = ctx.player
    if player is None:
        raise RuntimeError("The arena was built without a player")

    crule("Dungeon Crawl Engine", style="bold green")
    print_status(ctx)
    for _ in range(rounds):
        ctx.advance_turn()
        crule(f"Turn {ctx.turn}", style="bold blue", characters="-")
        player_turn(ctx, player)
        process_all_monsters(ctx)

        if not player.alive:
            ctx.phase = GamePhase.DEAD
            ctx.message("You have died.", MessageCategory.SYSTEM)
        elif not any(a.is_monster for a in ctx.actors_on_floor(player.floor)):
            ctx.phase = GamePhase.VICTORY
            ctx.message("The arena falls silent.", MessageCategory.SYSTEM)
        print_turn_messages(ctx)
        print_status(ctx)
        if ctx.phase != GamePhase.COMBAT:
            break
    crule(f"Phase: {ctx.phase.display_name}", style="bold green")
    return ctx


if __name__ == "__main__":
    setup_logging(logging.INFO)
    run(seed=int(sys.argv[1]) if len(sys.argv) > 1 else 7)
