"""
Constants and enumerations for the engine.

Defines global constants and the closed enumerations used throughout the
engine: tile types, actor kinds, status effect kinds, ability target shapes,
AI behavior tags, boss phases and the failure taxonomy of action primitives.
"""

from enum import Enum


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().replace("_", " ").capitalize()


class ActorKind(NiceEnum):
    """Defines the kind of actor in the dungeon."""

    PLAYER = "player"
    MONSTER = "monster"
    NPC = "npc"

    @property
    def color(self) -> str:
        """Returns the color string associated with this actor kind."""
        return {
            ActorKind.PLAYER: "bold blue",
            ActorKind.MONSTER: "bold red",
            ActorKind.NPC: "bold green",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies actor kind color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class TileType(NiceEnum):
    """Tile types of the dungeon grid."""

    WALL = 0
    FLOOR = 1
    DOOR = 2
    STAIRS_DOWN = 3
    STAIRS_UP = 4
    CORRIDOR = 5
    WATER = 6
    TRAP = 7

    @property
    def walkable(self) -> bool:
        """Whether actors can stand on this tile."""
        return self in WALKABLE_TILES

    @property
    def opaque(self) -> bool:
        """Whether this tile blocks line of sight."""
        return self in OPAQUE_TILES

    @property
    def glyph(self) -> str:
        return {
            TileType.WALL: "#",
            TileType.FLOOR: ".",
            TileType.DOOR: "+",
            TileType.STAIRS_DOWN: ">",
            TileType.STAIRS_UP: "<",
            TileType.CORRIDOR: ",",
            TileType.WATER: "~",
            TileType.TRAP: "^",
        }.get(self, "?")


WALKABLE_TILES = frozenset(
    {
        TileType.FLOOR,
        TileType.DOOR,
        TileType.STAIRS_DOWN,
        TileType.STAIRS_UP,
        TileType.CORRIDOR,
        TileType.TRAP,
    }
)

# Closed doors block sight.
OPAQUE_TILES = frozenset({TileType.WALL, TileType.DOOR})


class StatusKind(NiceEnum):
    """Kinds of timed status effects."""

    STUNNED = "stunned"
    SLOWED = "slowed"
    POISONED = "poisoned"
    BLEED = "bleed"
    SHIELDED = "shielded"
    BUFFED = "buffed"
    EVADING = "evading"
    DIVINE_SHIELD = "divine_shield"
    VULNERABLE = "vulnerable"

    @property
    def deals_damage(self) -> bool:
        """Whether the effect damages its owner on every tick."""
        return self in (StatusKind.POISONED, StatusKind.BLEED)

    @property
    def color(self) -> str:
        return {
            StatusKind.STUNNED: "bold yellow",
            StatusKind.SLOWED: "cyan",
            StatusKind.POISONED: "bold green",
            StatusKind.BLEED: "bold red",
            StatusKind.SHIELDED: "bold blue",
            StatusKind.BUFFED: "bold magenta",
            StatusKind.EVADING: "white",
            StatusKind.DIVINE_SHIELD: "bold white",
            StatusKind.VULNERABLE: "red",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies status color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class Resource(NiceEnum):
    """Spendable actor resources."""

    MANA = "mana"
    STAMINA = "stamina"


class Stat(NiceEnum):
    """Actor stats that buffs may modify."""

    ATTACK = "attack"
    DEFENSE = "defense"
    SPEED = "speed"


class TargetShape(NiceEnum):
    """Defines what an ability can target."""

    SELF = "self"
    MELEE = "melee"
    RANGED = "ranged"
    AOE = "aoe"
    PARTY = "party"


class Archetype(NiceEnum):
    """Ability archetypes."""

    WARRIOR = "warrior"
    MAGE = "mage"
    ROGUE = "rogue"
    CLERIC = "cleric"
    MONSTER = "monster"


class BehaviorTag(NiceEnum):
    """AI behavior tags for autonomous actors."""

    AGGRESSIVE = "aggressive"
    FLANKING = "flanking"
    CAUTIOUS = "cautious"
    RANGED = "ranged"
    BOSS = "boss"


class BossPhase(NiceEnum):
    """Phases of a boss encounter, in order of escalation."""

    NORMAL = "normal"
    PHASE_TWO = "phase_two"
    ENRAGED = "enraged"


class BossTrigger(NiceEnum):
    """One-shot boss transitions, each guarded by an HP threshold."""

    ENRAGE = "enrage"
    SUMMON_HALF = "summon_half"
    SUMMON_QUARTER = "summon_quarter"


class TelegraphKind(NiceEnum):
    """Heavy attacks a boss announces one turn ahead."""

    HEAVY_STRIKE = "heavy_strike"
    BREATH = "breath"


class MessageCategory(NiceEnum):
    """Categories of user-visible log messages."""

    INFO = "info"
    COMBAT = "combat"
    LOOT = "loot"
    SYSTEM = "system"

    @property
    def color(self) -> str:
        return {
            MessageCategory.INFO: "white",
            MessageCategory.COMBAT: "bold red",
            MessageCategory.LOOT: "bold yellow",
            MessageCategory.SYSTEM: "bold cyan",
        }.get(self, "dim white")


class GamePhase(NiceEnum):
    """Phases of the surrounding game loop."""

    EXPLORING = "exploring"
    COMBAT = "combat"
    DEAD = "dead"
    VICTORY = "victory"


class ActionFailure(NiceEnum):
    """Reasons an action primitive refused to proceed."""

    OUT_OF_RANGE = "out_of_range"
    NO_LINE_OF_SIGHT = "no_line_of_sight"
    INSUFFICIENT_RESOURCE = "insufficient_resource"
    INCAPACITATED = "incapacitated"
    UNKNOWN_ABILITY = "unknown_ability"
    NO_MAP = "no_map"


# 8-way movement, clockwise from north.
DIRECTIONS: dict[str, tuple[int, int]] = {
    "N": (0, -1),
    "NE": (1, -1),
    "E": (1, 0),
    "SE": (1, 1),
    "S": (0, 1),
    "SW": (-1, 1),
    "W": (-1, 0),
    "NW": (-1, -1),
}

CARDINAL_DIRECTIONS: dict[str, tuple[int, int]] = {
    "N": (0, -1),
    "E": (1, 0),
    "S": (0, 1),
    "W": (-1, 0),
}

MAP_WIDTH = 50
MAP_HEIGHT = 50
MAX_FLOORS = 10
BOSS_FLOOR = 9

# XP needed to advance from level i + 1.
XP_PER_LEVEL: tuple[int, ...] = tuple(int(50 * 1.25**i) for i in range(20))
