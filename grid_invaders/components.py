"""
Component Definitions
======================
Entity records and enums. All components are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from enum import Enum, auto


# =============================================================================
# ENTITIES
# =============================================================================

@dataclass
class GameObject:
    """The player ship or one formation member."""
    x: int = 0
    y: int = 0
    alive: bool = True


@dataclass
class Bullet:
    """A projectile. Direction comes from the list that owns it."""
    x: int = 0
    y: int = 0


# =============================================================================
# ENUMS
# =============================================================================

class Command(Enum):
    """One player action per tick."""
    NONE = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    SHOOT = auto()
    QUIT = auto()  # Interpreted by the game loop, ignored by the simulation


class Outcome(Enum):
    PLAYING = auto()
    WON = auto()
    LOST = auto()


class CellKind(Enum):
    """What occupies a drawn cell. Doubles as the color class."""
    PLAYER = auto()
    ENEMY = auto()
    PLAYER_BULLET = auto()
    ENEMY_BULLET = auto()
