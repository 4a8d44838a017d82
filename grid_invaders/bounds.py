"""
Playfield Bounds
=================
Playfield geometry, formation layout and tick constants, plus the
clamping helpers every system uses to keep entities on the grid.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class PlayfieldConfig:
    """Immutable layout of one game. Defaults match the classic 60x25 board."""

    width: int = 60
    height: int = 25

    # Formation grid
    enemy_rows: int = 5
    enemy_cols: int = 10
    enemy_spacing_x: int = 5
    enemy_spacing_y: int = 3
    enemy_origin_x: int = 5
    enemy_origin_y: int = 2

    # Pacing
    enemy_move_interval: int = 5  # ticks per formation step
    enemy_fire_chance: float = 0.05  # per tick, whole formation
    max_player_bullets: Optional[int] = 1  # None = unlimited
    score_per_kill: int = 10
    tick_seconds: float = 0.1

    def __post_init__(self):
        if self.width < 3 or self.height < 4:
            raise ValueError(
                f'Playfield too small: {self.width}x{self.height} (minimum 3x4)'
            )
        if self.enemy_rows < 1 or self.enemy_cols < 1:
            raise ValueError('Formation needs at least one row and one column')
        if self.enemy_spacing_x < 1 or self.enemy_spacing_y < 1:
            raise ValueError('Formation spacing must be positive')

        right = self.enemy_origin_x + (self.enemy_cols - 1) * self.enemy_spacing_x
        bottom = self.enemy_origin_y + (self.enemy_rows - 1) * self.enemy_spacing_y
        if self.enemy_origin_x < 0 or right >= self.width:
            raise ValueError(
                f'Formation spans x={self.enemy_origin_x}..{right}, '
                f'outside playfield width {self.width}'
            )
        if self.enemy_origin_y < 0 or bottom >= self.invasion_row:
            raise ValueError(
                f'Formation spans y={self.enemy_origin_y}..{bottom}, '
                f'must stay above invasion row {self.invasion_row}'
            )

        if self.enemy_move_interval < 1:
            raise ValueError('enemy_move_interval must be at least 1')
        if not 0.0 <= self.enemy_fire_chance <= 1.0:
            raise ValueError(
                f'enemy_fire_chance must be within [0, 1], got {self.enemy_fire_chance}'
            )
        if self.max_player_bullets is not None and self.max_player_bullets < 1:
            raise ValueError('max_player_bullets must be at least 1 or None')
        if self.score_per_kill < 1:
            raise ValueError('score_per_kill must be positive')
        if self.tick_seconds <= 0:
            raise ValueError('tick_seconds must be positive')

    @property
    def invasion_row(self) -> int:
        """First row at which an enemy counts as having landed."""
        return self.height - 2

    @property
    def player_start(self) -> Tuple[int, int]:
        return self.width // 2, self.height - 2

    def clamp_x(self, x: int) -> int:
        return clamp(x, 0, self.width - 1)

    def clamp_y(self, y: int) -> int:
        return clamp(y, 0, self.height - 1)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def at_side_edge(self, x: int) -> bool:
        """True if x sits on the leftmost or rightmost column."""
        return x == 0 or x == self.width - 1


def clamp(value: int, low: int, high: int) -> int:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))
