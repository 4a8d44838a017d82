"""
Render Model
=============
Pure conversion of a Game snapshot into a grid of drawable cells.
Nothing here touches the terminal.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .components import CellKind, Outcome


PLAYER_GLYPH = '^'
ENEMY_GLYPH = 'W'
BULLET_GLYPH = '|'

GLYPHS: Dict[CellKind, str] = {
    CellKind.PLAYER: PLAYER_GLYPH,
    CellKind.ENEMY: ENEMY_GLYPH,
    CellKind.PLAYER_BULLET: BULLET_GLYPH,
    CellKind.ENEMY_BULLET: BULLET_GLYPH,
}

# Highest first: the winner of any overlap
PRECEDENCE: Tuple[CellKind, ...] = (
    CellKind.PLAYER,
    CellKind.ENEMY,
    CellKind.PLAYER_BULLET,
    CellKind.ENEMY_BULLET,
)


@dataclass(frozen=True)
class DrawCell:
    kind: CellKind
    glyph: str


Grid = List[List[Optional[DrawCell]]]


@dataclass
class RenderModel:
    """Everything a renderer needs for one frame."""
    grid: Grid
    score: int
    outcome: Outcome
    enemies_remaining: int

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def height(self) -> int:
        return len(self.grid)

    def cell(self, x: int, y: int) -> Optional[DrawCell]:
        return self.grid[y][x]


def render_model(game) -> RenderModel:
    """Build the frame for ``game`` without mutating it."""
    width = game.config.width
    height = game.config.height
    grid: Grid = [[None] * width for _ in range(height)]

    positions = {
        CellKind.PLAYER: [(game.player.x, game.player.y)] if game.player.alive else [],
        CellKind.ENEMY: [(e.x, e.y) for e in game.enemies if e.alive],
        CellKind.PLAYER_BULLET: [(b.x, b.y) for b in game.player_bullets],
        CellKind.ENEMY_BULLET: [(b.x, b.y) for b in game.enemy_bullets],
    }

    # Paint lowest precedence first so higher kinds overwrite
    for kind in reversed(PRECEDENCE):
        cell = DrawCell(kind, GLYPHS[kind])
        for x, y in positions[kind]:
            if 0 <= x < width and 0 <= y < height:
                grid[y][x] = cell

    return RenderModel(
        grid=grid,
        score=game.score,
        outcome=game.outcome,
        enemies_remaining=sum(1 for e in game.enemies if e.alive),
    )


def grid_to_text(model: RenderModel) -> str:
    """Flatten the grid into newline-terminated rows of glyphs."""
    lines = []
    for row in model.grid:
        lines.append(''.join(c.glyph if c else ' ' for c in row))
    return ''.join(line + '\n' for line in lines)
