"""
Rendering Engine
=================
Double-buffered terminal renderer that paints a RenderModel.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

try:
    from blessed import Terminal
except ImportError:
    raise ImportError("'blessed' library required. Install with: pip install blessed")

from .components import CellKind, Outcome
from .render_model import RenderModel


# ANSI 256 color constants
NEON_GREEN = 46
NEON_RED = 196
NEON_YELLOW = 226
NEON_CYAN = 51
NEON_BLUE = 33

DARK_GREEN = 22
DARK_RED = 52

GRAY_MED = 245
GRAY_DARK = 238
GRAY_DARKER = 235

WHITE = 255

# (fg, bg) per cell kind; bg -1 = transparent
PALETTE: Dict[CellKind, Tuple[int, int]] = {
    CellKind.PLAYER: (NEON_GREEN, DARK_GREEN),
    CellKind.ENEMY: (NEON_RED, DARK_RED),
    CellKind.PLAYER_BULLET: (WHITE, GRAY_DARK),
    CellKind.ENEMY_BULLET: (NEON_YELLOW, -1),
}

# Rows below the playfield: separator + status line
HUD_ROWS = 2

DEFAULT_FG = 7


@dataclass(frozen=True)
class Cell:
    """One painted character. Cells compare by value."""
    char: str = ' '
    fg_color: int = DEFAULT_FG
    bg_color: int = -1  # -1 = transparent/default

    @property
    def colors(self) -> Tuple[int, int]:
        return self.fg_color, self.bg_color


BLANK = Cell()


class DoubleBuffer:
    """
    Two frames of immutable cells.

    The back frame is painted, diffed against the front frame and swapped
    in. Each run of changed cells in a row that shares one color pair is
    sent as a single cursor move followed by a plain string.
    """

    def __init__(self, term: Terminal, width: int, height: int):
        self.term = term
        self.width = width
        self.height = height
        self.front: List[List[Cell]] = self._blank_frame()
        self.back: List[List[Cell]] = self._blank_frame()

    def _blank_frame(self) -> List[List[Cell]]:
        return [[BLANK] * self.width for _ in range(self.height)]

    def clear_back(self):
        for row in self.back:
            row[:] = [BLANK] * self.width

    def put(self, x: int, y: int, char: str, fg_color: int = DEFAULT_FG,
            bg_color: int = -1):
        """Paint one cell of the back frame; off-frame writes are dropped."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.back[y][x] = Cell(char or ' ', fg_color, bg_color)

    def put_kind(self, x: int, y: int, kind: CellKind, glyph: str):
        """Paint a playfield entity in its palette colors."""
        fg, bg = PALETTE[kind]
        self.put(x, y, glyph, fg, bg)

    def put_string(self, x: int, y: int, text: str, fg_color: int = DEFAULT_FG,
                   bg_color: int = -1):
        for i, char in enumerate(text):
            self.put(x + i, y, char, fg_color, bg_color)

    def style(self, cell: Cell) -> str:
        """Escape sequence selecting a cell's colors from a clean state."""
        seq = self.term.normal
        if cell.bg_color >= 0:
            seq += self.term.on_color(cell.bg_color)
        return seq + self.term.color(cell.fg_color)

    def dirty_runs(self, y: int) -> Iterator[Tuple[int, List[Cell]]]:
        """Yield (x, cells) for each changed same-colored run of row y."""
        back, front = self.back[y], self.front[y]
        x = 0
        while x < self.width:
            if back[x] == front[x]:
                x += 1
                continue
            start = x
            colors = back[x].colors
            x += 1
            while (x < self.width and back[x] != front[x]
                   and back[x].colors == colors):
                x += 1
            yield start, back[start:x]

    def present(self) -> str:
        """Swap frames and return the output that turns front into back."""
        parts = []
        for y in range(self.height):
            for x, run in self.dirty_runs(y):
                parts.append(self.term.move_xy(x, y))
                parts.append(self.style(run[0]))
                parts.append(''.join(cell.char for cell in run))

        self.front, self.back = self.back, self.front
        return ''.join(parts)


@dataclass
class GameRenderer:
    """
    Paints the playfield, the HUD below it and the end-of-game banner.

    The buffer covers exactly playfield_width x (playfield_height + HUD_ROWS),
    anchored at the top-left of the terminal.
    """
    term: Terminal
    playfield_width: int
    playfield_height: int
    buffer: DoubleBuffer = field(init=False)
    frame: int = 0

    def __post_init__(self):
        self.buffer = DoubleBuffer(
            self.term, self.playfield_width, self.playfield_height + HUD_ROWS
        )

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def hud_y(self) -> int:
        return self.playfield_height

    def draw(self, model: RenderModel) -> str:
        """Render one frame and return the escape sequences to print."""
        self.buffer.clear_back()
        self.draw_playfield(model)
        self.draw_hud(model)
        if model.outcome != Outcome.PLAYING:
            self.draw_banner(model)
        self.frame += 1
        return self.buffer.present()

    def draw_playfield(self, model: RenderModel):
        for y, row in enumerate(model.grid):
            for x, cell in enumerate(row):
                if cell is None:
                    continue
                self.buffer.put_kind(x, y, cell.kind, cell.glyph)

    def draw_hud(self, model: RenderModel):
        """Separator line plus score, remaining enemies and controls."""
        sep_y = self.hud_y
        self.buffer.put_string(0, sep_y, '=' * self.width, GRAY_DARK)

        status = f'SCORE: {model.score}  ENEMIES: {model.enemies_remaining}'
        self.buffer.put_string(0, sep_y + 1, status, NEON_BLUE)

        controls = '<- -> Move  SPACE Fire  ESC Quit'
        cx = self.width - len(controls)
        if cx > len(status) + 1:
            self.buffer.put_string(cx, sep_y + 1, controls, GRAY_DARKER)

    def draw_banner(self, model: RenderModel):
        """Centered outcome message with restart/quit prompt."""
        if model.outcome == Outcome.WON:
            title, color = 'YOU WIN!', NEON_GREEN
        else:
            title, color = 'GAME OVER', NEON_RED

        lines = [
            (title, color),
            (f'FINAL SCORE: {model.score}', NEON_YELLOW),
        ]
        # Blink the prompt
        if (self.frame // 5) % 2 == 0:
            lines.append(('[ R - RESTART ]  [ Q - QUIT ]', NEON_CYAN))

        top = self.playfield_height // 2 - len(lines) // 2
        for i, (text, fg) in enumerate(lines):
            x = max(0, self.width // 2 - len(text) // 2)
            self.buffer.put_string(x, top + i, text, fg)
