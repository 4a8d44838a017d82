#!/usr/bin/env python3
"""
GRID INVADERS - Terminal Arcade Shooter
========================================
Hold the bottom row against a descending formation.

Controls:
    LEFT/RIGHT  - Move
    SPACE       - Fire
    ESC         - Quit
    R / Q       - Restart / quit after the game ends
"""

import argparse
import logging
import random
import sys
import time
from typing import Optional

try:
    from blessed import Terminal
except ImportError:
    print("ERROR: 'blessed' library required. Install with: pip install blessed")
    sys.exit(1)

from .bounds import PlayfieldConfig
from .components import Command, Outcome
from .controls import CommandQueue, translate
from .engine import GameRenderer, HUD_ROWS
from .game import Game
from .render_model import render_model


__version__ = '0.1.0'

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

MAX_CATCHUP_TICKS = 4
IDLE_SLEEP = 0.01  # seconds between input polls

# Session phases
PHASE_PLAYING = 'playing'
PHASE_GAME_OVER = 'game_over'

LOG_FORMAT = '[%(asctime)s][%(levelname)s] %(name)s: %(message)s'


# =============================================================================
# SESSION
# =============================================================================

class Session:
    """Couples a Game to the terminal: input, pacing and drawing."""

    def __init__(self, term: Terminal, config: PlayfieldConfig,
                 seed: Optional[int] = None):
        self.term = term
        self.config = config
        self.rng = random.Random(seed)
        self.commands = CommandQueue()
        self.renderer = GameRenderer(term, config.width, config.height)

        self.running = True
        self.phase = PHASE_PLAYING
        self.game = None
        self.start_game()

    def start_game(self):
        """Begin a fresh game with a new formation."""
        self.game = Game(self.config, self.rng)
        self.commands.clear()
        self.phase = PHASE_PLAYING

    def handle_input(self):
        """Drain pending keys into the command queue. ESC stops at once."""
        key = self.term.inkey(timeout=0)
        while key:
            if self.phase == PHASE_GAME_OVER:
                key_str = key.lower() if not key.is_sequence else ''
                if key_str == 'r':
                    self.start_game()
                    return
                if key_str == 'q' or key.name == 'KEY_ESCAPE':
                    self.running = False
                    return
            else:
                command = translate(key)
                if command == Command.QUIT:
                    logger.info('Quit requested at score %d', self.game.score)
                    self.running = False
                    return
                self.commands.push(command)
            key = self.term.inkey(timeout=0)

    def next_command(self) -> Command:
        return self.commands.pop()

    def update(self, command: Command):
        """Run one simulation tick and watch for the end of the game."""
        if self.phase != PHASE_PLAYING:
            return
        self.game.tick(command)
        if self.game.game_over:
            self.phase = PHASE_GAME_OVER

    def render(self):
        output = self.renderer.draw(render_model(self.game))
        if output:
            print(output, end='', flush=True)

    def farewell(self) -> str:
        """Message printed after the terminal is restored."""
        if self.game.outcome == Outcome.WON:
            return 'Congratulations! You won!'
        if self.game.outcome == Outcome.LOST:
            return f'Game Over! Final Score: {self.game.score}'
        return f'Final Score: {self.game.score}'


# =============================================================================
# MAIN LOOP
# =============================================================================

def configure_logging(log_file: Optional[str]) -> None:
    """Log to a file if asked; the terminal belongs to the game."""
    root = logging.getLogger('grid_invaders')
    if log_file:
        handler = logging.FileHandler(log_file)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.DEBUG)
    else:
        root.addHandler(logging.NullHandler())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='grid-invaders',
        description='Defend the bottom row against a descending formation.',
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='seed for enemy fire, for reproducible games',
    )
    parser.add_argument(
        '--log-file', default=None,
        help='write a debug log to this file',
    )
    parser.add_argument(
        '-V', '--version', action='version', version='%(prog)s ' + __version__
    )
    return parser


def run(term: Terminal, session: Session) -> None:
    """Fixed-timestep loop: poll input, tick at the configured cadence, draw."""
    tick_seconds = session.config.tick_seconds
    last_time = time.perf_counter()
    accumulator = 0.0

    # Initial clear (only time we clear the whole screen)
    print(term.home + term.clear, end='', flush=True)

    while session.running:
        now = time.perf_counter()
        delta = now - last_time
        last_time = now

        # Clamp delta to prevent spiral of death
        accumulator += min(delta, tick_seconds * MAX_CATCHUP_TICKS)

        session.handle_input()
        if not session.running:
            break

        ticks = 0
        while accumulator >= tick_seconds and ticks < MAX_CATCHUP_TICKS:
            session.update(session.next_command())
            accumulator -= tick_seconds
            ticks += 1

        session.render()
        time.sleep(IDLE_SLEEP)


def main(argv=None) -> int:
    """Entry point. Sets up the terminal and runs the game loop."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    config = PlayfieldConfig()
    term = Terminal()

    min_height = config.height + HUD_ROWS
    if term.width < config.width or term.height < min_height:
        print(
            f'Terminal too small: {term.width}x{term.height}. '
            f'Minimum: {config.width}x{min_height}'
        )
        return 1

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        session = Session(term, config, seed=args.seed)
        run(term, session)

        # Restore terminal
        print(term.normal, end='', flush=True)

    print(session.farewell())
    return 0


if __name__ == '__main__':
    sys.exit(main())
