"""
Game Aggregate
===============
Authoritative game state and the fixed-order tick that advances it.
"""

import logging
import random
from typing import List, Optional

from .bounds import PlayfieldConfig
from .components import Bullet, Command, GameObject, Outcome
from .systems import (
    RandomSource,
    player_command_system,
    player_bullet_system,
    enemy_bullet_system,
    formation_system,
    enemy_fire_system,
    player_hit_system,
    enemy_hit_system,
    invasion_system,
    victory_system,
)


logger = logging.getLogger(__name__)


class Game:
    """
    Owns the player, the formation, both bullet lists and the score.

    Destroyed enemies stay in ``enemies`` with ``alive = False`` so the
    formation keeps its layout; bullets are removed outright.
    """

    def __init__(self, config: Optional[PlayfieldConfig] = None,
                 rng: Optional[RandomSource] = None):
        self.config = config or PlayfieldConfig()
        self.rng: RandomSource = rng if rng is not None else random.Random()

        px, py = self.config.player_start
        self.player = GameObject(px, py)
        self.enemies: List[GameObject] = []
        self.player_bullets: List[Bullet] = []
        self.enemy_bullets: List[Bullet] = []

        self.score = 0
        self.outcome = Outcome.PLAYING
        self.enemy_move_counter = 0
        self.formation_direction = 1
        self.ticks = 0

        self.spawn_enemies()
        logger.info('New game: %dx%d playfield, %d enemies',
                    self.config.width, self.config.height, len(self.enemies))

    @property
    def game_over(self) -> bool:
        return self.outcome != Outcome.PLAYING

    def spawn_enemies(self) -> None:
        """Lay out the formation grid at the configured origin and spacing."""
        cfg = self.config
        for row in range(cfg.enemy_rows):
            for col in range(cfg.enemy_cols):
                self.enemies.append(GameObject(
                    x=cfg.enemy_origin_x + col * cfg.enemy_spacing_x,
                    y=cfg.enemy_origin_y + row * cfg.enemy_spacing_y,
                ))

    def alive_enemies(self) -> List[GameObject]:
        return [e for e in self.enemies if e.alive]

    def finish(self, outcome: Outcome, reason: str) -> None:
        """Record the terminal outcome. The first one reached sticks."""
        if self.game_over:
            return
        self.outcome = outcome
        logger.info('Game over (%s): %s after %d ticks, score %d',
                    outcome.name, reason, self.ticks, self.score)

    def tick(self, command: Command = Command.NONE) -> None:
        """Advance the simulation one step. No-op once the game is over."""
        if self.game_over:
            return
        self.ticks += 1

        player_command_system(self, command)
        player_bullet_system(self)
        enemy_bullet_system(self)
        formation_system(self)
        enemy_fire_system(self)
        player_hit_system(self)
        enemy_hit_system(self)

        if not self.game_over:
            invasion_system(self)
        if not self.game_over:
            victory_system(self)
