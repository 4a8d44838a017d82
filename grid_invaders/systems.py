"""
Simulation Systems
===================
One function per tick step. Each system reads and mutates the Game
aggregate in place; Game.tick runs them in a fixed order.
"""

import logging
from typing import TYPE_CHECKING, Optional, Protocol, Sequence, TypeVar

from .components import Bullet, Command, GameObject, Outcome

if TYPE_CHECKING:
    from .game import Game


logger = logging.getLogger(__name__)

T = TypeVar('T')


class RandomSource(Protocol):
    """Uniform random capability. random.Random satisfies it."""

    def random(self) -> float:
        ...

    def choice(self, seq: Sequence[T]) -> T:
        ...


# =============================================================================
# PLAYER
# =============================================================================

def player_command_system(game: 'Game', command: Command) -> None:
    """Move the ship or fire, honoring the live-bullet limit."""
    player = game.player
    config = game.config

    if command == Command.MOVE_LEFT:
        player.x = config.clamp_x(player.x - 1)
    elif command == Command.MOVE_RIGHT:
        player.x = config.clamp_x(player.x + 1)
    elif command == Command.SHOOT:
        limit = config.max_player_bullets
        if limit is not None and len(game.player_bullets) >= limit:
            return
        game.player_bullets.append(Bullet(player.x, player.y))


# =============================================================================
# PROJECTILES
# =============================================================================

def player_bullet_system(game: 'Game') -> None:
    """Player bullets climb one row; those leaving the top are dropped."""
    for bullet in game.player_bullets:
        bullet.y -= 1
    game.player_bullets[:] = [b for b in game.player_bullets if b.y >= 0]


def enemy_bullet_system(game: 'Game') -> None:
    """Enemy bullets fall one row; those leaving the bottom are dropped."""
    height = game.config.height
    for bullet in game.enemy_bullets:
        bullet.y += 1
    game.enemy_bullets[:] = [b for b in game.enemy_bullets if b.y < height]


# =============================================================================
# FORMATION
# =============================================================================

def formation_system(game: 'Game') -> bool:
    """
    Step the formation once every enemy_move_interval ticks.

    All alive enemies shift by the shared direction. If any of them lands
    on a side edge, the whole formation drops a row and the direction
    flips for the next step. Returns True if a step happened.
    """
    config = game.config
    game.enemy_move_counter += 1
    if game.enemy_move_counter < config.enemy_move_interval:
        return False
    game.enemy_move_counter = 0

    alive = game.alive_enemies()
    move_down = False
    for enemy in alive:
        enemy.x = config.clamp_x(enemy.x + game.formation_direction)
        if config.at_side_edge(enemy.x):
            move_down = True

    if move_down:
        game.formation_direction = -game.formation_direction
        for enemy in alive:
            enemy.y = config.clamp_y(enemy.y + 1)
        logger.debug(
            'Formation reversed, now heading %+d', game.formation_direction
        )

    return True


def enemy_fire_system(game: 'Game') -> Optional[Bullet]:
    """Roll once per tick; on success a random alive enemy fires."""
    if game.rng.random() >= game.config.enemy_fire_chance:
        return None

    alive = game.alive_enemies()
    if not alive:
        return None

    shooter = game.rng.choice(alive)
    bullet = Bullet(shooter.x, shooter.y)
    game.enemy_bullets.append(bullet)
    logger.debug('Enemy at (%d, %d) fired', shooter.x, shooter.y)
    return bullet


# =============================================================================
# COLLISIONS
# =============================================================================

def player_hit_system(game: 'Game') -> int:
    """
    Resolve player bullets against enemies.

    A bullet kills at most the first alive enemy on its cell and is
    consumed. Returns the number of kills this tick.
    """
    kills = 0
    surviving = []

    for bullet in game.player_bullets:
        target = _enemy_at(game, bullet.x, bullet.y)
        if target is None:
            surviving.append(bullet)
            continue
        target.alive = False
        game.score += game.config.score_per_kill
        kills += 1
        logger.debug('Enemy destroyed at (%d, %d), score %d',
                     target.x, target.y, game.score)

    game.player_bullets[:] = surviving
    return kills


def enemy_hit_system(game: 'Game') -> bool:
    """An enemy bullet on the player's cell ends the game."""
    player = game.player
    for i, bullet in enumerate(game.enemy_bullets):
        if bullet.x == player.x and bullet.y == player.y:
            del game.enemy_bullets[i]
            player.alive = False
            game.finish(Outcome.LOST, 'player hit')
            return True
    return False


# =============================================================================
# OUTCOME
# =============================================================================

def invasion_system(game: 'Game') -> bool:
    """Loss when any alive enemy reaches the player's row band."""
    row = game.config.invasion_row
    for enemy in game.alive_enemies():
        if enemy.y >= row:
            game.finish(Outcome.LOST, 'formation landed')
            return True
    return False


def victory_system(game: 'Game') -> bool:
    """Win when the formation is gone."""
    if game.alive_enemies():
        return False
    game.finish(Outcome.WON, 'formation destroyed')
    return True


def _enemy_at(game: 'Game', x: int, y: int) -> Optional[GameObject]:
    for enemy in game.enemies:
        if enemy.alive and enemy.x == x and enemy.y == y:
            return enemy
    return None
