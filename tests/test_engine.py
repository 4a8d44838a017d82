"""Double buffer diffing and frame painting."""

import unittest

from grid_invaders.bounds import PlayfieldConfig
from grid_invaders.components import CellKind, Outcome
from grid_invaders.engine import (
    BLANK, HUD_ROWS, PALETTE, Cell, DoubleBuffer, GameRenderer
)
from grid_invaders.game import Game
from grid_invaders.render_model import render_model

from fakes import never_fire, plain_terminal


def row_text(buffer, y):
    """Text of row y in the most recently presented frame."""
    return ''.join(cell.char for cell in buffer.front[y])


class MarkupTerminal:
    """Terminal stand-in whose sequences are readable markers."""
    normal = ''

    def move_xy(self, x, y):
        return f'<{x},{y}>'

    def color(self, n):
        return f'[fg{n}]'

    def on_color(self, n):
        return f'[bg{n}]'


class TestCell(unittest.TestCase):

    def test_cells_compare_by_value(self):
        self.assertEqual(Cell('a', 1, 2), Cell('a', 1, 2))
        self.assertNotEqual(Cell('a', 1, 2), Cell('a', 3, 2))
        self.assertEqual(Cell(), BLANK)

    def test_cleared_frame_is_blank(self):
        buffer = DoubleBuffer(plain_terminal(), 4, 2)
        buffer.put(1, 1, '#', 9, 9)
        buffer.clear_back()
        self.assertEqual(buffer.back, [[BLANK] * 4, [BLANK] * 4])


class TestDoubleBuffer(unittest.TestCase):

    def setUp(self):
        self.buffer = DoubleBuffer(plain_terminal(), 10, 3)

    def test_only_changed_cells_are_emitted(self):
        self.buffer.put_string(2, 1, 'hi')
        self.assertEqual(self.buffer.present(), 'hi')

        self.buffer.clear_back()
        self.buffer.put_string(2, 1, 'hi')
        self.assertEqual(self.buffer.present(), '')

    def test_erased_cells_become_spaces(self):
        self.buffer.put(0, 0, '#')
        self.buffer.present()
        self.buffer.clear_back()
        self.assertEqual(self.buffer.present(), ' ')

    def test_out_of_range_puts_are_ignored(self):
        self.buffer.put(10, 0, '#')
        self.buffer.put(0, -1, '#')
        self.assertEqual(self.buffer.present(), '')


class TestRunBatching(unittest.TestCase):

    def setUp(self):
        self.buffer = DoubleBuffer(MarkupTerminal(), 10, 3)

    def test_run_is_one_move_and_one_style(self):
        self.buffer.put_string(2, 1, 'hi', 33)
        self.assertEqual(self.buffer.present(), '<2,1>[fg33]hi')

    def test_color_change_starts_a_new_run(self):
        self.buffer.put(0, 0, 'a', 1)
        self.buffer.put(1, 0, 'b', 2, 5)
        self.assertEqual(self.buffer.present(), '<0,0>[fg1]a<1,0>[bg5][fg2]b')

    def test_unchanged_gap_splits_a_run(self):
        self.buffer.put_string(0, 0, 'abc')
        self.buffer.present()
        self.buffer.clear_back()
        self.buffer.put_string(0, 0, 'xbz')
        self.assertEqual(self.buffer.present(), '<0,0>[fg7]x<2,0>[fg7]z')

    def test_palette_painting(self):
        self.buffer.put_kind(4, 2, CellKind.ENEMY, 'W')
        fg, bg = PALETTE[CellKind.ENEMY]
        self.assertEqual(self.buffer.present(), f'<4,2>[bg{bg}][fg{fg}]W')


class TestGameRenderer(unittest.TestCase):

    def setUp(self):
        self.config = PlayfieldConfig()
        self.game = Game(self.config, rng=never_fire())
        self.renderer = GameRenderer(plain_terminal(), self.config.width,
                                     self.config.height)

    def test_buffer_covers_playfield_and_hud(self):
        self.assertEqual(self.renderer.buffer.width, 60)
        self.assertEqual(self.renderer.buffer.height, 25 + HUD_ROWS)

    def test_playfield_colors(self):
        self.renderer.draw(render_model(self.game))
        player = self.renderer.buffer.front[23][30]
        self.assertEqual(player.char, '^')
        self.assertEqual((player.fg_color, player.bg_color),
                         PALETTE[render_model(self.game).cell(30, 23).kind])
        self.assertEqual(self.renderer.buffer.front[2][5].char, 'W')

    def test_hud_shows_score(self):
        self.game.score = 120
        self.renderer.draw(render_model(self.game))
        buffer = self.renderer.buffer
        self.assertEqual(row_text(buffer, 25), '=' * 60)
        self.assertTrue(row_text(buffer, 26).startswith('SCORE: 120  ENEMIES: 50'))
        self.assertIn('ESC Quit', row_text(buffer, 26))

    def test_no_banner_while_playing(self):
        self.renderer.draw(render_model(self.game))
        screen = ''.join(row_text(self.renderer.buffer, y) for y in range(25))
        self.assertNotIn('GAME OVER', screen)

    def test_loss_banner(self):
        self.game.score = 40
        self.game.finish(Outcome.LOST, 'test')
        self.renderer.draw(render_model(self.game))
        screen = '\n'.join(row_text(self.renderer.buffer, y) for y in range(25))
        self.assertIn('GAME OVER', screen)
        self.assertIn('FINAL SCORE: 40', screen)
        self.assertIn('R - RESTART', screen)

    def test_win_banner(self):
        self.game.finish(Outcome.WON, 'test')
        self.renderer.draw(render_model(self.game))
        screen = '\n'.join(row_text(self.renderer.buffer, y) for y in range(25))
        self.assertIn('YOU WIN!', screen)


if __name__ == '__main__':
    unittest.main(verbosity=2)
