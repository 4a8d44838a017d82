"""Playfield configuration and clamping helpers."""

import unittest

from grid_invaders.bounds import PlayfieldConfig, clamp


class TestDefaults(unittest.TestCase):

    def test_classic_board(self):
        config = PlayfieldConfig()
        self.assertEqual((config.width, config.height), (60, 25))
        self.assertEqual(config.enemy_move_interval, 5)
        self.assertEqual(config.score_per_kill, 10)
        self.assertEqual(config.max_player_bullets, 1)

    def test_player_starts_centered_above_bottom(self):
        config = PlayfieldConfig()
        self.assertEqual(config.player_start, (30, 23))

    def test_invasion_row_is_player_band(self):
        config = PlayfieldConfig(width=20, height=10, enemy_rows=1,
                                 enemy_cols=1, enemy_origin_x=2,
                                 enemy_origin_y=1)
        self.assertEqual(config.invasion_row, 8)
        self.assertEqual(config.invasion_row, config.player_start[1])

    def test_is_immutable(self):
        config = PlayfieldConfig()
        with self.assertRaises(AttributeError):
            config.width = 10


class TestClamping(unittest.TestCase):

    def test_clamp(self):
        self.assertEqual(clamp(-3, 0, 9), 0)
        self.assertEqual(clamp(12, 0, 9), 9)
        self.assertEqual(clamp(4, 0, 9), 4)

    def test_clamp_axes(self):
        config = PlayfieldConfig()
        self.assertEqual(config.clamp_x(-1), 0)
        self.assertEqual(config.clamp_x(60), 59)
        self.assertEqual(config.clamp_y(-1), 0)
        self.assertEqual(config.clamp_y(25), 24)

    def test_in_bounds(self):
        config = PlayfieldConfig()
        self.assertTrue(config.in_bounds(0, 0))
        self.assertTrue(config.in_bounds(59, 24))
        self.assertFalse(config.in_bounds(60, 0))
        self.assertFalse(config.in_bounds(0, -1))

    def test_side_edges(self):
        config = PlayfieldConfig()
        self.assertTrue(config.at_side_edge(0))
        self.assertTrue(config.at_side_edge(59))
        self.assertFalse(config.at_side_edge(30))


class TestValidation(unittest.TestCase):

    def test_rejects_tiny_playfield(self):
        with self.assertRaises(ValueError):
            PlayfieldConfig(width=2, height=25)

    def test_rejects_formation_wider_than_playfield(self):
        with self.assertRaises(ValueError):
            PlayfieldConfig(width=30)

    def test_rejects_formation_reaching_invasion_row(self):
        with self.assertRaises(ValueError):
            PlayfieldConfig(height=16)

    def test_rejects_bad_fire_chance(self):
        with self.assertRaises(ValueError):
            PlayfieldConfig(enemy_fire_chance=1.5)

    def test_rejects_zero_move_interval(self):
        with self.assertRaises(ValueError):
            PlayfieldConfig(enemy_move_interval=0)

    def test_rejects_zero_bullet_limit(self):
        with self.assertRaises(ValueError):
            PlayfieldConfig(max_player_bullets=0)

    def test_unlimited_bullets_allowed(self):
        config = PlayfieldConfig(max_player_bullets=None)
        self.assertIsNone(config.max_player_bullets)

    def test_rejects_non_positive_tick(self):
        with self.assertRaises(ValueError):
            PlayfieldConfig(tick_seconds=0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
