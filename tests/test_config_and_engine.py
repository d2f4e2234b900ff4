import unittest
from liars_dice.core.config import GameConfig
from liars_dice.core.engine import GameEngine


class TestConfigAndEngine(unittest.TestCase):
    """
    Tests around how `GameConfig` is interpreted by the engine with respect to per-player
    dice distribution. These tests verify that:
      - By default each player receives `starting_dice` (5) if `dice_distribution` is not set.
      - `num_players` controls how many seats are created.
      - Providing an explicit `dice_distribution` overrides `starting_dice`.
    """

    def test_default_per_player_dice(self):
        engine = GameEngine(GameConfig())
        self.assertEqual([p.num_dice for p in engine.state.players], [5, 5])
        self.assertEqual(engine.dice_in_play(), 10)

    def test_starting_dice_and_player_count(self):
        engine = GameEngine(GameConfig(num_players=4, starting_dice=3))
        self.assertEqual(engine.players(), (0, 1, 2, 3))
        self.assertEqual(engine.dice_per_player(), {0: 3, 1: 3, 2: 3, 3: 3})

    def test_explicit_distribution_overrides(self):
        engine = GameEngine(GameConfig(dice_distribution=(4, 6)))
        p0, p1 = engine.state.players
        self.assertEqual(p0.num_dice, 4)
        self.assertEqual(p1.num_dice, 6)

    def test_short_distribution_is_repeated(self):
        cfg = GameConfig(num_players=3, dice_distribution=(2,))
        self.assertEqual(cfg.dice_for_players(), (2, 2, 2))

    def test_invalid_configurations(self):
        with self.assertRaises(ValueError):
            GameConfig(num_players=1).dice_for_players()
        with self.assertRaises(ValueError):
            GameConfig(dice_distribution=(3, 0)).dice_for_players()

    def test_start_rolls_hands_of_the_right_size(self):
        engine = GameEngine(GameConfig(dice_distribution=(2, 3, 4), rng_seed=5))
        engine.start_new_round()
        hands = engine.hands()
        self.assertEqual({p: len(h) for p, h in hands.items()}, {0: 2, 1: 3, 2: 4})
        self.assertTrue(all(1 <= d <= 6 for h in hands.values() for d in h))

    def test_same_seed_rolls_same_hands(self):
        a = GameEngine(GameConfig(rng_seed=42))
        b = GameEngine(GameConfig(rng_seed=42))
        a.start_new_round()
        b.start_new_round()
        self.assertEqual(a.hands(), b.hands())


if __name__ == '__main__':
    unittest.main()
