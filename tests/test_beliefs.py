import math
import unittest
from liars_dice.core.bid import Bid
from liars_dice.inference.beliefs import ProbabilityEngine, PUBLIC, REAL
from liars_dice.inference.tables import binomial_table
from dice_fixtures import dealt_engine


def binom_pmf(n, k, p=1 / 6):
    return math.comb(n, k) * p ** k * (1 - p) ** (n - k)


def binom_at_least(n, q, p=1 / 6):
    return sum(binom_pmf(n, k, p) for k in range(max(q, 0), n + 1))


def mean(table):
    return sum(k * p for k, p in enumerate(table.probs))


class TestPriorTables(unittest.TestCase):
    def setUp(self):
        self.engine = ProbabilityEngine(0, [2, 2, 2, 2, 2], {0: 5, 1: 5})

    def test_public_mode_ignores_own_hand(self):
        for face in range(1, 7):
            for q in range(0, 11):
                self.assertAlmostEqual(self.engine.probability(q, face, PUBLIC), binom_at_least(10, q), places=12)

    def test_real_mode_uses_own_hand(self):
        self.assertAlmostEqual(self.engine.probability(5, 2, REAL), 1.0, places=12)
        self.assertAlmostEqual(self.engine.probability(6, 2, REAL), 1 - (5 / 6) ** 5, places=12)
        self.assertAlmostEqual(self.engine.probability(1, 1, REAL), 1 - (5 / 6) ** 5, places=12)
        self.assertAlmostEqual(self.engine.probability(2, 1, REAL), binom_at_least(5, 2), places=12)

    def test_table_invariants(self):
        for mode in (PUBLIC, REAL):
            cum = self.engine.cumulative(mode)
            for face in range(1, 7):
                self.assertEqual(cum[face].at_least(0), 1.0)
                for q in range(len(cum[face])):
                    self.assertGreaterEqual(cum[face].at_least(q), cum[face].at_least(q + 1))
                self.assertLess(abs(self.engine.aggregate(face, mode).total() - 1.0), 1e-9)

    def test_unknown_mode(self):
        with self.assertRaises(ValueError):
            self.engine.probability(1, 1, "secret")


class TestBayesianUpdate(unittest.TestCase):
    def test_posterior_matches_direct_bayes(self):
        bid = Bid(3, 4, 1)
        engine = ProbabilityEngine(0, [1, 1, 2, 3, 5], {0: 5, 1: 5}, [bid])
        # P(h | bid) ~ P(h) * P(X0 + h >= 3), X0 ~ Bin(5, 1/6) is player 0's public belief
        weights = [binom_pmf(5, h) * binom_at_least(5, 3 - h) for h in range(6)]
        total = sum(weights)
        posterior = engine.beliefs[1][4]
        for h in range(6):
            self.assertAlmostEqual(posterior[h], weights[h] / total, places=12)
        self.assertAlmostEqual(posterior.total(), 1.0, places=12)

    def test_bid_raises_belief_in_bid_face_only(self):
        engine = ProbabilityEngine(0, [1, 1, 2, 3, 5], {0: 5, 1: 5}, [Bid(3, 4, 1)])
        self.assertGreater(mean(engine.beliefs[1][4]), mean(binomial_table(5)))
        self.assertEqual(engine.beliefs[1][3], binomial_table(5))
        self.assertEqual(engine.beliefs[0][4], binomial_table(5))
        self.assertEqual(engine.skipped, [])

    def test_update_moves_public_and_real_tables(self):
        before = ProbabilityEngine(0, [1, 1, 2, 3, 5], {0: 5, 1: 5})
        after = ProbabilityEngine(0, [1, 1, 2, 3, 5], {0: 5, 1: 5}, [Bid(3, 4, 1)])
        self.assertGreater(after.probability(3, 4, PUBLIC), before.probability(3, 4, PUBLIC))
        self.assertGreater(after.probability(2, 4, REAL), before.probability(2, 4, REAL))
        self.assertEqual(after.probability(2, 3, REAL), before.probability(2, 3, REAL))

    def test_bids_fold_in_order(self):
        bids = [Bid(1, 6, 0), Bid(2, 6, 1), Bid(3, 6, 2)]
        engine = ProbabilityEngine(2, [6, 1, 1], {0: 3, 1: 3, 2: 3}, bids)
        for pid in (0, 1, 2):
            self.assertAlmostEqual(engine.beliefs[pid][6].total(), 1.0, places=12)
            self.assertGreater(mean(engine.beliefs[pid][6]), mean(binomial_table(3)))

    def test_zero_marginal_update_is_skipped(self):
        impossible = Bid(11, 3, 1)
        engine = ProbabilityEngine(0, [1, 2, 3, 4, 5], {0: 5, 1: 5}, [impossible])
        self.assertEqual(engine.skipped, [impossible])
        self.assertEqual(engine.beliefs[1][3], binomial_table(5))
        self.assertFalse(engine.observe(impossible))

    def test_observe_returns_true_on_update(self):
        engine = ProbabilityEngine(0, [1, 2, 3, 4, 5], {0: 5, 1: 5})
        self.assertTrue(engine.observe(Bid(2, 5, 1)))

    def test_unknown_bidder(self):
        engine = ProbabilityEngine(0, [1, 2], {0: 2, 1: 2})
        with self.assertRaises(ValueError):
            engine.observe(Bid(1, 1, 7))

    def test_recomputing_is_idempotent(self):
        args = (1, [3, 3, 6], {0: 3, 1: 3, 2: 2}, [Bid(1, 3, 0), Bid(2, 3, 1), Bid(2, 6, 2)])
        a = ProbabilityEngine(*args)
        b = ProbabilityEngine(*args)
        self.assertEqual(a.public_cum, b.public_cum)
        self.assertEqual(a.real_cum, b.real_cum)
        self.assertEqual(a.beliefs, b.beliefs)


class TestFourSidedDice(unittest.TestCase):
    def test_priors_follow_the_number_of_faces(self):
        engine = ProbabilityEngine(0, [1, 2], {0: 2, 1: 2}, faces=(1, 2, 3, 4))
        self.assertEqual(sorted(engine.beliefs[1]), [1, 2, 3, 4])
        self.assertEqual(engine.beliefs[1][3], binomial_table(2, 0.25))
        self.assertAlmostEqual(engine.probability(1, 3, PUBLIC), 1 - 0.75 ** 4, places=12)
        self.assertAlmostEqual(engine.probability(1, 3, REAL), 1 - 0.75 ** 2, places=12)


class TestFromView(unittest.TestCase):
    def test_engine_built_from_game_view(self):
        game = dealt_engine([[2, 2, 4], [1, 5, 6], [3, 3, 3]])
        game.submit_bid(0, 2, 2)
        game.submit_bid(1, 2, 5)
        engine = ProbabilityEngine.from_view(game.get_view(2))
        self.assertEqual(engine.player_id, 2)
        self.assertEqual(engine.hand, (3, 3, 3))
        self.assertEqual(engine.dice_in_play, 9)
        self.assertAlmostEqual(engine.probability(3, 3, REAL), 1.0, places=12)
        self.assertGreater(mean(engine.beliefs[0][2]), mean(binomial_table(3)))
        self.assertGreater(mean(engine.beliefs[1][5]), mean(binomial_table(3)))


if __name__ == '__main__':
    unittest.main()
