import unittest
from unittest import mock
from liars_dice.agents import AGENT_MAP
from liars_dice.agents.bayes_agent import BayesAgent
from liars_dice.core.actions import BidAction, ChallengeAction
from liars_dice.core.bid import Bid
from liars_dice.inference.beliefs import ProbabilityEngine, REAL
from dice_fixtures import dealt_engine


class TestBayesAgent(unittest.TestCase):
    """
    Tests for the probability-maximising policy:
      - opening bids follow the agent's own hand,
      - hopeless bids are challenged without scoring successors,
      - the challenge/bid choice compares the best successor with the challenge's chance of success,
      - ties between successors keep the lowest bid.
    """

    def setUp(self):
        self.agent = BayesAgent()

    def test_registered(self):
        self.assertIs(AGENT_MAP["bayes"], BayesAgent)

    def test_opening_bid_follows_own_hand(self):
        engine = dealt_engine([[2, 2, 2, 2, 2], [1, 3, 4, 5, 6]])
        action = self.agent.choose_action(engine.get_view(0))
        self.assertIsInstance(action, BidAction)
        self.assertEqual(action.bid.face, 2)
        self.assertGreaterEqual(action.bid.quantity, 1)
        # (1, 2) is certain and comes before every other certain bid
        self.assertEqual(action.bid, Bid(1, 2))

    def test_challenges_bid_above_dice_in_play(self):
        engine = dealt_engine([[1, 2, 3], [4, 5, 6]])
        engine.submit_bid(0, 6, 6)
        engine.submit_bid(1, 7, 1)
        action = self.agent.choose_action(engine.get_view(0))
        self.assertIsInstance(action, ChallengeAction)
        record = engine.apply_action(0, action)
        self.assertEqual(record.loser, 1)

    def test_equal_odds_keep_bidding(self):
        engine = dealt_engine([[1, 2, 4, 5, 6], [1, 2, 3, 4, 5]])
        engine.submit_bid(0, 2, 3)
        view = engine.get_view(1)
        challenge_odds = 1.0 - ProbabilityEngine.from_view(view).probability(2, 3, REAL)
        with mock.patch.object(self.agent, "best_bid", return_value=(Bid(2, 4), challenge_odds)):
            action = self.agent.choose_action(view)
        self.assertEqual(action, BidAction(Bid(2, 4)))
        with mock.patch.object(self.agent, "best_bid", return_value=(Bid(2, 4), challenge_odds - 1e-9)):
            self.assertIsInstance(self.agent.choose_action(view), ChallengeAction)

    def test_challenges_top_bid(self):
        engine = dealt_engine([[6, 6, 6, 6, 6], [6, 6, 6, 6, 6]])
        engine.submit_bid(0, 10, 6)
        self.assertIsInstance(self.agent.choose_action(engine.get_view(1)), ChallengeAction)

    def test_challenges_claim_impossible_from_own_hand(self):
        engine = dealt_engine([[1, 2, 3, 4, 5], [1, 1, 1, 1, 1]])
        engine.submit_bid(0, 6, 6)
        self.assertIsInstance(self.agent.choose_action(engine.get_view(1)), ChallengeAction)

    def test_challenges_unlikely_bid(self):
        engine = dealt_engine([[6, 6, 6, 6, 6], [1, 2, 3, 4, 5]])
        engine.submit_bid(0, 5, 6)
        view = engine.get_view(1)
        probs = ProbabilityEngine.from_view(view)
        self.assertLess(probs.probability(5, 6, REAL), 0.05)
        self.assertIsInstance(self.agent.choose_action(view), ChallengeAction)

    def test_raises_when_bid_is_certain(self):
        engine = dealt_engine([[1, 2, 4, 5, 6], [3, 3, 3, 3, 3]])
        engine.submit_bid(0, 1, 3)
        action = self.agent.choose_action(engine.get_view(1))
        self.assertIsInstance(action, BidAction)
        # (2, 3) is the first successor that is certain to hold
        self.assertEqual(action.bid, Bid(2, 3))

    def test_chosen_bid_is_legal(self):
        engine = dealt_engine([[1, 4, 4, 5, 6], [2, 3, 4, 4, 6], [1, 1, 2, 5, 6]])
        engine.submit_bid(0, 2, 4)
        engine.submit_bid(1, 3, 4)
        action = self.agent.choose_action(engine.get_view(2))
        if isinstance(action, BidAction):
            self.assertTrue(action.bid.is_higher_than(engine.latest_bid()))
            engine.apply_action(2, action)
        else:
            engine.apply_action(2, action)
            self.assertEqual(len(engine.rounds), 1)

    def test_best_bid_ties_keep_lowest(self):
        probs = ProbabilityEngine(0, [4, 4], {0: 2, 1: 2})
        best, odds = self.agent.best_bid(probs, Bid(1, 2))
        self.assertEqual(best, Bid(1, 4))
        self.assertAlmostEqual(odds, 1.0, places=12)

    def test_best_bid_without_successor(self):
        probs = ProbabilityEngine(0, [4], {0: 1, 1: 1})
        with self.assertRaises(ValueError):
            self.agent.best_bid(probs, Bid(2, 6))


if __name__ == '__main__':
    unittest.main()
