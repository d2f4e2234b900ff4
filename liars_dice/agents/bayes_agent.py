from typing import Optional, Tuple

from .base import Agent
from . import register_agent
from ..core.bid import Bid
from ..core.dice import FACES
from ..core.actions import BidAction, ChallengeAction
from ..core.rules import legal_successors, has_successor
from ..inference.beliefs import ProbabilityEngine, REAL


@register_agent("bayes")
class BayesAgent(Agent):
    """
    Bids to maximise the chance of being right.
    Each turn it rebuilds its beliefs from the round's bids (see ProbabilityEngine), scores every legal
    successor bid by the real-mode probability that it holds, and compares the best of them with the
    probability that challenging the latest bid succeeds.
    """

    def choose_action(self, view):
        """
        Decide the next action based on the current view.
        Args:
            view (dict): Player view, see GameEngine.get_view.
        Returns:
            Action: BidAction for the best successor, or ChallengeAction.
        """
        my_dice = tuple(view["my_dice"])
        last = view["last_bid"]
        dice_in_play = view["dice_in_play"]
        faces = view["config"].faces if view.get("config") is not None else FACES

        if last is not None and self.is_hopeless(my_dice, last, dice_in_play, faces):
            return ChallengeAction()

        engine = ProbabilityEngine.from_view(view)
        best, best_odds = self.best_bid(engine, last)
        if last is not None:
            challenge_odds = 1.0 - engine.probability(last.quantity, last.face, REAL)
            if challenge_odds > best_odds:
                return ChallengeAction()
        return BidAction(best)

    def is_hopeless(self, my_dice, last: Bid, dice_in_play: int, faces=FACES) -> bool:
        """The latest bid cannot hold, or no bid can follow it."""
        if last.quantity > dice_in_play:
            return True
        if not has_successor(last, dice_in_play, faces):
            return True
        return self.call_liar_deterministic(my_dice, last, dice_in_play)

    def best_bid(self, engine: ProbabilityEngine, last: Optional[Bid]) -> Tuple[Bid, float]:
        """
        Highest-probability legal successor of `last`; ties keep the lowest bid.
        Returns:
            (Bid, float): The bid and its real-mode probability.
        """
        best = None
        best_odds = -1.0
        for candidate in legal_successors(last, engine.dice_in_play, engine.faces):
            odds = engine.probability(candidate.quantity, candidate.face, REAL)
            if odds > best_odds:
                best, best_odds = candidate, odds
        if best is None:
            raise ValueError(f"no legal bid follows {last}")
        return best, best_odds
