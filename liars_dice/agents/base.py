import random
from abc import ABC, abstractmethod
from typing import Any

from liars_dice.core.rules import is_claim_impossible


class Agent(ABC):
    """
    Abstract base class for all Liar's Dice agents.
    Agents must implement choose_action(view), which receives a player-specific view of the game state and returns an Action.
    Common agent utilities can be added here for reuse.
    """

    def __init__(self, rng=None):
        """
        Args:
            rng: Optional random.Random; each agent owns its own source so matches are reproducible.
        """
        self.rng = rng or random.Random()

    @abstractmethod
    def choose_action(self, view: Any):
        """
        Given a player-specific view, return the next Action to take.
        Args:
            view (dict): Player view, see GameEngine.get_view.
        Returns:
            Action: The action to take (BidAction or ChallengeAction).
        """
        raise NotImplementedError

    def on_rejected(self, action, error) -> None:
        """
        Called by the match runner when the engine rejected `action`; the agent is then asked again.
        error.latest_bid holds the bid a new action has to beat.
        """
        pass

    def call_liar_deterministic(self, my_dice, last_bid, dice_in_play):
        """
        Determine if the agent should challenge with certainty, given the last bid, own dice, and total dice in play.
        Returns True if even with all unseen dice showing the face, the bid cannot be true.
        Args:
            my_dice (iterable): The agent's private dice.
            last_bid (Bid): The last bid made.
            dice_in_play (int): Total dice in the game.
        Returns:
            bool: True if the agent should challenge deterministically.
        """
        return is_claim_impossible(tuple(my_dice), last_bid, dice_in_play)
