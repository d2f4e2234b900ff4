from .base import Agent
from ..core.bid import Bid
from ..core.actions import BidAction, ChallengeAction
from ..core.dice import FACES
from . import register_agent


@register_agent("random")
class RandomAgent(Agent):
    """
    A baseline opponent: opens with one die of a random face, challenges when the latest bid is impossible
    given its own dice, and otherwise flips a coin between challenging and raising the quantity on the same face.
    """
    def __init__(self, rng=None, call_prob=0.5, raise_amount=1):
        """
        Args:
            rng: Optional random number generator.
            call_prob: Probability to challenge a possible bid (float 0-1).
            raise_amount: How much to increase quantity when raising (int >=1).
        """
        super().__init__(rng=rng)
        self.call_prob = call_prob
        self.raise_amount = raise_amount

    def choose_action(self, view):
        """
        Decide the next action based on the current view.
        Args:
            view (dict): Player view, see GameEngine.get_view.
        Returns:
            Action: The action to take (BidAction or ChallengeAction).
        """
        my_dice = tuple(view["my_dice"])
        last = view["last_bid"]
        dice_in_play = view["dice_in_play"]
        faces = view["config"].faces if view.get("config") is not None else FACES

        if last is None:
            return BidAction(Bid(1, self.rng.choice(faces)))

        # Guard-rail: challenge deterministically if the bid is impossible
        if self.call_liar_deterministic(my_dice, last, dice_in_play):
            return ChallengeAction()

        if self.rng.random() < self.call_prob:
            return ChallengeAction()

        q = last.quantity + self.raise_amount
        if q > dice_in_play:
            return ChallengeAction()
        return BidAction(Bid(q, last.face))
