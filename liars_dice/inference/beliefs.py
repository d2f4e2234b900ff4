"""
beliefs.py
Implements the ProbabilityEngine: per-player, per-face beliefs about hidden dice, updated from the
round's public bids with Bayes' rule and aggregated into "at least q dice of face f" probabilities.
Related modules:
- tables.py: ProbabilityTable, AggregateDistribution and CumulativeTable.
- agents/bayes_agent.py: Queries the engine to choose bids and challenges.

Two modes are computed:
- public: every player, the evaluator included, is described by its belief table.
- real: the evaluator's table is replaced by its own known hand.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from liars_dice.core.bid import Bid
from liars_dice.core.dice import FACES
from .tables import (
    AggregateDistribution,
    CumulativeTable,
    DegenerateProbabilityError,
    ProbabilityTable,
    binomial_table,
    hand_tables,
)

PUBLIC = "public"
REAL = "real"


class ProbabilityEngine:
    """
    Beliefs of one evaluating player at one decision point.
    Building the engine folds every bid of the round into the beliefs, in order; the resulting
    public_cum and real_cum tables are the output for the decision. The engine only reads the
    values it is given, so two engines built from the same view hold equal tables.
    Attributes:
        beliefs (dict): player -> face -> ProbabilityTable.
        public_cum (dict): face -> CumulativeTable, public mode.
        real_cum (dict): face -> CumulativeTable, real mode.
        skipped (list[Bid]): Bids whose update was skipped as degenerate.
    """

    def __init__(self,
                 player_id: int,
                 hand: Sequence[int],
                 dice_counts: Mapping[int, int],
                 bids: Iterable[Bid] = (),
                 faces: Sequence[int] = FACES):
        """
        Args:
            player_id: The evaluating seat.
            hand: The evaluator's own dice.
            dice_counts: Active seat -> dice held, in rotation order.
            bids: The round's numeric bids, oldest first.
            faces: Die faces to model.
        """
        self.player_id = player_id
        self.hand = tuple(sorted(hand))
        self.dice_counts = dict(dice_counts)
        self.faces = tuple(faces)
        self.beliefs: Dict[int, Dict[int, ProbabilityTable]] = {
            pid: {face: binomial_table(n, 1.0 / len(self.faces)) for face in self.faces}
            for pid, n in self.dice_counts.items()
        }
        self.own_tables = hand_tables(self.hand, self.faces)
        self.skipped: List[Bid] = []
        self._refresh()
        for bid in bids:
            self.observe(bid)

    @classmethod
    def from_view(cls, view) -> 'ProbabilityEngine':
        """Build the engine from an engine view dict (see GameEngine.get_view)."""
        config = view.get("config")
        faces = config.faces if config is not None else FACES
        return cls(view["player_id"], view["my_dice"], view["dice_counts"], view["bid_history"], faces)

    @property
    def dice_in_play(self) -> int:
        return sum(self.dice_counts.values())

    def _tables(self, face: int, mode: str,
                override: Optional[Tuple[int, ProbabilityTable]] = None) -> Iterable[ProbabilityTable]:
        for pid in self.dice_counts:
            if override is not None and pid == override[0]:
                yield override[1]
            elif mode == REAL and pid == self.player_id:
                yield self.own_tables[face]
            else:
                yield self.beliefs[pid][face]

    def aggregate(self, face: int, mode: str = PUBLIC,
                  override: Optional[Tuple[int, ProbabilityTable]] = None) -> AggregateDistribution:
        """
        Distribution of the total count of `face` over every active player.
        Args:
            face: Face to aggregate.
            mode: PUBLIC or REAL.
            override: Optional (player, table) pair standing in for that player's belief.
        """
        if mode not in (PUBLIC, REAL):
            raise ValueError(f"unknown mode {mode!r}")
        return AggregateDistribution.combine(face, self._tables(face, mode, override))

    def _refresh(self) -> None:
        self.public_cum: Dict[int, CumulativeTable] = {f: self.aggregate(f, PUBLIC).cumulative() for f in self.faces}
        self.real_cum: Dict[int, CumulativeTable] = {f: self.aggregate(f, REAL).cumulative() for f in self.faces}

    def _cum(self, mode: str) -> Dict[int, CumulativeTable]:
        if mode == PUBLIC:
            return self.public_cum
        if mode == REAL:
            return self.real_cum
        raise ValueError(f"unknown mode {mode!r}")

    def cumulative(self, mode: str = REAL) -> Dict[int, CumulativeTable]:
        return dict(self._cum(mode))

    def probability(self, quantity: int, face: int, mode: str = REAL) -> float:
        """P(at least `quantity` dice show `face`)."""
        return self._cum(mode)[face].at_least(quantity)

    def observe(self, bid: Bid) -> bool:
        """
        Fold one bid into the bidder's belief about the bid face, then recompute the tables.
        Returns:
            bool: False if the update was skipped because the evidence was degenerate.
        """
        try:
            posterior = self.posterior(bid)
        except DegenerateProbabilityError:
            self.skipped.append(bid)
            return False
        self.beliefs[bid.player][bid.face] = posterior
        self._refresh()
        return True

    def posterior(self, bid: Bid) -> ProbabilityTable:
        """
        Bayes' rule over the bidder's hidden count h of the bid face:
        P(h | bid) = P(h) * P(bid | h) / P(bid), where P(bid | h) is the chance the bid holds
        if the bidder held exactly h of the face, and P(bid) the current public chance.
        Raises:
            DegenerateProbabilityError: If P(bid) is zero or the posterior cannot be normalised.
        """
        if bid.player not in self.beliefs:
            raise ValueError(f"player {bid.player} is not in play")
        face, quantity = bid.face, bid.quantity
        prior = self.beliefs[bid.player][face]
        marginal = self.public_cum[face].at_least(quantity)
        if marginal <= 0.0:
            raise DegenerateProbabilityError(f"{bid} has zero probability")

        n = prior.size
        placeholder = next(f for f in self.faces if f != face)
        weights = []
        for h in range(n + 1):
            hypo_hand = [face] * h + [placeholder] * (n - h)
            hypo = hand_tables(hypo_hand, (face,))[face]
            likelihood = self.aggregate(face, PUBLIC, override=(bid.player, hypo)).cumulative().at_least(quantity)
            weights.append(prior[h] * likelihood / marginal)
        # the point posteriors already sum to 1 up to rounding; rescale to absorb the drift
        return ProbabilityTable.from_weights(weights)
