"""
tables.py
Discrete distributions used by the probability engine: per-player count tables, their
convolution into aggregate distributions, and right-tail cumulative tables.
Related modules:
- beliefs.py: Builds and updates these tables from a player's view.
"""

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, List, Sequence, Tuple

from liars_dice.core.dice import FACES


class DegenerateProbabilityError(ArithmeticError):
    """
    Raised when a Bayesian update would divide by a zero (or non-finite) probability.
    The probability engine skips the offending update.
    """
    pass


@dataclass(frozen=True)
class ProbabilityTable:
    """
    Distribution over how many dice of one face a single player holds.
    Index k holds P(count == k) for k in 0..size. Instances are immutable; updates return new tables.
    """
    probs: Tuple[float, ...]

    @property
    def size(self) -> int:
        return len(self.probs) - 1

    def __getitem__(self, k: int) -> float:
        if 0 <= k < len(self.probs):
            return self.probs[k]
        return 0.0

    def __len__(self) -> int:
        return len(self.probs)

    def total(self) -> float:
        return math.fsum(self.probs)

    @classmethod
    def certain(cls, count: int, size: int) -> 'ProbabilityTable':
        """One-hot table: the player holds exactly `count` of the face among `size` dice."""
        if not (0 <= count <= size):
            raise ValueError(f"count {count} outside 0..{size}")
        return cls(tuple(1.0 if k == count else 0.0 for k in range(size + 1)))

    @classmethod
    def from_weights(cls, weights: Sequence[float]) -> 'ProbabilityTable':
        """
        Rescale non-negative weights proportionally so they sum to 1.
        Raises:
            DegenerateProbabilityError: If the weights are negative, non-finite or all zero.
        """
        if any(w < 0.0 or not math.isfinite(w) for w in weights):
            raise DegenerateProbabilityError(f"invalid weights {list(weights)}")
        total = math.fsum(weights)
        if total <= 0.0:
            raise DegenerateProbabilityError("weights sum to zero")
        return cls(tuple(w / total for w in weights))


@lru_cache(maxsize=None)
def binomial_table(n: int, p: float = 1.0 / 6.0) -> ProbabilityTable:
    """
    Prior over the count of one face in a hand of n fair dice: Binomial(n, p).
    Cached, so every player with the same hand size shares one immutable table.
    """
    q = 1.0 - p
    return ProbabilityTable(tuple(math.comb(n, k) * p ** k * q ** (n - k) for k in range(n + 1)))


def hand_tables(hand: Sequence[int], faces: Sequence[int] = FACES) -> Dict[int, ProbabilityTable]:
    """
    Degenerate per-face tables for a hand whose dice are known.
    Args:
        hand (sequence): Dice faces.
        faces (sequence): Faces to build tables for.
    Returns:
        dict: face -> one-hot ProbabilityTable.
    """
    return {face: ProbabilityTable.certain(sum(1 for d in hand if d == face), len(hand)) for face in faces}


def convolve(a: Sequence[float], b: Sequence[float]) -> List[float]:
    """Distribution of the sum of two independent counts."""
    out = [0.0] * (len(a) + len(b) - 1)
    for i, pa in enumerate(a):
        if pa == 0.0:
            continue
        for j, pb in enumerate(b):
            out[i + j] += pa * pb
    return out


@dataclass(frozen=True)
class CumulativeTable:
    """
    Right-tail table for one face: at_least(q) = P(total count >= q).
    tail[0] is 1 and the table never increases.
    """
    face: int
    tail: Tuple[float, ...]

    def at_least(self, quantity: int) -> float:
        if quantity <= 0:
            return 1.0
        if quantity >= len(self.tail):
            return 0.0
        return self.tail[quantity]

    def __getitem__(self, quantity: int) -> float:
        return self.at_least(quantity)

    def __len__(self) -> int:
        return len(self.tail)


@dataclass(frozen=True)
class AggregateDistribution:
    """
    Distribution over the total count of one face across every active player.
    Index k holds P(total == k) for k in 0..dice_in_play.
    """
    face: int
    probs: Tuple[float, ...]

    @classmethod
    def combine(cls, face: int, tables: Iterable[ProbabilityTable]) -> 'AggregateDistribution':
        """
        Convolve the per-player tables of one face. Each step sums the joint probability of
        every pair of partial totals into the bin of their sum, so the result covers every
        combination of per-player counts.
        """
        acc: List[float] = [1.0]
        for table in tables:
            acc = convolve(acc, table.probs)
        return cls(face, tuple(acc))

    def total(self) -> float:
        return math.fsum(self.probs)

    def cumulative(self) -> CumulativeTable:
        tail = [0.0] * len(self.probs)
        running = 0.0
        for k in range(len(self.probs) - 1, -1, -1):
            running += self.probs[k]
            tail[k] = min(1.0, running)
        tail[0] = 1.0
        return CumulativeTable(self.face, tuple(tail))
