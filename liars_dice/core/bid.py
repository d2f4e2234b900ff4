"""
bid.py
Defines the Bid model and the round-scoped BidHistory, including validation and ordering logic.
Related modules:
- actions.py: Uses Bid in BidAction.
- engine.py: Validates and compares bids to enforce game rules.
- rules.py: Enumerates legal successors using the same ordering.
"""

from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Sequence, Tuple

from .dice import FACES


@dataclass(frozen=True)
class Bid:
    """
    Represents a bid in Liar's Dice: a claim that at least 'quantity' dice show 'face'.
    Args:
        quantity (int): Number of dice claimed.
        face (int): Face value claimed (one of the die faces, 1-6 by default).
        player (int|None): Seat that placed the bid; filled in by the engine.
    """
    quantity: int
    face: int
    player: Optional[int] = None

    def validate(self, faces: Sequence[int] = FACES) -> None:
        """
        Validates the bid's face and quantity. Quantities above the dice in play are legal claims.
        Args:
            faces (sequence): Faces of the dice in use.
        Raises:
            ValueError: If bid is out of bounds.
        """
        if self.face not in faces:
            raise ValueError(f"face must be one of {tuple(faces)}")
        if self.quantity < 1:
            raise ValueError("quantity must be at least 1")

    def is_higher_than(self, other: Optional['Bid']) -> bool:
        """
        Checks if this bid is strictly higher than another bid, per game rules.
        Args:
            other (Bid): The previous bid to compare against (or None).
        Returns:
            bool: True if this bid is higher, False otherwise.
        """
        if other is None:
            return True
        if self.quantity != other.quantity:
            return self.quantity > other.quantity
        return self.face > other.face

    def by(self, player: int) -> 'Bid':
        """Return a copy of this bid attributed to the given seat."""
        return replace(self, player=player)

    def __str__(self) -> str:
        who = "?" if self.player is None else self.player
        return f"player {who} bid {self.quantity} x {self.face}"


class BidHistory:
    """
    Chronological, append-only list of the numeric bids placed in the current round.
    The engine clears it after each adjudication; snapshots are plain tuples.
    """

    def __init__(self, bids=()):
        self._bids: List[Bid] = list(bids)

    def append(self, bid: Bid) -> None:
        latest = self.latest()
        if not bid.is_higher_than(latest):
            raise ValueError(f"{bid} does not exceed {latest}")
        self._bids.append(bid)

    def latest(self) -> Optional[Bid]:
        return self._bids[-1] if self._bids else None

    def clear(self) -> None:
        self._bids.clear()

    def snapshot(self) -> Tuple[Bid, ...]:
        return tuple(self._bids)

    def __iter__(self) -> Iterator[Bid]:
        return iter(tuple(self._bids))

    def __len__(self) -> int:
        return len(self._bids)

    def __bool__(self) -> bool:
        return bool(self._bids)

    def __repr__(self) -> str:
        return f"BidHistory({self._bids!r})"
