"""
rules.py
Defines helper functions for Liar's Dice rules: counting matches and enumerating legal bids.
Related modules:
- engine.py: Uses count_matches to adjudicate challenges.
- agents: Use legal_successors and is_claim_impossible when choosing actions.
"""

from typing import Dict, Iterator, List, Optional, Sequence

from .bid import Bid
from .dice import FACES


def count_matches(all_dice: Dict[int, List[int]], face: int) -> int:
    """
    Count the number of dice matching a given face across all players.
    Args:
        all_dice (dict): Mapping of player_id to list of dice.
        face (int): Face value to count.
    Returns:
        int: Total count of matching dice.
    """
    count = 0
    for dice in all_dice.values():
        count += sum(1 for d in dice if d == face)
    return count


def legal_successors(last_bid: Optional[Bid], dice_in_play: int, faces: Sequence[int] = FACES) -> Iterator[Bid]:
    """
    Yield every bid that may legally follow last_bid, lowest first
    (quantity ascending, then face ascending).
    Args:
        last_bid (Bid|None): Latest numeric bid of the round, None on the opening move.
        dice_in_play (int): Upper bound on quantity.
    """
    start_quantity = 1 if last_bid is None else last_bid.quantity
    for quantity in range(start_quantity, dice_in_play + 1):
        for face in faces:
            candidate = Bid(quantity, face)
            if candidate.is_higher_than(last_bid):
                yield candidate


def has_successor(last_bid: Optional[Bid], dice_in_play: int, faces: Sequence[int] = FACES) -> bool:
    return next(legal_successors(last_bid, dice_in_play, faces), None) is not None


def is_claim_impossible(my_dice: Sequence[int], bid: Optional[Bid], dice_in_play: int) -> bool:
    """
    True if the bid cannot hold even when every die the player cannot see shows the bid face.
    Args:
        my_dice (sequence): The player's own dice.
        bid (Bid|None): The claim to test.
        dice_in_play (int): Total dice held by active players.
    """
    if bid is None:
        return False
    unseen = max(0, dice_in_play - len(my_dice))
    mine = sum(1 for d in my_dice if d == bid.face)
    return mine + unseen < bid.quantity
