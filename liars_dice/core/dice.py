"""
dice.py
Defines dice rolling utilities for the Liar's Dice engine.
Related modules:
- engine.py: Uses roll_n to re-roll every active hand at the start of a round.
"""

import random
from typing import List, Sequence

FACES = (1, 2, 3, 4, 5, 6)


def roll_die(rng: random.Random, faces: Sequence[int] = FACES) -> int:
    """
    Roll a single die using the provided random number generator.
    Args:
        rng (random.Random): RNG instance.
        faces (sequence): Faces of the die.
    Returns:
        int: Die face.
    """
    return rng.choice(faces)


def roll_n(n: int, rng: random.Random, faces: Sequence[int] = FACES) -> List[int]:
    """
    Roll n dice using the provided RNG.
    Args:
        n (int): Number of dice to roll.
        rng (random.Random): RNG instance.
    Returns:
        list[int]: List of die faces.
    """
    return [roll_die(rng, faces) for _ in range(n)]
