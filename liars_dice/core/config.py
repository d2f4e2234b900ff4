"""
config.py
Defines the GameConfig dataclass, which centralizes rule options and numeric constraints for the Liar's Dice engine.
Related modules:
- engine.py: Uses GameConfig to seat players and seed the dice RNG.
- match.py: Uses max_retries and rng_seed when driving agents.
"""

from dataclasses import dataclass
from typing import Tuple, Optional


@dataclass(frozen=True)
class GameConfig:
    """
    Centralizes all rule options and numeric constraints for a Liar's Dice match.
    Fields:
        num_players (int): Number of seats (default 2).
        starting_dice (int): Dice per player at the start (used if dice_distribution is None).
        dice_distribution (tuple): Starting dice per seat (overrides starting_dice).
        faces (tuple): Allowed die faces.
        rng_seed (int|None): Seed for deterministic matches.
        max_retries (int): How many times a runner re-queries an agent after a rejected action.
    """
    num_players: int = 2
    starting_dice: int = 5
    dice_distribution: Optional[Tuple[int, ...]] = None
    faces: Tuple[int, ...] = (1, 2, 3, 4, 5, 6)
    rng_seed: Optional[int] = 69
    max_retries: int = 3

    def dice_for_players(self) -> Tuple[int, ...]:
        """
        Resolve the starting dice of every seat.
        Returns:
            tuple[int, ...]: One entry per seat.
        Raises:
            ValueError: If the configuration cannot seat at least two players with dice.
        """
        if self.dice_distribution:
            dist = tuple(self.dice_distribution)
            # short distributions are repeated to cover every seat
            if len(dist) < self.num_players:
                dist = tuple(dist[i % len(dist)] for i in range(self.num_players))
        else:
            dist = tuple(self.starting_dice for _ in range(self.num_players))
        if len(dist) < 2:
            raise ValueError("a match needs at least two players")
        if any(n < 1 for n in dist):
            raise ValueError("every player must start with at least one die")
        return dist
