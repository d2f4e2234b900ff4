"""
state.py
Defines all game state dataclasses for Liar's Dice: PlayerState, PublicState, GameState and the Round record.
Related modules:
- engine.py: Mutates and reads GameState during play.
- bid.py: BidHistory holds the current round's bids.
- config.py: GameConfig is part of GameState.
"""

from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple
from .bid import Bid, BidHistory
from .config import GameConfig


@dataclass
class PlayerState:
    """
    Stores private state for a single seat.
    Fields:
        player_id (int): Seat index.
        num_dice (int): Number of dice held; 0 once eliminated.
        private_dice (list[int]): Player's dice (hidden from opponents).
        agent_id (str|None): Optional agent identifier.
    """
    player_id: int
    num_dice: int
    private_dice: List[int] = field(default_factory=list)
    agent_id: Optional[str] = None

    @property
    def active(self) -> bool:
        return self.num_dice > 0


@dataclass
class PublicState:
    """
    Stores public state visible to all players and agents.
    Fields:
        round_index (int): Current round number (1-based once started).
        turn_index (int): Actions taken in the current round.
        current_player (int|None): Seat whose turn it is.
        bid_history (BidHistory): Numeric bids of the current round.
        status (str): NOT_STARTED, BIDDING or GAME_OVER.
        winner (int|None): Winner of the match.
    """
    round_index: int = 0
    turn_index: int = 0
    current_player: Optional[int] = None
    bid_history: BidHistory = field(default_factory=BidHistory)
    status: str = "NOT_STARTED"  # BIDDING | GAME_OVER
    winner: Optional[int] = None

    @property
    def last_bid(self) -> Optional[Bid]:
        return self.bid_history.latest()


@dataclass(frozen=True)
class Round:
    """
    Immutable record of one adjudicated round, taken before the loser's die is removed.
    Fields:
        index (int): Round number.
        bids (tuple[Bid]): Every numeric bid of the round, in order.
        hands (mapping): Read-only seat -> tuple of dice as they were when the challenge was made.
        challenger (int): Seat that challenged.
        challenged_bid (Bid): The bid that was challenged.
        actual_count (int): Dice showing the challenged face.
        winner (int): Seat that won the challenge.
        loser (int): Seat that lost a die.
    """
    index: int
    bids: Tuple[Bid, ...]
    hands: Mapping[int, Tuple[int, ...]]
    challenger: int
    challenged_bid: Bid
    actual_count: int
    winner: int
    loser: int

    @property
    def bid_held(self) -> bool:
        return self.actual_count >= self.challenged_bid.quantity

    def dice_before(self) -> int:
        return sum(len(h) for h in self.hands.values())

    def __str__(self) -> str:
        bids = ", ".join(f"{b.quantity}x{b.face}" for b in self.bids)
        hands = "; ".join(f"{p}: {list(h)}" for p, h in self.hands.items())
        return f"[{bids}] challenged by {self.challenger}, winner {self.winner}. Hands were {hands}"


@dataclass
class GameState:
    """
    Composite state for the entire match: config, every seat and the public state.
    Fields:
        config (GameConfig): Game configuration.
        players (tuple): PlayerState per seat, eliminated seats included.
        public (PublicState): Public game state.
    """
    config: GameConfig
    players: Tuple[PlayerState, ...]
    public: PublicState
