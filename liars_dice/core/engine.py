"""
engine.py
Implements the GameEngine class, which manages match state, applies actions, enforces rules, adjudicates challenges and emits events.
Related modules:
- config.py: GameConfig is used to configure the engine.
- state.py: GameState, PlayerState, PublicState and Round hold all game data.
- actions.py: Actions are applied to update state.
- bid.py: Bid validation and ordering.
- rules.py: Helpers for counting dice at adjudication.
"""

import random
from types import MappingProxyType
from typing import Dict, List, Optional, Tuple

from .config import GameConfig
from .state import PlayerState, PublicState, GameState, Round
from .dice import roll_n
from .bid import Bid
from .actions import BidAction, ChallengeAction, Action
from .rules import count_matches


class IllegalMoveError(Exception):
    """
    Raised when an illegal action is attempted (invalid move, wrong turn, etc).
    Recoverable: the state is left untouched and the caller may retry.
    Attributes:
        latest_bid (Bid|None): The bid the rejected action had to beat.
    """
    def __init__(self, message: str, latest_bid: Optional[Bid] = None):
        if latest_bid is not None:
            message = f"{message} (latest bid: {latest_bid.quantity} x {latest_bid.face})"
        super().__init__(message)
        self.latest_bid = latest_bid


class NotCurrentTurnError(IllegalMoveError):
    """Raised when a seat acts out of turn."""


class IllegalBidError(IllegalMoveError):
    """Raised when a bid is out of bounds or does not exceed the latest bid."""


class NoBidToChallengeError(IllegalMoveError):
    """Raised when a challenge is made before any bid in the round."""


class GameOverError(IllegalMoveError):
    """Raised when an action arrives while no round is in progress."""


class InvariantViolationError(Exception):
    """
    Raised when the engine's own bookkeeping is inconsistent. Never caused by a
    caller; the match cannot continue.
    """


class GameEngine:
    """
    Main state machine for Liar's Dice. Seats any number of players, applies actions, enforces legality,
    adjudicates challenges, removes dice, eliminates players and emits events.
    Interacts with agents via get_view and apply_action.
    """
    def __init__(self, config: GameConfig):
        """
        Initialize a new match with the given configuration. Call start_new_round() to roll the first hands.
        Args:
            config (GameConfig): Game configuration.
        """
        self.config = config
        self.rng = random.Random(config.rng_seed)
        dist = config.dice_for_players()
        players = tuple(PlayerState(player_id=i, num_dice=n) for i, n in enumerate(dist))
        self.state = GameState(config=config, players=players, public=PublicState())
        self.rounds: List[Round] = []
        self._events = []
        # turn_log will contain per-action snapshots that can be serialized to JSON
        self.turn_log = []

    # Events are simple dicts
    def _emit(self, event: Dict):
        """
        Internal: Record an event (dict) for later retrieval.
        """
        self._events.append(event)

    def pop_events(self):
        """
        Return and clear all emitted events since last call.
        Returns:
            list[dict]: List of event dicts.
        """
        ev = list(self._events)
        self._events.clear()
        return ev

    def get_events(self):
        """
        Return all events emitted so far (does not clear).
        Returns:
            list[dict]: List of event dicts.
        """
        return list(self._events)

    def _snapshot(self, actor: int = None, action: Dict = None):
        """
        Internal: Create a snapshot of the current state for replay.
        Args:
            actor (int|None): Player who made the action.
            action (dict|None): Action that produced this state.
        Returns:
            dict: Snapshot of state.
        """
        players_snapshot = []
        for p in self.state.players:
            players_snapshot.append({
                "player_id": p.player_id,
                "num_dice": p.num_dice,
                "private_dice": list(p.private_dice),
                "agent_id": p.agent_id,
            })

        public = self.state.public
        last_bid = public.last_bid
        public_snapshot = {
            "round_index": public.round_index,
            "turn_index": public.turn_index,
            "current_player": public.current_player,
            "last_bid": None if last_bid is None else (last_bid.quantity, last_bid.face),
            "bid_history": [(b.player, b.quantity, b.face) for b in public.bid_history],
            "status": public.status,
            "winner": public.winner,
        }

        snap = {
            "actor": actor,
            "action": action,
            "public": public_snapshot,
            "players": players_snapshot,
        }
        self.turn_log.append(snap)
        return snap

    # --- queries ---

    def players(self) -> Tuple[int, ...]:
        """Active seats in rotation order."""
        return tuple(p.player_id for p in self.state.players if p.active)

    def dice_in_play(self) -> int:
        return sum(p.num_dice for p in self.state.players if p.active)

    def dice_per_player(self) -> Dict[int, int]:
        return {p.player_id: p.num_dice for p in self.state.players if p.active}

    def hands(self) -> Dict[int, List[int]]:
        """
        Every active hand. Full visibility is meant for adjudication and tests;
        agents only ever see their own hand through get_view.
        """
        return {p.player_id: list(p.private_dice) for p in self.state.players if p.active}

    def latest_bid(self) -> Optional[Bid]:
        return self.state.public.last_bid

    def bids(self) -> Tuple[Bid, ...]:
        return self.state.public.bid_history.snapshot()

    def winner(self) -> Optional[int]:
        return self.state.public.winner

    def is_terminal(self) -> bool:
        """
        Returns True once a single player is left.
        """
        return self.state.public.status == "GAME_OVER"

    def get_view(self, player_id: int):
        """
        Get a player-specific view of the game state (public info + own dice).
        Args:
            player_id (int): Seat index.
        Returns:
            dict: Player view for agent decision-making.
        """
        p = self.state.players[player_id]
        public = self.state.public
        return {
            "player_id": player_id,
            "round_index": public.round_index,
            "my_dice": tuple(sorted(p.private_dice)),
            "bid_history": public.bid_history.snapshot(),
            "last_bid": public.last_bid,
            "players": self.players(),
            "dice_counts": self.dice_per_player(),
            "dice_in_play": self.dice_in_play(),
            "can_challenge": public.last_bid is not None,
            "config": self.config,
        }

    # --- rotation ---

    def _next_active(self, seat: int) -> int:
        """
        Internal: The first active seat after `seat`, wrapping around the table.
        """
        n = len(self.state.players)
        for step in range(1, n + 1):
            candidate = (seat + step) % n
            if self.state.players[candidate].active:
                return candidate
        raise InvariantViolationError("no active player left to take the turn")

    # --- transitions ---

    def start_new_round(self, first_player: Optional[int] = None) -> None:
        """
        Start a new round: roll dice for every active player, reset the bid history, emit initial events.
        Args:
            first_player (int|None): Seat that opens; if it is eliminated the next active seat opens.
        Raises:
            GameOverError: If the match is already over.
        """
        public = self.state.public
        if public.status == "GAME_OVER":
            raise GameOverError("The match is over")
        for p in self.state.players:
            if p.active:
                p.private_dice = roll_n(p.num_dice, self.rng, self.config.faces)
        if first_player is None:
            first_player = 0
        if not self.state.players[first_player].active:
            first_player = self._next_active(first_player)
        public.status = "BIDDING"
        public.round_index += 1
        public.turn_index = 0
        public.current_player = first_player
        public.bid_history.clear()
        self._emit({"type": "RoundStarted", "round": public.round_index, "player": first_player,
                    "dice_counts": self.dice_per_player()})
        self._emit({"type": "DiceRolled", "hands": self.hands()})
        self._snapshot(actor=None, action=None)

    def _require_turn(self, player_id: int) -> None:
        public = self.state.public
        if public.status == "NOT_STARTED":
            raise GameOverError("The match has not started")
        if public.status != "BIDDING":
            raise GameOverError("The match is over", public.last_bid)
        if player_id != public.current_player:
            raise NotCurrentTurnError(
                f"It is player {public.current_player}'s turn, not player {player_id}'s", public.last_bid)

    def submit_bid(self, player_id: int, quantity: int, face: int) -> Bid:
        """
        Place a numeric bid for the turn holder.
        Returns:
            Bid: The recorded bid, attributed to player_id.
        Raises:
            NotCurrentTurnError, IllegalBidError, GameOverError
        """
        self._require_turn(player_id)
        last = self.state.public.last_bid
        bid = Bid(quantity, face, player_id)
        try:
            bid.validate(self.config.faces)
        except ValueError as e:
            raise IllegalBidError(f"Bid {quantity} x {face} is invalid: {e}", last) from e
        if not bid.is_higher_than(last):
            raise IllegalBidError(f"Bid {quantity} x {face} is not higher than last bid", last)

        public = self.state.public
        public.bid_history.append(bid)
        public.turn_index += 1
        public.current_player = self._next_active(player_id)
        self._emit({"type": "BidPlaced", "player": player_id, "bid": (quantity, face)})
        self._snapshot(actor=player_id, action={"type": "Bid", "bid": (quantity, face)})
        return bid

    def submit_challenge(self, player_id: int) -> Round:
        """
        Challenge the latest bid and adjudicate the round.
        Returns:
            Round: The record of the adjudicated round.
        Raises:
            NotCurrentTurnError, NoBidToChallengeError, GameOverError
        """
        self._require_turn(player_id)
        last = self.state.public.last_bid
        if last is None:
            raise NoBidToChallengeError("No bid to challenge this round")
        self._emit({"type": "ChallengeMade", "player": player_id, "bid": (last.quantity, last.face)})
        record = self._adjudicate(challenger=player_id, challenged=last)
        self._snapshot(actor=player_id, action={"type": "Challenge"})
        return record

    def apply_action(self, player_id: int, action: Action):
        """
        Apply an action for the given player, updating state and emitting events.
        Args:
            player_id (int): Seat index.
            action (Action): The action to apply (BidAction or ChallengeAction).
        Returns:
            Bid|Round: The placed bid, or the adjudicated round for a challenge.
        Raises:
            IllegalMoveError: If action is invalid or not player's turn.
        """
        if isinstance(action, BidAction):
            return self.submit_bid(player_id, action.bid.quantity, action.bid.face)
        if isinstance(action, ChallengeAction):
            return self.submit_challenge(player_id)
        raise IllegalMoveError(f"Unknown action {action!r}", self.state.public.last_bid)

    def _adjudicate(self, challenger: int, challenged: Bid) -> Round:
        """
        Internal: Reveal dice, decide who loses a die, record the round and move on to the next round or end the match.
        """
        self._check_invariants()
        public = self.state.public
        all_dice = self.hands()
        match_count = count_matches(all_dice, challenged.face)
        was_true = match_count >= challenged.quantity
        if was_true:
            # bid holds, challenger loses
            winner, loser = challenged.player, challenger
        else:
            winner, loser = challenger, challenged.player

        record = Round(
            index=public.round_index,
            bids=public.bid_history.snapshot(),
            hands=MappingProxyType({pid: tuple(d) for pid, d in all_dice.items()}),
            challenger=challenger,
            challenged_bid=challenged,
            actual_count=match_count,
            winner=winner,
            loser=loser,
        )
        self.rounds.append(record)

        before = self.dice_in_play()
        self._remove_die(loser)
        if self.dice_in_play() != before - 1:
            raise InvariantViolationError(f"Expected {before - 1} dice in play after round {record.index}")

        self._emit({"type": "DiceRevealed", "all_dice": all_dice})
        self._emit({"type": "RoundEnded", "round": record.index, "winner": winner, "loser": loser,
                    "match_count": match_count, "was_true": was_true, "record": record})
        public.bid_history.clear()

        survivors = self.players()
        if len(survivors) == 1:
            public.status = "GAME_OVER"
            public.winner = survivors[0]
            public.current_player = None
            self._emit({"type": "MatchEnded", "winner": survivors[0], "rounds": len(self.rounds)})
        else:
            self.start_new_round(first_player=loser)
        return record

    def _remove_die(self, player_id: int) -> None:
        p = self.state.players[player_id]
        p.private_dice.pop()
        p.num_dice -= 1
        if p.num_dice == 0:
            self._emit({"type": "PlayerEliminated", "player": player_id})

    def _check_invariants(self) -> None:
        """
        Internal: Verify hand sizes against dice counts and the turn pointer.
        Raises:
            InvariantViolationError: On any mismatch.
        """
        for p in self.state.players:
            if p.num_dice < 0:
                raise InvariantViolationError(f"Player {p.player_id} holds a negative dice count")
            if len(p.private_dice) != p.num_dice:
                raise InvariantViolationError(
                    f"Player {p.player_id} holds {len(p.private_dice)} dice but should hold {p.num_dice}")
        current = self.state.public.current_player
        if current is not None and not self.state.players[current].active:
            raise InvariantViolationError(f"Turn pointer is on eliminated player {current}")
