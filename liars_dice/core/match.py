"""
match.py
Plays whole Liar's Dice matches between agents and tallies winners over many matches.
Related modules:
- engine.py: The state machine the runner drives.
- agents: Strategies asked for actions through choose_action(view).
- persistence/recorder.py: Optional reporting sink receiving round and match narration.
"""

import datetime
import hashlib
import random
from collections import Counter
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

from .config import GameConfig
from .engine import GameEngine, IllegalMoveError
from .state import Round
from ..persistence.events import GameEvent
from ..agents import make_agent


@dataclass
class MatchResult:
    """
    Outcome of one match.
    Fields:
        game_id (str): Match identifier.
        winner (int): Winning seat.
        rounds (list[Round]): Every adjudicated round, in order.
        agents (tuple[str]): Agent class name per seat.
        steps (int): Accepted actions.
        rejected_actions (int): Actions the engine refused.
    """
    game_id: str
    winner: int
    rounds: List[Round] = field(default_factory=list)
    agents: Tuple[str, ...] = ()
    steps: int = 0
    rejected_actions: int = 0


def generate_match_id(agent_names: Sequence[str], timestamp: str) -> str:
    raw = f"{timestamp}_" + "_".join(agent_names)
    return hashlib.sha256(raw.encode()).hexdigest()[:16]


def _forward(events, recorder, game_id: str) -> None:
    if recorder is None:
        return
    for ev in events:
        t = ev.get("type")
        if t == "RoundEnded":
            record = ev["record"]
            recorder.record(GameEvent(game_id, "RoundEnded", {
                "round": record.index,
                "winner": record.winner,
                "loser": record.loser,
                "was_true": ev["was_true"],
                "match_count": ev["match_count"],
                "bids": [(b.player, b.quantity, b.face) for b in record.bids],
                "summary": str(record),
            }))
        elif t == "MatchEnded":
            recorder.record(GameEvent(game_id, "MatchEnded", {"winner": ev["winner"], "rounds": ev["rounds"]}))


def play_match(agents: Sequence, config: GameConfig, recorder=None, game_id: Optional[str] = None) -> MatchResult:
    """
    Run a full match: rounds are played until a single player holds dice.
    Rejected actions are reported to the agent through on_rejected and the agent is asked again,
    up to config.max_retries times, after which the error propagates. InvariantViolationError always propagates.
    Args:
        agents (sequence): One Agent per seat.
        config (GameConfig): Match configuration.
        recorder: Optional sink with a record(GameEvent) method.
        game_id (str|None): Identifier used in recorded events.
    Returns:
        MatchResult: Winner and round log.
    """
    seats = len(config.dice_for_players())
    if len(agents) != seats:
        raise ValueError(f"expected {seats} agents, got {len(agents)}")
    names = tuple(type(a).__name__ for a in agents)
    if game_id is None:
        game_id = generate_match_id(names, datetime.datetime.now(datetime.timezone.utc).isoformat())

    engine = GameEngine(config)
    for p, name in zip(engine.state.players, names):
        p.agent_id = name
    engine.start_new_round()
    _forward(engine.pop_events(), recorder, game_id)

    steps = 0
    rejected = 0
    while not engine.is_terminal():
        current = engine.state.public.current_player
        agent = agents[current]
        attempts = 0
        while True:
            action = agent.choose_action(engine.get_view(current))
            try:
                engine.apply_action(current, action)
                break
            except IllegalMoveError as e:
                rejected += 1
                attempts += 1
                if recorder is not None:
                    recorder.record(GameEvent(game_id, "ActionRejected",
                                              {"player": current, "action": repr(action), "error": str(e)},
                                              player_type=names[current]))
                if attempts > config.max_retries:
                    raise
                agent.on_rejected(action, e)
        steps += 1
        _forward(engine.pop_events(), recorder, game_id)

    if recorder is not None:
        recorder.flush()
    return MatchResult(game_id=game_id, winner=engine.winner(), rounds=list(engine.rounds),
                       agents=names, steps=steps, rejected_actions=rejected)


def match_config(config: GameConfig, index: int) -> GameConfig:
    """Per-match config: each match gets its own seed derived from the base seed and its index."""
    if config.rng_seed is None:
        return config
    return replace(config, rng_seed=config.rng_seed * 1_000_003 + index)


def build_agents(agent_names: Sequence[str], config: GameConfig):
    seed = config.rng_seed
    return [make_agent(name, rng=random.Random(None if seed is None else f"{seed}:{seat}"))
            for seat, name in enumerate(agent_names)]


def _play_indexed(agent_names: Sequence[str], config: GameConfig, index: int, recorder=None) -> MatchResult:
    cfg = match_config(config, index)
    return play_match(build_agents(agent_names, cfg), cfg, recorder=recorder)


def _winner_of(args) -> int:
    agent_names, config, index = args
    return _play_indexed(agent_names, config, index).winner


def run_matches(agent_names: Sequence[str], config: GameConfig, matches: int,
                workers: int = 1, recorder=None) -> Counter:
    """
    Play `matches` independent matches and count wins per seat.
    Args:
        agent_names (sequence): Registered agent name per seat.
        config (GameConfig): Base configuration; rng_seed seeds every match.
        matches (int): Number of matches.
        workers (int): Processes to spread matches over; matches share no state.
        recorder: Optional sink; only supported with a single worker.
    Returns:
        Counter: seat -> matches won.
    """
    tally = Counter()
    if workers <= 1:
        for i in range(matches):
            tally[_play_indexed(agent_names, config, i, recorder).winner] += 1
        return tally
    if recorder is not None:
        raise ValueError("a recorder can only be used with a single worker")
    jobs = [(tuple(agent_names), config, i) for i in range(matches)]
    with ProcessPoolExecutor(max_workers=workers) as pool:
        for winner in pool.map(_winner_of, jobs):
            tally[winner] += 1
    return tally
