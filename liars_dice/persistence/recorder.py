"""
recorder.py
Reporting sinks for Liar's Dice matches. A recorder receives GameEvent objects from the match runner;
it is purely observational and never feeds back into the game.
InMemoryRecorder is used for tests and in-memory analysis; ConsoleRecorder narrates rounds and matches.
Related modules:
- events.py: Defines GameEvent type.
- serializer.py: Used to render payloads.
"""

from typing import List
from .events import GameEvent
from . import serializer


class InMemoryRecorder:
    """
    Records GameEvent objects in memory for later retrieval.
    Methods:
        record(event): Add a new event.
        events(): Get all recorded events.
        flush(): No-op for in-memory.
    """
    def __init__(self):
        self._events: List[GameEvent] = []

    def record(self, event: GameEvent) -> None:
        """Add a new event to the recorder."""
        self._events.append(event)

    def events(self, event_type: str = None):
        """Return recorded events as a list, optionally only those of one type."""
        if event_type is None:
            return list(self._events)
        return [e for e in self._events if e.event_type == event_type]

    def flush(self):
        """No-op for in-memory recorder."""
        pass


class ConsoleRecorder:
    """
    Prints one narration line per completed round and per completed match.
    Other event types are ignored unless verbose is set.
    """
    def __init__(self, verbose: bool = False, out=None):
        self.verbose = verbose
        self.out = out

    def record(self, event: GameEvent) -> None:
        p = event.payload
        if event.event_type == "RoundEnded":
            line = f"Round {p['round']}: {p['summary']}"
        elif event.event_type == "MatchEnded":
            line = "-" * 40 + f"\nMatch {event.game_id} won by player {p['winner']} after {p['rounds']} rounds\n"
        elif self.verbose:
            line = f"{event.event_type}: {serializer.dumps(p)}"
        else:
            return
        print(line, file=self.out)

    def flush(self):
        if self.out is not None and hasattr(self.out, "flush"):
            self.out.flush()
