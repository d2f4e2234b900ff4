"""
events.py
Defines the GameEvent dataclass for event-sourced reporting of a match.
The match runner turns engine events into GameEvents and hands them to a recorder (see recorder.py).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class GameEvent:
    """
    Represents a single event in a match (e.g., round ended, match ended).
    Fields:
        game_id (str): Unique match identifier.
        event_type (str): Type of event (e.g., 'RoundEnded').
        payload (dict): Event-specific data.
        player_type (str|None): Agent class name of the acting player, when there is one.
    """
    game_id: str
    event_type: str
    payload: Dict[str, Any] = field(default_factory=dict)
    player_type: Optional[str] = None
