"""
csv_io.py
Persistence utilities for appending Liar's Dice match summaries to CSV files.
"""

import os
import csv
from typing import Dict, List, Any

SUMMARY_HEADER = [
    "game_id", "game_index", "timestamp", "agents", "winner", "winner_agent",
    "rounds_played", "starting_dice_per_player", "rejected_actions", "rounds",
]

def append_row_to_csv(row: Dict[str, Any], csv_path: str, header: List[str]):
    write_header = not os.path.exists(csv_path)
    with open(csv_path, "a", newline='', encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=header)
        if write_header:
            writer.writeheader()
        writer.writerow(row)

def get_summary_header():
    return SUMMARY_HEADER.copy()
