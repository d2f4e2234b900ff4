import csv
import os
import tempfile
import unittest
from liars_dice.core.bid import Bid
from liars_dice.persistence import csv_io, serializer
from liars_dice.persistence.events import GameEvent
from liars_dice.persistence.recorder import InMemoryRecorder
from dice_fixtures import dealt_engine


class TestPersistence(unittest.TestCase):
    def test_summary_rows_share_one_header(self):
        header = csv_io.get_summary_header()
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "summary.csv")
            csv_io.append_row_to_csv({"game_id": "a", "winner": 0}, path, header)
            csv_io.append_row_to_csv({"game_id": "b", "winner": 1}, path, header)
            with open(path, newline='', encoding="utf-8") as f:
                rows = list(csv.DictReader(f))
        self.assertEqual([r["game_id"] for r in rows], ["a", "b"])
        self.assertEqual(rows[1]["winner"], "1")

    def test_round_record_serializes(self):
        engine = dealt_engine([[1, 1], [2, 2]])
        engine.submit_bid(0, 1, 1)
        record = engine.submit_challenge(1)
        data = serializer.loads(serializer.dumps(record))
        self.assertEqual(data["hands"], {"0": [1, 1], "1": [2, 2]})
        self.assertEqual(data["challenged_bid"], {"quantity": 1, "face": 1, "player": 0})
        self.assertEqual(data["loser"], 1)

    def test_in_memory_recorder_filters_by_type(self):
        rec = InMemoryRecorder()
        rec.record(GameEvent("g", "RoundEnded", {"round": 1}))
        rec.record(GameEvent("g", "MatchEnded", {"winner": 0}))
        self.assertEqual(len(rec.events()), 2)
        self.assertEqual([e.payload for e in rec.events("MatchEnded")], [{"winner": 0}])
        self.assertEqual(serializer.loads(serializer.dumps(Bid(2, 5))), {"quantity": 2, "face": 5, "player": None})


if __name__ == '__main__':
    unittest.main()
