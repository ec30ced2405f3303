"""
Tests for roll notification payloads.

Run from project root: python -m pytest tests/test_shared -v
"""

import json
import sys
import unittest
from datetime import datetime
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from shared.enums import RollEventType
from shared.events import RollStarted, RollFinished, BatchRollStarted, BatchRollFinished


class TestBatchAggregate(unittest.TestCase):

    def test_pair_of_equal_values_is_double(self):
        result = BatchRollFinished.from_results({"left": 4, "right": 4})
        self.assertEqual(result.total_result, 8)
        self.assertIs(result.is_double, True)

    def test_pair_of_different_values(self):
        result = BatchRollFinished.from_results({"left": 4, "right": 5})
        self.assertEqual(result.total_result, 9)
        self.assertIs(result.is_double, False)

    def test_double_undefined_for_other_counts(self):
        self.assertIsNone(BatchRollFinished.from_results({"a": 3}).is_double)
        self.assertIsNone(BatchRollFinished.from_results({"a": 3, "b": 3, "c": 3}).is_double)
        self.assertIsNone(
            BatchRollFinished.from_results({"a": 1, "b": 1, "c": 1, "d": 1}).is_double
        )

    def test_empty_results(self):
        result = BatchRollFinished.from_results({})
        self.assertEqual(result.results, {})
        self.assertEqual(result.total_result, 0)
        self.assertIsNone(result.is_double)

    def test_results_are_copied(self):
        values = {"a": 2, "b": 6}
        result = BatchRollFinished.from_results(values)
        values["a"] = 5
        self.assertEqual(result.results["a"], 2)


class TestSerialization(unittest.TestCase):

    def test_session_events(self):
        moment = datetime(2024, 5, 1, 12, 30, 0)

        started = RollStarted(time_started=moment).to_dict()
        self.assertEqual(started["type"], RollEventType.ROLL_STARTED.value)
        self.assertEqual(started["time_started"], moment.isoformat())

        finished = RollFinished(result=3, time_finished=moment).to_dict()
        self.assertEqual(finished["type"], RollEventType.ROLL_FINISHED.value)
        self.assertEqual(finished["result"], 3)

    def test_batch_events(self):
        started = BatchRollStarted()
        self.assertEqual(started.type, RollEventType.BATCH_ROLL_STARTED)
        self.assertIsInstance(started.time_started, datetime)

        raw = json.loads(BatchRollFinished.from_results({"a": 2, "b": 2}).to_json())
        self.assertEqual(raw["type"], RollEventType.BATCH_ROLL_FINISHED.value)
        self.assertEqual(raw["results"], {"a": 2, "b": 2})
        self.assertEqual(raw["total_result"], 4)
        self.assertTrue(raw["is_double"])

    def test_undefined_double_serializes_as_null(self):
        raw = json.loads(BatchRollFinished.from_results({"a": 1}).to_json())
        self.assertIsNone(raw["is_double"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
