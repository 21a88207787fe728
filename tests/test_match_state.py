"""Tests for MatchState serialization."""

import unittest

from fencing_scout.models import Athlete, MatchState


class MatchStateTests(unittest.TestCase):
    def test_defaults(self) -> None:
        state = MatchState()
        self.assertEqual((state.score_a, state.score_b), (0, 0))
        self.assertEqual(state.athlete_a_name, "Athlete A")
        self.assertEqual(state.athlete_b_name, "Athlete B")
        self.assertEqual(state.zone_order, ["Home", "Square", "House"])
        self.assertEqual(state.active_zone, "Home")
        self.assertEqual(len(state.log), 0)
        self.assertEqual(state.archived_reports, [])
        self.assertIsNone(state.updated_at)

    def test_zone_order_is_not_shared_between_instances(self) -> None:
        first = MatchState()
        first.zone_order.reverse()
        self.assertEqual(MatchState().zone_order, ["Home", "Square", "House"])

    def test_to_json_uses_flat_record(self) -> None:
        state = MatchState(score_a=3, athlete_b_name="Bob")
        state.log.append("Attack", "Home", 3, 0)
        data = state.to_json()

        self.assertEqual(data["scoreA"], 3)
        self.assertEqual(data["athleteBName"], "Bob")
        self.assertEqual(data["zoneOrder"], ["Home", "Square", "House"])
        self.assertEqual(data["log"][0]["action"], "Attack")
        self.assertEqual(data["archivedReports"], [])

    def test_from_json_defaults_missing_optional_fields(self) -> None:
        state = MatchState.from_json({
            "scoreA": 2,
            "scoreB": 1,
            "athleteAName": "Alice",
            "athleteBName": "Bob",
            "activeZone": "Square",
            "log": [],
        })

        self.assertEqual(state.zone_order, ["Home", "Square", "House"])
        self.assertEqual(state.archived_reports, [])
        self.assertEqual(state.active_zone, "Square")
        self.assertEqual(state.score_of(Athlete.A), 2)
        self.assertEqual(state.name_of(Athlete.B), "Bob")

    def test_from_json_of_empty_document(self) -> None:
        state = MatchState.from_json({})
        self.assertEqual(state.to_json(), MatchState().to_json())

    def test_from_json_rejects_malformed_zone_order(self) -> None:
        state = MatchState.from_json({"zoneOrder": ["Home", "Home", "House"], "activeZone": "Lounge"})
        self.assertEqual(state.zone_order, ["Home", "Square", "House"])
        self.assertEqual(state.active_zone, "Home")

    def test_round_trip(self) -> None:
        state = MatchState(score_a=1, score_b=4, zone_order=["House", "Square", "Home"], active_zone="House")
        state.log.append("Point for B", "House", 1, 3, point_for=Athlete.B)
        state.archived_reports.append("--- report ---")
        state.updated_at = "2024-01-01T00:00:00.000+00:00"

        restored = MatchState.from_json(state.to_json())

        self.assertEqual(restored.to_json(), state.to_json())
        self.assertEqual(restored.log.all(), state.log.all())

    def test_copy_is_independent(self) -> None:
        state = MatchState()
        clone = state.copy()
        clone.log.append("Attack", "Home", 0, 0)
        clone.archived_reports.append("x")
        self.assertEqual(len(state.log), 0)
        self.assertEqual(state.archived_reports, [])


if __name__ == "__main__":
    unittest.main()
