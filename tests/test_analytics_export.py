"""Test analysis CSV export functionality."""

import csv
import io
import unittest

from fencing_scout.models import ActionLog, Athlete
from fencing_scout.services import AnalyticsService


class TestAnalyticsExport(unittest.TestCase):
    """Test CSV export functionality for analysis reports."""

    def setUp(self):
        """Set up test fixtures."""
        self.log = ActionLog()
        self.log.append("Offensive", "Home", 0, 0)
        self.log.append("Attack", "Home", 0, 0)
        self.log.append("Point for B", "House", 0, 0, point_for=Athlete.B)
        self.log.append("Defense", "Square", 0, 1)

        self.analytics_service = AnalyticsService()

    def _rows(self):
        csv_content = self.analytics_service.export_analysis_csv(self.log)
        return list(csv.reader(io.StringIO(csv_content)))

    def test_csv_export_summary(self):
        rows = self._rows()

        self.assertEqual(rows[0], ["Fencing Scout Analysis"])
        self.assertIn(["Total Events", "4"], rows)
        self.assertIn(["Attack", "1"], rows)
        self.assertIn(["Point B", "1"], rows)
        self.assertIn(["Point A", "0"], rows)

    def test_csv_export_zone_rows(self):
        rows = self._rows()

        header = [
            "Zone", "Total", "Percentage (%)", "Offensive", "Attack", "Defense",
            "Retreat", "Counter-Attack", "Point A", "Point B",
        ]
        self.assertIn(header, rows)
        zone_rows = {row[0]: row for row in rows[rows.index(header) + 1:]}

        self.assertEqual(zone_rows["Home"][:3], ["Home", "2", "50.0"])
        self.assertEqual(zone_rows["Square"][:3], ["Square", "1", "25.0"])
        self.assertEqual(zone_rows["House"][-1], "1")

    def test_csv_export_empty_log(self):
        rows = list(csv.reader(io.StringIO(self.analytics_service.export_analysis_csv([]))))

        self.assertIn(["Total Events", "0"], rows)
        self.assertIn(["Home", "0", "0.0", "0", "0", "0", "0", "0", "0", "0"], rows)


if __name__ == "__main__":
    unittest.main()
