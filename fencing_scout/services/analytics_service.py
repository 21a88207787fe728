"""Analytics helpers for the Fencing Scout application."""

from __future__ import annotations

import csv
import io
from typing import Dict, Iterable, List, Optional, Protocol

from ..models import AnalysisReport, LogEntry, ZoneBreakdown
from ..utils import ACTION_CATEGORIES, ZONES


class ExportServiceInterface(Protocol):
    """Interface for analysis export - supports ISP."""

    def export_to_csv(self, report: AnalysisReport) -> str:
        """Export report to CSV format."""
        ...


class AnalysisReportExporter:
    """Writes an :class:`AnalysisReport` as a CSV document."""

    def export_to_csv(self, report: AnalysisReport) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")

        writer.writerow(["Fencing Scout Analysis"])
        writer.writerow(["Total Events", report.total_events])
        writer.writerow([])

        writer.writerow(["Action", "Count"])
        for action in ACTION_CATEGORIES:
            writer.writerow([display_label(action), report.count_by_action.get(action, 0)])
        writer.writerow([])

        writer.writerow(["Zone", "Total", "Percentage (%)"] + [display_label(a) for a in ACTION_CATEGORIES])
        for zone in ZONES:
            breakdown = report.per_zone[zone]
            writer.writerow(
                [zone, breakdown.total, breakdown.percentage]
                + [breakdown.count_by_action.get(a, 0) for a in ACTION_CATEGORIES]
            )

        csv_text = buffer.getvalue()
        buffer.close()
        return csv_text


def display_label(action: str) -> str:
    """Shorten synthetic point labels for tables ("Point for A" -> "Point A")."""
    return action.replace("Point for ", "Point ")


class AnalyticsService:
    """
    Aggregate the action log into per-action and per-zone counts.

    The report is recomputed from the full log on every call.
    """

    def __init__(self, export_service: Optional[ExportServiceInterface] = None) -> None:
        self.export_service = export_service or AnalysisReportExporter()

    def analyze(self, entries: Iterable[LogEntry]) -> AnalysisReport:
        """Build an :class:`AnalysisReport` in a single pass over ``entries``."""

        count_by_action: Dict[str, int] = {action: 0 for action in ACTION_CATEGORIES}
        per_zone: Dict[str, ZoneBreakdown] = {
            zone: ZoneBreakdown(
                zone=zone,
                count_by_action={action: 0 for action in ACTION_CATEGORIES},
            )
            for zone in ZONES
        }

        total_events = 0
        for entry in entries:
            total_events += 1
            if entry.action not in count_by_action:
                continue
            count_by_action[entry.action] += 1
            breakdown = per_zone.get(entry.zone)
            if breakdown is not None:
                breakdown.total += 1
                breakdown.count_by_action[entry.action] += 1

        for breakdown in per_zone.values():
            breakdown.percentage = (
                round(breakdown.total / total_events * 100, 1) if total_events else 0.0
            )

        return AnalysisReport(
            total_events=total_events,
            count_by_action=count_by_action,
            per_zone=per_zone,
        )

    def export_analysis_csv(self, entries: Iterable[LogEntry]) -> str:
        """Return a CSV document of the analysis using the injected exporter."""
        return self.export_service.export_to_csv(self.analyze(entries))

    @staticmethod
    def log_table(entries: Iterable[LogEntry]) -> List[dict]:
        """Rows for the match log view, newest first."""
        return [
            {
                "id": entry.id,
                "action": display_label(entry.action),
                "score": f"{entry.score_a}:{entry.score_b}",
                "zone": entry.zone,
            }
            for entry in reversed(list(entries))
        ]
