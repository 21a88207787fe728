"""Dataclasses representing the per-zone action analysis of a match."""

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class ZoneBreakdown:
    """Aggregated action counts for a single zone."""

    zone: str
    total: int = 0
    count_by_action: Dict[str, int] = field(default_factory=dict)
    percentage: float = 0.0


@dataclass
class AnalysisReport:
    """Snapshot of action distribution across the current action log."""

    total_events: int = 0
    count_by_action: Dict[str, int] = field(default_factory=dict)
    per_zone: Dict[str, ZoneBreakdown] = field(default_factory=dict)
