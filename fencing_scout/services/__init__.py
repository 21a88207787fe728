"""
Services package for the Fencing Scout application.

This package contains service classes that handle business logic.
Includes factory for proper dependency injection following SOLID principles.
"""
from .scheduler import Scheduler, ThreadingScheduler
from .timer_service import TimerService
from .score_service import ScoreService
from .zone_service import ZoneService
from .report_service import ReportService
from .analytics_service import AnalyticsService, AnalysisReportExporter, display_label
from .persistence_service import (
    PersistenceService, DebouncedSaver, SessionIdentity,
    JsonFileDocumentStore, HttpDocumentStore
)
from .match_service import MatchService
from .service_factory import ServiceFactory

__all__ = [
    "Scheduler", "ThreadingScheduler", "TimerService", "ScoreService",
    "ZoneService", "ReportService", "AnalyticsService", "AnalysisReportExporter",
    "display_label", "PersistenceService", "DebouncedSaver", "SessionIdentity",
    "JsonFileDocumentStore", "HttpDocumentStore", "MatchService", "ServiceFactory"
]
