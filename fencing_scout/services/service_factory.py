"""
Service Factory for dependency injection following SOLID principles.

This module provides a factory for creating properly configured service instances
with their dependencies injected, following the Dependency Inversion Principle.
"""
from typing import Optional

from ..utils import AppConfig
from ..utils.logging_utils import get_logger
from .analytics_service import AnalysisReportExporter, AnalyticsService
from .match_service import MatchService
from .persistence_service import (
    DocumentStore, HttpDocumentStore, JsonFileDocumentStore, PersistenceService
)
from .report_service import ReportService
from .scheduler import Scheduler, ThreadingScheduler

log = get_logger("services.factory")


class ServiceFactory:
    """
    Factory for creating service instances with proper dependency injection.
    
    The document store is chosen from the configuration: a remote REST
    store when ``store_url`` is set, JSON files under ``store_dir`` otherwise.
    """
    
    def __init__(self, config: Optional[AppConfig] = None):
        """Initialize factory with the given or environment configuration."""
        self.config = config or AppConfig.from_env()
        self._scheduler: Optional[Scheduler] = None
        self._document_store: Optional[DocumentStore] = None
        self._export_service: Optional[AnalysisReportExporter] = None
    
    def create_persistence_service(self) -> PersistenceService:
        """
        Create PersistenceService with injected store and scheduler.
        
        Returns:
            Configured PersistenceService instance
        """
        return PersistenceService(
            store=self._get_document_store(),
            scheduler=self._get_scheduler(),
            delay=self.config.save_delay,
        )
    
    def create_analytics_service(self) -> AnalyticsService:
        return AnalyticsService(export_service=self._get_export_service())
    
    def create_match_service(self) -> MatchService:
        """
        Create a MatchService with its complete service suite.
        
        Returns:
            Configured MatchService instance
        """
        return MatchService(
            persistence_service=self.create_persistence_service(),
            scheduler=self._get_scheduler(),
            report_service=ReportService(),
            analytics_service=self.create_analytics_service(),
        )
    
    def _get_scheduler(self) -> Scheduler:
        """Get singleton scheduler."""
        if self._scheduler is None:
            self._scheduler = ThreadingScheduler()
        return self._scheduler
    
    def _get_document_store(self) -> DocumentStore:
        """Get singleton document store."""
        if self._document_store is None:
            if self.config.store_url:
                log.info(f"Using remote document store at {self.config.store_url}")
                self._document_store = HttpDocumentStore(self.config.store_url)
            else:
                log.info(f"Using JSON document store in {self.config.store_dir}")
                self._document_store = JsonFileDocumentStore(self.config.store_dir)
        return self._document_store
    
    def _get_export_service(self) -> AnalysisReportExporter:
        """Get singleton export service."""
        if self._export_service is None:
            self._export_service = AnalysisReportExporter()
        return self._export_service
    
    def configure_custom_scheduler(self, scheduler: Scheduler) -> None:
        """Configure custom scheduler - supports OCP."""
        self._scheduler = scheduler
    
    def configure_custom_document_store(self, store: DocumentStore) -> None:
        """Configure custom document store - supports OCP."""
        self._document_store = store
