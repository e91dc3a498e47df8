"""FastAPI server setup and routes"""
import threading
import time
from typing import Optional
from fastapi import FastAPI, Response
from config import Config
from metrics.registry import MetricsRegistry
from metrics.exporters.prometheus import CONTENT_TYPE_LATEST, PrometheusExporter
from logging_config import get_logger, log_metrics_collection
from .middleware import RequestLoggingMiddleware


logger = get_logger(__name__)


class MetricsServer:
    """FastAPI server exposing a fresh snapshot on every scrape"""

    def __init__(self, config: Config, registry: Optional[MetricsRegistry] = None):
        self.config = config
        self.app = FastAPI(
            title="macOS Metrics Exporter",
            version=config.service_version,
            docs_url=None,
            redoc_url=None,
            openapi_url=None
        )
        self.registry = registry if registry is not None else MetricsRegistry(config)
        self.exporter = PrometheusExporter(config)

        # Scrape bookkeeping, shared between request threads
        self._stats_lock = threading.Lock()
        self.scrape_count = 0
        self.last_scrape_time = 0.0
        self.last_scrape_duration = 0.0
        self.last_metrics_count = 0
        self.last_scrape_errors = 0
        self.start_time = time.time()

        if self.config.enable_request_logging:
            self.app.add_middleware(RequestLoggingMiddleware)

        self._setup_routes()
        self._setup_events()

    def _setup_routes(self):
        """Setup FastAPI routes"""

        @self.app.get('/metrics', response_class=Response)
        def get_metrics():
            """Collect and serve metrics in Prometheus format"""
            content = self.scrape()
            return Response(content, media_type=CONTENT_TYPE_LATEST)

        @self.app.get('/health')
        def health_check():
            """Health check endpoint"""
            with self._stats_lock:
                return {
                    "status": "healthy",
                    "uptime_seconds": round(time.time() - self.start_time, 1),
                    "total_scrapes": self.scrape_count,
                    "last_scrape_duration_seconds": round(self.last_scrape_duration, 3),
                    "last_metrics_count": self.last_metrics_count,
                    "last_scrape_errors": self.last_scrape_errors,
                    "enabled_collectors": self.config.enabled_collectors,
                }

        @self.app.get('/collectors')
        def list_collectors():
            """List all available collectors"""
            return {
                "collectors": self.registry.get_collector_status(),
                "enabled_collectors": self.config.enabled_collectors
            }

    def _setup_events(self):
        """Setup FastAPI shutdown handling"""

        @self.app.on_event("shutdown")
        def shutdown_event():
            """Release collector executors"""
            logger.info("Shutting down metrics exporter", event_type="server_shutdown")
            self.registry.cleanup()

    def scrape(self) -> str:
        """Run one collection and render it"""
        start_time = time.time()
        metrics, errors = self.registry.collect_with_errors()
        content = self.exporter.export_metrics(metrics)
        finished = time.time()

        with self._stats_lock:
            self.scrape_count += 1
            self.last_scrape_time = finished
            self.last_scrape_duration = finished - start_time
            self.last_metrics_count = len(metrics)
            self.last_scrape_errors = errors

        log_metrics_collection(logger, len(metrics), finished - start_time, errors)
        return content

    def get_app(self) -> FastAPI:
        """Get the FastAPI application"""
        return self.app
