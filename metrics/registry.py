"""Metrics registry for managing collectors and orchestrating collection"""
import asyncio
from typing import Dict, List, Optional, Tuple
from .models import MetricDescriptor, MetricValue
from collectors.base import BaseCollector
from logging_config import get_logger


logger = get_logger(__name__)


def default_collectors(config=None) -> List[BaseCollector]:
    """Collectors in registration order"""
    from collectors.powermetrics import PowermetricsCollector
    from collectors.vmstat import VmStatCollector
    from collectors.macmon import MacMonCollector

    return [
        PowermetricsCollector(config),
        VmStatCollector(config),
        MacMonCollector(config),
    ]


class MetricsRegistry:
    """Central registry for all metric collectors.

    Samples come back in collector registration order, and within one
    collector in descriptor declaration order.
    """

    def __init__(self, config=None, collectors: Optional[List[BaseCollector]] = None):
        self.config = config
        self.collectors: Dict[str, BaseCollector] = {}
        if collectors is None:
            collectors = default_collectors(config)
        for collector in collectors:
            self.register_collector(collector)

    def register_collector(self, collector: BaseCollector):
        """Register a new collector"""
        if not isinstance(collector, BaseCollector):
            raise ValueError("Collector must inherit from BaseCollector")
        if collector.name in self.collectors:
            raise ValueError(f"Collector {collector.name} is already registered")

        self.collectors[collector.name] = collector
        logger.info(f"Registered collector: {collector.name}")

    def get_collector(self, name: str) -> Optional[BaseCollector]:
        """Get collector by name"""
        return self.collectors.get(name)

    def list_collectors(self) -> List[str]:
        """List all registered collector names"""
        return list(self.collectors.keys())

    def enabled_collectors(self) -> List[BaseCollector]:
        return [collector for collector in self.collectors.values() if collector.is_enabled()]

    def describe_all(self) -> List[MetricDescriptor]:
        """Descriptors of every enabled collector"""
        descriptors = []
        for collector in self.enabled_collectors():
            descriptors.extend(collector.describe())
        return descriptors

    def collect_all(self) -> List[MetricValue]:
        """Collect metrics from all enabled collectors (synchronous)"""
        metrics, _ = self.collect_with_errors()
        return metrics

    def collect_with_errors(self) -> Tuple[List[MetricValue], int]:
        """Collect from all enabled collectors and count the ones that failed"""
        all_metrics = []
        errors = 0

        for collector in self.enabled_collectors():
            metrics, failed = self._collect_single(collector)
            all_metrics.extend(metrics)
            if failed:
                errors += 1

        return all_metrics, errors

    def _collect_single(self, collector: BaseCollector) -> Tuple[List[MetricValue], bool]:
        try:
            logger.debug("Collecting metrics", collector=collector.name, event_type="collection_start")
            metrics, error = collector.collect_with_status()
            logger.debug("Collected metrics", collector=collector.name, metrics_count=len(metrics),
                         event_type="collection_complete")
            return metrics, error is not None
        except Exception as e:
            # Continue with other collectors even if one fails
            logger.error("Collector failed", collector=collector.name, error=str(e),
                         event_type="collection_error", exc_info=True)
            return [], True

    async def collect_all_async(self) -> List[MetricValue]:
        """Collect from all enabled collectors concurrently, keeping registration order"""
        tasks = [self._collect_single_async(collector) for collector in self.enabled_collectors()]

        if not tasks:
            return []

        results = await asyncio.gather(*tasks)

        all_metrics = []
        for metrics in results:
            all_metrics.extend(metrics)

        return all_metrics

    async def _collect_single_async(self, collector: BaseCollector) -> List[MetricValue]:
        """Collect metrics from a single collector asynchronously"""
        try:
            logger.debug("Starting async collection", collector=collector.name, event_type="async_collection_start")
            metrics = await collector.collect_async()
            logger.debug("Completed async collection", collector=collector.name, metrics_count=len(metrics),
                         event_type="async_collection_complete")
            return metrics
        except Exception as e:
            logger.error("Async collector failed", collector=collector.name, error=str(e),
                         event_type="async_collection_error", exc_info=True)
            return []

    def get_collector_status(self) -> Dict[str, Dict]:
        """Get status information for all collectors"""
        status = {}

        for name, collector in self.collectors.items():
            status[name] = {
                "enabled": collector.is_enabled(),
                "class": collector.__class__.__name__,
                "help": collector.help_text,
                "command": " ".join(collector.source.argv),
                "timeout_seconds": collector.source.timeout,
                "metrics": [descriptor.name for descriptor in collector.describe()],
            }

        return status

    def cleanup(self):
        """Cleanup all collectors"""
        for collector in self.collectors.values():
            try:
                collector.cleanup()
            except Exception as e:
                logger.error("Failed to cleanup collector", collector=collector.name, error=str(e))
