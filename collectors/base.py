"""Base collector class and interfaces"""
import asyncio
import threading
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple
from metrics.mapper import MappingRule, map_snapshot
from metrics.models import MetricDescriptor, MetricValue, RawCapture, Snapshot
from logging_config import get_logger, log_source_failure
from .errors import SourceError
from .sources import CommandSource


logger = get_logger(__name__)


class BaseCollector(ABC):
    """Base class for all metric collectors.

    A collector owns one external command. ``collect`` runs it, parses the
    output into a snapshot and maps the snapshot onto the collector's
    descriptors. A failing source is logged and yields no parsed samples.
    """

    command: Tuple[str, ...] = ()
    default_timeout: float = 10.0
    descriptors: Tuple[MetricDescriptor, ...] = ()
    mapping_rules: Tuple[MappingRule, ...] = ()

    def __init__(self, config=None, name: str = "", help_text: str = ""):
        self.config = config or {}
        self._name = name
        self._help_text = help_text
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"{name}_collector")
        self.source = self._create_source()

    def _create_source(self) -> CommandSource:
        timeout = self.default_timeout
        if hasattr(self.config, 'timeout_for'):
            timeout = self.config.timeout_for(self.name)
        return CommandSource(self.name, self.command, timeout)

    @abstractmethod
    def parse(self, capture: RawCapture) -> Snapshot:
        """Turn raw command output into a snapshot"""
        pass

    def constant_metrics(self) -> List[MetricValue]:
        """Samples emitted every cycle regardless of the source outcome"""
        return []

    def describe(self) -> List[MetricDescriptor]:
        """Descriptors this collector may emit"""
        return list(self.descriptors)

    def collect(self) -> List[MetricValue]:
        """Collect metrics and return list of MetricValue objects"""
        metrics, _ = self.collect_with_status()
        return metrics

    def collect_with_status(self) -> Tuple[List[MetricValue], Optional[str]]:
        """Collect metrics and report the source failure reason, if any.

        Overlapping calls are serialized so concurrent scrapes never start
        the same command twice at once.
        """
        with self._lock:
            metrics = []
            error = None
            try:
                capture = self.source.capture()
                snapshot = self.parse(capture)
                metrics.extend(self.map(snapshot))
            except SourceError as e:
                error = e.reason
                log_source_failure(logger, self.name, e.reason)
            metrics.extend(self.constant_metrics())
            return metrics, error

    def map(self, snapshot: Snapshot) -> List[MetricValue]:
        return map_snapshot(self.mapping_rules, snapshot)

    async def collect_async(self) -> List[MetricValue]:
        """Async version of collect method"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.collect)

    @property
    def name(self) -> str:
        """Collector name for identification"""
        return self._name

    @property
    def help_text(self) -> str:
        """Help text describing what this collector does"""
        return self._help_text or f"{self.name} metrics collector"

    def is_enabled(self) -> bool:
        """Check if this collector is enabled"""
        if hasattr(self.config, 'is_collector_enabled'):
            return self.config.is_collector_enabled(self.name)
        return True

    def cleanup(self):
        """Cleanup resources"""
        if hasattr(self, '_executor'):
            self._executor.shutdown(wait=False)


def rules_for(pairs: Sequence[Tuple]) -> Tuple[MappingRule, ...]:
    """Build unscaled mapping rules from (key, descriptor[, aliases]) tuples"""
    rules = []
    for key, descriptor, *aliases in pairs:
        rules.append(MappingRule(key, descriptor, aliases=tuple(aliases)))
    return tuple(rules)
