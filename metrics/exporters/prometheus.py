"""Prometheus text exposition exporter"""
from typing import Dict, List
from ..models import MetricValue
from logging_config import get_logger


logger = get_logger(__name__)


CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"


def escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


class PrometheusExporter:
    """Render collected samples in the Prometheus text format"""

    def __init__(self, config=None):
        self.config = config

    def export_metrics(self, metrics: List[MetricValue]) -> str:
        """Convert metrics to Prometheus format, one HELP/TYPE block per name"""
        lines = []

        for metric_name, metric_list in self._group_metrics_by_name(metrics).items():
            # HELP and TYPE come from the shared descriptor
            lines.append(f"# HELP {metric_name} {escape_help(metric_list[0].help_text)}")
            lines.append(f"# TYPE {metric_name} {metric_list[0].metric_type.value}")

            for metric in metric_list:
                lines.append(metric.to_prometheus_line())

        logger.debug(f"Rendered {len(metrics)} metrics")
        return "\n".join(lines) + "\n" if lines else ""

    def _group_metrics_by_name(self, metrics: List[MetricValue]) -> Dict[str, List[MetricValue]]:
        """Group metrics by name, preserving order"""
        grouped: Dict[str, List[MetricValue]] = {}
        for metric in metrics:
            grouped.setdefault(metric.name, []).append(metric)
        return grouped
