"""Metric data models"""
from dataclasses import dataclass, field
from typing import Dict, List, Tuple
from enum import Enum


class MetricType(Enum):
    """Prometheus metric types"""
    COUNTER = "counter"
    GAUGE = "gauge"


@dataclass(frozen=True)
class MetricDescriptor:
    """Immutable identity of one exported metric"""
    name: str
    help_text: str
    metric_type: MetricType = MetricType.GAUGE
    label_names: Tuple[str, ...] = ()
    unit: str = "1"


@dataclass(frozen=True)
class RawCapture:
    """Verbatim output of one external command invocation"""
    source_id: str
    argv: Tuple[str, ...]
    stdout: str
    stderr: str = ""
    returncode: int = 0
    duration: float = 0.0


@dataclass(frozen=True)
class ParsedValue:
    """A numeric observation, optionally qualified by label values"""
    value: float
    labels: Tuple[str, ...] = ()


@dataclass
class MetricValue:
    """Represents a single metric sample for one scrape"""
    descriptor: MetricDescriptor
    value: float
    label_values: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        self.label_values = tuple(self.label_values)
        if len(self.label_values) != len(self.descriptor.label_names):
            raise ValueError(
                f"{self.descriptor.name} expects labels {self.descriptor.label_names}, "
                f"got {self.label_values}"
            )
        self.value = float(self.value)

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def help_text(self) -> str:
        return self.descriptor.help_text

    @property
    def metric_type(self) -> MetricType:
        return self.descriptor.metric_type

    @property
    def unit(self) -> str:
        return self.descriptor.unit

    @property
    def labels(self) -> Dict[str, str]:
        """Label names zipped with their values, in declaration order"""
        return dict(zip(self.descriptor.label_names, self.label_values))

    def to_prometheus_line(self) -> str:
        """Convert to Prometheus exposition format"""
        labels_str = ""
        if self.labels:
            label_pairs = [f'{k}="{escape_label_value(v)}"' for k, v in self.labels.items()]
            labels_str = "{" + ",".join(label_pairs) + "}"

        return f"{self.name}{labels_str} {format_sample_value(self.value)}"


def escape_label_value(value: str) -> str:
    """Escape a label value for the text exposition format"""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def format_sample_value(value: float) -> str:
    """Render integral floats without a trailing .0 so counters stay readable"""
    if value != value:
        return "NaN"
    if value in (float("inf"), float("-inf")):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


# Parsed output of one source: observation key -> values in first-seen order
Snapshot = Dict[str, List[ParsedValue]]
