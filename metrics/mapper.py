"""Join parsed snapshots onto metric descriptors"""
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
from .models import MetricDescriptor, MetricValue, ParsedValue, Snapshot


MHZ_TO_HZ = 1_000_000.0


@dataclass(frozen=True)
class MappingRule:
    """Observation key feeding one descriptor, with an optional unit scale.

    ``aliases`` are tried in order when ``key`` is missing, for tools whose
    wording changed between releases.
    """
    key: str
    descriptor: MetricDescriptor
    scale: float = 1.0
    aliases: Tuple[str, ...] = ()

    def lookup(self, snapshot: Snapshot) -> Optional[List[ParsedValue]]:
        for key in (self.key,) + self.aliases:
            values = snapshot.get(key)
            if values:
                return values
        return None


def map_snapshot(rules: Sequence[MappingRule], snapshot: Snapshot) -> List[MetricValue]:
    """Build samples in rule order; keys missing from the snapshot are skipped"""
    metrics = []

    for rule in rules:
        values = rule.lookup(snapshot)
        if values is None:
            continue
        for parsed in values:
            metrics.append(MetricValue(
                descriptor=rule.descriptor,
                value=parsed.value * rule.scale,
                label_values=parsed.labels,
            ))

    return metrics
