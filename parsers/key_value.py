"""Line-oriented ``key: value`` parsing, as printed by vm_stat"""
import math
from typing import Dict, Mapping, Optional
from metrics.models import ParsedValue, Snapshot


def parse_float(text: str) -> Optional[float]:
    """Parse a finite float, returning None instead of raising"""
    try:
        value = float(text)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_key_value_lines(text: str) -> Dict[str, float]:
    """Map each ``key: value.`` line to a float.

    Lines without a colon and lines whose value is not numeric (the
    "Mach Virtual Memory Statistics" banner, for instance) are skipped.
    A repeated key keeps the last value seen.
    """
    values: Dict[str, float] = {}

    for line in text.splitlines():
        if ":" not in line:
            continue
        key, raw_value = line.split(":", 1)
        key = key.strip()
        if not key:
            continue

        value = parse_float(raw_value.strip().rstrip("."))
        if value is None:
            continue
        values[key] = value

    return values


def snapshot_from_scalars(values: Mapping[str, float]) -> Snapshot:
    """Lift a flat key -> float mapping into a snapshot"""
    return {key: [ParsedValue(value)] for key, value in values.items()}
