"""vm_stat virtual memory collector"""
import os
from typing import List
from metrics import descriptors as d
from metrics.models import MetricValue, RawCapture, Snapshot
from parsers.key_value import parse_key_value_lines, snapshot_from_scalars
from logging_config import get_logger
from .base import BaseCollector, rules_for


logger = get_logger(__name__)


# Newer macOS releases renamed a few lines; the older wording is tried first.
MAPPING_RULES = rules_for([
    ("Pages free", d.VMSTAT_PAGES_FREE),
    ("Pages active", d.VMSTAT_PAGES_ACTIVE),
    ("Pages inactive", d.VMSTAT_PAGES_INACTIVE),
    ("Pages speculative", d.VMSTAT_PAGES_SPECULATIVE),
    ("Pages throttled", d.VMSTAT_PAGES_THROTTLED),
    ("Pages wired down", d.VMSTAT_PAGES_WIRED),
    ("Pages purgeable", d.VMSTAT_PAGES_PURGEABLE),
    ("Copy-on-writes", d.VMSTAT_COW_FAULTS, "Pages copy-on-write"),
    ("Pages zero filled", d.VMSTAT_ZERO_FILLED),
    ("Pages reactivated", d.VMSTAT_REACTIVATED),
    ("Pages purged", d.VMSTAT_PURGED),
    ("File-backed pages", d.VMSTAT_FILE_BACKED),
    ("Anonymous pages", d.VMSTAT_ANONYMOUS),
    ("Pages stored in compressor", d.VMSTAT_COMPRESSOR),
    ("Pages decompressed", d.VMSTAT_DECOMPRESSED, "Decompressions"),
    ("Pages compressed", d.VMSTAT_COMPRESSED, "Compressions"),
    ("Pageins", d.VMSTAT_PAGE_INS),
    ("Pageouts", d.VMSTAT_PAGE_OUTS),
    ("Page faults", d.VMSTAT_FAULTS, "Faults", "\"Translation faults\""),
    ("Swapins", d.VMSTAT_SWAP_INS),
    ("Swapouts", d.VMSTAT_SWAP_OUTS),
])


def system_page_size() -> int:
    """Page size of the running kernel in bytes"""
    return os.sysconf("SC_PAGE_SIZE")


class VmStatCollector(BaseCollector):
    """Collect page counters from vm_stat plus the system page size"""

    command = ("vm_stat",)
    default_timeout = 5.0
    descriptors = d.VMSTAT_DESCRIPTORS
    mapping_rules = MAPPING_RULES

    def __init__(self, config=None):
        super().__init__(config, "vmstat", "Virtual memory page statistics from vm_stat")

    def parse(self, capture: RawCapture) -> Snapshot:
        return snapshot_from_scalars(parse_key_value_lines(capture.stdout))

    def constant_metrics(self) -> List[MetricValue]:
        try:
            page_size = system_page_size()
        except (ValueError, OSError) as e:
            logger.warning("Page size unavailable", error=str(e))
            return []
        return [MetricValue(d.VMSTAT_PAGE_SIZE, page_size)]
