"""powermetrics power, frequency and residency collector"""
from metrics import descriptors as d
from metrics.mapper import MHZ_TO_HZ, MappingRule
from metrics.models import RawCapture, Snapshot
from parsers.text_scan import ScanRule, scan_text
from .base import BaseCollector


# CPU Power: 1339 mW
CPU_POWER = ScanRule("CPU Power", ("CPU Power:",), "mW", "Power:", once=True)
# GPU Power: 6 mW
GPU_POWER = ScanRule("GPU Power", ("GPU Power:",), "mW", "Power:", once=True)
# CPU 0 frequency: 2064 MHz
CPU_FREQUENCY = ScanRule("CPU frequency", ("frequency:", "CPU"), "MHz", "frequency:", label_token="CPU")
# CPU 0 active residency:  99.96% (600 MHz: 12% ...)
CPU_ACTIVE_RESIDENCY = ScanRule(
    "CPU active residency", ("active residency:", "CPU"), "%", "residency:", label_token="CPU", minimum=0.0)
# CPU 0 idle residency:   0.04%
CPU_IDLE_RESIDENCY = ScanRule(
    "CPU idle residency", ("idle residency:", "CPU"), "%", "residency:", label_token="CPU", minimum=0.0)
# GPU HW active residency:   2.25% (389 MHz: 2.2% ...)
GPU_ACTIVE_RESIDENCY = ScanRule(
    "GPU active residency", ("GPU HW active residency:",), "%", "residency:", once=True, minimum=0.0)
# GPU idle residency:  97.75%
GPU_IDLE_RESIDENCY = ScanRule(
    "GPU idle residency", ("GPU idle residency:",), "%", "residency:", once=True, minimum=0.0)

SCAN_RULES = (
    CPU_POWER,
    GPU_POWER,
    CPU_FREQUENCY,
    CPU_ACTIVE_RESIDENCY,
    CPU_IDLE_RESIDENCY,
    GPU_ACTIVE_RESIDENCY,
    GPU_IDLE_RESIDENCY,
)

MAPPING_RULES = (
    MappingRule(CPU_FREQUENCY.key, d.POWERMETRICS_CPU_FREQUENCY, scale=MHZ_TO_HZ),
    MappingRule(CPU_POWER.key, d.POWERMETRICS_CPU_POWER),
    MappingRule(GPU_POWER.key, d.POWERMETRICS_GPU_POWER),
    MappingRule(CPU_ACTIVE_RESIDENCY.key, d.POWERMETRICS_CPU_ACTIVE_RESIDENCY),
    MappingRule(CPU_IDLE_RESIDENCY.key, d.POWERMETRICS_CPU_IDLE_RESIDENCY),
    MappingRule(GPU_ACTIVE_RESIDENCY.key, d.POWERMETRICS_GPU_ACTIVE_RESIDENCY),
    MappingRule(GPU_IDLE_RESIDENCY.key, d.POWERMETRICS_GPU_IDLE_RESIDENCY),
)


class PowermetricsCollector(BaseCollector):
    """Collect CPU/GPU power, per-core frequency and residency from powermetrics.

    powermetrics needs root; without it the source fails and the collector
    contributes nothing for that scrape.
    """

    command = ("powermetrics", "--samplers", "cpu_power,gpu_power", "-i", "1000", "-n", "1")
    default_timeout = 10.0
    descriptors = d.POWERMETRICS_DESCRIPTORS
    mapping_rules = MAPPING_RULES

    def __init__(self, config=None):
        super().__init__(config, "powermetrics", "CPU and GPU power, frequency and residency from powermetrics")

    def parse(self, capture: RawCapture) -> Snapshot:
        return scan_text(capture.stdout, SCAN_RULES)
