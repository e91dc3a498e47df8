"""macmon JSON power monitor collector"""
from metrics import descriptors as d
from metrics.models import RawCapture, Snapshot
from parsers.json_records import decode_records, snapshot_from_records
from .base import BaseCollector, rules_for


MAPPING_RULES = rules_for([
    ("all_power", d.MACMON_ALL_POWER),
    ("ane_power", d.MACMON_ANE_POWER),
    ("cpu_power", d.MACMON_CPU_POWER),
    ("gpu_power", d.MACMON_GPU_POWER),
    ("gpu_ram_power", d.MACMON_GPU_RAM_POWER),
    ("ram_power", d.MACMON_RAM_POWER),
    ("sys_power", d.MACMON_SYS_POWER),
    ("temp.cpu_temp_avg", d.MACMON_CPU_TEMP),
    ("temp.gpu_temp_avg", d.MACMON_GPU_TEMP),
    ("ecpu_usage.frequency", d.MACMON_ECPU_FREQUENCY),
    ("ecpu_usage.percent", d.MACMON_ECPU_USAGE),
    ("pcpu_usage.frequency", d.MACMON_PCPU_FREQUENCY),
    ("pcpu_usage.percent", d.MACMON_PCPU_USAGE),
    ("gpu_usage.frequency", d.MACMON_GPU_FREQUENCY),
    ("gpu_usage.percent", d.MACMON_GPU_USAGE),
    ("memory.ram_total", d.MACMON_RAM_TOTAL),
    ("memory.ram_usage", d.MACMON_RAM_USED),
    ("memory.swap_total", d.MACMON_SWAP_TOTAL),
    ("memory.swap_usage", d.MACMON_SWAP_USED),
])


class MacMonCollector(BaseCollector):
    """Collect power, temperature, cluster usage and memory from ``macmon pipe``"""

    command = ("macmon", "pipe", "-s", "1")
    default_timeout = 10.0
    descriptors = d.MACMON_DESCRIPTORS
    mapping_rules = MAPPING_RULES

    def __init__(self, config=None):
        super().__init__(config, "macmon", "Power, temperature and usage from the macmon JSON stream")

    def parse(self, capture: RawCapture) -> Snapshot:
        return snapshot_from_records(decode_records(capture.stdout))
