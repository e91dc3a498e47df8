"""Process-wide metric descriptor table.

Every metric the exporter can emit is declared here once. Descriptors are
frozen and shared read-only between collectors and concurrent scrapes.
Declaration order within each group is the order samples are emitted in.
"""
from typing import Tuple
from .models import MetricDescriptor, MetricType


GAUGE = MetricType.GAUGE
COUNTER = MetricType.COUNTER

CORE_LABEL = ("core",)


def _desc(name: str, help_text: str, metric_type: MetricType = GAUGE,
          label_names: Tuple[str, ...] = (), unit: str = "1") -> MetricDescriptor:
    return MetricDescriptor(name=name, help_text=help_text, metric_type=metric_type,
                            label_names=label_names, unit=unit)


# powermetrics --samplers cpu_power,gpu_power
POWERMETRICS_CPU_FREQUENCY = _desc(
    "powermetrics_cpu_frequency_hertz", "Current CPU frequency in Hertz.",
    label_names=CORE_LABEL, unit="hertz")
# Declared for compatibility; the cpu_power sampler never reports temperatures.
POWERMETRICS_CPU_TEMPERATURE = _desc(
    "powermetrics_cpu_temperature_celsius", "Current CPU temperature in Celsius.",
    label_names=("sensor_id",), unit="celsius")
POWERMETRICS_CPU_POWER = _desc(
    "powermetrics_cpu_power_milliwatts", "Current CPU power in milliwatts.", unit="milliwatts")
POWERMETRICS_GPU_POWER = _desc(
    "powermetrics_gpu_power_milliwatts", "Current GPU power in milliwatts.", unit="milliwatts")
POWERMETRICS_CPU_ACTIVE_RESIDENCY = _desc(
    "powermetrics_cpu_active_residency_percent", "Current CPU active residency percentage.",
    label_names=CORE_LABEL, unit="percent")
POWERMETRICS_CPU_IDLE_RESIDENCY = _desc(
    "powermetrics_cpu_idle_residency_percent", "Current CPU idle residency percentage.",
    label_names=CORE_LABEL, unit="percent")
POWERMETRICS_GPU_ACTIVE_RESIDENCY = _desc(
    "powermetrics_gpu_active_residency_percent", "Current GPU active residency percentage.",
    unit="percent")
POWERMETRICS_GPU_IDLE_RESIDENCY = _desc(
    "powermetrics_gpu_idle_residency_percent", "Current GPU idle residency percentage.",
    unit="percent")

POWERMETRICS_DESCRIPTORS = (
    POWERMETRICS_CPU_FREQUENCY,
    POWERMETRICS_CPU_TEMPERATURE,
    POWERMETRICS_CPU_POWER,
    POWERMETRICS_GPU_POWER,
    POWERMETRICS_CPU_ACTIVE_RESIDENCY,
    POWERMETRICS_CPU_IDLE_RESIDENCY,
    POWERMETRICS_GPU_ACTIVE_RESIDENCY,
    POWERMETRICS_GPU_IDLE_RESIDENCY,
)


# vm_stat
VMSTAT_PAGES_FREE = _desc("vmstat_pages_free_count", "Number of free pages.")
VMSTAT_PAGES_ACTIVE = _desc("vmstat_pages_active_count", "Number of active pages.")
VMSTAT_PAGES_INACTIVE = _desc("vmstat_pages_inactive_count", "Number of inactive pages.")
VMSTAT_PAGES_SPECULATIVE = _desc("vmstat_pages_speculative_count", "Number of speculative pages.")
VMSTAT_PAGES_THROTTLED = _desc("vmstat_pages_throttled_count", "Number of throttled pages.")
VMSTAT_PAGES_WIRED = _desc("vmstat_pages_wired_count", "Number of wired down pages.")
VMSTAT_PAGES_PURGEABLE = _desc("vmstat_pages_purgeable_count", "Number of purgeable pages.")
VMSTAT_COW_FAULTS = _desc("vmstat_pages_cow_faults_total", "Number of copy-on-write faults.", COUNTER)
VMSTAT_ZERO_FILLED = _desc("vmstat_pages_zero_filled_total", "Number of pages zero filled.", COUNTER)
VMSTAT_REACTIVATED = _desc("vmstat_pages_reactivated_total", "Number of pages reactivated.", COUNTER)
VMSTAT_PURGED = _desc("vmstat_pages_purged_total", "Number of pages purged.", COUNTER)
VMSTAT_FILE_BACKED = _desc("vmstat_pages_file_backed_count", "Number of pages file-backed.")
VMSTAT_ANONYMOUS = _desc("vmstat_pages_anonymous_count", "Number of pages anonymous.")
# vm_stat has no matching line; kept so the described set stays stable.
VMSTAT_UNCOMPRESSED = _desc("vmstat_pages_uncompressed_total", "Number of pages uncompressed.", COUNTER)
VMSTAT_COMPRESSOR = _desc("vmstat_pages_compressor_count", "Number of pages used by compressor.")
VMSTAT_DECOMPRESSED = _desc("vmstat_pages_decompressed_total", "Number of pages decompressed.", COUNTER)
VMSTAT_COMPRESSED = _desc("vmstat_pages_compressed_total", "Number of pages compressed.", COUNTER)
VMSTAT_PAGE_INS = _desc("vmstat_page_ins_total", "Number of pageins.", COUNTER)
VMSTAT_PAGE_OUTS = _desc("vmstat_page_outs_total", "Number of pageouts.", COUNTER)
VMSTAT_FAULTS = _desc("vmstat_faults_total", "Number of page faults.", COUNTER)
VMSTAT_SWAP_INS = _desc("vmstat_swap_ins_total", "Number of swapins.", COUNTER)
VMSTAT_SWAP_OUTS = _desc("vmstat_swap_outs_total", "Number of swapouts.", COUNTER)
VMSTAT_PAGE_SIZE = _desc("vmstat_page_size_bytes", "Size of pages in bytes.", unit="bytes")

VMSTAT_DESCRIPTORS = (
    VMSTAT_PAGES_FREE,
    VMSTAT_PAGES_ACTIVE,
    VMSTAT_PAGES_INACTIVE,
    VMSTAT_PAGES_SPECULATIVE,
    VMSTAT_PAGES_THROTTLED,
    VMSTAT_PAGES_WIRED,
    VMSTAT_PAGES_PURGEABLE,
    VMSTAT_COW_FAULTS,
    VMSTAT_ZERO_FILLED,
    VMSTAT_REACTIVATED,
    VMSTAT_PURGED,
    VMSTAT_FILE_BACKED,
    VMSTAT_ANONYMOUS,
    VMSTAT_UNCOMPRESSED,
    VMSTAT_COMPRESSOR,
    VMSTAT_DECOMPRESSED,
    VMSTAT_COMPRESSED,
    VMSTAT_PAGE_INS,
    VMSTAT_PAGE_OUTS,
    VMSTAT_FAULTS,
    VMSTAT_SWAP_INS,
    VMSTAT_SWAP_OUTS,
    VMSTAT_PAGE_SIZE,
)


# macmon pipe
MACMON_ALL_POWER = _desc("macmon_all_power_watts", "Total power consumption in Watts.", unit="watts")
MACMON_ANE_POWER = _desc("macmon_ane_power_watts", "Current ANE power in Watts.", unit="watts")
MACMON_CPU_POWER = _desc("macmon_cpu_power_watts", "Current CPU power in Watts.", unit="watts")
MACMON_GPU_POWER = _desc("macmon_gpu_power_watts", "Current GPU power in Watts.", unit="watts")
MACMON_GPU_RAM_POWER = _desc("macmon_gpu_ram_power_watts", "Current GPU RAM power in Watts.", unit="watts")
MACMON_RAM_POWER = _desc("macmon_ram_power_watts", "Current RAM power in Watts.", unit="watts")
MACMON_SYS_POWER = _desc("macmon_sys_power_watts", "Current system power in Watts.", unit="watts")
MACMON_CPU_TEMP = _desc("macmon_cpu_temperature_celsius", "Average CPU temperature in Celsius.", unit="celsius")
MACMON_GPU_TEMP = _desc("macmon_gpu_temperature_celsius", "Average GPU temperature in Celsius.", unit="celsius")
MACMON_ECPU_FREQUENCY = _desc(
    "macmon_ecpu_frequency_megahertz", "Efficiency CPU frequency in Megahertz.", unit="megahertz")
MACMON_ECPU_USAGE = _desc("macmon_ecpu_usage_percent", "Efficiency CPU usage percentage.", unit="percent")
MACMON_PCPU_FREQUENCY = _desc(
    "macmon_pcpu_frequency_megahertz", "Performance CPU frequency in Megahertz.", unit="megahertz")
MACMON_PCPU_USAGE = _desc("macmon_pcpu_usage_percent", "Performance CPU usage percentage.", unit="percent")
MACMON_GPU_FREQUENCY = _desc("macmon_gpu_frequency_megahertz", "GPU frequency in Megahertz.", unit="megahertz")
MACMON_GPU_USAGE = _desc("macmon_gpu_usage_percent", "GPU usage percentage.", unit="percent")
MACMON_RAM_TOTAL = _desc("macmon_memory_ram_total_bytes", "Total RAM size in bytes.", unit="bytes")
MACMON_RAM_USED = _desc("macmon_memory_ram_used_bytes", "Used RAM size in bytes.", unit="bytes")
MACMON_SWAP_TOTAL = _desc("macmon_memory_swap_total_bytes", "Total swap size in bytes.", unit="bytes")
MACMON_SWAP_USED = _desc("macmon_memory_swap_used_bytes", "Used swap size in bytes.", unit="bytes")

MACMON_DESCRIPTORS = (
    MACMON_ALL_POWER,
    MACMON_ANE_POWER,
    MACMON_CPU_POWER,
    MACMON_GPU_POWER,
    MACMON_GPU_RAM_POWER,
    MACMON_RAM_POWER,
    MACMON_SYS_POWER,
    MACMON_CPU_TEMP,
    MACMON_GPU_TEMP,
    MACMON_ECPU_FREQUENCY,
    MACMON_ECPU_USAGE,
    MACMON_PCPU_FREQUENCY,
    MACMON_PCPU_USAGE,
    MACMON_GPU_FREQUENCY,
    MACMON_GPU_USAGE,
    MACMON_RAM_TOTAL,
    MACMON_RAM_USED,
    MACMON_SWAP_TOTAL,
    MACMON_SWAP_USED,
)

ALL_DESCRIPTORS = POWERMETRICS_DESCRIPTORS + VMSTAT_DESCRIPTORS + MACMON_DESCRIPTORS
