"""Decoding of the JSON lines emitted by ``macmon pipe``"""
from typing import Dict, List, Optional
from pydantic import BaseModel, ValidationError
from collectors.errors import RecordDecodeError
from metrics.models import ParsedValue, Snapshot
from .key_value import parse_float
from logging_config import get_logger


logger = get_logger(__name__)


class MacmonTemperature(BaseModel):
    """Averaged sensor temperatures"""
    cpu_temp_avg: Optional[float] = None
    gpu_temp_avg: Optional[float] = None


class MacmonMemory(BaseModel):
    """RAM and swap sizes in bytes"""
    ram_total: Optional[int] = None
    ram_usage: Optional[int] = None
    swap_total: Optional[int] = None
    swap_usage: Optional[int] = None


class MacmonRecord(BaseModel):
    """One sample line. Usage arrays hold ``[frequency MHz, usage]``"""
    all_power: Optional[float] = None
    ane_power: Optional[float] = None
    cpu_power: Optional[float] = None
    gpu_power: Optional[float] = None
    gpu_ram_power: Optional[float] = None
    ram_power: Optional[float] = None
    sys_power: Optional[float] = None
    temp: Optional[MacmonTemperature] = None
    ecpu_usage: Optional[List[float]] = None
    pcpu_usage: Optional[List[float]] = None
    gpu_usage: Optional[List[float]] = None
    memory: Optional[MacmonMemory] = None


SCALAR_FIELDS = (
    "all_power",
    "ane_power",
    "cpu_power",
    "gpu_power",
    "gpu_ram_power",
    "ram_power",
    "sys_power",
)
USAGE_FIELDS = ("ecpu_usage", "pcpu_usage", "gpu_usage")


def decode_record(line: str, line_number: int = 0) -> MacmonRecord:
    """Decode a single JSON line or raise RecordDecodeError"""
    try:
        return MacmonRecord.model_validate_json(line)
    except ValidationError as e:
        raise RecordDecodeError(line_number, str(e)) from e


def decode_records(text: str) -> List[MacmonRecord]:
    """Decode every non-blank line; undecodable lines are logged and skipped"""
    records = []

    for line_number, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            records.append(decode_record(line, line_number))
        except RecordDecodeError as e:
            logger.warning(
                "Skipping undecodable record",
                line_number=e.line_number,
                error=e.reason,
                event_type="record_decode_error",
            )

    return records


def _observe(observations: Dict[str, float], key: str, value) -> None:
    # Absent and non-finite fields produce no key
    parsed = parse_float(value)
    if parsed is not None:
        observations[key] = parsed


def record_observations(record: MacmonRecord) -> Dict[str, float]:
    """Flatten a record into observation keys, leaving out absent fields"""
    observations: Dict[str, float] = {}

    for name in SCALAR_FIELDS:
        _observe(observations, name, getattr(record, name))

    if record.temp is not None:
        for name in ("cpu_temp_avg", "gpu_temp_avg"):
            _observe(observations, f"temp.{name}", getattr(record.temp, name))

    for name in USAGE_FIELDS:
        pair = getattr(record, name)
        if pair is None or len(pair) < 2:
            continue
        _observe(observations, f"{name}.frequency", pair[0])
        _observe(observations, f"{name}.percent", pair[1])

    if record.memory is not None:
        for name in ("ram_total", "ram_usage", "swap_total", "swap_usage"):
            _observe(observations, f"memory.{name}", getattr(record.memory, name))

    return observations


def snapshot_from_records(records: List[MacmonRecord]) -> Snapshot:
    """Merge records into one snapshot; later records overwrite earlier keys"""
    merged: Dict[str, float] = {}
    for record in records:
        merged.update(record_observations(record))
    return {key: [ParsedValue(value)] for key, value in merged.items()}
