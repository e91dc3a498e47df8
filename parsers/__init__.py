"""Parsers turning raw command output into snapshots"""
from .key_value import parse_key_value_lines, parse_float, snapshot_from_scalars
from .text_scan import ScanRule, scan_text
from .json_records import MacmonRecord, decode_records, snapshot_from_records

__all__ = [
    "parse_key_value_lines",
    "parse_float",
    "snapshot_from_scalars",
    "ScanRule",
    "scan_text",
    "MacmonRecord",
    "decode_records",
    "snapshot_from_records",
]
