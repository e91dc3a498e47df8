"""Tests for the three snapshot parsing strategies"""
from pathlib import Path
import pytest

from collectors.errors import RecordDecodeError
from collectors.powermetrics import SCAN_RULES, CPU_POWER, GPU_POWER, CPU_FREQUENCY
from metrics.models import ParsedValue
from parsers.key_value import parse_float, parse_key_value_lines, snapshot_from_scalars
from parsers.text_scan import ScanRule, scan_text
from parsers.json_records import decode_record, decode_records, snapshot_from_records


FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


class TestParseFloat:
    """Test tolerant float parsing"""

    def test_valid_numbers(self):
        assert parse_float("13717") == 13717.0
        assert parse_float("0.04") == 0.04
        assert parse_float("-3.5") == -3.5

    def test_invalid_numbers_return_none(self):
        assert parse_float("") is None
        assert parse_float("(page size of 16384 bytes)") is None
        assert parse_float("12abc") is None
        assert parse_float(None) is None

    def test_non_finite_values_rejected(self):
        assert parse_float("nan") is None
        assert parse_float("inf") is None
        assert parse_float("-Infinity") is None


class TestKeyValueParser:
    """Test line-oriented key: value parsing"""

    def test_parses_trimmed_key_and_strips_period(self):
        values = parse_key_value_lines("Pages free:                               13717.\n")

        assert values == {"Pages free": 13717.0}

    def test_skips_banner_line(self):
        values = parse_key_value_lines(load_fixture("vm_stat.txt"))

        assert "Mach Virtual Memory Statistics" not in values
        assert values["Pages free"] == 13717.0
        assert values["Swapouts"] == 478211.0

    def test_keeps_quoted_keys_verbatim(self):
        values = parse_key_value_lines(load_fixture("vm_stat.txt"))

        assert values['"Translation faults"'] == 816379285.0

    def test_lines_without_colon_are_ignored(self):
        values = parse_key_value_lines("no separator here 42.\nPages active: 7.\n")

        assert values == {"Pages active": 7.0}

    def test_non_numeric_value_is_dropped_not_zeroed(self):
        values = parse_key_value_lines("Pages free: lots.\nPages active: 12.\n")

        assert "Pages free" not in values
        assert values["Pages active"] == 12.0

    def test_value_with_extra_colon_is_skipped(self):
        values = parse_key_value_lines("Time: 10:02:13\nPageins: 5.\n")

        assert values == {"Pageins": 5.0}

    def test_last_duplicate_wins(self):
        values = parse_key_value_lines("Pageins: 1.\nPageins: 2.\n")

        assert values["Pageins"] == 2.0

    def test_empty_key_is_ignored(self):
        assert parse_key_value_lines(": 12.\n") == {}

    def test_snapshot_from_scalars(self):
        snapshot = snapshot_from_scalars({"Pages free": 1.0})

        assert snapshot == {"Pages free": [ParsedValue(1.0)]}


class TestTextScanner:
    """Test marker scanning of powermetrics output"""

    def setup_method(self):
        """Setup test fixtures"""
        self.snapshot = scan_text(load_fixture("powermetrics_cpu_gpu.txt"), SCAN_RULES)

    def test_power_values(self):
        assert self.snapshot["CPU Power"] == [ParsedValue(1339.0)]
        assert self.snapshot["GPU Power"] == [ParsedValue(6.0)]

    def test_repeated_power_line_keeps_first_value(self):
        text = "CPU Power: 1339 mW\nCPU Power: 2000 mW\n"

        snapshot = scan_text(text, SCAN_RULES)

        assert snapshot["CPU Power"] == [ParsedValue(1339.0)]

    def test_unparsable_power_does_not_consume_rule(self):
        text = "CPU Power: ??? mW\nCPU Power: 812 mW\n"

        snapshot = scan_text(text, [CPU_POWER])

        assert snapshot["CPU Power"] == [ParsedValue(812.0)]

    def test_frequency_is_raw_megahertz_with_core_label(self):
        assert self.snapshot["CPU frequency"] == [
            ParsedValue(1318.0, ("cpu0",)),
            ParsedValue(1287.0, ("cpu1",)),
            ParsedValue(2400.0, ("cpu2",)),
            ParsedValue(2400.0, ("cpu3",)),
        ]

    def test_cluster_lines_are_not_per_core(self):
        cores = [value.labels for value in self.snapshot["CPU active residency"]]

        assert cores == [("cpu0",), ("cpu1",), ("cpu2",), ("cpu3",)]

    def test_residency_percent_sign_stripped(self):
        assert self.snapshot["CPU active residency"][0] == ParsedValue(41.33, ("cpu0",))
        assert self.snapshot["CPU idle residency"][3] == ParsedValue(96.98, ("cpu3",))

    def test_gpu_residency(self):
        assert self.snapshot["GPU active residency"] == [ParsedValue(2.25)]
        assert self.snapshot["GPU idle residency"] == [ParsedValue(97.75)]

    def test_combined_power_is_not_cpu_power(self):
        snapshot = scan_text("Combined Power (CPU + GPU + ANE): 1345 mW\n", SCAN_RULES)

        assert snapshot == {}

    def test_marker_without_unit_is_ignored(self):
        snapshot = scan_text("CPU Power: 1339\nCPU 0 frequency: 2064\n", SCAN_RULES)

        assert snapshot == {}

    def test_unrelated_text_yields_nothing(self):
        text = "Machine model: MacBookPro18,3\n**** Processor usage ****\n\n"

        assert scan_text(text, SCAN_RULES) == {}

    def test_core_label_must_be_integer(self):
        snapshot = scan_text("CPU x frequency: 2064 MHz\n", [CPU_FREQUENCY])

        assert snapshot == {}

    def test_duplicate_core_line_keeps_first(self):
        text = "CPU 3 frequency: 2400 MHz\nCPU 3 frequency: 600 MHz\n"

        snapshot = scan_text(text, [CPU_FREQUENCY])

        assert snapshot["CPU frequency"] == [ParsedValue(2400.0, ("cpu3",))]

    def test_malformed_line_does_not_stop_scan(self):
        text = "CPU 0 frequency: fast MHz\nCPU 1 frequency: 1200 MHz\nGPU Power: 6 mW\n"

        snapshot = scan_text(text, SCAN_RULES)

        assert snapshot["CPU frequency"] == [ParsedValue(1200.0, ("cpu1",))]
        assert snapshot["GPU Power"] == [ParsedValue(6.0)]

    def test_missing_value_is_skipped(self):
        snapshot = scan_text("GPU idle residency: %\n", SCAN_RULES)

        assert snapshot == {}

    def test_negative_residency_is_dropped(self):
        text = "CPU 0 active residency:  -1.50%\nCPU 1 active residency:  12.00%\nGPU idle residency:  -3.00%\n"

        snapshot = scan_text(text, SCAN_RULES)

        assert snapshot["CPU active residency"] == [ParsedValue(12.0, ("cpu1",))]
        assert "GPU idle residency" not in snapshot

    def test_zero_residency_is_kept(self):
        snapshot = scan_text("CPU 2 idle residency:   0.00%\n", SCAN_RULES)

        assert snapshot["CPU idle residency"] == [ParsedValue(0.0, ("cpu2",))]

    def test_custom_rule(self):
        rule = ScanRule("ANE Power", ("ANE Power:",), "mW", "Power:", once=True)

        snapshot = scan_text("ANE Power: 42 mW\n", [rule])

        assert snapshot["ANE Power"] == [ParsedValue(42.0)]

    def test_gpu_power_rule_matches_only_gpu_line(self):
        snapshot = scan_text("CPU Power: 10 mW\n", [GPU_POWER])

        assert snapshot == {}


class TestJsonRecords:
    """Test macmon JSON record decoding"""

    def test_decodes_fixture(self):
        records = decode_records(load_fixture("macmon_pipe.jsonl"))

        assert len(records) == 1
        assert records[0].cpu_power == pytest.approx(0.20486385)
        assert records[0].temp.cpu_temp_avg == pytest.approx(43.73614)
        assert records[0].memory.ram_total == 25769803776
        assert records[0].ecpu_usage == [1181, pytest.approx(0.082656614)]

    def test_invalid_line_raises_record_decode_error(self):
        with pytest.raises(RecordDecodeError) as exc_info:
            decode_record("{not json", line_number=3)

        assert exc_info.value.line_number == 3

    def test_wrong_type_raises_record_decode_error(self):
        with pytest.raises(RecordDecodeError):
            decode_record('{"cpu_power": "hot"}')

    def test_bad_line_does_not_block_following_lines(self):
        text = 'garbage\n{"cpu_power": 1.5}\n\n{"gpu_power": 0.5}\n'

        records = decode_records(text)

        assert [r.cpu_power for r in records] == [1.5, None]
        assert records[1].gpu_power == 0.5

    def test_absent_fields_produce_no_keys(self):
        snapshot = snapshot_from_records(decode_records('{"sys_power": 5.0}'))

        assert snapshot == {"sys_power": [ParsedValue(5.0)]}

    def test_usage_arrays_need_two_positions(self):
        text = '{"ecpu_usage": [1181], "pcpu_usage": [1974, 0.25], "gpu_usage": []}'

        snapshot = snapshot_from_records(decode_records(text))

        assert "ecpu_usage.frequency" not in snapshot
        assert "ecpu_usage.percent" not in snapshot
        assert "gpu_usage.frequency" not in snapshot
        assert snapshot["pcpu_usage.frequency"] == [ParsedValue(1974.0)]
        assert snapshot["pcpu_usage.percent"] == [ParsedValue(0.25)]

    def test_later_record_overrides_earlier_keys(self):
        text = '{"cpu_power": 1.0, "gpu_power": 2.0}\n{"cpu_power": 3.0}\n'

        snapshot = snapshot_from_records(decode_records(text))

        assert snapshot["cpu_power"] == [ParsedValue(3.0)]
        assert snapshot["gpu_power"] == [ParsedValue(2.0)]

    def test_nested_keys(self):
        snapshot = snapshot_from_records(decode_records(load_fixture("macmon_pipe.jsonl")))

        assert snapshot["temp.gpu_temp_avg"][0].value == pytest.approx(36.95167)
        assert snapshot["memory.swap_usage"] == [ParsedValue(2602434560.0)]
        assert len(snapshot) == 19

    def test_null_nested_object_keeps_other_fields(self):
        text = '{"cpu_power": 1.5, "gpu_power": 0.5, "temp": null, "memory": {"ram_total": 10}}'

        records = decode_records(text)
        snapshot = snapshot_from_records(records)

        assert len(records) == 1
        assert snapshot == {
            "cpu_power": [ParsedValue(1.5)],
            "gpu_power": [ParsedValue(0.5)],
            "memory.ram_total": [ParsedValue(10.0)],
        }

    def test_null_memory_object(self):
        snapshot = snapshot_from_records(decode_records('{"memory": null, "temp": {"cpu_temp_avg": 40.5}}'))

        assert snapshot == {"temp.cpu_temp_avg": [ParsedValue(40.5)]}

    def test_non_finite_values_are_dropped_per_field(self):
        text = '{"cpu_power": NaN, "gpu_power": Infinity, "ane_power": 0.25, "gpu_usage": [-Infinity, 0.5]}'

        snapshot = snapshot_from_records(decode_records(text))

        assert snapshot == {
            "ane_power": [ParsedValue(0.25)],
            "gpu_usage.percent": [ParsedValue(0.5)],
        }
