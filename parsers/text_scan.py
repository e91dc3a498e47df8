"""Marker scanning for free-text tool output such as powermetrics.

Each metric is described by a ``ScanRule``: the literal substrings a line
must contain, the unit that must appear on it, and the token that precedes
the value. Format drift in the upstream tool should only ever need an edit
to a rule, never to the scanner.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple
from metrics.models import ParsedValue, Snapshot
from .key_value import parse_float


@dataclass(frozen=True)
class ScanRule:
    """How to recognise one observation in a line of text"""
    key: str
    markers: Tuple[str, ...]
    unit: str
    value_token: str
    label_token: Optional[str] = None
    label_prefix: str = "cpu"
    once: bool = False
    minimum: Optional[float] = None

    def matches(self, line: str) -> bool:
        if self.unit not in line:
            return False
        return all(marker in line for marker in self.markers)

    def extract(self, tokens: Sequence[str]) -> Optional[ParsedValue]:
        """Pull the value (and label) out of a tokenized line"""
        value = None
        for i, token in enumerate(tokens[:-1]):
            if token == self.value_token:
                value = parse_float(_strip_unit(tokens[i + 1], self.unit))
                break
        if value is None:
            return None
        if self.minimum is not None and value < self.minimum:
            return None

        if self.label_token is None:
            return ParsedValue(value)

        label = _token_after(tokens, self.label_token)
        if label is None or not label.isdigit():
            return None
        return ParsedValue(value, (f"{self.label_prefix}{label}",))


def _token_after(tokens: Sequence[str], marker: str) -> Optional[str]:
    for i, token in enumerate(tokens[:-1]):
        if token == marker:
            return tokens[i + 1]
    return None


def _strip_unit(token: str, unit: str) -> str:
    if token.endswith(unit):
        return token[:-len(unit)]
    return token


def scan_text(text: str, rules: Sequence[ScanRule]) -> Snapshot:
    """Apply every rule to every line and collect the matches.

    Rules flagged ``once`` keep their first successful match. Labelled rules
    keep the first value for each label set, so a repeated core line cannot
    produce a duplicate series.
    """
    snapshot: Dict[str, List[ParsedValue]] = {}
    seen: Set[Tuple[str, Tuple[str, ...]]] = set()

    for line in text.splitlines():
        tokens = None
        for rule in rules:
            if rule.once and rule.key in snapshot:
                continue
            if not rule.matches(line):
                continue

            if tokens is None:
                tokens = line.split()
            parsed = rule.extract(tokens)
            if parsed is None:
                continue

            identity = (rule.key, parsed.labels)
            if identity in seen:
                continue
            seen.add(identity)
            snapshot.setdefault(rule.key, []).append(parsed)

    return snapshot
