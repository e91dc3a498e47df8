"""Exception types raised by sources and decoders"""


class ExporterError(Exception):
    """Base class for collection errors"""


class SourceError(ExporterError):
    """An external source failed, timed out or produced unreadable output"""

    def __init__(self, source_id: str, reason: str):
        super().__init__(f"{source_id}: {reason}")
        self.source_id = source_id
        self.reason = reason


class RecordDecodeError(ExporterError):
    """A structured record line could not be decoded"""

    def __init__(self, line_number: int, reason: str):
        super().__init__(f"line {line_number}: {reason}")
        self.line_number = line_number
        self.reason = reason
