"""External command sources"""
import subprocess
import time
from typing import Sequence, Tuple
from metrics.models import RawCapture
from logging_config import get_logger
from .errors import SourceError


logger = get_logger(__name__)


class CommandSource:
    """Run one fixed external command and capture its output.

    Every capture is bounded by ``timeout``. On expiry ``subprocess.run``
    kills the child before the error is reported, so a hung tool never
    outlives the scrape that started it.
    """

    def __init__(self, source_id: str, argv: Sequence[str], timeout: float):
        if not argv:
            raise ValueError("argv must name a command")
        self.source_id = source_id
        self.argv: Tuple[str, ...] = tuple(argv)
        self.timeout = timeout

    def capture(self) -> RawCapture:
        """Run the command once; raise SourceError on any failure"""
        start_time = time.monotonic()
        try:
            result = subprocess.run(
                list(self.argv),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise SourceError(self.source_id, f"timed out after {self.timeout}s")
        except UnicodeDecodeError as e:
            raise SourceError(self.source_id, f"undecodable output: {e}")
        except OSError as e:
            raise SourceError(self.source_id, f"failed to run {self.argv[0]}: {e}")

        duration = time.monotonic() - start_time
        logger.debug(
            "Source captured",
            source=self.source_id,
            returncode=result.returncode,
            duration_seconds=round(duration, 3),
        )

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            reason = f"exited with status {result.returncode}"
            if stderr:
                reason = f"{reason}: {stderr.splitlines()[-1]}"
            raise SourceError(self.source_id, reason)

        return RawCapture(
            source_id=self.source_id,
            argv=self.argv,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
            duration=duration,
        )

    def __repr__(self) -> str:
        return f"CommandSource({self.source_id!r}, {' '.join(self.argv)!r}, timeout={self.timeout})"
