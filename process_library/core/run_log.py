"""
Run log: the sink behind `ctx.log`.

Entries are kept in memory for the run record and forwarded to the
standard `logging` hierarchy under `process_library.run`.
"""

import logging
import sys
from typing import Callable, Dict, List, Optional

from .models import LogEntry


LOGGER_NAME = "process_library.run"

LEVELS: Dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class RunLog:
    """Collects `ctx.log` lines for one run"""

    def __init__(self, run_id: str, clock: Callable[[], float],
                 logger: Optional[logging.Logger] = None):
        self.run_id = run_id
        self._clock = clock
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self.entries: List[LogEntry] = []

    def log(self, level: str, message: str) -> LogEntry:
        """
        Record one line.

        Raises:
            ValueError: If `level` is not one of debug/info/warn/warning/error
        """
        normalized = (level or "").lower()
        if normalized not in LEVELS:
            raise ValueError(f"Unknown log level: {level!r}. Expected one of {sorted(LEVELS)}")
        if normalized == "warn":
            normalized = "warning"

        entry = LogEntry(level=normalized, message=str(message), timestamp=self._clock())
        self.entries.append(entry)
        self._logger.log(LEVELS[normalized], "[%s] %s", self.run_id, entry.message)
        return entry

    def messages(self, level: Optional[str] = None) -> List[str]:
        if level is None:
            return [e.message for e in self.entries]
        return [e.message for e in self.entries if e.level == level]


def configure_logging(level: str = "info") -> None:
    """Attach a stderr handler to the `process_library` logger (CLI use)"""
    normalized = (level or "info").lower()
    if normalized not in LEVELS:
        raise ValueError(f"Unknown log level: {level!r}")

    root = logging.getLogger("process_library")
    root.setLevel(LEVELS[normalized])
    # sys.stderr may have been swapped since the last call
    for old in [h for h in root.handlers if getattr(h, "_process_library", False)]:
        root.removeHandler(old)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._process_library = True  # type: ignore[attr-defined]
    root.addHandler(handler)
