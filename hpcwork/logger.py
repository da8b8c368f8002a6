"""Thread-safe line logger stamping each record with Unix milliseconds."""

from __future__ import annotations

import sys
import threading
import time
from enum import Enum
from pathlib import Path
from typing import Optional, TextIO, Union


class Level(Enum):
    DEBUG = 0
    INFO = 1
    ALL = 2


_PREFIXES = {Level.INFO: "[INFO]: ", Level.DEBUG: "[DEBUG]: "}


class Logger:
    """Write comma-separated records to standard output or to a file.

    Records on standard output carry a level prefix; records in a file do not.
    """

    def __init__(self, filename: Optional[Union[str, Path]] = None, level: Level = Level.ALL) -> None:
        self._lock = threading.Lock()
        self.level = level
        if filename is None:
            self._stream: TextIO = sys.stdout
            self._owned = False
        else:
            self._stream = open(filename, "w")
            self._owned = True

    @property
    def with_stdout(self) -> bool:
        return not self._owned

    def log(self, *args: object, level: Level = Level.INFO) -> None:
        """Write ``millis,arg1,arg2,...`` as one line."""
        with self._lock:
            millis = time.time_ns() // 1_000_000
            prefix = _PREFIXES.get(level, "") if self.with_stdout else ""
            fields = ",".join([str(millis), *(str(a) for a in args)])
            self._stream.write(f"{prefix}{fields}\n")
            self._stream.flush()

    def close(self) -> None:
        with self._lock:
            if self._owned and not self._stream.closed:
                self._stream.close()

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()