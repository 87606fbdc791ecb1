"""Process-wide file logger."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, ClassVar, Optional

_PATTERN = "[%(asctime)s.%(msecs)03d] [%(name)s] [%(levelname)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _Formatter(logging.Formatter):
    """Formatter that writes level names in lower case."""

    def __init__(self) -> None:
        super().__init__(_PATTERN, datefmt=_DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = record.levelname.lower()
        return super().format(record)


class Logger:
    """A single named logger writing to one file, shared by the process."""

    _instance: ClassVar[Optional["Logger"]] = None

    def __init__(self, name: str, log_dir: "str | os.PathLike[str]", log_file: str, truncate: bool) -> None:
        self.path = Path(f"{os.fspath(log_dir)}/{log_file}")
        self.path.parent.mkdir(parents=True, exist_ok=True)

        self._handler = logging.FileHandler(
            self.path, mode="w" if truncate else "a", encoding="utf-8"
        )
        self._handler.setLevel(logging.INFO)
        self._handler.setFormatter(_Formatter())

        self._logger = logging.getLogger(name)
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False
        self._logger.addHandler(self._handler)

    @classmethod
    def initialize(cls, name: str, log_dir: "str | os.PathLike[str]", log_file: str, truncate: bool) -> None:
        """Create the shared logger unless one already exists."""
        if cls._instance is None:
            cls._instance = cls(name, log_dir, log_file, truncate)

    @classmethod
    def instance(cls) -> "Logger":
        """Return the shared logger; raise RuntimeError if not initialized."""
        if cls._instance is None:
            raise RuntimeError("Logger not initialized")
        return cls._instance

    @classmethod
    def cleanup(cls) -> None:
        """Close and discard the shared logger, if any."""
        if cls._instance is not None:
            cls._instance._close()
            cls._instance = None

    def _close(self) -> None:
        self._logger.removeHandler(self._handler)
        self._handler.close()

    def info(self, fmt: str, *args: Any) -> None:
        self._logger.info(fmt.format(*args))

    def error(self, fmt: str, *args: Any) -> None:
        self._logger.error(fmt.format(*args))

    def warning(self, fmt: str, *args: Any) -> None:
        self._logger.warning(fmt.format(*args))