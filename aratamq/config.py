"""Locations of the broker's log and queue files."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

ROOT_DIR_ENV = "ARATAMQ_DIR"


def _default_root_dir() -> Path:
    return Path(os.environ.get(ROOT_DIR_ENV) or Path.cwd())


@dataclass(frozen=True)
class ArataMQConfig:
    """File locations used by the broker and its processes."""

    root_dir: Path = field(default_factory=_default_root_dir)
    log_file: str = "aratamq.log"
    queue_file: str = "queue.config"

    def __post_init__(self) -> None:
        object.__setattr__(self, "root_dir", Path(self.root_dir))

    @property
    def log_file_dir(self) -> Path:
        return self.root_dir / "files"

    @property
    def queue_file_dir(self) -> Path:
        return self.root_dir / "files"