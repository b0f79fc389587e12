"""Environment-driven settings."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

# Default data directory (relative to project root)
DEFAULT_DATA_DIR = Path(__file__).parent.parent / "cities"


def parse_log_level(name: str) -> int:
    """Map a level name like 'info' to its number, WARNING if unknown."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        data_dir = env.get("TAXZONE_DATA_DIR")
        return cls(
            data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
            log_level=env.get("TAXZONE_LOG_LEVEL", "WARNING"),
        )
