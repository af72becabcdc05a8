"""Runtime settings for the command-line entry point.

The root click group fills these in from its options, which fall back to
``ORDERDESK_DATA_DIR`` and ``ORDERDESK_LOG_LEVEL``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DATA_DIR_ENV = "ORDERDESK_DATA_DIR"
LOG_LEVEL_ENV = "ORDERDESK_LOG_LEVEL"

# Relative to the working directory the CLI is started from.
DEFAULT_DATA_DIR = Path("data")
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def products_file(self) -> Path:
        return self.data_dir / "products.json"

    @property
    def orders_file(self) -> Path:
        return self.data_dir / "orders.json"
