"""
Runtime settings for the item picker backend.

Values come from ``ITEMPICKER_*`` environment variables (a ``.env`` file is
loaded first by main.py), falling back to the defaults below.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .shared.logger import get_logger

logger = get_logger(__name__)

_ENV_PREFIX = "ITEMPICKER_"

DEFAULT_TOTAL_ITEMS = 1_000_000
DEFAULT_ADD_BATCH_INTERVAL = 10.0
DEFAULT_COMMIT_INTERVAL = 1.0


@dataclass(frozen=True)
class AppSettings:
    """Settings shared by the store, the scheduler and the server."""

    total_items: int = DEFAULT_TOTAL_ITEMS
    add_batch_interval: float = DEFAULT_ADD_BATCH_INTERVAL
    commit_interval: float = DEFAULT_COMMIT_INTERVAL
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 5000

    def __post_init__(self):
        if self.total_items < 1:
            raise ValueError(f"total_items must be positive, got {self.total_items}")
        if self.add_batch_interval <= 0:
            raise ValueError(
                f"add_batch_interval must be positive, got {self.add_batch_interval}"
            )
        if self.commit_interval <= 0:
            raise ValueError(f"commit_interval must be positive, got {self.commit_interval}")
        if self.commit_interval >= self.add_batch_interval:
            logger.warning(
                "Commit interval (%.2fs) is not shorter than add batch interval (%.2fs)",
                self.commit_interval,
                self.add_batch_interval,
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppSettings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from, ``os.environ`` when omitted.

        Raises:
            ValueError: If a variable cannot be parsed or is out of range.
        """
        env = os.environ if environ is None else environ

        def _get(name: str, default):
            raw = env.get(_ENV_PREFIX + name)
            if raw is None or raw.strip() == "":
                return default
            try:
                return type(default)(raw.strip())
            except ValueError:
                raise ValueError(f"Invalid value for {_ENV_PREFIX}{name}: {raw!r}") from None

        return cls(
            total_items=_get("TOTAL_ITEMS", DEFAULT_TOTAL_ITEMS),
            add_batch_interval=_get("ADD_BATCH_INTERVAL", DEFAULT_ADD_BATCH_INTERVAL),
            commit_interval=_get("COMMIT_INTERVAL", DEFAULT_COMMIT_INTERVAL),
            log_level=_get("LOG_LEVEL", "INFO"),
            host=_get("HOST", "127.0.0.1"),
            port=_get("PORT", 5000),
        )
