"""Runtime settings, read from ``BOOKSTORE_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    lock_timeout: float = 5.0
    max_attempts: int = 3
    log_level: str = "WARNING"

    @property
    def books_file(self) -> Path:
        return self.data_dir / "books.json"

    @property
    def orders_file(self) -> Path:
        return self.data_dir / "orders.json"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    defaults = Settings()

    data_dir = env.get("BOOKSTORE_DATA_DIR")
    lock_timeout = _parse(env, "BOOKSTORE_LOCK_TIMEOUT", float, defaults.lock_timeout)
    max_attempts = _parse(env, "BOOKSTORE_MAX_ATTEMPTS", int, defaults.max_attempts)
    if lock_timeout <= 0:
        raise ValueError("BOOKSTORE_LOCK_TIMEOUT must be positive")
    if max_attempts < 1:
        raise ValueError("BOOKSTORE_MAX_ATTEMPTS must be at least 1")

    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else defaults.data_dir,
        lock_timeout=lock_timeout,
        max_attempts=max_attempts,
        log_level=env.get("BOOKSTORE_LOG_LEVEL", defaults.log_level).upper(),
    )


def _parse(env: Mapping[str, str], name: str, cast, default):
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name}: expected {cast.__name__}, got {raw!r}") from None
