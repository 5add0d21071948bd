"""Locked, atomically replaced JSON record files.

Every read-modify-write runs under an exclusive ``flock`` on a sibling
``.lock`` file, and every write lands in a temp file that is renamed over
the original.  Readers therefore need no lock: they always see either the
previous or the next committed list, never a partial one.
"""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from bookstore.domain.exceptions import ConcurrentModificationError

_POLL_INTERVAL = 0.01


class JsonRecordFile:

    def __init__(self, file_path: Path, lock_timeout: float = 5.0) -> None:
        self._file_path = file_path
        self._lock_path = file_path.with_name(f".{file_path.name}.lock")
        self._lock_timeout = lock_timeout
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the exclusive write lock, or fail after ``lock_timeout``."""
        deadline = time.monotonic() + self._lock_timeout
        with open(self._lock_path, "a", encoding="utf-8") as lock_file:
            while True:
                try:
                    fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                    break
                except BlockingIOError:
                    if time.monotonic() >= deadline:
                        raise ConcurrentModificationError(
                            f"Timed out after {self._lock_timeout}s waiting for "
                            f"{self._file_path.name}"
                        ) from None
                    time.sleep(_POLL_INTERVAL)
            try:
                yield
            finally:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def load(self) -> list[dict[str, Any]]:
        with open(self._file_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def write(self, records: list[dict[str, Any]]) -> None:
        """Replace the file contents; call only while holding ``locked()``."""
        fd, temp_path = tempfile.mkstemp(
            dir=self._file_path.parent,
            prefix=f".{self._file_path.stem}_",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2)
                f.write("\n")
            os.replace(temp_path, self._file_path)
        except BaseException:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

    def _ensure_file(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        if self._file_path.exists():
            return
        with self.locked():
            if not self._file_path.exists():
                self.write([])
