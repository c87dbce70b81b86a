"""Creation of uniquely named, exclusively opened temporary cache files."""

from __future__ import annotations

import os
import stat
import threading
import time
from typing import BinaryIO

FINAL_MODE = 0o664
"""Permissions of a cache file once it has been completely written."""

WIP_MODE = FINAL_MODE | stat.S_ISGID
"""Permissions of a cache file still being written; setgid marks it incomplete."""

_FLAGS = os.O_RDWR | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0)
_ATTEMPTS = 10000


class TempfileError(OSError):
    """A temporary file could not be created."""


class TempfileCreator:
    """Creates temp files named ``<base>-<random>`` using a fast LCG."""

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = time.time_ns()
        self._state = seed & 0xFFFFFFFF
        self._lock = threading.Lock()

    def _next_random(self) -> str:
        with self._lock:
            self._state = (self._state * 1664525 + 1013904223) & 0xFFFFFFFF
            value = self._state
        return str(1_000_000_000 + value % 1_000_000_000)[1:]

    def create(self, base: str, legacy: bool = False) -> tuple[BinaryIO, str]:
        """Create and open a new file; return it with its random name part.

        The file has the setgid bit set until the caller chmods it to
        ``FINAL_MODE``. A ``.v1`` suffix is added when ``legacy`` is true.
        """
        for _ in range(_ATTEMPTS):
            random = self._next_random()
            name = f"{base}-{random}.v1" if legacy else f"{base}-{random}"
            try:
                fd = os.open(name, _FLAGS, WIP_MODE)
            except FileExistsError:
                continue
            except OSError as err:
                raise TempfileError(f"Unexpected error opening temp file: {err}") from err
            return os.fdopen(fd, "w+b"), random
        raise TempfileError("Failed to create a temp file")