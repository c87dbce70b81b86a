"""Random blobs, digests and a silent logger, for exercising the cache."""

from __future__ import annotations

import hashlib
import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Digest:
    """A content digest: the SHA256 hex hash and size of a blob."""

    hash: str
    size_bytes: int


def random_data_and_hash(size: int) -> tuple[bytes, str]:
    """Return ``size`` random bytes and their SHA256 hex digest."""
    if size < 0:
        raise ValueError(f"size must not be negative, got {size}")
    data = os.urandom(size)
    return data, hashlib.sha256(data).hexdigest()


def random_data_and_digest(size: int) -> tuple[bytes, Digest]:
    """Return ``size`` random bytes and their Digest."""
    data, hash_key = random_data_and_hash(size)
    return data, Digest(hash=hash_key, size_bytes=size)


def silent_logger() -> logging.Logger:
    """Return a logger that discards everything."""
    logger = logging.getLogger("remotecache.silent")
    logger.propagate = False
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger