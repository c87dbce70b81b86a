"""Request URL parsing and helpers for the HTTP cache interface."""

from __future__ import annotations

import enum
import html
import re
from typing import NamedTuple

_BLOB_NAME_SHA256 = re.compile(r"/?(.*/)?(ac/|cas/)([a-f0-9]{64})")


class EntryKind(enum.Enum):
    """The kind of a cache entry."""

    AC = "ac"
    CAS = "cas"
    RAW = "raw"

    def __str__(self) -> str:
        return self.value


class RequestURLError(ValueError):
    """A request path does not name a cache entry."""


class RequestTarget(NamedTuple):
    """The cache entry that a request path refers to."""

    kind: EntryKind
    hash: str
    instance: str


def parse_request_url(url: str, validate_ac: bool) -> RequestTarget:
    """Parse ``[instance/](ac|cas)/<sha256>`` into its kind, hash and instance.

    Action cache entries are of kind AC when ``validate_ac`` is true, and
    RAW otherwise.
    """
    match = _BLOB_NAME_SHA256.fullmatch(url)
    if match is None:
        raise RequestURLError(
            f"resource name must be a SHA256 hash in hex, got '{html.escape(url)}'"
        )

    prefix, kind_part, hash_key = match.groups()
    instance = (prefix or "").removesuffix("/")

    if kind_part == "cas/":
        kind = EntryKind.CAS
    elif validate_ac:
        kind = EntryKind.AC
    else:
        kind = EntryKind.RAW
    return RequestTarget(kind, hash_key, instance)


def blob_path(kind: EntryKind, hash_key: str) -> str:
    """Return the path of a cache entry, as used in log messages."""
    return f"/{kind}/{hash_key}"


def worker_from_address(addr: str) -> str:
    """Return the worker name recorded for an upload from ``addr``."""
    return addr or "unknown"