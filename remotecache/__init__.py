"""Building blocks for a remote build cache server: request paths, validation, timers, temp files, uploads and flags."""

__version__ = "0.1.0"

__all__ = [
    "annotate",
    "backendproxy",
    "blobs",
    "flags",
    "http",
    "idle",
    "rlimit",
    "tempfiles",
    "usage",
    "validate",
]