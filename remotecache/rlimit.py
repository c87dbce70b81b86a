"""Raise the soft limit on open files as far as the system allows."""

from __future__ import annotations

import logging
import subprocess
import sys

try:
    import resource
except ImportError:  # Not available on Windows.
    resource = None

_log = logging.getLogger(__name__)


def _darwin_max_files() -> int | None:
    try:
        completed = subprocess.run(
            ["/usr/sbin/sysctl", "-n", "kern.maxfilesperproc"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as err:
        _log.warning("Failed to find rlimit from sysctl: %s", err)
        return None
    try:
        return int(completed.stdout.strip("\n"))
    except ValueError as err:
        _log.warning("Failed to parse rlimit from sysctl: %s", err)
        return None


def raise_open_file_limit() -> int | None:
    """Set the soft RLIMIT_NOFILE to the hard limit.

    Returns the new limit, or None if it could not be changed or the
    platform has no such limit.
    """
    if resource is None:
        return None

    try:
        soft, hard = resource.getrlimit(resource.RLIMIT_NOFILE)
    except (OSError, ValueError) as err:
        _log.warning("Failed to find rlimit from getrlimit: %s", err)
        return None

    if sys.platform == "darwin":
        # getrlimit can report a hard limit the kernel will not honour.
        sysctl_max = _darwin_max_files()
        if sysctl_max is None:
            return None
        if hard == resource.RLIM_INFINITY or hard > sysctl_max:
            hard = sysctl_max

    _log.info("Initial RLIMIT_NOFILE cur: %d max: %d", soft, hard)
    _log.info("Setting RLIMIT_NOFILE cur: %d max: %d", hard, hard)

    try:
        resource.setrlimit(resource.RLIMIT_NOFILE, (hard, hard))
    except (OSError, ValueError) as err:
        _log.warning("Failed to set rlimit: %s", err)
        return None
    return hard