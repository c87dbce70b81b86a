"""Checks on the immediate fields of an ActionResult."""

from __future__ import annotations

import re
from typing import Any, Iterable

HASH_KEY_PATTERN = re.compile(r"[a-f0-9]{64}")
"""Cache keys are lower case hex SHA256 sums."""


class ValidationError(ValueError):
    """An ActionResult or Digest is malformed."""


def _field(message: Any, name: str) -> Any:
    """Return a message field, or None if it is absent or unset."""
    value = getattr(message, name, None)
    if value is None:
        return None
    has_field = getattr(message, "HasField", None)
    if callable(has_field):
        try:
            if not has_field(name):
                return None
        except ValueError:
            pass
    return value


def _items(message: Any, name: str) -> Iterable[Any]:
    return getattr(message, name, None) or ()


def is_valid_hash(hash_key: str) -> bool:
    """Return whether ``hash_key`` is a lower case hex SHA256 sum."""
    return isinstance(hash_key, str) and HASH_KEY_PATTERN.fullmatch(hash_key) is not None


def validate_digest(digest: Any) -> None:
    """Check a digest's size and hash; a missing digest is accepted."""
    if digest is None:
        return
    if digest.size_bytes < 0:
        raise ValidationError("Digest has negative SizeBytes")
    if not is_valid_hash(digest.hash):
        raise ValidationError(f'Invalid hash: "{digest.hash}"')


def _check_symlinks(symlinks: Iterable[Any], field: str, label: str) -> None:
    for link in symlinks:
        if link is None:
            raise ValidationError(f"nil OutputSymlink in {field}")
        if not link.path:
            raise ValidationError(f"empty path in {field}")
        if not link.target:
            raise ValidationError(f"empty target in {field}")
        if link.path.startswith("/"):
            raise ValidationError(f'absolute path in {label}: "{link.path}"')


def validate_action_result(action_result: Any) -> Any:
    """Validate an ActionResult's own fields and return it.

    Referenced blobs are not checked for existence.
    """
    if action_result is None:
        raise ValidationError("nil ActionResult")

    for output in _items(action_result, "output_files"):
        if output is None:
            raise ValidationError("nil output file")
        if not output.path:
            raise ValidationError("empty path")
        if output.path.startswith("/"):
            raise ValidationError(f'absolute path in output file: "{output.path}"')
        digest = _field(output, "digest")
        if digest is None:
            raise ValidationError(f'nil Digest for path "{output.path}"')
        try:
            validate_digest(digest)
        except ValidationError as err:
            raise ValidationError(f'invalid Digest for path "{output.path}": {err}') from err

    for directory in _items(action_result, "output_directories"):
        if directory is None:
            raise ValidationError("nil output directory")
        if directory.path.startswith("/"):
            raise ValidationError(f'absolute path in output directory: "{directory.path}"')
        tree_digest = _field(directory, "tree_digest")
        if tree_digest is None:
            raise ValidationError(
                f'nil tree digest pointer for output directory: "{directory.path}"'
            )
        try:
            validate_digest(tree_digest)
        except ValidationError as err:
            raise ValidationError(
                f'Invalid TreeDigest for path "{directory.path}": {err}'
            ) from err

    _check_symlinks(
        _items(action_result, "output_file_symlinks"),
        "OutputFileSymlinks",
        "output file symlink",
    )
    _check_symlinks(
        _items(action_result, "output_symlinks"), "OutputSymlinks", "output symlink"
    )
    _check_symlinks(
        _items(action_result, "output_directory_symlinks"),
        "OutputDirectorySymlinks",
        "output directory symlink",
    )

    for name, label in (("stdout_digest", "StdoutDigest"), ("stderr_digest", "StderrDigest")):
        try:
            validate_digest(_field(action_result, name))
        except ValidationError as err:
            raise ValidationError(f"invalid {label}: {err}") from err

    return action_result