from dataclasses import dataclass, field
from typing import Optional

import pytest

from remotecache.validate import (
    ValidationError,
    is_valid_hash,
    validate_action_result,
    validate_digest,
)

GOOD_HASH = "fec3be77b8aa0d307ed840581ded3d114c86f36d4914c81e33a72877020c0603"


@dataclass
class Digest:
    hash: str
    size_bytes: int


@dataclass
class OutputFile:
    path: str
    digest: Optional[Digest] = None


@dataclass
class OutputDirectory:
    path: str
    tree_digest: Optional[Digest] = None


@dataclass
class OutputSymlink:
    path: str
    target: str


@dataclass
class ActionResult:
    output_files: list = field(default_factory=list)
    output_directories: list = field(default_factory=list)
    output_file_symlinks: list = field(default_factory=list)
    output_symlinks: list = field(default_factory=list)
    output_directory_symlinks: list = field(default_factory=list)
    stdout_digest: Optional[Digest] = None
    stderr_digest: Optional[Digest] = None


@pytest.mark.parametrize(
    "action_result,expected",
    [
        (None, "nil ActionResult"),
        (ActionResult(output_files=[None]), "nil output file"),
        (ActionResult(output_file_symlinks=[None]), "nil OutputSymlink in OutputFileSymlinks"),
        (ActionResult(output_symlinks=[None]), "nil OutputSymlink in OutputSymlinks"),
        (
            ActionResult(output_directory_symlinks=[None]),
            "nil OutputSymlink in OutputDirectorySymlinks",
        ),
    ],
)
def test_validate_nil_pointers(action_result, expected):
    with pytest.raises(ValidationError) as info:
        validate_action_result(action_result)
    assert str(info.value) == expected


def test_valid_result_is_returned():
    ar = ActionResult(
        output_files=[OutputFile("out/a", Digest(GOOD_HASH, 3))],
        output_directories=[OutputDirectory("out/d", Digest(GOOD_HASH, 10))],
        output_symlinks=[OutputSymlink("out/l", "a")],
        stdout_digest=Digest(GOOD_HASH, 0),
    )
    assert validate_action_result(ar) is ar


def test_empty_result_is_valid():
    ar = ActionResult()
    assert validate_action_result(ar) is ar


@pytest.mark.parametrize(
    "ar,fragment",
    [
        (ActionResult(output_files=[OutputFile("", Digest(GOOD_HASH, 1))]), "empty path"),
        (ActionResult(output_files=[OutputFile("/abs", Digest(GOOD_HASH, 1))]), "absolute path"),
        (ActionResult(output_files=[OutputFile("rel")]), "nil Digest"),
        (ActionResult(output_files=[OutputFile("rel", Digest(GOOD_HASH, -1))]), "negative"),
        (ActionResult(output_directories=[None]), "nil output directory"),
        (ActionResult(output_directories=[OutputDirectory("d")]), "nil tree digest"),
        (ActionResult(output_directories=[OutputDirectory("d", Digest("xyz", 1))]), "Invalid TreeDigest"),
        (ActionResult(output_symlinks=[OutputSymlink("", "t")]), "empty path in OutputSymlinks"),
        (ActionResult(output_symlinks=[OutputSymlink("p", "")]), "empty target in OutputSymlinks"),
        (ActionResult(output_file_symlinks=[OutputSymlink("/p", "t")]), "absolute path in output file symlink"),
        (ActionResult(stdout_digest=Digest("bad", 1)), "invalid StdoutDigest"),
        (ActionResult(stderr_digest=Digest(GOOD_HASH, -5)), "invalid StderrDigest"),
    ],
)
def test_invalid_results(ar, fragment):
    with pytest.raises(ValidationError, match=fragment):
        validate_action_result(ar)


def test_validate_digest_none_accepted():
    assert validate_digest(None) is None


def test_validate_digest_bad_hash_message():
    with pytest.raises(ValidationError) as info:
        validate_digest(Digest("nothex", 1))
    assert str(info.value) == 'Invalid hash: "nothex"'


@pytest.mark.parametrize(
    "value,expected",
    [
        (GOOD_HASH, True),
        (GOOD_HASH.upper(), False),
        (GOOD_HASH[:-1], False),
        (GOOD_HASH + "\n", False),
        (GOOD_HASH + "0", False),
        ("", False),
    ],
)
def test_is_valid_hash(value, expected):
    assert is_valid_hash(value) is expected