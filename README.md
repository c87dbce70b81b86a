# remotecache

Building blocks for a remote build cache server that speaks the HTTP cache
protocol and the gRPC remote execution APIs.

## What is in the package

- `remotecache.http`: `parse_request_url(url, validate_ac)` turns a path such
  as `/cas/<sha256>`, `/ac/<sha256>` or `/<instance>/ac/<sha256>` into a
  `RequestTarget` named tuple of `kind` (an `EntryKind`: `AC`, `CAS` or `RAW`),
  `hash` and `instance`. Action cache paths give `AC` when `validate_ac` is
  true and `RAW` otherwise. Malformed paths raise `RequestURLError`.
  `blob_path(kind, hash_key)` gives `/<kind>/<hash>` for log messages, and
  `worker_from_address(addr)` returns the address, or `"unknown"` if it is
  empty.
- `remotecache.validate`: `validate_action_result` checks the output files,
  directories, symlinks and stdout/stderr digests of an ActionResult (empty or
  absolute paths, missing or malformed digests) and returns it, raising
  `ValidationError` otherwise. `validate_digest` checks one digest (a missing
  one is accepted) and `is_valid_hash` tells whether a string is a lower case
  hex SHA256 sum.
- `remotecache.idle`: `IdleTimer(timeout, notify, tick=1.0)` calls `notify`
  once no request has been seen for `timeout` seconds after `start()`;
  `reset_timer()` restarts the countdown. `GrpcIdleTimer` is a
  `grpc.ServerInterceptor` that calls `reset_timer()` on every call.
- `remotecache.tempfiles`: `TempfileCreator.create(base, legacy=False)`
  exclusively creates `<base>-<random>` (with `.v1` appended when `legacy` is
  true) with mode `WIP_MODE` (setgid set) and returns the open binary file and
  the random part. Chmod the file to `FINAL_MODE` once it is complete. Failures
  raise `TempfileError`.
- `remotecache.backendproxy`: `start_uploaders(uploader, num_uploaders,
  max_queued_uploads)` starts worker threads that pass queued `UploadReq`
  items to an `Uploader.upload_file`, and returns an `UploadQueue` (with
  `put`, `try_put` and `close`, usable as a context manager), or `None` if
  either count is not positive.
- `remotecache.flags`: `cli_flags()` lists every server option as a `Flag`
  (name, kind, usage, default and environment variables);
  `Flag.value_from_env` reads a value from the environment and
  `Flag.help_entry()` gives its help line. `build_parser(prog)` returns an
  `argparse.ArgumentParser` for all flags, with defaults taken from the
  environment.
- `remotecache.usage`: `format_help(name, flags)` and
  `print_help(name, flags, out)` produce help text wrapped to
  `console_width()`, which reads `$COLUMNS` or runs `tput cols`, never going
  below 30 columns. `wrap` and `wrap_line` do the word wrapping.
- `remotecache.annotate`: `annotate(prefix, err, context_error=None)` returns
  an `AnnotatedError` whose message is `prefix: err`, followed by the
  context error in parentheses if one is given.
- `remotecache.rlimit`: `raise_open_file_limit()` sets the soft open-file
  limit to the hard limit (on macOS, capped by `kern.maxfilesperproc`) and
  returns the new limit, or `None` if it could not.
- `remotecache.blobs`: `random_data_and_hash`, `random_data_and_digest`
  (returning a `Digest`) and `silent_logger`, for exercising a cache.

## Installation

Install the package with pip from a checkout of this project. The `test`
extra pulls in pytest.

## Examples

Parsing a request path:

```python
from remotecache.http import EntryKind, RequestURLError, parse_request_url

digest = "fec3be77b8aa0d307ed840581ded3d114c86f36d4914c81e33a72877020c0603"

kind, hash_key, instance = parse_request_url("prefix/ac/" + digest, True)
assert kind is EntryKind.AC
assert instance == "prefix"

try:
    parse_request_url("invalid/url", True)
except RequestURLError as exc:
    print(exc)
```

Checking a hash key:

```python
from remotecache.validate import is_valid_hash

assert is_valid_hash("e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855")
assert not is_valid_hash("not-a-hash")
```

Wrapping help text:

```python
from remotecache.usage import wrap_line

print(wrap_line("the quick brown fox jumped over the lazy dog", 10, "__"))
```

Printing help for all server options:

```python
import sys

from remotecache.flags import cli_flags
from remotecache.usage import print_help

print_help("cache-server", cli_flags(), sys.stdout)
```

## What the package does not do

The package holds no cache storage: there is no disk cache, no eviction and
no proxy backend for S3, Azure, GCS, HTTP or gRPC. It has no HTTP request
handlers and no gRPC services, so it cannot serve a cache by itself, and it
installs no command that starts a server. The flags describe options for such
a server, but nothing here acts on them.

## Platform notes

Cache files rely on POSIX file modes, so the package targets Linux and macOS.
Where the `resource` module is missing, `raise_open_file_limit` does nothing
and returns `None`.