"""Command-line flags accepted by the cache server, with environment fallbacks."""

from __future__ import annotations

import argparse
import enum
import os
import re
from dataclasses import dataclass
from typing import Any, Mapping

MAX_INT64 = 2**63 - 1
_MIN_INT64 = -(2**63)

S3_AUTH_STATIC = "access_key"
S3_AUTH_IAM_ROLE = "iam_role"
S3_AUTH_AWS_CREDENTIALS_FILE = "aws_credentials_file"
S3_AUTH_METHODS = (S3_AUTH_STATIC, S3_AUTH_IAM_ROLE, S3_AUTH_AWS_CREDENTIALS_FILE)

AZBLOB_AUTH_CLIENT_CERTIFICATE = "client_certificate"
AZBLOB_AUTH_CLIENT_APP = "client_secret"
AZBLOB_AUTH_ENVIRONMENT_CREDENTIAL = "environment_credential"
AZBLOB_AUTH_ACCOUNT = "shared_key"
AZBLOB_AUTH_DEFAULT = "default"
AZBLOB_AUTH_METHODS = (
    AZBLOB_AUTH_CLIENT_CERTIFICATE,
    AZBLOB_AUTH_CLIENT_APP,
    AZBLOB_AUTH_ENVIRONMENT_CREDENTIAL,
    AZBLOB_AUTH_ACCOUNT,
    AZBLOB_AUTH_DEFAULT,
)


class FlagKind(enum.Enum):
    """The type of value a flag takes."""

    STRING = "string"
    INT = "int"
    INT64 = "int64"
    BOOL = "bool"
    DURATION = "duration"


_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def _parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"invalid boolean value: {text!r}")


def _parse_int(text: str) -> int:
    value = int(text.strip(), 0)
    if not _MIN_INT64 <= value <= MAX_INT64:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _parse_duration(text: str) -> float:
    """Parse a duration such as ``1h30m`` or ``250ms`` into seconds."""
    body = text
    sign = 1.0
    if body[:1] in "+-" and body:
        if body[0] == "-":
            sign = -1.0
        body = body[1:]
    if body == "0":
        return 0.0
    if not body:
        raise ValueError(f"invalid duration: {text!r}")
    total = 0.0
    pos = 0
    while pos < len(body):
        match = _DURATION_PART.match(body, pos)
        if match is None:
            raise ValueError(f"invalid duration: {text!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    return sign * total


def _format_number(value: float) -> str:
    return f"{value:.9f}".rstrip("0").rstrip(".")


def _format_duration(seconds: float) -> str:
    if seconds == 0:
        return "0s"
    sign = "-" if seconds < 0 else ""
    remaining = abs(seconds)
    if remaining < 1e-6:
        return f"{sign}{_format_number(remaining * 1e9)}ns"
    if remaining < 1e-3:
        return f"{sign}{_format_number(remaining * 1e6)}µs"
    if remaining < 1:
        return f"{sign}{_format_number(remaining * 1e3)}ms"
    hours, rest = divmod(remaining, 3600)
    minutes, secs = divmod(rest, 60)
    text = ""
    if hours:
        text += f"{int(hours)}h"
    if hours or minutes:
        text += f"{int(minutes)}m"
    text += f"{_format_number(secs)}s"
    return sign + text


_PARSERS = {
    FlagKind.STRING: str,
    FlagKind.INT: _parse_int,
    FlagKind.INT64: _parse_int,
    FlagKind.BOOL: _parse_bool,
    FlagKind.DURATION: _parse_duration,
}


@dataclass(frozen=True)
class Flag:
    """One command-line option and the environment variables that can set it."""

    name: str
    kind: FlagKind
    usage: str
    default: Any = None
    env_vars: tuple[str, ...] = ()
    default_text: str = ""

    def __post_init__(self) -> None:
        if self.default is None:
            empty = {
                FlagKind.STRING: "",
                FlagKind.INT: 0,
                FlagKind.INT64: 0,
                FlagKind.BOOL: False,
                FlagKind.DURATION: 0.0,
            }[self.kind]
            object.__setattr__(self, "default", empty)

    @property
    def dest(self) -> str:
        """The attribute name under which a parsed value is stored."""
        return self.name.replace(".", "_")

    def parse(self, text: str) -> Any:
        """Convert a textual value for this flag into its Python value."""
        return _PARSERS[self.kind](text)

    def value_from_env(self, environ: Mapping[str, str]) -> Any:
        """Return the value from the first set environment variable, else the default."""
        for var in self.env_vars:
            if var in environ:
                raw = environ[var]
                try:
                    return self.parse(raw)
                except ValueError as err:
                    raise ValueError(
                        f"could not parse {raw!r} as {self.kind.value} value "
                        f"from {var} for flag {self.name}: {err}"
                    ) from err
        return self.default

    def _shown_default(self) -> str:
        if self.default_text:
            return self.default_text
        if self.kind is FlagKind.STRING:
            return f'"{self.default}"' if self.default else ""
        if self.kind is FlagKind.BOOL:
            return "true" if self.default else "false"
        if self.kind is FlagKind.DURATION:
            return _format_duration(self.default)
        return str(self.default)

    def help_entry(self) -> str:
        """The help line: names, a tab, usage, default and environment hint."""
        names = f"--{self.name}" if len(self.name) > 1 else f"-{self.name}"
        if self.kind is not FlagKind.BOOL:
            names += " value"
        usage = self.usage
        shown = self._shown_default()
        if shown:
            usage += f" (default: {shown})"
        entry = f"{names}\t{usage.strip()}"
        if self.env_vars:
            entry += " [" + ", ".join(f"${var}" for var in self.env_vars) + "]"
        return entry


def _s3_auth_msg(*methods: str) -> str:
    return f"Applies to s3 auth method(s): {', '.join(methods)}."


def _azblob_auth_msg(*methods: str) -> str:
    return f"Applies to AzBlob auth method(s): {', '.join(methods)}."


def _string(name, usage, env, default="", default_text=""):
    return Flag(name, FlagKind.STRING, usage, default, tuple(env), default_text)


def _int(name, usage, env, default=0, default_text=""):
    return Flag(name, FlagKind.INT, usage, default, tuple(env), default_text)


def _int64(name, usage, env, default=0, default_text=""):
    return Flag(name, FlagKind.INT64, usage, default, tuple(env), default_text)


def _bool(name, usage, env, default=False, default_text=""):
    return Flag(name, FlagKind.BOOL, usage, default, tuple(env), default_text)


def _duration(name, usage, env, default=0.0, default_text=""):
    return Flag(name, FlagKind.DURATION, usage, default, tuple(env), default_text)


def cli_flags() -> list[Flag]:
    """Return every flag the server accepts, in help order."""
    max_int64_text = str(MAX_INT64)
    return [
        _string("config_file",
                "Path to a YAML configuration file. If this flag is specified then all other flags "
                "are ignored.",
                ["BAZEL_REMOTE_CONFIG_FILE"]),
        _string("dir", "Directory path where to store the cache contents. This flag is required.",
                ["BAZEL_REMOTE_DIR"]),
        _int64("max_size",
               "The maximum size of bazel-remote's disk cache in GiB. This flag is required.",
               ["BAZEL_REMOTE_MAX_SIZE"]),
        _string("storage_mode",
                "Which format to store CAS blobs in. Must be one of \"zstd\" or \"uncompressed\".",
                ["BAZEL_REMOTE_STORAGE_MODE"], default="zstd"),
        _string("zstd_implementation",
                "ZSTD implementation to use. Must be one of \"go\" or \"cgo\".",
                ["BAZEL_REMOTE_ZSTD_IMPLEMENTATION"], default="go"),
        _string("http_address",
                "Address specification for the HTTP server listener, formatted either as [host]:port "
                "for TCP or unix://path.sock for Unix domain sockets.",
                ["BAZEL_REMOTE_HTTP_ADDRESS"]),
        _string("host", "DEPRECATED. Use --http_address to specify the HTTP server listener.",
                ["BAZEL_REMOTE_HOST"]),
        _int("port", "DEPRECATED. Use --http_address to specify the HTTP server listener.",
             ["BAZEL_REMOTE_PORT"], default=8080),
        _string("grpc_address",
                "Address specification for the gRPC server listener, formatted either as [host]:port "
                "for TCP or unix://path.sock for Unix domain sockets. Set to 'none' to disable.",
                ["BAZEL_REMOTE_GRPC_ADDRESS"]),
        _int("grpc_port",
             "DEPRECATED. Use --grpc_address to specify the gRPC server listener. Set to 0 to disable.",
             ["BAZEL_REMOTE_GRPC_PORT"], default=9092),
        _string("profile_address",
                "Address specification for a http server to listen on for profiling, formatted either "
                "as [host]:port for TCP or unix://path.sock for Unix domain sockets. Off by default, "
                "but can also be set to 'none' to disable explicitly.",
                ["BAZEL_REMOTE_PROFILE_ADDRESS"], default_text="\"\", ie profiling disabled"),
        _string("profile_host",
                "DEPRECATED. Use --profile_address instead. A host address to listen on for profiling, "
                "if enabled by a valid --profile_port setting.",
                ["BAZEL_REMOTE_PROFILE_HOST"], default="127.0.0.1"),
        _int("profile_port",
             "DEPRECATED. Use --profile_address instead. If a positive integer, serve /debug/pprof/* "
             "URLs from http://profile_host:profile_port.",
             ["BAZEL_REMOTE_PROFILE_PORT"], default_text="0, ie profiling disabled"),
        _duration("http_read_timeout",
                  "The HTTP read timeout for a client request in seconds (does not apply to the proxy "
                  "backends or the profiling endpoint)",
                  ["BAZEL_REMOTE_HTTP_READ_TIMEOUT"], default_text="0s, ie disabled"),
        _duration("http_write_timeout",
                  "The HTTP write timeout for a server response in seconds (does not apply to the "
                  "proxy backends or the profiling endpoint)",
                  ["BAZEL_REMOTE_HTTP_WRITE_TIMEOUT"], default_text="0s, ie disabled"),
        _string("htpasswd_file",
                "Path to a .htpasswd file. This flag is optional. See the htpasswd documentation "
                "for the file format.",
                ["BAZEL_REMOTE_HTPASSWD_FILE"]),
        _string("min_tls_version",
                "The minimum TLS version that is acceptable for incoming requests (does not apply to "
                "proxy backends). Allowed values: 1.0, 1.1, 1.2, 1.3.",
                ["BAZEL_REMOTE_MIN_TLS_VERSION"], default="1.0"),
        _string("tls_ca_file",
                "Optional. Enables mTLS (authenticating client certificates), should be the "
                "certificate authority that signed the client certificates.",
                ["BAZEL_REMOTE_TLS_CA_FILE"]),
        _string("tls_cert_file", "Path to a pem encoded certificate file.",
                ["BAZEL_REMOTE_TLS_CERT_FILE"]),
        _string("tls_key_file", "Path to a pem encoded key file.", ["BAZEL_REMOTE_TLS_KEY_FILE"]),
        _bool("allow_unauthenticated_reads",
              "If authentication is enabled (--htpasswd_file or --tls_ca_file), allow "
              "unauthenticated clients read access.",
              ["BAZEL_REMOTE_UNAUTHENTICATED_READS"],
              default_text="false, ie if authentication is required, read-only requests must also "
                           "be authenticated"),
        _duration("idle_timeout",
                  "The maximum period of having received no request after which the server will "
                  "shut itself down.",
                  ["BAZEL_REMOTE_IDLE_TIMEOUT"], default_text="0s, ie disabled"),
        _int("max_queued_uploads",
             "When using proxy backends, sets the maximum number of objects in queue for upload. If "
             "the queue is full, uploads will be skipped until the queue has space again.",
             ["BAZEL_REMOTE_MAX_QUEUED_UPLOADS"], default=1000000),
        _int64("max_blob_size",
               "The maximum logical/uncompressed blob size that will be accepted from clients. Note "
               "that this limit is not applied to preexisting blobs in the cache.",
               ["BAZEL_REMOTE_MAX_BLOB_SIZE"], default=MAX_INT64, default_text=max_int64_text),
        _int64("max_proxy_blob_size",
               "The maximum logical/uncompressed blob size that will be downloaded from proxies. "
               "Note that this limit is not applied to preexisting blobs in the cache.",
               ["BAZEL_REMOTE_MAX_PROXY_BLOB_SIZE"], default=MAX_INT64, default_text=max_int64_text),
        _int("num_uploaders",
             "When using proxy backends, sets the number of Goroutines to process parallel uploads "
             "to backend.",
             ["BAZEL_REMOTE_NUM_UPLOADERS"], default=100),
        _string("grpc_proxy.url",
                "The base URL to use for the experimental grpc proxy backend, e.g. "
                "grpc://localhost:9090 or grpcs://example.com:7070. Note that this requires a backend "
                "with remote asset API support if you want http client requests to work.",
                ["BAZEL_REMOTE_GRPC_PROXY_URL"]),
        _string("grpc_proxy.key_file",
                "Path to a key used to authenticate with the proxy backend using mTLS. If this flag "
                "is provided, then grpc_proxy.cert_file must also be specified.",
                ["BAZEL_REMOTE_GRPC_PROXY_KEY_FILE"]),
        _string("grpc_proxy.cert_file",
                "Path to a certificate used to authenticate with the proxy backend using mTLS. If "
                "this flag is provided, then grpc_proxy.key_file must also be specified.",
                ["BAZEL_REMOTE_GRPC_PROXY_CERT_FILE"]),
        _string("grpc_proxy.ca_file",
                "Path to a certificate autority used to validate the grpc proxy backend certificate.",
                ["BAZEL_REMOTE_GRPC_PROXY_CA_FILE"]),
        _string("http_proxy.url", "The base URL to use for a http proxy backend.",
                ["BAZEL_REMOTE_HTTP_PROXY_URL"]),
        _string("http_proxy.key_file",
                "Path to a key used to authenticate with the proxy backend using mTLS. If this flag "
                "is provided, then http_proxy.cert_file must also be specified.",
                ["BAZEL_REMOTE_HTTP_PROXY_KEY_FILE"]),
        _string("http_proxy.cert_file",
                "Path to a certificate used to authenticate with the proxy backend using mTLS. If "
                "this flag is provided, then http_proxy.key_file must also be specified.",
                ["BAZEL_REMOTE_HTTP_PROXY_CERT_FILE"]),
        _string("http_proxy.ca_file",
                "Path to a certificate autority used to validate the http proxy backend certificate.",
                ["BAZEL_REMOTE_HTTP_PROXY_CA_FILE"]),
        _string("gcs_proxy.bucket", "The bucket to use for the Google Cloud Storage proxy backend.",
                ["BAZEL_REMOTE_GCS_BUCKET"]),
        _bool("gcs_proxy.use_default_credentials",
              "Whether or not to use authentication for the Google Cloud Storage proxy backend.",
              ["BAZEL_REMOTE_GCS_USE_DEFAULT_CREDENTIALS"]),
        _string("gcs_proxy.json_credentials_file",
                "Path to a JSON file that contains Google credentials for the Google Cloud Storage "
                "proxy backend.",
                ["BAZEL_REMOTE_GCS_JSON_CREDENTIALS_FILE"]),
        _string("s3.endpoint", "The S3/minio endpoint to use when using S3 proxy backend.",
                ["BAZEL_REMOTE_S3_ENDPOINT"]),
        _string("s3.bucket", "The S3/minio bucket to use when using S3 proxy backend.",
                ["BAZEL_REMOTE_S3_BUCKET"]),
        _string("s3.bucket_lookup_type",
                "The S3/minio bucket lookup type to use when using S3 proxy backend. Allowed values: "
                "auto, dns, path.",
                ["BAZEL_REMOTE_S3_BUCKET_LOOKUP_TYPE"], default="auto"),
        _string("s3.prefix", "The S3/minio object prefix to use when using S3 proxy backend.",
                ["BAZEL_REMOTE_S3_PREFIX"]),
        _string("s3.auth_method",
                "The S3/minio authentication method. This argument is required when an s3 proxy "
                f"backend is used. Allowed values: {', '.join(S3_AUTH_METHODS)}.",
                ["BAZEL_REMOTE_S3_AUTH_METHOD"]),
        _string("s3.access_key_id",
                "The S3/minio access key to use when using S3 proxy backend. "
                + _s3_auth_msg(S3_AUTH_STATIC),
                ["BAZEL_REMOTE_S3_ACCESS_KEY_ID"]),
        _string("s3.secret_access_key",
                "The S3/minio secret access key to use when using S3 proxy backend. "
                + _s3_auth_msg(S3_AUTH_STATIC),
                ["BAZEL_REMOTE_S3_SECRET_ACCESS_KEY"]),
        _string("s3.signature_type",
                "Which type of s3 signature to use when using S3 proxy backend. Only applies when "
                "using the s3 access_key auth method. Allowed values: v2, v4, v4streaming, anonymous.",
                ["BAZEL_REMOTE_S3_SIGNATURE_TYPE"], default_text="v4"),
        _string("s3.aws_shared_credentials_file",
                "Path to the AWS credentials file. If not specified, the minio client will default "
                "to '~/.aws/credentials'. " + _s3_auth_msg(S3_AUTH_AWS_CREDENTIALS_FILE),
                ["BAZEL_REMOTE_S3_AWS_SHARED_CREDENTIALS_FILE", "AWS_SHARED_CREDENTIALS_FILE"]),
        _string("s3.aws_profile",
                "The aws credentials profile to use from within s3.aws_shared_credentials_file. "
                + _s3_auth_msg(S3_AUTH_AWS_CREDENTIALS_FILE),
                ["BAZEL_REMOTE_S3_AWS_PROFILE", "AWS_PROFILE"], default="default"),
        _bool("s3.disable_ssl", "Whether to disable TLS/SSL when using the S3 proxy backend.",
              ["BAZEL_REMOTE_S3_DISABLE_SSL"], default_text="false, ie enable TLS/SSL"),
        _bool("s3.update_timestamps", "Whether to update timestamps of object on cache hit.",
              ["BAZEL_REMOTE_S3_UPDATE_TIMESTAMPS"], default_text="false"),
        _string("s3.iam_role_endpoint",
                "Endpoint for using IAM security credentials. By default it will look for "
                "credentials in the standard locations for the AWS platform. "
                + _s3_auth_msg(S3_AUTH_IAM_ROLE),
                ["BAZEL_REMOTE_S3_IAM_ROLE_ENDPOINT"]),
        _string("s3.region", "The AWS region. Required when not specifying S3/minio access keys.",
                ["BAZEL_REMOTE_S3_REGION"]),
        _int("s3.key_version",
             "DEPRECATED. Key version 2 now is the only supported value. This flag will be removed.",
             ["BAZEL_REMOTE_S3_KEY_VERSION"], default=2, default_text="2"),
        _string("azblob.tenant_id",
                "The Azure blob storage tenant id to use when using azblob proxy backend.",
                ["BAZEL_REMOTE_AZBLOB_TENANT_ID", "AZURE_TENANT_ID"]),
        _string("azblob.storage_account",
                "The Azure blob storage storage account to use when using azblob proxy backend.",
                ["BAZEL_REMOTE_AZBLOB_STORAGE_ACCOUNT"]),
        _string("azblob.container_name",
                "The Azure blob storage container name to use when using azblob proxy backend.",
                ["BAZEL_REMOTE_AZBLOB_CONTAINER_NAME"]),
        _string("azblob.prefix",
                "The Azure blob storage object prefix to use when using azblob proxy backend.",
                ["BAZEL_REMOTE_AZBLOB_PREFIX"]),
        _bool("azblob.update_timestamps", "Whether to update timestamps of object on cache hit.",
              ["BAZEL_REMOTE_AZBLOB_UPDATE_TIMESTAMPS"], default_text="false"),
        _string("azblob.auth_method",
                "The Azure blob storage authentication method. This argument is required when an "
                f"azblob proxy backend is used. Allowed values: {', '.join(AZBLOB_AUTH_METHODS)}.",
                ["BAZEL_REMOTE_AZBLOB_AUTH_METHOD"]),
        _string("azblob.shared_key",
                "The Azure blob storage account access key to use when using azblob proxy backend. "
                + _azblob_auth_msg(AZBLOB_AUTH_ACCOUNT),
                ["BAZEL_REMOTE_AZBLOB_SHARED_KEY", "AZURE_STORAGE_ACCOUNT_KEY"]),
        _string("azblob.client_id",
                "The Azure blob storage client id to use when using azblob proxy backend. "
                + _azblob_auth_msg(AZBLOB_AUTH_CLIENT_APP, AZBLOB_AUTH_CLIENT_CERTIFICATE),
                ["BAZEL_REMOTE_AZBLOB_CLIENT_ID", "AZURE_CLIENT_ID"]),
        _string("azblob.client_secret",
                "The Azure blob storage client secret key to use when using azblob proxy backend. "
                + _azblob_auth_msg(AZBLOB_AUTH_CLIENT_APP),
                ["BAZEL_REMOTE_AZBLOB_SECRET_CLIENT_SECRET", "AZURE_CLIENT_SECRET"]),
        _string("azblob.cert_path",
                "Path to the certificates file. " + _azblob_auth_msg(AZBLOB_AUTH_CLIENT_CERTIFICATE),
                ["BAZEL_REMOTE_AZBLOB_CERT_PATH", "AZURE_CLIENT_CERTIFICATE_PATH"]),
        _bool("disable_http_ac_validation",
              "Whether to disable ActionResult validation for HTTP requests.",
              ["BAZEL_REMOTE_DISABLE_HTTP_AC_VALIDATION"],
              default_text="false, ie enable validation"),
        _bool("disable_grpc_ac_deps_check",
              "Whether to disable ActionResult dependency checks for gRPC GetActionResult requests.",
              ["BAZEL_REMOTE_DISABLE_GRPS_AC_DEPS_CHECK"],
              default_text="false, ie enable ActionCache dependency checks"),
        _bool("enable_ac_key_instance_mangling",
              "Whether to enable mangling ActionCache keys with non-empty instance names.",
              ["BAZEL_REMOTE_ENABLE_AC_KEY_INSTANCE_MANGLING"],
              default_text="false, ie disable mangling"),
        _bool("enable_endpoint_metrics", "Whether to enable metrics for each HTTP/gRPC endpoint.",
              ["BAZEL_REMOTE_ENABLE_ENDPOINT_METRICS"], default_text="false, ie disable metrics"),
        _bool("experimental_remote_asset_api",
              "Whether to enable the experimental remote asset API implementation.",
              ["BAZEL_REMOTE_EXPERIMENTAL_REMOTE_ASSET_API"],
              default_text="false, ie disable remote asset API"),
        _string("access_log_level",
                "The access logger verbosity level. If supplied, must be one of \"none\" or \"all\".",
                ["BAZEL_REMOTE_ACCESS_LOG_LEVEL"], default="all",
                default_text="all, ie enable full access logging"),
        _string("log_timezone",
                "The timezone to use for log timestamps. If supplied, must be one of \"UTC\", "
                "\"local\" or \"none\" for no timestamps.",
                ["BAZEL_REMOTE_LOG_TIMEZONE"], default="UTC",
                default_text="UTC, ie use UTC timezone"),
    ]


def _argparse_type(flag: Flag):
    def convert(text: str) -> Any:
        try:
            return flag.parse(text)
        except ValueError as err:
            raise argparse.ArgumentTypeError(
                f"invalid value {text!r} for flag --{flag.name}: {err}"
            ) from err

    convert.__name__ = flag.kind.value
    return convert


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    """Build an argument parser for every flag.

    Defaults come from the first set environment variable of each flag,
    falling back to the flag's own default. A malformed environment value
    raises ValueError.
    """
    parser = argparse.ArgumentParser(prog=prog, allow_abbrev=False)
    environ = os.environ
    for flag in cli_flags():
        default = flag.value_from_env(environ)
        help_text = flag.usage.replace("%", "%%")
        if flag.kind is FlagKind.BOOL:
            parser.add_argument(
                f"--{flag.name}",
                dest=flag.dest,
                nargs="?",
                const=True,
                default=default,
                type=_argparse_type(flag),
                metavar="BOOL",
                help=help_text,
            )
        else:
            parser.add_argument(
                f"--{flag.name}",
                dest=flag.dest,
                default=default,
                type=_argparse_type(flag),
                metavar="value",
                help=help_text,
            )
    return parser