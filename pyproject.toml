[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "remotecache"
version = "0.1.0"
description = "Building blocks for a remote build cache server: request path parsing, ActionResult validation, idle timers, temp files, upload workers and command-line flags"
requires-python = ">=3.10"
dependencies = [
    "grpcio",
]
keywords = [
    "build-cache",
    "remote-cache",
    "remote-execution",
    "content-addressable-storage",
    "grpc",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.setuptools.packages.find]
include = ["remotecache*"]

[tool.pytest.ini_options]
addopts = "-ra"
