"""Lazily evaluated program-path resolvers.

A resolver is a zero-argument callable returning a path string. Resolvers
built here read the environment (working directory, file system) only when
called, so a launch profile registered at start-up picks up the state of the
world at the moment a debug session is launched.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

from dap_launch.exceptions import ResolutionError

ProgramResolver = Callable[[], str]


def current_directory() -> Path:
    """Return the current working directory.

    Raises:
        ResolutionError: If the working directory no longer exists.
    """
    try:
        return Path(os.getcwd())
    except OSError as e:
        raise ResolutionError(f"Cannot determine current working directory: {e}") from e


def _checked(path: Path, must_exist: bool) -> str:
    if must_exist and not path.exists():
        raise ResolutionError(f"Program not found: {path}")
    return str(path)


def cwd_relative(*parts: str, must_exist: bool = False) -> ProgramResolver:
    """Resolve ``parts`` against the working directory at call time."""

    def resolve() -> str:
        return _checked(current_directory().joinpath(*parts), must_exist)

    return resolve


def fixed_path(path: str | Path, *, must_exist: bool = False) -> ProgramResolver:
    """Resolve to a constant path."""

    def resolve() -> str:
        return _checked(Path(path), must_exist)

    return resolve


def cargo_binary(
    name: str,
    profile: str = "debug",
    *,
    example: bool = False,
    must_exist: bool = True,
) -> ProgramResolver:
    """Resolve a Cargo build artifact under ``<cwd>/target/<profile>``.

    Args:
        name: Binary (or example) name.
        profile: Cargo profile directory, e.g. ``debug`` or ``release``.
        example: Look under ``examples/`` for ``cargo build --example`` output.
        must_exist: Fail with ResolutionError when the binary has not been built.
    """
    parts = ["target", profile]
    if example:
        parts.append("examples")
    parts.append(name)
    return cwd_relative(*parts, must_exist=must_exist)


def from_program(program: str, *, must_exist: bool = False) -> ProgramResolver:
    """Build a resolver from a configured program string.

    ``~`` is expanded when the resolver is called. Absolute paths are then
    used as-is; relative paths are resolved against the working directory
    at that time.
    """

    def resolve() -> str:
        path = Path(os.path.expanduser(program))
        if not path.is_absolute():
            path = current_directory() / path
        return _checked(path, must_exist)

    return resolve
