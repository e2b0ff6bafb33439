"""Launch configurations for Cargo example targets."""

from __future__ import annotations

from pathlib import Path

from dap_launch.exceptions import ResolutionError
from dap_launch.resolvers import cargo_binary
from dap_launch.types import WORKSPACE_FOLDER
from dap_launch.types import LaunchConfig

EXAMPLES_DIR = "examples"


def discover_examples(examples_dir: str | Path = EXAMPLES_DIR) -> list[str]:
    """List Cargo example names under ``examples_dir``.

    Cargo treats both ``examples/<name>.rs`` and ``examples/<name>/main.rs``
    as examples.

    Raises:
        ResolutionError: If the directory cannot be read.
    """
    root = Path(examples_dir)
    try:
        entries = list(root.iterdir())
    except OSError as e:
        raise ResolutionError(f"Cannot read examples directory {root}: {e}") from e

    names: set[str] = set()
    for entry in entries:
        if entry.is_dir() and (entry / "main.rs").is_file():
            names.add(entry.name)
        elif entry.is_file() and entry.suffix == ".rs":
            names.add(entry.stem)
    return sorted(names)


def example_launch_configs(
    examples_dir: str | Path = EXAMPLES_DIR,
    *,
    adapter_name: str = "lldb",
    profile: str = "debug",
    stop_on_entry: bool = False,
    must_exist: bool = True,
) -> list[LaunchConfig]:
    """Build one launch configuration per Cargo example, sorted by name."""
    return [
        LaunchConfig(
            name=f"example: {name}",
            adapter_name=adapter_name,
            program_resolver=cargo_binary(name, profile, example=True, must_exist=must_exist),
            cwd=WORKSPACE_FOLDER,
            stop_on_entry=stop_on_entry,
        )
        for name in discover_examples(examples_dir)
    ]
