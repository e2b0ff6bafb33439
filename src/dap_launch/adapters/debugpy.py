"""Debugpy (Python) adapter preset."""

from __future__ import annotations

import shutil
import sys
from pathlib import Path

from dap_launch.adapters.base import AdapterPreset
from dap_launch.adapters.base import adapter
from dap_launch.exceptions import AdapterNotFoundError


@adapter(
    name="debugpy",
    display_name="debugpy",
    languages=["python"],
    aliases=["python"],
)
class DebugpyPreset(AdapterPreset):
    """Python debugger. Runs ``python -m debugpy.adapter``."""

    def __init__(self, python_path: str | None = None) -> None:
        """Initialize debugpy preset.

        Args:
            python_path: Custom Python interpreter path. If not provided,
                         uses sys.executable.
        """
        self._python_path = python_path

    def find_command(self) -> str:
        """Find the interpreter that runs the debugpy adapter."""
        if self._python_path is None:
            return sys.executable

        if Path(self._python_path).is_file():
            return self._python_path
        found = shutil.which(self._python_path)
        if found:
            return found
        raise AdapterNotFoundError(f"Python interpreter not found: {self._python_path}")

    def command_args(self) -> list[str]:
        return ["-m", "debugpy.adapter"]
