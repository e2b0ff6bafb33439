"""LLDB's own DAP adapter (lldb-vscode, renamed lldb-dap in LLVM 18)."""

from __future__ import annotations

import shutil
from pathlib import Path

from dap_launch.adapters.base import AdapterPreset
from dap_launch.adapters.base import adapter
from dap_launch.exceptions import AdapterNotFoundError

DEFAULT_COMMAND = "/usr/bin/lldb-vscode"


@adapter(
    name="lldb",
    display_name="lldb",
    languages=["rust", "c", "cpp"],
    aliases=["lldb-vscode", "lldb-dap"],
)
class LLDBPreset(AdapterPreset):
    """Rust/C/C++ debugger shipped with LLVM (lldb-dap / lldb-vscode)."""

    def __init__(self, path: str | None = None, search_path: bool | str = False) -> None:
        """Initialize LLDB preset.

        Args:
            path: Explicit path to the adapter binary.
            search_path: Look for lldb-dap / lldb-vscode on PATH before
                         falling back to /usr/bin/lldb-vscode.
        """
        self._path = path
        # Env vars arrive as strings
        self._search_path = str(search_path).lower() in {"true", "1", "yes", "on"}

    def find_command(self) -> str:
        """Find the lldb-dap or lldb-vscode binary.

        Without an explicit path the command is /usr/bin/lldb-vscode whether
        or not it is installed; a missing binary shows up when the launcher
        starts it.
        """
        if self._path:
            path = Path(self._path)
            if path.is_file():
                return str(path)
            raise AdapterNotFoundError(f"lldb adapter not found at: {self._path}")

        if self._search_path:
            for candidate in ("lldb-dap", "lldb-vscode"):
                found = shutil.which(candidate)
                if found:
                    return found

        return DEFAULT_COMMAND
