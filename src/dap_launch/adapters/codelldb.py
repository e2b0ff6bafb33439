"""CodeLLDB adapter preset for Rust/C/C++ debugging."""

from __future__ import annotations

import shutil
from pathlib import Path

from dap_launch.adapters.base import AdapterPreset
from dap_launch.adapters.base import adapter
from dap_launch.exceptions import AdapterNotFoundError


@adapter(
    name="codelldb",
    display_name="CodeLLDB",
    languages=["rust", "c", "cpp"],
    aliases=["vscode-lldb"],
)
class CodeLLDBPreset(AdapterPreset):
    """Rust/C/C++ debugger from the vadimcn.vscode-lldb extension."""

    def __init__(self, path: str | None = None) -> None:
        """Initialize CodeLLDB preset.

        Args:
            path: Explicit path to codelldb binary. If not provided,
                  searches VS Code extensions directory.
        """
        self._path = path

    def find_command(self) -> str:
        """Find the codelldb binary."""
        # 1. Explicit path
        if self._path:
            path = Path(self._path)
            if path.is_file():
                return str(path)
            raise AdapterNotFoundError(f"CodeLLDB not found at: {self._path}")

        # 2. VS Code extensions directory
        vscode_dirs = [
            Path.home() / ".vscode" / "extensions",
            Path.home() / ".vscode-server" / "extensions",
            Path.home() / ".vscode-oss" / "extensions",
        ]

        for vscode_dir in vscode_dirs:
            if vscode_dir.exists():
                # Newest extension version first
                lldb_dirs = sorted(
                    vscode_dir.glob("vadimcn.vscode-lldb-*"),
                    key=lambda p: p.name,
                    reverse=True,
                )
                for lldb_dir in lldb_dirs:
                    codelldb = lldb_dir / "adapter" / "codelldb"
                    if codelldb.exists():
                        return str(codelldb)

        # 3. Check PATH
        codelldb_in_path = shutil.which("codelldb")
        if codelldb_in_path:
            return codelldb_in_path

        raise AdapterNotFoundError(
            "CodeLLDB not found.\n\n"
            "Install the CodeLLDB VS Code extension (vadimcn.vscode-lldb) "
            "or install codelldb manually and add it to PATH."
        )
