"""Delve adapter preset for Go debugging."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from dap_launch.adapters.base import AdapterPreset
from dap_launch.adapters.base import adapter
from dap_launch.exceptions import AdapterNotFoundError
from dap_launch.types import AdapterDescriptor
from dap_launch.types import AdapterKind

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 38697


@adapter(
    name="delve",
    display_name="Delve",
    languages=["go"],
    aliases=["go", "dlv", "godlv"],
)
class DelvePreset(AdapterPreset):
    """Go debugger (Delve). The launcher starts ``dlv dap`` and connects over TCP."""

    kind = AdapterKind.SERVER

    def __init__(
        self,
        path: str | None = None,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
    ) -> None:
        """Initialize Delve preset.

        Args:
            path: Explicit path to dlv binary. If not provided,
                  searches GOPATH/bin and PATH.
            host: Address dlv listens on.
            port: Port dlv listens on.
        """
        self._path = path
        self._host = host
        self._port = int(port)

    def find_command(self) -> str:
        """Find the dlv binary."""
        # 1. Explicit path
        if self._path:
            path = Path(self._path)
            if path.is_file():
                return str(path)
            raise AdapterNotFoundError(f"Delve not found at: {self._path}")

        # 2. GOPATH/bin or GOBIN
        gobin = self._find_gobin()
        if gobin:
            dlv_in_gobin = Path(gobin) / "dlv"
            if dlv_in_gobin.exists():
                return str(dlv_in_gobin)

        # 3. PATH
        dlv_in_path = shutil.which("dlv")
        if dlv_in_path:
            return dlv_in_path

        raise AdapterNotFoundError(
            "Delve (dlv) not found.\n\n"
            "Install Delve:\n"
            "  go install github.com/go-delve/delve/cmd/dlv@latest\n\n"
            "Or set the 'path' config to point to the dlv binary."
        )

    def command_args(self) -> list[str]:
        return ["dap", f"--listen={self._host}:{self._port}"]

    def descriptor(self) -> AdapterDescriptor:
        """Build a server descriptor carrying the listen address."""
        return AdapterDescriptor(
            kind=self.kind,
            command=self.find_command(),
            display_name=self.display_name,
            args=self.command_args(),
            host=self._host,
            port=self._port,
        )

    @staticmethod
    def _find_gobin() -> str | None:
        """Find GOBIN or GOPATH/bin directory."""
        gobin = os.environ.get("GOBIN")
        if gobin and Path(gobin).is_dir():
            return gobin

        gopath = os.environ.get("GOPATH")
        if gopath:
            gobin_path = Path(gopath) / "bin"
            if gobin_path.is_dir():
                return str(gobin_path)

        # Default GOPATH is ~/go
        default_gobin = Path.home() / "go" / "bin"
        if default_gobin.is_dir():
            return str(default_gobin)

        return None
