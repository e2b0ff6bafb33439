"""Pydantic models for dap-launch."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from types import ModuleType

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from dap_launch.exceptions import CapabilityUnavailableError

# Left for the external launcher to expand.
WORKSPACE_FOLDER = "${workspaceFolder}"


class AdapterKind(StrEnum):
    """How the launcher reaches a debug adapter."""

    EXECUTABLE = "executable"
    SERVER = "server"


class RequestKind(StrEnum):
    """DAP request used to start a session."""

    LAUNCH = "launch"
    ATTACH = "attach"


# === Adapters ===


class AdapterDescriptor(BaseModel):
    """How to start or reach a debug adapter."""

    model_config = ConfigDict(frozen=True)

    kind: AdapterKind = AdapterKind.EXECUTABLE
    command: str = Field(description="Path to the adapter binary.")
    display_name: str = Field(description="Human-readable adapter name.")
    args: tuple[str, ...] = Field(
        default=(),
        description="Extra arguments passed to the adapter command.",
    )
    env: dict[str, str] = Field(
        default_factory=dict,
        description="Environment variables for the adapter process.",
    )
    host: str | None = Field(
        default=None,
        description="Host the adapter listens on (server adapters).",
    )
    port: int | None = Field(
        default=None,
        description="Port the adapter listens on (server adapters).",
    )


# === Launch configurations ===


class LaunchConfig(BaseModel):
    """A named, language-scoped template for starting a debug session.

    ``program_resolver`` is kept by reference and only called when the
    launcher asks for the program path, so it sees the environment
    (working directory, files on disk) as of launch time.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    adapter_name: str = Field(description="Name of a registered adapter.")
    request: RequestKind = RequestKind.LAUNCH
    program_resolver: Callable[[], str] = Field(
        exclude=True,
        description="Zero-argument callable returning the program path.",
    )
    cwd: str = WORKSPACE_FOLDER
    stop_on_entry: bool = False
    args: tuple[str, ...] = ()
    env: dict[str, str] = Field(default_factory=dict)


# === Host capability ===


class CapabilityProbe(BaseModel):
    """Outcome of checking whether a host capability can be loaded."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    ok: bool
    handle: ModuleType | None = None
    error: BaseException | None = None

    def require(self) -> ModuleType:
        """Return the loaded module or raise CapabilityUnavailableError."""
        if not self.ok or self.handle is None:
            raise CapabilityUnavailableError(
                f"Host capability '{self.name}' is unavailable: {self.error}"
            )
        return self.handle
