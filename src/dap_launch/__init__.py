"""Registry of debug adapters and launch configurations for debug-session launchers."""

from __future__ import annotations

from dap_launch.bootstrap import initialize
from dap_launch.capability import probe_capability
from dap_launch.config import LaunchSettings
from dap_launch.config import get_config
from dap_launch.config import load_config
from dap_launch.exceptions import AdapterError
from dap_launch.exceptions import AdapterNotFoundError
from dap_launch.exceptions import CapabilityUnavailableError
from dap_launch.exceptions import ConfigurationError
from dap_launch.exceptions import DAPLaunchError
from dap_launch.exceptions import ResolutionError
from dap_launch.registry import AdapterRegistry
from dap_launch.types import AdapterDescriptor
from dap_launch.types import AdapterKind
from dap_launch.types import LaunchConfig
from dap_launch.types import RequestKind

__version__ = "0.1.0"

__all__ = [
    "AdapterDescriptor",
    "AdapterError",
    "AdapterKind",
    "AdapterNotFoundError",
    "AdapterRegistry",
    "CapabilityUnavailableError",
    "ConfigurationError",
    "DAPLaunchError",
    "LaunchConfig",
    "LaunchSettings",
    "RequestKind",
    "ResolutionError",
    "get_config",
    "initialize",
    "load_config",
    "probe_capability",
]
