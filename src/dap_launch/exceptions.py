"""Custom exceptions for dap-launch."""

from __future__ import annotations


class DAPLaunchError(Exception):
    """Base exception for all dap-launch errors."""


class CapabilityUnavailableError(DAPLaunchError):
    """The host debug-launch framework could not be loaded."""


class ResolutionError(DAPLaunchError):
    """A launch-time value (such as the program path) could not be resolved."""


class ConfigurationError(DAPLaunchError):
    """Invalid adapter or launch configuration entry."""


class AdapterError(DAPLaunchError):
    """Error related to debug adapter configuration."""


class AdapterNotFoundError(AdapterError):
    """Debug adapter not found or not registered."""
