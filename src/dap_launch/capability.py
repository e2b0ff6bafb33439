"""Probing for optional host capabilities."""

from __future__ import annotations

import importlib
import logging

from dap_launch.types import CapabilityProbe

logger = logging.getLogger(__name__)


def probe_capability(module_name: str) -> CapabilityProbe:
    """Try to import ``module_name``.

    Returns a CapabilityProbe instead of raising, so callers can bail out
    with an early return when the host framework is missing.
    """
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        logger.debug("Capability %r unavailable: %s", module_name, e)
        return CapabilityProbe(name=module_name, ok=False, error=e)
    return CapabilityProbe(name=module_name, ok=True, handle=module)
