"""Registry initialization guarded by a host capability check."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dap_launch.capability import probe_capability
from dap_launch.registry import AdapterRegistry

if TYPE_CHECKING:
    from collections.abc import Callable

    from dap_launch.config import LaunchSettings
    from dap_launch.types import CapabilityProbe

logger = logging.getLogger(__name__)


def initialize(
    registry: AdapterRegistry | None = None,
    *,
    config: LaunchSettings | None = None,
    probe: Callable[[str], CapabilityProbe] = probe_capability,
) -> AdapterRegistry:
    """Populate a registry, unless the host framework is missing.

    When the capability probe for ``config.host_module`` fails, a warning
    is logged and the registry is returned without any adapters or launch
    configurations. No exception escapes in that case.

    Args:
        registry: Registry to populate. A new one is created if omitted.
        config: Settings to read. Defaults to the global configuration.
        probe: Capability check, called with the host module name.

    Returns:
        The (possibly empty) registry.
    """
    if registry is None:
        registry = AdapterRegistry()
    if config is None:
        from dap_launch.config import get_config

        config = get_config()

    result = probe(config.host_module)
    if not result.ok:
        logger.warning(
            "Failed to load %s, no debug adapters registered: %s",
            config.host_module,
            result.error,
        )
        return registry

    config.build_registry(registry)
    logger.info(
        "Registered %d adapter(s) and launch configurations for %s",
        len(registry),
        ", ".join(registry.languages()) or "no languages",
    )
    return registry
