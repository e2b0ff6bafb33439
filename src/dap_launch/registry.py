"""Registry of debug adapters and per-language launch configurations."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from dap_launch.exceptions import AdapterNotFoundError
from dap_launch.exceptions import ResolutionError
from dap_launch.types import AdapterDescriptor
from dap_launch.types import LaunchConfig

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """In-memory tables consulted by an external debug-session launcher.

    Entries are written once during start-up and read afterwards. Adapter
    references in launch configurations are not checked on registration,
    only when the launcher consumes a configuration through
    :meth:`launch_arguments`.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._adapters: dict[str, AdapterDescriptor] = {}
        self._configurations: dict[str, tuple[LaunchConfig, ...]] = {}

    def __len__(self) -> int:
        return len(self._adapters)

    def __contains__(self, name: object) -> bool:
        return name in self._adapters

    # === Registration ===

    def register_adapter(self, name: str, descriptor: AdapterDescriptor) -> None:
        """Register an adapter under ``name``; an existing entry is replaced."""
        if name in self._adapters:
            logger.debug("Replacing adapter %r", name)
        self._adapters[name] = descriptor

    def register_launch_configs(self, language: str, configs: Iterable[LaunchConfig]) -> None:
        """Set the launch configurations for ``language``, replacing any previous ones."""
        self._configurations[language] = tuple(configs)
        logger.debug(
            "Registered %d launch configuration(s) for %r",
            len(self._configurations[language]),
            language,
        )

    def clear(self) -> None:
        """Drop all adapters and launch configurations."""
        self._adapters.clear()
        self._configurations.clear()

    # === Lookups ===

    def get_adapter(self, name: str) -> AdapterDescriptor | None:
        """Get the adapter registered under ``name``, or None."""
        return self._adapters.get(name)

    def get_launch_configs(self, language: str) -> tuple[LaunchConfig, ...]:
        """Get launch configurations for ``language`` in registration order."""
        return self._configurations.get(language, ())

    def get_launch_config(self, language: str, name: str) -> LaunchConfig | None:
        """Get a single launch configuration by language and name."""
        for config in self.get_launch_configs(language):
            if config.name == name:
                return config
        return None

    def adapters(self) -> dict[str, AdapterDescriptor]:
        """Get a snapshot of all registered adapters."""
        return self._adapters.copy()

    def languages(self) -> list[str]:
        """Get languages with registered launch configurations."""
        return list(self._configurations)

    # === Launch-time resolution ===

    def resolve_program_path(self, config: LaunchConfig) -> str:
        """Call the configuration's program resolver now.

        Raises:
            ResolutionError: If the program path cannot be determined.
        """
        try:
            program = config.program_resolver()
        except ResolutionError:
            raise
        except OSError as e:
            raise ResolutionError(
                f"Cannot resolve program for launch configuration '{config.name}': {e}"
            ) from e
        logger.debug("Resolved program for %r: %s", config.name, program)
        return program

    def launch_arguments(self, config: LaunchConfig) -> dict[str, Any]:
        """Build DAP request arguments for ``config``.

        Placeholders such as ``${workspaceFolder}`` are passed through for the
        launcher to expand.

        Raises:
            AdapterNotFoundError: If the configuration's adapter is not registered.
            ResolutionError: If the program path cannot be determined.
        """
        if config.adapter_name not in self._adapters:
            raise AdapterNotFoundError(
                f"Launch configuration '{config.name}' references unknown adapter "
                f"'{config.adapter_name}'. Registered: {sorted(self._adapters)}"
            )

        arguments: dict[str, Any] = {
            "name": config.name,
            "type": config.adapter_name,
            "request": config.request.value,
            "program": self.resolve_program_path(config),
            "cwd": config.cwd,
            "stopOnEntry": config.stop_on_entry,
            "args": list(config.args),
        }
        if config.env:
            arguments["env"] = dict(config.env)

        return arguments

    def describe(self) -> dict[str, Any]:
        """Get a JSON-serialisable view of the registry."""
        return {
            "adapters": {
                name: descriptor.model_dump(mode="json")
                for name, descriptor in self._adapters.items()
            },
            "configurations": {
                language: [config.model_dump(mode="json") for config in configs]
                for language, configs in self._configurations.items()
            },
        }
