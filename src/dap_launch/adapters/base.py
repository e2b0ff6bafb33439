"""Base adapter preset."""

from __future__ import annotations

import inspect
from abc import ABC
from abc import abstractmethod
from typing import TYPE_CHECKING
from typing import Any
from typing import TypeVar

from dap_launch.types import AdapterDescriptor
from dap_launch.types import AdapterKind

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T", bound="AdapterPreset")

# Global registry of adapter preset classes
_PRESET_REGISTRY: dict[str, type[AdapterPreset]] = {}
_PRESET_ALIASES: dict[str, str] = {}


def adapter(
    name: str,
    display_name: str,
    languages: list[str],
    aliases: list[str] | None = None,
) -> Callable[[type[T]], type[T]]:
    """Decorator to register an adapter preset class.

    Args:
        name: Name the adapter is registered under (the launch config ``type``).
        display_name: Human-readable adapter name.
        languages: Languages this adapter debugs.
        aliases: Optional list of alternate names for this preset.
    """

    def decorator(cls: type[T]) -> type[T]:
        cls.name = name
        cls.display_name = display_name
        cls.languages = languages
        cls.aliases = aliases or []

        _PRESET_REGISTRY[name] = cls
        for alias in cls.aliases:
            _PRESET_ALIASES[alias] = name

        return cls

    return decorator


def get_registered_presets() -> dict[str, type[AdapterPreset]]:
    """Get all registered preset classes."""
    return _PRESET_REGISTRY.copy()


def get_preset_aliases() -> dict[str, str]:
    """Get mapping of aliases to primary preset names."""
    return _PRESET_ALIASES.copy()


def get_preset(name: str) -> type[AdapterPreset] | None:
    """Look up a preset class by name or alias, case-insensitively."""
    key = name.lower()
    key = _PRESET_ALIASES.get(key, key)
    return _PRESET_REGISTRY.get(key)


class AdapterPreset(ABC):
    """Abstract base class for built-in debug adapter presets."""

    # These are set by the @adapter decorator
    name: str
    display_name: str
    languages: list[str]
    aliases: list[str]

    kind: AdapterKind = AdapterKind.EXECUTABLE

    @property
    def description(self) -> str:
        """Human-readable description taken from the class docstring."""
        doc = self.__class__.__doc__
        return inspect.cleandoc(doc) if doc else ""

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> AdapterPreset:
        """Create a preset from a configuration dictionary.

        Default implementation passes all keys (except 'enabled') to the constructor.
        """
        cfg = config.copy()
        cfg.pop("enabled", None)
        return cls(**cfg)

    @abstractmethod
    def find_command(self) -> str:
        """Locate the adapter binary.

        Raises:
            AdapterNotFoundError: If the adapter is not installed.
        """

    def command_args(self) -> list[str]:
        """Arguments passed to the adapter command."""
        return []

    def descriptor(self) -> AdapterDescriptor:
        """Build the descriptor registered for this adapter."""
        return AdapterDescriptor(
            kind=self.kind,
            command=self.find_command(),
            display_name=self.display_name,
            args=self.command_args(),
        )

    def get_info(self) -> dict[str, Any]:
        """Get preset info for the registry resource."""
        return {
            "name": self.name,
            "display_name": self.display_name,
            "kind": self.kind.value,
            "description": self.description,
            "languages": self.languages,
            "aliases": self.aliases,
        }
