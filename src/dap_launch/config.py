"""dap-launch configuration."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError
from pydantic_settings import BaseSettings
from pydantic_settings import PydanticBaseSettingsSource
from pydantic_settings import SettingsConfigDict
from pydantic_settings import TomlConfigSettingsSource

from dap_launch.adapters.base import get_preset
from dap_launch.adapters.base import get_registered_presets
from dap_launch.cargo import example_launch_configs
from dap_launch.exceptions import AdapterNotFoundError
from dap_launch.exceptions import ConfigurationError
from dap_launch.registry import AdapterRegistry
from dap_launch.resolvers import from_program
from dap_launch.types import WORKSPACE_FOLDER
from dap_launch.types import AdapterDescriptor
from dap_launch.types import LaunchConfig
from dap_launch.types import RequestKind

logger = logging.getLogger(__name__)

CONFIG_FILES = [
    Path("dap-launch.toml"),
    Path.home() / ".config" / "dap-launch" / "config.toml",
]

_FALSE_VALUES = {"false", "0", "no", "off"}


def _default_configurations() -> dict[str, list[dict[str, Any]]]:
    return {
        "rust": [
            {
                "name": "vulkan-test",
                "type": "lldb",
                "request": "launch",
                "program": "target/debug/vulkan-test",
                "cwd": WORKSPACE_FOLDER,
                "stop_on_entry": False,
            },
        ],
    }


def _is_enabled(settings: dict[str, Any]) -> bool:
    # Env vars arrive as strings
    return str(settings.get("enabled", True)).lower() not in _FALSE_VALUES


class LaunchProfile(BaseModel):
    """A launch configuration entry as written in a config file.

    ``program`` is a path string: absolute paths are used as-is, relative
    ones are resolved against the working directory when the session is
    launched. Resolution fails if the program has not been built yet, unless
    ``must_exist`` is turned off.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str
    type: str = Field(description="Name of the adapter to use.")
    request: RequestKind = RequestKind.LAUNCH
    program: str = Field(description="Path to the program to debug.")
    cwd: str = WORKSPACE_FOLDER
    stop_on_entry: bool = Field(default=False, alias="stopOnEntry")
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)
    must_exist: bool = Field(
        default=True,
        description="Fail resolution when the program does not exist.",
    )

    def to_launch_config(self) -> LaunchConfig:
        """Convert to a LaunchConfig with a lazy program resolver."""
        return LaunchConfig(
            name=self.name,
            adapter_name=self.type,
            request=self.request,
            program_resolver=from_program(self.program, must_exist=self.must_exist),
            cwd=self.cwd,
            stop_on_entry=self.stop_on_entry,
            args=self.args,
            env=self.env,
        )


class LaunchSettings(BaseSettings):
    """dap-launch configuration.

    Configuration is loaded from (in order of precedence):
    1. Environment variables (prefixed with DAP_LAUNCH_)
    2. Config file (./dap-launch.toml or ~/.config/dap-launch/config.toml)
    3. Default values

    Environment variable examples:
        DAP_LAUNCH_LOG_LEVEL=DEBUG
        DAP_LAUNCH_ADAPTERS__DEBUGPY__ENABLED=false
        DAP_LAUNCH_ADAPTERS__LLDB__PATH=/usr/bin/lldb-dap
        DAP_LAUNCH_ADAPTERS__LLDB__SEARCH_PATH=true
    """

    model_config = SettingsConfigDict(
        env_prefix="DAP_LAUNCH_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # adapter_name -> settings_dict. Preset names take preset options
    # (enabled, path, ...); other names define custom adapters.
    adapters: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Configuration for debug adapters.",
    )
    configurations: dict[str, list[dict[str, Any]]] = Field(
        default_factory=_default_configurations,
        description="Launch configurations per language, in display order.",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR).",
    )
    host_module: str = Field(
        default="mcp.server",
        description="Module providing the debug-launch framework the registry plugs into.",
    )
    cargo_examples: bool = Field(
        default=False,
        description="Add a Rust launch configuration for every Cargo example.",
    )
    examples_dir: str = Field(
        default="examples",
        description="Directory scanned for Cargo examples.",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include TOML config files."""
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=CONFIG_FILES),
        )

    def _preset_settings(self, name: str) -> dict[str, Any]:
        """Find settings for a preset by name or alias, case-insensitively."""
        for key, val in self.adapters.items():
            preset = get_preset(key)
            if preset is not None and preset.name == name:
                return val
        return {"enabled": True}

    def build_registry(self, registry: AdapterRegistry | None = None) -> AdapterRegistry:
        """Populate a registry from configuration.

        Presets whose adapter binary cannot be found are skipped.

        Raises:
            ConfigurationError: If an adapter or launch configuration entry is invalid.
        """
        if registry is None:
            registry = AdapterRegistry()

        for name, cls in get_registered_presets().items():
            settings = self._preset_settings(name)
            if not _is_enabled(settings):
                logger.debug("Adapter %r disabled", name)
                continue
            try:
                preset = cls.from_config(settings)
            except TypeError as e:
                raise ConfigurationError(f"Invalid settings for adapter '{name}': {e}") from e
            try:
                descriptor = preset.descriptor()
            except AdapterNotFoundError as e:
                logger.info("Skipping adapter %r: %s", name, e)
                continue
            registry.register_adapter(name, descriptor)

        for name, settings in self.adapters.items():
            if get_preset(name) is not None or not _is_enabled(settings):
                continue
            cfg = {k: v for k, v in settings.items() if k != "enabled"}
            cfg.setdefault("display_name", name)
            try:
                descriptor = AdapterDescriptor.model_validate(cfg)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid adapter '{name}': {e}") from e
            registry.register_adapter(name, descriptor)

        for language, entries in self._launch_profiles().items():
            registry.register_launch_configs(language, entries)

        return registry

    def _launch_profiles(self) -> dict[str, list[LaunchConfig]]:
        profiles: dict[str, list[LaunchConfig]] = {}
        for language, entries in self.configurations.items():
            configs: list[LaunchConfig] = []
            for index, entry in enumerate(entries):
                try:
                    profile = LaunchProfile.model_validate(entry)
                except ValidationError as e:
                    raise ConfigurationError(
                        f"Invalid launch configuration {language}[{index}]: {e}"
                    ) from e
                configs.append(profile.to_launch_config())
            profiles[language] = configs

        if self.cargo_examples:
            profiles.setdefault("rust", []).extend(example_launch_configs(self.examples_dir))

        return profiles

    def get_registry_info(self) -> dict[str, Any]:
        """Get information about adapter presets and config sources."""
        presets_info: list[dict[str, Any]] = []
        for name, cls in get_registered_presets().items():
            settings = self._preset_settings(name)
            try:
                info = cls.from_config(settings).get_info()
            except TypeError:
                # Unusable settings; report what the class itself knows
                info = {
                    "name": name,
                    "display_name": cls.display_name,
                    "languages": cls.languages,
                }
            info["enabled"] = _is_enabled(settings)
            presets_info.append(info)

        return {
            "presets": presets_info,
            "host_module": self.host_module,
            "config_sources": self._get_config_sources(),
        }

    def _get_config_sources(self) -> list[str]:
        """Get list of configuration sources that were loaded."""
        sources: list[str] = ["defaults"]

        for path in CONFIG_FILES:
            if path.exists():
                sources.append(f"file:{path}")

        for key in os.environ:
            if key.startswith("DAP_LAUNCH_"):
                sources.append("environment")
                break

        return sources


def load_config() -> LaunchSettings:
    """Load configuration."""
    return LaunchSettings()


# Global config instance (lazily loaded)
_config: LaunchSettings | None = None


def get_config() -> LaunchSettings:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
