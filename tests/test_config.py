"""Tests for configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING
from unittest import mock

import pytest

from dap_launch.config import LaunchProfile
from dap_launch.config import LaunchSettings
from dap_launch.config import load_config
from dap_launch.config import reset_config
from dap_launch.exceptions import ConfigurationError
from dap_launch.exceptions import ResolutionError
from dap_launch.types import AdapterKind
from dap_launch.types import RequestKind

if TYPE_CHECKING:
    from collections.abc import Callable
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def reset_config_fixture() -> Generator[None, None, None]:
    """Reset config before and after each test."""
    reset_config()
    yield
    reset_config()


class TestLaunchSettings:
    """Tests for LaunchSettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = LaunchSettings()

        assert config.log_level == "INFO"
        assert config.host_module == "mcp.server"
        assert config.adapters == {}
        assert config.cargo_examples is False
        assert config.configurations["rust"][0]["name"] == "vulkan-test"
        assert config.configurations["rust"][0]["type"] == "lldb"

    def test_env_var_override_log_level(self) -> None:
        """Test environment variable overrides."""
        with mock.patch.dict(os.environ, {"DAP_LAUNCH_LOG_LEVEL": "DEBUG"}):
            config = LaunchSettings()
            assert config.log_level == "DEBUG"

    def test_env_var_set_adapter_path(self) -> None:
        """Test setting adapter path via environment variable."""
        with mock.patch.dict(os.environ, {"DAP_LAUNCH_ADAPTERS__LLDB__PATH": "/custom/lldb-dap"}):
            config = LaunchSettings()
            assert config.adapters["lldb"]["path"] == "/custom/lldb-dap"


class TestLaunchProfile:
    """Tests for LaunchProfile entries."""

    def test_camel_case_alias(self) -> None:
        """Test that stopOnEntry is accepted as written in launch.json files."""
        profile = LaunchProfile.model_validate(
            {"name": "app", "type": "lldb", "program": "/bin/app", "stopOnEntry": True}
        )
        assert profile.stop_on_entry is True
        assert profile.request == RequestKind.LAUNCH

    def test_to_launch_config(
        self, tmp_path: Path, cargo_build: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test conversion keeps the program lazy."""
        config = LaunchProfile(name="app", type="lldb", program="target/debug/app").to_launch_config()

        monkeypatch.chdir(tmp_path)
        cargo_build(tmp_path, "app")
        assert config.adapter_name == "lldb"
        assert config.cwd == "${workspaceFolder}"
        assert config.program_resolver() == str(tmp_path.resolve() / "target" / "debug" / "app")

    def test_program_must_exist_by_default(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that a missing program fails resolution unless the check is off."""
        monkeypatch.chdir(tmp_path)
        checked = LaunchProfile(name="app", type="lldb", program="target/debug/app")
        unchecked = LaunchProfile(
            name="app", type="lldb", program="target/debug/app", must_exist=False
        )

        with pytest.raises(ResolutionError, match="Program not found"):
            checked.to_launch_config().program_resolver()
        assert unchecked.to_launch_config().program_resolver() == str(
            tmp_path.resolve() / "target" / "debug" / "app"
        )


class TestBuildRegistry:
    """Tests for registry building."""

    def test_default_rust_profile(self) -> None:
        """Test that the default configuration registers vulkan-test."""
        registry = LaunchSettings().build_registry()

        configs = registry.get_launch_configs("rust")
        assert len(configs) == 1
        assert configs[0].name == "vulkan-test"
        assert configs[0].adapter_name == "lldb"
        assert configs[0].stop_on_entry is False

    def test_default_rust_profile_needs_build(
        self, tmp_path: Path, cargo_build: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that vulkan-test resolves only once target/debug/vulkan-test exists."""
        registry = LaunchSettings().build_registry()
        config = registry.get_launch_configs("rust")[0]

        monkeypatch.chdir(tmp_path)
        with pytest.raises(ResolutionError, match="Program not found"):
            registry.resolve_program_path(config)

        binary = cargo_build(tmp_path, "vulkan-test")
        assert registry.resolve_program_path(config) == str(binary.resolve())

    def test_preset_with_explicit_path(self, tmp_path: Path) -> None:
        """Test a preset configured with an explicit binary path."""
        lldb = tmp_path / "lldb-vscode"
        lldb.touch()

        registry = LaunchSettings(adapters={"lldb": {"path": str(lldb)}}).build_registry()

        descriptor = registry.get_adapter("lldb")
        assert descriptor is not None
        assert descriptor.command == str(lldb)

    def test_preset_settings_by_alias(self, tmp_path: Path) -> None:
        """Test that preset settings can be keyed by alias."""
        lldb = tmp_path / "lldb-dap"
        lldb.touch()

        registry = LaunchSettings(adapters={"lldb-dap": {"path": str(lldb)}}).build_registry()

        descriptor = registry.get_adapter("lldb")
        assert descriptor is not None
        assert descriptor.command == str(lldb)
        assert "lldb-dap" not in registry

    def test_missing_preset_skipped(self, tmp_path: Path) -> None:
        """Test that presets whose binary is missing are skipped."""
        registry = LaunchSettings(
            adapters={"delve": {"path": str(tmp_path / "dlv")}}
        ).build_registry()

        assert "delve" not in registry

    def test_env_var_disable_adapter(self) -> None:
        """Test disabling a preset via environment variable."""
        with mock.patch.dict(os.environ, {"DAP_LAUNCH_ADAPTERS__DEBUGPY__ENABLED": "false"}):
            registry = LaunchSettings().build_registry()

        assert "debugpy" not in registry

    def test_debugpy_enabled_by_default(self) -> None:
        """Test that debugpy is registered with the running interpreter."""
        registry = LaunchSettings().build_registry()
        assert "debugpy" in registry

    def test_custom_adapter(self) -> None:
        """Test defining an adapter that is not a preset."""
        config = LaunchSettings(
            adapters={
                "gdb": {"kind": "executable", "command": "/usr/bin/gdb", "args": ["-i", "dap"]},
            },
        )
        registry = config.build_registry()

        descriptor = registry.get_adapter("gdb")
        assert descriptor is not None
        assert descriptor.kind == AdapterKind.EXECUTABLE
        assert descriptor.display_name == "gdb"
        assert descriptor.args == ("-i", "dap")

    def test_custom_adapter_invalid(self) -> None:
        """Test that a custom adapter without a command is rejected."""
        config = LaunchSettings(adapters={"gdb": {"kind": "executable"}})
        with pytest.raises(ConfigurationError, match="gdb"):
            config.build_registry()

    def test_preset_invalid_settings(self) -> None:
        """Test that unknown preset options are rejected."""
        config = LaunchSettings(adapters={"lldb": {"bogus": 1}})
        with pytest.raises(ConfigurationError, match="lldb"):
            config.build_registry()

    def test_invalid_launch_configuration(self) -> None:
        """Test that a profile without a program is rejected."""
        config = LaunchSettings(configurations={"rust": [{"name": "x", "type": "lldb"}]})
        with pytest.raises(ConfigurationError, match=r"rust\[0\]"):
            config.build_registry()

    def test_configuration_order(self) -> None:
        """Test that configuration order is kept."""
        config = LaunchSettings(
            configurations={
                "python": [
                    {"name": "tests", "type": "debugpy", "program": "tests/run.py"},
                    {"name": "app", "type": "debugpy", "program": "main.py"},
                ],
            },
        )
        registry = config.build_registry()

        assert [c.name for c in registry.get_launch_configs("python")] == ["tests", "app"]

    def test_cargo_examples(self, tmp_path: Path) -> None:
        """Test that Cargo examples are appended to the rust profiles."""
        examples = tmp_path / "examples"
        examples.mkdir()
        (examples / "images.rs").write_text("fn main() {}\n")

        registry = LaunchSettings(
            cargo_examples=True, examples_dir=str(examples)
        ).build_registry()

        names = [c.name for c in registry.get_launch_configs("rust")]
        assert names == ["vulkan-test", "example: images"]


class TestConfigFiles:
    """Tests for TOML configuration files."""

    def test_reads_toml_file(self, isolated_config: Path) -> None:
        """Test that settings are read from dap-launch.toml."""
        (isolated_config / "dap-launch.toml").write_text(
            'log_level = "WARNING"\n'
            "\n"
            "[adapters.debugpy]\n"
            "enabled = false\n"
        )

        config = LaunchSettings()

        assert config.log_level == "WARNING"
        assert "debugpy" not in config.build_registry()
        sources = config.get_registry_info()["config_sources"]
        assert f"file:{isolated_config / 'dap-launch.toml'}" in sources

    def test_env_overrides_toml(self, isolated_config: Path) -> None:
        """Test that environment variables take precedence over the file."""
        (isolated_config / "dap-launch.toml").write_text('log_level = "WARNING"\n')

        with mock.patch.dict(os.environ, {"DAP_LAUNCH_LOG_LEVEL": "ERROR"}):
            assert LaunchSettings().log_level == "ERROR"

    def test_no_files_uses_defaults(self) -> None:
        """Test that only defaults apply when no file exists."""
        assert LaunchSettings().get_registry_info()["config_sources"] == ["defaults"]


class TestRegistryInfo:
    """Tests for registry info generation."""

    def test_info_structure(self) -> None:
        """Test registry info structure."""
        info = LaunchSettings().get_registry_info()

        assert info["host_module"] == "mcp.server"
        assert "defaults" in info["config_sources"]
        names = [p["name"] for p in info["presets"]]
        assert "lldb" in names
        assert all(p["enabled"] for p in info["presets"])

    def test_info_disabled_preset(self) -> None:
        """Test that disabled presets are reported."""
        info = LaunchSettings(adapters={"delve": {"enabled": False}}).get_registry_info()

        delve = next(p for p in info["presets"] if p["name"] == "delve")
        assert delve["enabled"] is False


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_config_returns_instance(self) -> None:
        """Test that load_config returns a LaunchSettings instance."""
        assert isinstance(load_config(), LaunchSettings)

    def test_reset_config_clears_cache(self) -> None:
        """Test that reset_config clears the cached config."""
        from dap_launch.config import get_config

        _ = get_config()
        reset_config()

        with mock.patch.dict(os.environ, {"DAP_LAUNCH_LOG_LEVEL": "ERROR"}):
            config = get_config()
            assert config.log_level == "ERROR"
