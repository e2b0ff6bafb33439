"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from dap_launch import config as config_module
from dap_launch.registry import AdapterRegistry
from dap_launch.resolvers import cargo_binary
from dap_launch.types import AdapterDescriptor
from dap_launch.types import AdapterKind
from dap_launch.types import LaunchConfig


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Keep the user's config files and DAP_LAUNCH_* variables out of tests.

    Returns the directory the config files are read from.
    """
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(
        config_module,
        "CONFIG_FILES",
        [home / "dap-launch.toml", home / ".config" / "dap-launch" / "config.toml"],
    )
    for key in list(os.environ):
        if key.startswith("DAP_LAUNCH_"):
            monkeypatch.delenv(key)
    return home


@pytest.fixture
def cargo_build() -> Callable[..., Path]:
    """Create a stand-in for a Cargo build artifact under ``root/target``."""

    def build(root: Path, name: str, profile: str = "debug", example: bool = False) -> Path:
        target = root / "target" / profile
        if example:
            target = target / "examples"
        target.mkdir(parents=True, exist_ok=True)
        binary = target / name
        binary.touch()
        return binary

    return build


@pytest.fixture
def registry() -> AdapterRegistry:
    """An empty registry."""
    return AdapterRegistry()


@pytest.fixture
def lldb_descriptor() -> AdapterDescriptor:
    """The lldb-vscode adapter descriptor."""
    return AdapterDescriptor(
        kind=AdapterKind.EXECUTABLE,
        command="/usr/bin/lldb-vscode",
        display_name="lldb",
    )


@pytest.fixture
def vulkan_config() -> LaunchConfig:
    """Rust launch configuration for the vulkan-test binary."""
    return LaunchConfig(
        name="vulkan-test",
        adapter_name="lldb",
        program_resolver=cargo_binary("vulkan-test"),
        stop_on_entry=False,
    )
