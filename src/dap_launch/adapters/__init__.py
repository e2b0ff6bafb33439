"""Built-in debug adapter presets."""

from __future__ import annotations

from dap_launch.adapters.base import AdapterPreset
from dap_launch.adapters.codelldb import CodeLLDBPreset
from dap_launch.adapters.debugpy import DebugpyPreset
from dap_launch.adapters.godlv import DelvePreset
from dap_launch.adapters.lldb import LLDBPreset

__all__ = [
    "AdapterPreset",
    "CodeLLDBPreset",
    "DebugpyPreset",
    "DelvePreset",
    "LLDBPreset",
]
