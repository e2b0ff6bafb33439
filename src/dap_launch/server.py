"""MCP server exposing the launch registry to debug-session launchers."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Resource
from mcp.types import TextContent
from mcp.types import Tool
from pydantic import BaseModel
from pydantic import Field

from dap_launch.bootstrap import initialize
from dap_launch.config import LaunchSettings
from dap_launch.config import get_config
from dap_launch.exceptions import AdapterNotFoundError
from dap_launch.exceptions import DAPLaunchError
from dap_launch.registry import AdapterRegistry

logger = logging.getLogger(__name__)

# === Tool Input Models ===


class LanguageInput(BaseModel):
    """Input for launch_list_configs tool."""

    language: str = Field(description="Language name, e.g. 'rust'")


class AdapterInput(BaseModel):
    """Input for launch_get_adapter tool."""

    name: str = Field(description="Adapter name, e.g. 'lldb'")


class ResolveInput(BaseModel):
    """Input for launch_resolve tool."""

    language: str = Field(description="Language name, e.g. 'rust'")
    name: str = Field(description="Launch configuration name")


# === Server Implementation ===


class LaunchRegistryServer:
    """MCP server answering adapter and launch configuration lookups."""

    def __init__(
        self,
        registry: AdapterRegistry | None = None,
        config: LaunchSettings | None = None,
    ) -> None:
        """Initialize the server.

        Args:
            registry: Registry to serve. Built from configuration if omitted.
            config: Settings. Defaults to the global configuration.
        """
        self.config = config or get_config()
        self.registry = registry if registry is not None else initialize(config=self.config)
        self.server = Server("dap-launch")

        self._register_tools()
        self._register_resources()

    def _register_tools(self) -> None:
        """Register all MCP tools."""

        @self.server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
        async def list_tools() -> list[Tool]:
            return [
                Tool(
                    name="launch_list_configs",
                    description="List launch configurations for a language, in display order.",
                    inputSchema=LanguageInput.model_json_schema(),
                ),
                Tool(
                    name="launch_get_adapter",
                    description="Get how to start or reach a registered debug adapter.",
                    inputSchema=AdapterInput.model_json_schema(),
                ),
                Tool(
                    name="launch_resolve",
                    description=(
                        "Resolve a launch configuration into DAP launch/attach arguments. "
                        "The program path is computed now, from the current working directory."
                    ),
                    inputSchema=ResolveInput.model_json_schema(),
                ),
            ]

        @self.server.call_tool()  # type: ignore[untyped-decorator]
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            try:
                result = await self._handle_tool(name, arguments)
                return [TextContent(type="text", text=json.dumps(result, indent=2))]
            except DAPLaunchError as e:
                return [TextContent(type="text", text=json.dumps({"error": str(e)}))]
            except Exception as e:
                logger.exception("Tool %s failed", name)
                return [
                    TextContent(type="text", text=json.dumps({"error": f"Internal error: {e}"}))
                ]

    async def _handle_tool(self, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """Handle a tool call."""

        if name == "launch_list_configs":
            lang_inp = LanguageInput.model_validate(arguments)
            configs = self.registry.get_launch_configs(lang_inp.language)
            return {
                "language": lang_inp.language,
                "configurations": [c.model_dump(mode="json") for c in configs],
            }

        if name == "launch_get_adapter":
            adapter_inp = AdapterInput.model_validate(arguments)
            descriptor = self.registry.get_adapter(adapter_inp.name)
            if descriptor is None:
                raise AdapterNotFoundError(f"Adapter not registered: {adapter_inp.name}")
            return {"name": adapter_inp.name, **descriptor.model_dump(mode="json")}

        if name == "launch_resolve":
            resolve_inp = ResolveInput.model_validate(arguments)
            config = self.registry.get_launch_config(resolve_inp.language, resolve_inp.name)
            if config is None:
                raise DAPLaunchError(
                    f"No launch configuration '{resolve_inp.name}' for {resolve_inp.language}"
                )
            descriptor = self.registry.get_adapter(config.adapter_name)
            return {
                "arguments": self.registry.launch_arguments(config),
                "adapter": descriptor.model_dump(mode="json") if descriptor else None,
            }

        raise DAPLaunchError(f"Unknown tool: {name}")

    def _register_resources(self) -> None:
        """Register MCP resources."""

        @self.server.list_resources()  # type: ignore[no-untyped-call, untyped-decorator]
        async def list_resources() -> list[Resource]:
            return [
                Resource(
                    uri="launch://registry",  # type: ignore[arg-type]
                    name="Launch Registry",
                    description="Registered debug adapters and launch configurations",
                    mimeType="application/json",
                ),
                Resource(
                    uri="launch://presets",  # type: ignore[arg-type]
                    name="Adapter Presets",
                    description="Built-in adapter presets and configuration sources",
                    mimeType="application/json",
                ),
            ]

        @self.server.read_resource()  # type: ignore[no-untyped-call, untyped-decorator]
        async def read_resource(uri: Any) -> str:
            return self._read_resource(str(uri))

    def _read_resource(self, uri: str) -> str:
        if uri == "launch://registry":
            return json.dumps(self.registry.describe(), indent=2)
        if uri == "launch://presets":
            return json.dumps(self.config.get_registry_info(), indent=2)
        return json.dumps({"error": f"Unknown resource: {uri}"})

    async def run(self) -> None:
        """Run the MCP server."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


async def serve() -> None:
    """Start the dap-launch server."""
    server = LaunchRegistryServer()
    await server.run()


def main() -> None:
    """Entry point for dap-launch command."""
    # stdout carries MCP traffic
    logging.basicConfig(
        level=get_config().log_level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(serve())


if __name__ == "__main__":
    main()
