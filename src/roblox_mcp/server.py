#!/usr/bin/env python3
"""stdio MCP server exposing the Roblox user and game tools.

Configuration comes from the environment (or a .env file):

    ROBLOX_COOKIE     .ROBLOSECURITY value for the session tools (optional)
    ROBLOX_LOG_LEVEL  logging level name, default INFO

Run with ``roblox-mcp`` or ``python -m roblox_mcp.server``.
"""

import asyncio
import importlib
import logging
import os
import sys
from typing import Any

from dotenv import load_dotenv
from mcp.server import Server, NotificationOptions
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent, ImageContent, EmbeddedResource

from roblox_mcp.client import RobloxClient
from roblox_mcp.endpoints.base import EndpointManager
from roblox_mcp.utils.cookies import SessionCookies


load_dotenv()

# stdout carries MCP messages
logging.basicConfig(
    level=os.getenv("ROBLOX_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)
logger = logging.getLogger(__name__)

server = Server("roblox-mcp-server")

roblox_client: RobloxClient | None = None
endpoint_manager: EndpointManager | None = None


ENDPOINT_MODULES = ("users", "games")


def discover_endpoints() -> list[str]:
    """
    Import the endpoint modules so their tools register.

    Returns:
        Names of the modules that imported cleanly
    """
    loaded = []
    for module_name in ENDPOINT_MODULES:
        try:
            importlib.import_module(f"roblox_mcp.endpoints.{module_name}")
        except ImportError as e:
            logger.error(f"Failed to load endpoint module {module_name}: {e}")
            continue
        loaded.append(module_name)
    logger.info(f"Loaded endpoint modules: {', '.join(loaded)}")
    return loaded


def load_session_cookies() -> SessionCookies | None:
    """Build session cookies from ROBLOX_COOKIE, if set."""
    token = os.getenv("ROBLOX_COOKIE")
    if not token:
        return None
    return SessionCookies.from_roblosecurity(token)


@server.list_tools()
async def handle_list_tools() -> list[Tool]:
    """Return every registered Roblox tool."""
    if endpoint_manager is None:
        return []
    return endpoint_manager.get_all_tools()


@server.call_tool()
async def handle_call_tool(
    name: str, arguments: dict[str, Any] | None
) -> list[TextContent | ImageContent | EmbeddedResource]:
    """Dispatch a tool call to the endpoint manager."""
    if endpoint_manager is None:
        raise RuntimeError("Endpoint manager not initialized")

    try:
        return await endpoint_manager.call_tool(name, arguments)
    except ValueError as e:
        return [TextContent(type="text", text=f"Error: {e}")]
    except Exception as e:
        logger.exception(f"Unexpected error executing tool {name}")
        return [TextContent(type="text", text=f"Unexpected error: {e}")]


async def run_server() -> None:
    """Build the client and tool layer, then serve MCP over stdio until EOF."""
    global roblox_client, endpoint_manager

    credentials = load_session_cookies()
    if credentials is None:
        logger.info("ROBLOX_COOKIE not set; session tools are disabled")

    roblox_client = RobloxClient()
    discover_endpoints()
    endpoint_manager = EndpointManager(roblox_client, credentials)

    tool_count = len(endpoint_manager.get_all_tools())
    logger.info(f"Loaded {tool_count} tools from endpoint modules")

    async with stdio_server() as (read_stream, write_stream):
        try:
            await server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name="roblox-mcp-server",
                    server_version="0.1.0",
                    capabilities=server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                ),
            )
        finally:
            await roblox_client.close()


def main() -> None:
    """Console entry point."""
    try:
        asyncio.run(run_server())
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.exception(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
