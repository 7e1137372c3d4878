"""Roblox API endpoint modules.

Each endpoint module groups related Roblox web API calls (users, games)
and exposes MCP tools for them.
"""

from .base import BaseEndpoint, endpoint, EndpointRegistry

__all__ = ["BaseEndpoint", "endpoint", "EndpointRegistry"]
