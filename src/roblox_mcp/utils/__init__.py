"""Utility functions for Roblox MCP."""

from .cookies import SessionCookies
from .roblox_id import RobloxIDError, extract_place_id, is_valid_roblox_id

__all__ = ["SessionCookies", "RobloxIDError", "extract_place_id", "is_valid_roblox_id"]
