"""Roblox API client module."""

from .models import ReturnPolicy, RobloxUser, ThumbnailOptions, ThumbnailSize
from .roblox_client import RobloxAPIError, RobloxClient, RobloxDecodeError

__all__ = [
    "RobloxClient",
    "RobloxAPIError",
    "RobloxDecodeError",
    "RobloxUser",
    "ThumbnailOptions",
    "ThumbnailSize",
    "ReturnPolicy",
]
