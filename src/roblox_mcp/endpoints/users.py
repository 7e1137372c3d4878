"""Roblox user endpoints.

MCP tools for user lookup, avatar headshots and the configured session's
identity. Lookups by name and id use the public API; the session tools send
the ROBLOX_COOKIE session cookie.
"""

import json

from roblox_mcp.client import RobloxUser
from roblox_mcp.endpoints.base import NO_SESSION_MESSAGE, BaseEndpoint, endpoint
from roblox_mcp.utils.roblox_id import RobloxIDError, is_valid_roblox_id

# Square headshot resolutions offered by the thumbnail service
HEADSHOT_RESOLUTIONS = [48, 60, 100, 150, 180, 352, 420, 720]


class RobloxUsers(BaseEndpoint):
    """User identity and avatar tools."""

    def _format_user(self, user: RobloxUser, format: str) -> str:
        if user.id is None and user.username is None:
            # Error-shaped body, e.g. unknown username or expired session
            errors = user.raw.get("errors")
            if errors:
                message = errors[0].get("message", "Unknown error")
            else:
                message = user.raw.get("errorMessage", "User not found")
            return self.format_error(message, format)

        if format == "json":
            return json.dumps(user.to_dict(), indent=2)
        return (
            f"Roblox user: {user.username}\n"
            f"  User ID: {user.id}\n"
            f"  Profile: https://www.roblox.com/users/{user.id}/profile"
        )

    @endpoint(
        name="get_user",
        description="Look up a Roblox user by username and return their user id.",
        supports_json=True,
        params={
            "username": {
                "type": "string",
                "description": "Roblox username (e.g., 'builderman')",
                "required": True,
            },
        },
    )
    async def get_user(self, username: str, format: str = "text") -> str:
        """Get a user by username."""
        user = await self.client.get_user(username.strip())
        return self._format_user(user, format)

    @endpoint(
        name="get_user_by_id",
        description="Look up a Roblox user by numeric user id and return their username.",
        supports_json=True,
        params={
            "user_id": {
                "type": "string",
                "description": "Roblox user id (e.g., '156')",
                "required": True,
            },
        },
    )
    async def get_user_by_id(self, user_id: str, format: str = "text") -> str:
        """Get a user by id."""
        user_id = user_id.strip()
        if not is_valid_roblox_id(user_id):
            raise RobloxIDError(f"Invalid user id: '{user_id}'")

        user = await self.client.get_user_by_id(user_id)
        return self._format_user(user, format)

    @endpoint(
        name="get_user_headshot",
        description=(
            "Get the URL of a Roblox user's avatar headshot image (PNG). "
            "The user is looked up by username first."
        ),
        params={
            "username": {
                "type": "string",
                "description": "Roblox username",
                "required": True,
            },
            "resolution": {
                "type": "integer",
                "description": "Width and height of the square headshot in pixels",
                "required": False,
                "default": 420,
                "enum": HEADSHOT_RESOLUTIONS,
            },
        },
    )
    async def get_user_headshot(self, username: str, resolution: int = 420) -> str:
        """Get a headshot URL for a user."""
        url = await self.client.get_user_headshot(username.strip(), resolution)
        if not url:
            return f"No headshot available for '{username}'."
        return f"Headshot for {username} ({resolution}x{resolution}):\n  {url}"

    @endpoint(
        name="get_authenticated_user",
        description=(
            "Get the Roblox account that owns the configured session cookie "
            "(ROBLOX_COOKIE)."
        ),
        supports_json=True,
        params={},
    )
    async def get_authenticated_user(self, format: str = "text") -> str:
        """Get the user behind the configured session."""
        if not self.credentials:
            return self.format_error(NO_SESSION_MESSAGE, format)

        user = await self.client.get_authenticated_user(self.credentials)
        return self._format_user(user, format)

    @endpoint(
        name="check_session",
        description="Check whether the configured Roblox session cookie is still accepted.",
        params={},
    )
    async def check_session(self) -> str:
        """Check the configured session."""
        if not self.credentials:
            return NO_SESSION_MESSAGE

        if await self.client.is_account_valid(self.credentials):
            return "Roblox session is valid."
        return "Roblox session is not valid (expired or revoked cookie)."
