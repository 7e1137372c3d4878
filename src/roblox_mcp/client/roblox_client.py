"""Roblox web API client.

Each method wraps a single Roblox endpoint (two for the headshot lookup) and
returns the decoded response mapped into a typed shape. There is no
retry, rate limiting, caching or explicit timeout here; callers that need
to bound latency wrap calls themselves (e.g. ``asyncio.wait_for``).
"""

import logging
from typing import Any

import httpx

from roblox_mcp.client.models import (
    CookieHeader,
    RobloxAsset,
    RobloxUser,
    ThumbnailOptions,
)
from roblox_mcp.utils.roblox_id import RobloxIDError, is_valid_roblox_id


logger = logging.getLogger(__name__)

# Characters of the raw body kept when a headshot response can't be decoded
DECODE_EXCERPT_LENGTH = 100


class RobloxAPIError(Exception):
    """Raised when Roblox reports an error inside a decoded response body."""

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        self.message = message
        self.code = code

    @classmethod
    def from_errors(cls, errors: list[dict[str, Any]]) -> "RobloxAPIError":
        """Build from a Roblox ``errors`` array, using the first entry."""
        first = errors[0] if errors else {}
        return cls(first.get("message", "Unknown Roblox API error"), first.get("code"))


class RobloxDecodeError(RobloxAPIError):
    """Raised when a response body that should be JSON can't be decoded."""

    def __init__(self, message: str, body_excerpt: str):
        super().__init__(message)
        self.body_excerpt = body_excerpt


class RobloxClient:
    """Async client for the Roblox web API."""

    API_URL = "https://api.roblox.com"
    WWW_URL = "https://www.roblox.com"
    USERS_API_URL = "https://users.roblox.com"
    GAMES_API_URL = "https://games.roblox.com"
    THUMBNAILS_API_URL = "https://thumbnails.roblox.com"

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """
        Initialize the underlying HTTP client (timeouts disabled).

        Args:
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``
        """
        self._client = httpx.AsyncClient(
            transport=transport,
            timeout=None,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "RobloxClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Issue a single GET request. Transport errors propagate unchanged."""
        logger.debug(f"GET {url} params={kwargs.get('params')}")
        return await self._client.request("GET", url, **kwargs)

    @staticmethod
    def _cookie_headers(credentials: CookieHeader) -> dict[str, str]:
        return {"Cookie": str(credentials)}

    # Users

    async def get_user(self, username: str) -> RobloxUser:
        """
        Look up a user by username.

        Args:
            username: Roblox username (URL-encoded into the query string)

        Returns:
            The decoded user, normalized to canonical field names

        Raises:
            json.JSONDecodeError: If the body is not valid JSON
        """
        response = await self._get(
            f"{self.API_URL}/users/get-by-username",
            params={"username": username},
        )
        return RobloxUser.from_api(response.json())

    async def get_user_by_id(self, user_id: str) -> RobloxUser:
        """Look up a user by numeric id."""
        response = await self._get(f"{self.API_URL}/users/{user_id}")
        return RobloxUser.from_api(response.json())

    async def get_user_headshot(self, username_or_id: str, resolution: int) -> str:
        """
        Get the headshot thumbnail URL for a user.

        The user is resolved through ``get_user`` first; the headshot request
        is only issued once that response has been decoded.

        Args:
            username_or_id: Username to resolve
            resolution: Width and height of the square headshot in pixels

        Returns:
            Headshot image URL

        Raises:
            RobloxDecodeError: If the headshot body is not valid JSON (or not
                valid UTF-8). The message contains the start of the raw body.
        """
        user = await self.get_user(username_or_id)

        response = await self._get(
            f"{self.WWW_URL}/headshot-thumbnail/json",
            params={
                "userId": user.id,
                "width": resolution,
                "height": resolution,
                "format": "png",
            },
        )

        try:
            data = response.json()
        except ValueError as e:
            # JSONDecodeError, or UnicodeDecodeError for non-UTF-8 bodies
            excerpt = response.text[:DECODE_EXCERPT_LENGTH]
            raise RobloxDecodeError(
                f"Error parsing JSON. Here is a part of the JSON: {excerpt}",
                excerpt,
            ) from e

        return data.get("Url")

    async def get_authenticated_user(self, credentials: CookieHeader) -> RobloxUser:
        """
        Get the user that owns the given session cookies.

        The status code is not checked: an invalid session comes back as an
        error-shaped body, available on ``RobloxUser.raw``.
        """
        response = await self._get(
            f"{self.USERS_API_URL}/v1/users/authenticated",
            headers=self._cookie_headers(credentials),
        )
        return RobloxUser.from_api(response.json())

    async def is_account_valid(self, credentials: CookieHeader) -> bool:
        """
        Check whether the given session cookies are accepted.

        Returns:
            True if the check endpoint answered 200, False for any other status
        """
        # "authentificated" differs from get_authenticated_user's path; keep as-is
        response = await self._get(
            f"{self.USERS_API_URL}/v1/users/authentificated",
            headers=self._cookie_headers(credentials),
        )
        return response.status_code == 200

    # Games

    async def get_universe_id(self, game_id: str) -> int:
        """
        Get the universe id containing a place.

        Args:
            game_id: Place id, as a numeric string

        Returns:
            Universe id

        Raises:
            RobloxIDError: If game_id is not numeric (no request is made)
            RobloxAPIError: If Roblox reports an error
        """
        if not is_valid_roblox_id(game_id):
            raise RobloxIDError("Invalid gameId")

        response = await self._get(
            f"{self.API_URL}/universes/get-universe-containing-place",
            params={"placeid": game_id},
        )
        data = response.json()
        if data.get("errors") is not None:
            raise RobloxAPIError.from_errors(data["errors"])
        return data["UniverseId"]

    async def get_game_assets(self, game_id: str) -> list[RobloxAsset]:
        """
        Get the media assets (images, videos) for a game.

        Returns:
            The ``assets`` list from the response, unmodified
        """
        response = await self._get(f"{self.GAMES_API_URL}/v2/games/{game_id}/media")
        return response.json().get("assets")

    async def get_game_icons(
        self, game_ids: list[int], options: ThumbnailOptions
    ) -> list[str]:
        """
        Get icon image URLs for one or more universes.

        The form payload is sent as the body of a GET request, which is how
        the thumbnails endpoint was originally called.

        Args:
            game_ids: Universe ids
            options: Icon size, crop shape and return policy

        Returns:
            Image URLs in the order Roblox returned them; empty if the
            response carries no data

        Raises:
            RobloxAPIError: If Roblox reports an error
        """
        form = {
            "universeIds": ",".join(str(game_id) for game_id in game_ids),
            "returnPolicy": options.resolved_return_policy.value,
            "size": options.size.value,
            "isCircular": str(options.is_circular).lower(),
            "format": "png",
        }

        response = await self._get(
            f"{self.THUMBNAILS_API_URL}/v1/games/icons", data=form
        )
        data = response.json()

        if data.get("errors") is not None:
            raise RobloxAPIError.from_errors(data["errors"])

        thumbnails = data.get("data")
        if not thumbnails:
            return []
        return [thumbnail["imageUrl"] for thumbnail in thumbnails]
