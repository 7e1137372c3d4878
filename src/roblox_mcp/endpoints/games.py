"""Roblox game endpoints.

MCP tools for resolving places to universes and fetching game media and
icons. None of these endpoints need a session.

Roblox uses two ids for a game: the place id found in the game's URL, and
the universe id grouping the places of one experience. The icon endpoint
takes universe ids; ``get_universe_id`` converts.
"""

import json

from roblox_mcp.client import ReturnPolicy, ThumbnailOptions, ThumbnailSize
from roblox_mcp.endpoints.base import BaseEndpoint, endpoint
from roblox_mcp.utils.roblox_id import extract_place_id


class RobloxGames(BaseEndpoint):
    """Game metadata and image tools."""

    @endpoint(
        name="get_universe_id",
        description=(
            "Get the universe id of the experience containing a place. Accepts a "
            "place id or a roblox.com/games/... URL."
        ),
        params={
            "place_id": {
                "type": "string",
                "description": "Place id (e.g., '920587237') or game URL",
                "required": True,
            },
        },
    )
    async def get_universe_id(self, place_id: str) -> str:
        """Resolve a place id to its universe id."""
        place_id = extract_place_id(place_id)
        universe_id = await self.client.get_universe_id(place_id)
        return f"Place {place_id} belongs to universe {universe_id}."

    @endpoint(
        name="get_game_assets",
        description="Get the media (screenshots and videos) shown on a game's page.",
        supports_json=True,
        params={
            "game_id": {
                "type": "string",
                "description": "Universe id of the game",
                "required": True,
            },
        },
    )
    async def get_game_assets(self, game_id: str, format: str = "text") -> str:
        """List a game's media assets."""
        game_id = game_id.strip()
        assets = await self.client.get_game_assets(game_id) or []

        if format == "json":
            return json.dumps(assets, indent=2)

        if not assets:
            return f"No media found for game {game_id}."

        output = [f"Media for game {game_id} ({len(assets)} item(s)):", ""]
        for asset in assets:
            status = "approved" if asset.get("approved") else "pending review"
            line = f"- {asset.get('assetType', 'Unknown')} (image {asset.get('imageId')}, {status})"
            if asset.get("videoTitle"):
                line += f"\n  Video: {asset['videoTitle']}"
            output.append(line)

        return "\n".join(output)

    @endpoint(
        name="get_game_icons",
        description="Get icon image URLs for one or more games by universe id.",
        supports_json=True,
        params={
            "universe_ids": {
                "type": "array",
                "items": {"type": "integer"},
                "description": "Universe ids of the games",
                "required": True,
            },
            "size": {
                "type": "string",
                "description": "Icon size",
                "enum": [size.value for size in ThumbnailSize],
                "default": ThumbnailSize.SIZE_512.value,
                "required": False,
            },
            "is_circular": {
                "type": "boolean",
                "description": "Crop icons to a circle",
                "default": False,
                "required": False,
            },
            "return_policy": {
                "type": "string",
                "description": "What to return when no icon has been generated yet",
                "enum": [policy.value for policy in ReturnPolicy],
                "default": ReturnPolicy.PLACEHOLDER.value,
                "required": False,
            },
        },
    )
    async def get_game_icons(
        self,
        universe_ids: list[int],
        size: str = ThumbnailSize.SIZE_512.value,
        is_circular: bool = False,
        return_policy: str | None = None,
        format: str = "text",
    ) -> str:
        """Get icon URLs for games."""
        if not universe_ids:
            return self.format_error("No universe ids provided", format)

        try:
            options = ThumbnailOptions(
                size=ThumbnailSize(size),
                is_circular=is_circular,
                return_policy=ReturnPolicy(return_policy) if return_policy else None,
            )
        except ValueError as e:
            return self.format_error(str(e), format)

        urls = await self.client.get_game_icons(universe_ids, options)

        if format == "json":
            return json.dumps(urls, indent=2)

        if not urls:
            return "No icons returned."

        return "\n".join([f"Icons ({options.size.value}):"] + [f"  {url}" for url in urls])
