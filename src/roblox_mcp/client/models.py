"""Typed shapes for Roblox API responses and request options.

The Roblox web services are inconsistent about key casing: some endpoints
return ``Id``/``Username`` while others return ``id``/``username``.
Responses are normalized here, once, right after decoding.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NotRequired, Protocol, TypedDict


class CookieHeader(Protocol):
    """Anything that renders to a valid ``Cookie`` header value via ``str()``."""

    def __str__(self) -> str: ...


class ThumbnailSize(str, Enum):
    """Square icon sizes accepted by the thumbnails API."""

    SIZE_50 = "50x50"
    SIZE_128 = "128x128"
    SIZE_150 = "150x150"
    SIZE_256 = "256x256"
    SIZE_512 = "512x512"


class ReturnPolicy(str, Enum):
    """What the thumbnails API returns when no thumbnail is cached yet."""

    PLACEHOLDER = "PlaceHolder"
    AUTO_GENERATED = "AutoGenerated"
    FORCE_AUTO_GENERATED = "ForceAutoGenerated"


@dataclass(frozen=True)
class ThumbnailOptions:
    """Options for the game icon thumbnail request."""

    size: ThumbnailSize
    is_circular: bool = False
    return_policy: ReturnPolicy | None = None

    @property
    def resolved_return_policy(self) -> ReturnPolicy:
        return self.return_policy or ReturnPolicy.PLACEHOLDER


class RobloxAsset(TypedDict):
    """Game media entry from games.roblox.com, passed through unmodified."""

    assetTypeId: int
    assetType: str
    imageId: int
    videoHash: NotRequired[Any]
    videoTitle: NotRequired[Any]
    approved: bool


@dataclass
class RobloxUser:
    """A Roblox user identity with canonical field names."""

    id: str | None = None
    username: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: Any) -> "RobloxUser":
        """
        Build a user from a decoded response body.

        Accepts either ``id``/``Id`` and ``username``/``Username``; the
        lowercase key wins when both are present. Nothing else is validated,
        so an error-shaped body yields a user with empty fields and the body
        kept on ``raw``.
        """
        if not isinstance(data, dict):
            return cls(raw={"data": data})

        user_id = data.get("id")
        if user_id is None:
            user_id = data.get("Id")

        username = data.get("username")
        if username is None:
            username = data.get("Username")

        return cls(
            id=str(user_id) if user_id is not None else None,
            username=username,
            raw=data,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "username": self.username}
