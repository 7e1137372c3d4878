"""Roblox id validation.

Roblox user, place and universe ids are plain integers, but they reach this
package as strings (tool arguments, URLs pasted by users). An id is accepted
when it converts to a finite number. Digit-group underscores, which
``float()`` would otherwise allow, are rejected.
"""

import math
import re


class RobloxIDError(ValueError):
    """Raised when a caller-supplied Roblox id is not numeric."""

    pass


# Place/game URLs look like https://www.roblox.com/games/920587237/Adopt-Me
GAME_URL_PATTERN = re.compile(r"(?:https?://)?(?:www\.)?roblox\.com/games/(\d+)")


def is_valid_roblox_id(value: str) -> bool:
    """Return True if ``value`` converts to a finite number."""
    if not isinstance(value, str) or "_" in value:
        return False
    try:
        return math.isfinite(float(value))
    except ValueError:
        return False


def extract_place_id(value: str) -> str:
    """
    Extract a place id from a game URL, or return the input unchanged.

    Args:
        value: Place id or roblox.com/games/... URL

    Returns:
        The place id found in the URL, or the stripped input
    """
    value = value.strip()
    match = GAME_URL_PATTERN.match(value)
    if match:
        return match.group(1)
    return value
