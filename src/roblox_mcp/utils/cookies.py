"""Session cookie container for authenticated Roblox requests."""

from collections.abc import Mapping

# Name of the Roblox session cookie
ROBLOSECURITY = ".ROBLOSECURITY"


class SessionCookies:
    """
    Read-only set of cookies rendered as a ``Cookie`` header value.

    ``str()`` yields ``name=value; name2=value2``. Nothing here refreshes or
    persists the session.
    """

    def __init__(self, cookies: Mapping[str, str]) -> None:
        self._cookies = dict(cookies)

    @classmethod
    def from_roblosecurity(cls, token: str) -> "SessionCookies":
        """Build from a bare .ROBLOSECURITY value."""
        return cls({ROBLOSECURITY: token.strip()})

    def __str__(self) -> str:
        return "; ".join(f"{name}={value}" for name, value in self._cookies.items())

    def __repr__(self) -> str:
        # Never echo session tokens
        return f"SessionCookies(names={list(self._cookies)})"

    def __bool__(self) -> bool:
        return bool(self._cookies)
