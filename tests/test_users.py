"""Tests for Roblox user endpoints."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from roblox_mcp.client import RobloxUser
from roblox_mcp.endpoints.users import RobloxUsers
from roblox_mcp.utils.cookies import SessionCookies
from roblox_mcp.utils.roblox_id import RobloxIDError


@pytest.fixture
def mock_client():
    """Create mock Roblox client."""
    client = MagicMock()
    client.get_user = AsyncMock()
    client.get_user_by_id = AsyncMock()
    client.get_user_headshot = AsyncMock()
    client.get_authenticated_user = AsyncMock()
    client.is_account_valid = AsyncMock()
    return client


@pytest.fixture
def users(mock_client):
    return RobloxUsers(mock_client)


@pytest.fixture
def session_users(mock_client):
    return RobloxUsers(mock_client, SessionCookies.from_roblosecurity("token"))


class TestGetUser:
    """Tests for get_user tool."""

    @pytest.mark.asyncio
    async def test_text_output(self, users, mock_client):
        mock_client.get_user.return_value = RobloxUser.from_api(
            {"Id": 156, "Username": "builderman"}
        )

        result = await users.get_user(username=" builderman ")

        mock_client.get_user.assert_awaited_once_with("builderman")
        assert "builderman" in result
        assert "156" in result
        assert "https://www.roblox.com/users/156/profile" in result

    @pytest.mark.asyncio
    async def test_json_output(self, users, mock_client):
        mock_client.get_user.return_value = RobloxUser.from_api(
            {"id": 156, "username": "builderman"}
        )

        result = await users.get_user(username="builderman", format="json")

        assert json.loads(result) == {"id": "156", "username": "builderman"}

    @pytest.mark.asyncio
    async def test_error_body(self, users, mock_client):
        mock_client.get_user.return_value = RobloxUser.from_api(
            {"success": False, "errorMessage": "User not found"}
        )

        result = await users.get_user(username="nobody-here")

        assert result == "Error: User not found"


class TestGetUserById:
    """Tests for get_user_by_id tool."""

    @pytest.mark.asyncio
    async def test_valid_id(self, users, mock_client):
        mock_client.get_user_by_id.return_value = RobloxUser.from_api(
            {"Id": 156, "Username": "builderman"}
        )

        result = await users.get_user_by_id(user_id="156")

        mock_client.get_user_by_id.assert_awaited_once_with("156")
        assert "builderman" in result

    @pytest.mark.asyncio
    async def test_invalid_id_raises(self, users, mock_client):
        with pytest.raises(RobloxIDError):
            await users.get_user_by_id(user_id="builderman")

        mock_client.get_user_by_id.assert_not_awaited()


class TestGetUserHeadshot:
    """Tests for get_user_headshot tool."""

    @pytest.mark.asyncio
    async def test_returns_url(self, users, mock_client):
        mock_client.get_user_headshot.return_value = "https://tr.rbxcdn.com/head.png"

        result = await users.get_user_headshot(username="builderman", resolution=150)

        mock_client.get_user_headshot.assert_awaited_once_with("builderman", 150)
        assert "https://tr.rbxcdn.com/head.png" in result
        assert "150x150" in result

    @pytest.mark.asyncio
    async def test_default_resolution(self, users, mock_client):
        mock_client.get_user_headshot.return_value = "https://tr.rbxcdn.com/head.png"

        await users.get_user_headshot(username="builderman")

        mock_client.get_user_headshot.assert_awaited_once_with("builderman", 420)

    @pytest.mark.asyncio
    async def test_missing_url(self, users, mock_client):
        mock_client.get_user_headshot.return_value = None

        result = await users.get_user_headshot(username="builderman")

        assert "No headshot available" in result


class TestSessionTools:
    """Tests for get_authenticated_user and check_session tools."""

    @pytest.mark.asyncio
    async def test_authenticated_user_without_session(self, users, mock_client):
        result = await users.get_authenticated_user()

        assert "ROBLOX_COOKIE" in result
        mock_client.get_authenticated_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_authenticated_user_without_session_json(self, users):
        result = await users.get_authenticated_user(format="json")

        assert "ROBLOX_COOKIE" in json.loads(result)["error"]

    @pytest.mark.asyncio
    async def test_authenticated_user(self, session_users, mock_client):
        mock_client.get_authenticated_user.return_value = RobloxUser.from_api(
            {"id": 7, "username": "me"}
        )

        result = await session_users.get_authenticated_user()

        credentials = mock_client.get_authenticated_user.call_args.args[0]
        assert str(credentials) == ".ROBLOSECURITY=token"
        assert "User ID: 7" in result

    @pytest.mark.asyncio
    async def test_authenticated_user_rejected(self, session_users, mock_client):
        mock_client.get_authenticated_user.return_value = RobloxUser.from_api(
            {"errors": [{"code": 0, "message": "Authorization has been denied"}]}
        )

        result = await session_users.get_authenticated_user()

        assert result == "Error: Authorization has been denied"

    @pytest.mark.asyncio
    async def test_check_session_without_session(self, users, mock_client):
        result = await users.check_session()

        assert "ROBLOX_COOKIE" in result
        mock_client.is_account_valid.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "valid,expected", [(True, "is valid"), (False, "is not valid")]
    )
    async def test_check_session(self, session_users, mock_client, valid, expected):
        mock_client.is_account_valid.return_value = valid

        result = await session_users.check_session()

        assert expected in result
