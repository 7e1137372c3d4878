"""Tests for response and option models."""

import pytest

from roblox_mcp.client.models import (
    ReturnPolicy,
    RobloxUser,
    ThumbnailOptions,
    ThumbnailSize,
)


class TestRobloxUserFromApi:
    """Tests for RobloxUser.from_api normalization."""

    @pytest.mark.parametrize(
        "body",
        [
            {"id": 156, "username": "builderman"},
            {"Id": 156, "Username": "builderman"},
            {"Id": 156, "username": "builderman"},
            {"id": 156, "Username": "builderman"},
        ],
    )
    def test_either_casing(self, body):
        user = RobloxUser.from_api(body)

        assert user.id == "156"
        assert user.username == "builderman"

    def test_lowercase_wins(self):
        user = RobloxUser.from_api({"id": 1, "Id": 2, "username": "a", "Username": "b"})

        assert user.id == "1"
        assert user.username == "a"

    def test_zero_id_is_kept(self):
        user = RobloxUser.from_api({"id": 0, "Id": 5})
        assert user.id == "0"

    def test_error_body_yields_empty_user(self):
        body = {"errors": [{"code": 0, "message": "Unauthorized"}]}

        user = RobloxUser.from_api(body)

        assert user.id is None
        assert user.username is None
        assert user.raw == body

    def test_non_dict_body(self):
        user = RobloxUser.from_api(None)

        assert user.id is None
        assert user.raw == {"data": None}

    def test_to_dict_omits_raw(self):
        user = RobloxUser.from_api({"Id": 156, "Username": "builderman", "extra": 1})
        assert user.to_dict() == {"id": "156", "username": "builderman"}

    def test_equality_ignores_raw(self):
        assert RobloxUser.from_api({"id": 1, "username": "a"}) == RobloxUser.from_api(
            {"Id": 1, "Username": "a"}
        )


class TestThumbnailOptions:
    """Tests for ThumbnailOptions."""

    def test_return_policy_defaults_to_placeholder(self):
        options = ThumbnailOptions(size=ThumbnailSize.SIZE_50)

        assert options.return_policy is None
        assert options.resolved_return_policy is ReturnPolicy.PLACEHOLDER
        assert options.is_circular is False

    def test_explicit_return_policy(self):
        options = ThumbnailOptions(
            size=ThumbnailSize.SIZE_256, return_policy=ReturnPolicy.AUTO_GENERATED
        )
        assert options.resolved_return_policy is ReturnPolicy.AUTO_GENERATED

    def test_size_values(self):
        assert [size.value for size in ThumbnailSize] == [
            "50x50",
            "128x128",
            "150x150",
            "256x256",
            "512x512",
        ]

    def test_unknown_size_rejected(self):
        with pytest.raises(ValueError):
            ThumbnailSize("64x64")
