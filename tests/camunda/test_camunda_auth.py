"""Tests for engine credential helpers."""

import binascii

import pytest

from packages.camunda.auth import (
    decode_basic_username,
    describe_auth_header,
    resolve_auth_header,
)


class TestBasicCredentials:
    """Tests for X-Camunda-Auth decoding."""

    def test_decode_username(self) -> None:
        assert decode_basic_username("ZGVtbzpkZW1v") == "demo"

    def test_username_stops_at_first_colon(self) -> None:
        assert decode_basic_username("bWFyeTpwYTpzcw==") == "mary"

    def test_value_without_colon_is_all_username(self) -> None:
        assert decode_basic_username("am9obg==") == "john"

    def test_invalid_base64_raises(self) -> None:
        with pytest.raises(binascii.Error):
            decode_basic_username("not base64!")


class TestResolveAuthHeader:
    """Tests for the forwarded Authorization header."""

    def test_session_token_wins(self) -> None:
        header = resolve_auth_header(
            session_token="kc-token",
            authorization="Bearer other",
            camunda_auth="ZGVtbzpkZW1v",
        )
        assert header == "Bearer kc-token"

    def test_authorization_before_basic(self) -> None:
        header = resolve_auth_header(authorization="Bearer other", camunda_auth="ZGVtbzpkZW1v")
        assert header == "Bearer other"

    def test_basic_from_camunda_auth(self) -> None:
        assert resolve_auth_header(camunda_auth="ZGVtbzpkZW1v") == "Basic ZGVtbzpkZW1v"

    def test_nothing_available(self) -> None:
        assert resolve_auth_header() is None

    def test_describe_never_leaks_credentials(self) -> None:
        assert describe_auth_header(None) == "none"
        assert describe_auth_header("Bearer abc") == "OAuth"
        assert describe_auth_header("Basic ZGVtbzpkZW1v") == "Basic"
