try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from monnify.core.errors import AuthenticationError
from monnify.models.token import CachedToken, TokenGrant


def test_cached_token_validity_window() -> None:
    record = CachedToken(token="abc", expires_at=1000)

    assert record.is_valid(939)
    assert not record.is_valid(940)
    assert record.is_valid(995, buffer_seconds=0)


@pytest.mark.parametrize(
    "raw",
    ["", "   ", "{", "[]", '{"token": "abc"}', '{"token": "", "expiresAt": 5}'],
)
def test_cached_token_from_bad_json_is_none(raw: str) -> None:
    assert CachedToken.from_json(raw) is None


def test_cached_token_serializes_with_camel_case_key() -> None:
    record = CachedToken(token="abc", expires_at=1000)

    assert record.to_json() == '{"token":"abc","expiresAt":1000}'
    assert CachedToken.from_json(record.to_json()) == record


@pytest.mark.parametrize(
    "payload",
    [
        {"token": "abc", "expiresIn": 60},
        {"accessToken": "abc", "expiresIn": 60},
        {"token": "abc", "expires_in": 60},
    ],
)
def test_grant_coerce_accepts_known_spellings(payload) -> None:
    grant = TokenGrant.coerce(payload)

    assert grant.token == "abc"
    assert grant.expires_in == 60
    assert grant.to_cached(now=100).expires_at == 160


@pytest.mark.parametrize(
    "payload",
    [{"token": "", "expiresIn": 60}, {"token": "abc", "expiresIn": -5}, {"token": "abc"}, "abc"],
)
def test_grant_coerce_rejects_malformed_results(payload) -> None:
    with pytest.raises(AuthenticationError):
        TokenGrant.coerce(payload)
