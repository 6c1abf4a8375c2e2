from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from utils.errors import TokenExpired, TokenInvalid
from utils.tokenJWT import TokenService

CLAIMS = {"id": 7, "username": "sales01", "role": "sales", "full_name": "Sales Representative"}


@pytest.fixture
def tokens():
    return TokenService(secret_key="unit-secret", algorithm="HS256", expire_minutes=30)


def test_issued_token_verifies_to_same_claims(tokens):
    claims = tokens.verify(tokens.issue(CLAIMS))
    assert claims.model_dump() == CLAIMS


def test_expiry_is_set_from_configured_horizon(tokens):
    before = datetime.now(timezone.utc)
    payload = jwt.get_unverified_claims(tokens.issue(CLAIMS))
    exp = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    assert timedelta(minutes=29) < exp - before <= timedelta(minutes=30, seconds=1)
    assert payload["sub"] == "sales01"


def test_expired_token_is_reported_as_expired(tokens):
    token = tokens.issue(CLAIMS, expires_delta=timedelta(seconds=-5))
    with pytest.raises(TokenExpired) as exc_info:
        tokens.verify(token)
    assert exc_info.value.to_body() == {"error": "Token expired", "requireLogin": True, "expired": True}


def test_any_altered_character_invalidates_token(tokens):
    token = tokens.issue(CLAIMS)
    positions = [i for i, ch in enumerate(token) if ch != "."]

    for pos in positions:
        replacement = "A" if token[pos] != "A" else "B"
        altered = token[:pos] + replacement + token[pos + 1:]
        with pytest.raises(TokenInvalid):
            tokens.verify(altered)


def test_flipped_pad_bit_in_signature_is_invalid(tokens):
    alphabet = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
    token = tokens.issue(CLAIMS)
    last = token[-1]
    altered = token[:-1] + alphabet[alphabet.index(last) ^ 1]
    assert altered != token
    with pytest.raises(TokenInvalid):
        tokens.verify(altered)


def test_token_signed_with_other_key_is_invalid(tokens):
    foreign = TokenService(secret_key="someone-else").issue(CLAIMS)
    with pytest.raises(TokenInvalid):
        tokens.verify(foreign)


@pytest.mark.parametrize("token", ["", "garbage", "a.b", "a.b.c.d"])
def test_malformed_token_is_invalid(tokens, token):
    with pytest.raises(TokenInvalid) as exc_info:
        tokens.verify(token)
    assert "expired" not in exc_info.value.to_body()


def test_signed_token_without_identity_is_invalid(tokens):
    exp = datetime.now(timezone.utc) + timedelta(minutes=5)
    token = jwt.encode({"role": "admin", "exp": exp}, "unit-secret", algorithm="HS256")
    with pytest.raises(TokenInvalid):
        tokens.verify(token)


def test_token_without_role_still_authenticates(tokens):
    claims = tokens.verify(tokens.issue({"id": 1, "username": "legacy"}))
    assert claims.role is None
