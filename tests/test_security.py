"""
Tests for the password hasher, the token service and the auth gate.
"""

import jwt as pyjwt
import pytest

from notes_app.core.exceptions import InvalidToken, MissingToken
from notes_app.services.auth_gate import authenticate, extract_token
from notes_app.services.password_service import PasswordHashingError
from notes_app.services.token_service import TokenService

USER_ID = "65f0c0ffee0000000000abcd"


class TestPasswordHasher:
    @pytest.mark.asyncio
    async def test_hash_is_salted_and_not_plaintext(self, hasher):
        h1 = await hasher.hash("secret1")
        h2 = await hasher.hash("secret1")
        assert h1 != h2
        assert "secret1" not in h1
        assert h1.startswith("$argon2id$")

    @pytest.mark.asyncio
    async def test_verify_match_and_mismatch(self, hasher):
        h = await hasher.hash("secret1")
        assert await hasher.verify("secret1", h) is True
        assert await hasher.verify("secret2", h) is False

    @pytest.mark.asyncio
    async def test_malformed_hash_is_an_internal_failure(self, hasher):
        with pytest.raises(PasswordHashingError):
            await hasher.verify("secret1", "not-a-hash")


class TestTokenService:
    def test_round_trip(self, tokens):
        assert tokens.verify(tokens.issue(USER_ID)) == USER_ID

    def test_payload_shape(self, tokens):
        payload = pyjwt.decode(tokens.issue(USER_ID), options={"verify_signature": False})
        assert payload["user"] == {"id": USER_ID}
        assert "iat" in payload
        assert "exp" not in payload

    def test_two_tokens_for_same_user_differ(self, tokens):
        assert tokens.issue(USER_ID) != tokens.issue(USER_ID)

    def test_wrong_secret_is_invalid(self, tokens):
        other = TokenService(secret="another-secret-0123456789-abcdefgh")
        assert tokens.verify(other.issue(USER_ID)) is None

    def test_tampered_token_is_invalid(self, tokens):
        token = tokens.issue(USER_ID)
        head, body, sig = token.split(".")
        flipped = ("A" if sig[0] != "A" else "B") + sig[1:]
        assert tokens.verify(f"{head}.{body}.{flipped}") is None

    @pytest.mark.parametrize("raw", ["", "garbage", "a.b.c"])
    def test_malformed_is_invalid(self, tokens, raw):
        assert tokens.verify(raw) is None

    def test_token_without_user_claim_is_invalid(self, settings, tokens):
        forged = pyjwt.encode({"sub": USER_ID}, settings.jwt_secret, algorithm="HS256")
        assert tokens.verify(forged) is None

    def test_expiry_when_configured(self, settings):
        svc = TokenService(secret=settings.jwt_secret, expire_minutes=5)
        payload = pyjwt.decode(svc.issue(USER_ID), options={"verify_signature": False})
        assert payload["exp"] > payload["iat"]
        expired = pyjwt.encode(
            {"user": {"id": USER_ID}, "iat": 1, "exp": 2}, settings.jwt_secret, algorithm="HS256"
        )
        assert svc.verify(expired) is None

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            TokenService(secret="")


class TestAuthGate:
    def test_extract_bearer(self):
        assert extract_token("Bearer abc", None) == "abc"

    def test_extract_legacy_header(self):
        assert extract_token(None, "abc") == "abc"

    def test_extract_nothing(self):
        assert extract_token(None, None) is None
        assert extract_token("Bearer ", None) is None

    def test_empty_bearer_falls_back_to_legacy_header(self):
        assert extract_token("Bearer ", "abc") == "abc"
        assert extract_token("   ", "abc") == "abc"

    def test_missing_token(self, tokens):
        with pytest.raises(MissingToken):
            authenticate(None, tokens)

    def test_invalid_token(self, tokens):
        with pytest.raises(InvalidToken):
            authenticate("nope", tokens)

    def test_valid_token(self, tokens):
        assert authenticate(tokens.issue(USER_ID), tokens) == USER_ID

    def test_signed_token_with_non_objectid_user_is_invalid(self, settings, tokens):
        token = pyjwt.encode({"user": {"id": "abc"}}, settings.jwt_secret, algorithm="HS256")
        assert tokens.verify(token) is None
        with pytest.raises(InvalidToken):
            authenticate(token, tokens)
