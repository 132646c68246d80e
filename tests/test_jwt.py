"""
Tests for token issuing and verification.
"""

import base64
import json
import time
import uuid

import jwt
import pytest

from auth.jwt import TokenIssuer
from core.errors import AuthError

SECRET = "unit-test-signing-key-0123456789abcdef-xyz"


def _b64url_json(segment: str) -> dict:
    padded = segment + "=" * (-len(segment) % 4)
    return json.loads(base64.urlsafe_b64decode(padded))


def _b64url_encode(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


class TestTokenIssuer:
    def setup_method(self):
        self.issuer = TokenIssuer(SECRET, expiry_seconds=3600)
        self.user_id = uuid.uuid4()

    def test_issue_then_verify(self):
        token = self.issuer.issue(self.user_id, "alice")
        claims = self.issuer.verify(token)
        assert claims.subject == self.user_id
        assert claims.username == "alice"
        assert claims.expires_at > claims.issued_at

    def test_claim_names_on_the_wire(self):
        now = 1_700_000_000
        token = self.issuer.issue(self.user_id, "alice", now=now)
        header, payload, _sig = token.split(".")
        assert _b64url_json(header)["alg"] == "HS256"
        assert _b64url_json(payload) == {
            "sub": str(self.user_id),
            "username": "alice",
            "iat": now,
            "exp": now + 3600,
        }

    def test_default_expiry_is_24_hours(self):
        issuer = TokenIssuer(SECRET)
        token = issuer.issue(self.user_id, "alice", now=1000)
        payload = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
        assert payload["exp"] - payload["iat"] == 86400

    def test_expired_token_rejected(self):
        token = self.issuer.issue(self.user_id, "alice", now=time.time() - 7200)
        with pytest.raises(AuthError) as exc_info:
            self.issuer.verify(token)
        assert exc_info.value.message == "invalid or expired token"

    def test_same_token_rejected_once_it_ages_past_exp(self):
        t = time.time()
        token = self.issuer.issue(self.user_id, "alice", now=t)

        assert self.issuer.verify(token, now=t).subject == self.user_id
        assert self.issuer.verify(token, now=t + 3599).subject == self.user_id
        with pytest.raises(AuthError) as exc_info:
            self.issuer.verify(token, now=t + self.issuer.expiry_seconds + 1)
        assert exc_info.value.message == "invalid or expired token"

    def test_verify_at_exact_expiry_rejected(self):
        token = self.issuer.issue(self.user_id, "alice", now=1_700_000_000)
        with pytest.raises(AuthError):
            self.issuer.verify(token, now=1_700_000_000 + 3600)

    def test_different_key_rejected(self):
        other = TokenIssuer("another-signing-key-0123456789abcdef-xyz")
        token = other.issue(self.user_id, "alice")
        with pytest.raises(AuthError):
            self.issuer.verify(token)

    def test_tampered_payload_rejected(self):
        token = self.issuer.issue(self.user_id, "alice")
        header, payload, sig = token.split(".")
        claims = _b64url_json(payload)
        claims["sub"] = str(uuid.uuid4())
        forged = ".".join([header, _b64url_encode(claims), sig])
        with pytest.raises(AuthError):
            self.issuer.verify(forged)

    def test_unsigned_token_rejected(self):
        token = jwt.encode(
            {"sub": str(self.user_id), "username": "alice", "exp": int(time.time()) + 60},
            None,
            algorithm="none",
        )
        with pytest.raises(AuthError):
            self.issuer.verify(token)

    @pytest.mark.parametrize(
        "claims",
        [
            {"username": "alice"},
            {"sub": "not-a-uuid", "username": "alice"},
            {"sub": str(uuid.uuid4())},
        ],
    )
    def test_malformed_claims_rejected(self, claims):
        claims = dict(claims, exp=int(time.time()) + 60)
        token = jwt.encode(claims, SECRET, algorithm="HS256")
        with pytest.raises(AuthError):
            self.issuer.verify(token)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_garbage_rejected(self, token):
        with pytest.raises(AuthError):
            self.issuer.verify(token)

    def test_empty_secret_refused(self):
        with pytest.raises(ValueError):
            TokenIssuer("")

    def test_asymmetric_algorithm_refused(self):
        with pytest.raises(ValueError):
            TokenIssuer(SECRET, algorithm="RS256")
