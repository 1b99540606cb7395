import time

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi import HTTPException
from jose import jwk, jwt

from influencerflow.auth import clerk
from influencerflow.config import settings


class FakeResponse:
    def __init__(self, payload: dict) -> None:
        self._payload = payload

    def raise_for_status(self) -> None:
        return None

    def json(self) -> dict:
        return self._payload


@pytest.fixture()
def signing_key():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    public_jwk = jwk.construct(public_pem, "RS256").to_dict()
    public_jwk.update({"kid": "test-key", "use": "sig", "alg": "RS256"})
    return private_pem, public_jwk


@pytest.fixture()
def jwks_endpoint(monkeypatch, signing_key):
    _, public_jwk = signing_key
    calls = []

    def fake_get(url, timeout):
        calls.append(url)
        return FakeResponse({"keys": [public_jwk]})

    clerk.signing_keys.reset()
    monkeypatch.setattr(settings, "CLERK_JWKS_URL", "https://clerk.test/.well-known/jwks.json")
    monkeypatch.setattr(settings, "CLERK_JWT_ISSUER", "https://clerk.test")
    monkeypatch.setattr(settings, "CLERK_AUDIENCE", ["backend"])
    monkeypatch.setattr(clerk.httpx, "get", fake_get)
    yield calls
    clerk.signing_keys.reset()


def _token(private_pem: str, kid: str = "test-key", **claims) -> str:
    payload = {
        "sub": "user_abc",
        "iss": "https://clerk.test",
        "aud": "backend",
        "exp": int(time.time()) + 300,
        **claims,
    }
    return jwt.encode(payload, private_pem, algorithm="RS256", headers={"kid": kid})


def test_valid_token_returns_claims(signing_key, jwks_endpoint):
    private_pem, _ = signing_key
    claims = clerk.verify_clerk_token(_token(private_pem, email="a@example.test"))
    assert claims["sub"] == "user_abc"
    assert claims["email"] == "a@example.test"

    clerk.verify_clerk_token(_token(private_pem))
    assert len(jwks_endpoint) == 1


def test_wrong_audience_is_rejected(signing_key, jwks_endpoint):
    private_pem, _ = signing_key
    with pytest.raises(HTTPException) as exc_info:
        clerk.verify_clerk_token(_token(private_pem, aud="someone-else"))
    assert exc_info.value.status_code == 401


def test_wrong_issuer_is_rejected(signing_key, jwks_endpoint):
    private_pem, _ = signing_key
    with pytest.raises(HTTPException) as exc_info:
        clerk.verify_clerk_token(_token(private_pem, iss="https://evil.test"))
    assert exc_info.value.status_code == 401


def test_expired_token_is_rejected(signing_key, jwks_endpoint):
    private_pem, _ = signing_key
    with pytest.raises(HTTPException) as exc_info:
        clerk.verify_clerk_token(_token(private_pem, exp=int(time.time()) - 60))
    assert exc_info.value.status_code == 401


def test_unknown_kid_reloads_keys_once(signing_key, jwks_endpoint):
    private_pem, _ = signing_key
    clerk.verify_clerk_token(_token(private_pem))
    assert len(jwks_endpoint) == 1

    with pytest.raises(HTTPException) as exc_info:
        clerk.verify_clerk_token(_token(private_pem, kid="rotated-key"))
    assert exc_info.value.status_code == 401
    assert len(jwks_endpoint) == 2


def test_stale_keys_are_reloaded(signing_key, jwks_endpoint, monkeypatch):
    private_pem, _ = signing_key
    monkeypatch.setattr(clerk.signing_keys, "max_age_seconds", 0)
    clerk.verify_clerk_token(_token(private_pem))
    clerk.verify_clerk_token(_token(private_pem))
    assert len(jwks_endpoint) == 2


def test_jwks_outage_is_service_unavailable(signing_key, monkeypatch):
    private_pem, _ = signing_key

    def failing_get(url, timeout):
        raise httpx.ConnectError("unreachable")

    clerk.signing_keys.reset()
    monkeypatch.setattr(settings, "CLERK_JWKS_URL", "https://clerk.test/.well-known/jwks.json")
    monkeypatch.setattr(clerk.httpx, "get", failing_get)
    with pytest.raises(HTTPException) as exc_info:
        clerk.verify_clerk_token(_token(private_pem))
    assert exc_info.value.status_code == 503
