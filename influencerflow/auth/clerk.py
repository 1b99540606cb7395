from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import httpx
from fastapi import HTTPException, status
from jose import jwk, jwt
from jose.exceptions import JWSError, JWTError

from influencerflow.config import settings

logger = logging.getLogger("auth.clerk")


class SigningKeyCache:
    """Clerk's published signing keys, indexed by ``kid``."""

    def __init__(self, max_age_seconds: int = 300) -> None:
        self.max_age_seconds = max_age_seconds
        self._keys: Dict[str, Dict[str, Any]] = {}
        self._loaded_at: Optional[float] = None

    def reset(self) -> None:
        self._keys = {}
        self._loaded_at = None

    def _stale(self) -> bool:
        return self._loaded_at is None or time.monotonic() - self._loaded_at >= self.max_age_seconds

    def _load(self) -> None:
        if not settings.CLERK_JWKS_URL:
            logger.error("CLERK_JWKS_URL is not configured")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Identity provider is not configured",
            )
        try:
            resp = httpx.get(settings.CLERK_JWKS_URL, timeout=10)
            resp.raise_for_status()
            published = resp.json().get("keys", [])
        except httpx.HTTPError as exc:
            logger.exception("Could not load Clerk signing keys", extra={"jwks_url": settings.CLERK_JWKS_URL})
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Unable to fetch signing keys",
            ) from exc
        self._keys = {key["kid"]: key for key in published if key.get("kid")}
        self._loaded_at = time.monotonic()
        logger.debug("Loaded Clerk signing keys", extra={"kids": sorted(self._keys)})

    def key_for(self, kid: str) -> Dict[str, Any]:
        if self._stale():
            self._load()
        elif kid not in self._keys:
            # a kid we have not seen means Clerk rotated its keys
            self._load()
        key = self._keys.get(kid)
        if not key:
            logger.warning("No Clerk signing key for token", extra={"kid": kid})
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Signing key not found")
        return key


signing_keys = SigningKeyCache()


def _token_kid(token: str) -> str:
    try:
        header = jwt.get_unverified_header(token)
    except JWTError as exc:
        logger.warning("Unreadable session token header", exc_info=exc)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc
    kid = header.get("kid")
    if not kid:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing kid in token")
    return kid


def _check_audience(claims: Dict[str, Any]) -> None:
    """Accept the token when any of its audiences is configured."""
    token_aud = claims.get("aud")
    if not token_aud or not settings.CLERK_AUDIENCE:
        return
    if isinstance(token_aud, str):
        token_aud = [token_aud]
    if not set(token_aud) & set(settings.CLERK_AUDIENCE):
        raise JWTError("Invalid audience")


def verify_clerk_token(token: str) -> Dict[str, Any]:
    """Verify a Clerk session token and return its claims.

    Raises 401 for anything wrong with the token itself and 503 when the
    signing keys cannot be fetched.
    """
    public_key = signing_keys.key_for(_token_kid(token))
    try:
        claims = jwt.decode(
            token,
            key=jwk.construct(public_key).to_pem().decode(),
            algorithms=[public_key.get("alg", "RS256")],
            issuer=settings.CLERK_JWT_ISSUER or None,
            options={"verify_aud": False},
        )
        _check_audience(claims)
    except (JWTError, JWSError, ValueError) as exc:
        logger.warning("Rejected Clerk session token", exc_info=exc)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc

    logger.debug("Accepted Clerk session", extra={"sub": claims.get("sub"), "kid": public_key.get("kid")})
    return claims
