"""JWT authentication provider.

Accepts Supabase access tokens signed with ES256 (public keys from the
project's JWKS endpoint) and HS256 tokens signed with the shared secret,
which is also what the test suite issues.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)


class JWKSCache:
    """Signing keys by ``kid``, fetched lazily and refetched on a miss."""

    def __init__(self, url: str, timeout: float = 10.0) -> None:
        self._url = url
        self._timeout = timeout
        self._keys: dict[str, dict[str, Any]] | None = None

    async def _fetch(self) -> dict[str, dict[str, Any]]:
        if not self._url:
            return {}
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(self._url, timeout=self._timeout)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError:
            logger.exception("Failed to fetch JWKS from %s", self._url)
            return {}

        keys = {k["kid"]: k for k in payload.get("keys", []) if k.get("kid")}
        logger.info("Fetched %d JWKS keys", len(keys))
        return keys

    async def get(self, kid: str) -> dict[str, Any] | None:
        if self._keys is None:
            self._keys = await self._fetch()
        key = self._keys.get(kid)
        if key is None:
            # Keys may have rotated since the last fetch
            self._keys = await self._fetch()
            key = self._keys.get(kid)
        return key


class JWTAuthProvider:
    """JWT-based authentication provider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        jwks: JWKSCache | None = None,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._jwks = jwks or JWKSCache(settings.supabase_jwks_url)

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT and extract the user.

        Returns:
            TokenUser if valid, None if invalid, expired or missing ``sub``
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") == "ES256":
                payload = await self._decode_es256(token, header)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JWTError:
            return None

        if not payload or not payload.get("sub"):
            return None

        try:
            user_id = UUID(payload["sub"])
        except ValueError:
            return None

        return TokenUser(id=user_id, email=payload.get("email"), role=payload.get("role"))

    async def _decode_es256(self, token: str, header: dict[str, Any]) -> Optional[dict]:
        kid = header.get("kid")
        if not kid:
            return None

        key_data = await self._jwks.get(kid)
        if not key_data:
            logger.warning("JWKS key not found for kid=%s", kid)
            return None

        return jwt.decode(
            token,
            ECKey(key_data, algorithm="ES256"),
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    def create_token(self, user: TokenUser) -> str:
        """Create an HS256 token for a user (tests and local development)."""
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)
        payload: dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "aud": "authenticated",
            "role": user.role or "authenticated",
            "exp": expire,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
