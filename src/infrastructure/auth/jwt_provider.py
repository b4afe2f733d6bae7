"""JWT authentication provider implementation.

Supports identity-provider tokens signed with an asymmetric key published
at a JWKS endpoint (RS256/ES256), and locally-created HS256 tokens (tests
and service-to-service calls).

Expected payload:
    {
        "sub": "external-auth-id",
        "email": "user@example.com",
        "name": "Display Name",
        "exp": 1234567890
    }
"""

from datetime import datetime, timedelta
from typing import Any, Optional

import httpx
import structlog
from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()

ASYMMETRIC_ALGORITHMS = ("RS256", "ES256")

# Module-level JWKS cache (fetched once, reused across requests)
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys(jwks_url: str) -> dict[str, Any]:
    """Fetch and cache the identity provider's JWKS keys by kid."""
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache

    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            jwks_data = response.json()
    except (httpx.HTTPError, ValueError):
        logger.exception("jwks_fetch_failed", jwks_url=jwks_url)
        return {}

    _jwks_cache = {
        key_data["kid"]: key_data
        for key_data in jwks_data.get("keys", [])
        if key_data.get("kid")
    }
    logger.info("jwks_fetched", key_count=len(_jwks_cache))
    return _jwks_cache


def clear_jwks_cache() -> None:
    global _jwks_cache
    _jwks_cache = None


class JWTAuthProvider:
    """JWT-based authentication provider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        jwks_url: str = settings.jwks_url,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._jwks_url = jwks_url

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT and extract the verified subject.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid or expired
        """
        try:
            header = jwt.get_unverified_header(token)
            alg = header.get("alg", self._algorithm)

            if alg in ASYMMETRIC_ALGORITHMS:
                payload = await self._validate_with_jwks(token, header, alg)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JWTError:
            return None

        if payload is None:
            return None

        subject_id = payload.get("sub")
        email = payload.get("email")
        if not subject_id or not email:
            return None

        user_metadata = payload.get("user_metadata") or {}
        display_name = (
            payload.get("name")
            or user_metadata.get("display_name")
            or user_metadata.get("full_name")
        )

        return TokenUser(
            subject_id=str(subject_id),
            email=email,
            display_name=display_name,
        )

    async def _validate_with_jwks(
        self, token: str, header: dict, alg: str
    ) -> Optional[dict]:
        """Validate an asymmetrically signed JWT using JWKS public keys."""
        kid = header.get("kid")
        if not kid:
            return None

        jwks_keys = await _get_jwks_keys(self._jwks_url)
        key_data = jwks_keys.get(kid)
        if not key_data:
            # Key not found, refetch once in case of key rotation
            clear_jwks_cache()
            jwks_keys = await _get_jwks_keys(self._jwks_url)
            key_data = jwks_keys.get(kid)
            if not key_data:
                logger.warning("jwks_key_not_found", kid=kid)
                return None

        return jwt.decode(
            token,
            key_data,
            algorithms=[alg],
            options={"verify_aud": False},
        )

    def create_token(self, user: TokenUser) -> str:
        """
        Create an HS256 JWT for a subject (used for tests).

        Args:
            user: The subject to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": user.subject_id,
            "email": user.email,
            "name": user.display_name,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
