"""Firebase ID token authentication provider.

Firebase ID tokens are RS256 JWTs signed by Google. They are verified against
the public JWKS published for ``securetoken@system.gserviceaccount.com``:

    {
        "iss": "https://securetoken.google.com/<project-id>",
        "aud": "<project-id>",
        "sub": "<firebase uid>",
        "email": "user@example.com",
        "name": "Dana Levi",
        "picture": "https://...",
        "exp": 1234567890
    }

Locally-minted HS256 tokens are accepted only when a development secret is
configured (tests and local runs).
"""

import time
from datetime import datetime, timedelta
from typing import Any, Optional

import httpx
import structlog
from jose import jwt
from jose.exceptions import JOSEError
from jose.backends import RSAKey

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()

FIREBASE_JWKS_URL = (
    "https://www.googleapis.com/service_accounts/v1/jwk/"
    "securetoken@system.gserviceaccount.com"
)
FIREBASE_ISSUER_PREFIX = "https://securetoken.google.com/"

# Minimum spacing between JWKS fetches, successful or not
JWKS_MIN_REFRESH_SECONDS = 60.0

# Module-level JWKS cache (fetched once, reused across requests)
_jwks_cache: dict[str, Any] | None = None
# time.monotonic() of the last fetch attempt
_jwks_fetched_at: float | None = None


async def _fetch_jwks() -> dict[str, Any]:
    """Download Google's published signing keys."""
    async with httpx.AsyncClient() as client:
        response = await client.get(FIREBASE_JWKS_URL, timeout=10.0)
        response.raise_for_status()
        data = response.json()
    if not isinstance(data, dict):
        raise ValueError("JWKS document is not an object")
    return data


async def _get_jwks_keys(force_refresh: bool = False) -> dict[str, Any]:
    """Fetch and cache Google's token signing keys, keyed by kid.

    ``force_refresh`` asks for a refetch after key rotation. Fetches are
    spaced at least ``JWKS_MIN_REFRESH_SECONDS`` apart; inside that window
    the current cache (or an empty mapping after a failed fetch) is returned.
    """
    global _jwks_cache, _jwks_fetched_at
    if _jwks_cache is not None and not force_refresh:
        return _jwks_cache

    now = time.monotonic()
    if _jwks_fetched_at is not None and now - _jwks_fetched_at < JWKS_MIN_REFRESH_SECONDS:
        return _jwks_cache or {}
    _jwks_fetched_at = now

    try:
        jwks_data = await _fetch_jwks()
    except (httpx.HTTPError, ValueError):
        logger.exception("jwks_fetch_failed", url=FIREBASE_JWKS_URL)
        return _jwks_cache or {}

    keys: dict[str, Any] = {}
    for key_data in jwks_data.get("keys", []):
        kid = key_data.get("kid") if isinstance(key_data, dict) else None
        if isinstance(kid, str) and kid:
            keys[kid] = key_data
    _jwks_cache = keys
    logger.info("jwks_fetched", key_count=len(keys))
    return keys


class FirebaseAuthProvider:
    """Verifies Firebase ID tokens (RS256) and dev tokens (HS256)."""

    def __init__(
        self,
        project_id: str = settings.resolved_firebase_project_id,
        secret_key: str = settings.auth_dev_secret,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._project_id = project_id
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    @property
    def is_configured(self) -> bool:
        return bool(self._project_id or self._secret_key)

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a bearer token and extract the caller identity.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid, expired or unverifiable
        """
        try:
            header = jwt.get_unverified_header(token)
            if not isinstance(header, dict):
                return None
            alg = header.get("alg")

            if alg == "RS256":
                payload = await self._validate_rs256(token, header)
            elif alg == self._algorithm and self._secret_key:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
            else:
                logger.info("token_algorithm_rejected", alg=alg)
                return None
        except (JOSEError, ValueError, TypeError) as e:
            # A malformed token or signing key means no identity
            logger.info("token_rejected", reason=str(e))
            return None

        if payload is None:
            return None

        user_id = payload.get("sub")
        if not user_id:
            return None

        return TokenUser(
            id=str(user_id),
            email=payload.get("email"),
            display_name=payload.get("name"),
            avatar_url=payload.get("picture"),
        )

    async def _validate_rs256(self, token: str, header: dict) -> Optional[dict]:
        """Validate a Firebase ID token against Google's JWKS."""
        if not self._project_id:
            return None

        kid = header.get("kid")
        if not isinstance(kid, str) or not kid:
            return None

        jwks_keys = await _get_jwks_keys()
        key_data = jwks_keys.get(kid)
        if not key_data:
            # Key not found, refetch once in case Google rotated keys
            jwks_keys = await _get_jwks_keys(force_refresh=True)
            key_data = jwks_keys.get(kid)
            if not key_data:
                logger.warning("jwks_key_not_found", kid=kid)
                return None

        rsa_key = RSAKey(key_data, algorithm="RS256")
        return jwt.decode(
            token,
            rsa_key,
            algorithms=["RS256"],
            audience=self._project_id,
            issuer=f"{FIREBASE_ISSUER_PREFIX}{self._project_id}",
        )

    def create_token(self, user: TokenUser) -> str:
        """
        Create an HS256 token for a user (local development and tests).

        Raises:
            RuntimeError: If no development secret is configured
        """
        if not self._secret_key:
            raise RuntimeError("AUTH_DEV_SECRET is not configured")

        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)
        payload: dict = {
            "sub": user.id,
            "email": user.email,
            "name": user.display_name,
            "picture": user.avatar_url,
            "exp": expire,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
