"""Access token inspection for provider-issued (Supabase GoTrue) JWTs.

Tokens are issued by the hosted auth provider; this service never creates
them. When SUPABASE_JWT_SECRET is configured, tokens are verified locally
(HS256, audience 'authenticated'); otherwise the session service asks the
provider (/auth/v1/user) and only reads the unverified expiry here.
"""

from datetime import UTC, datetime
from typing import Any

from jose import JWTError, jwt

ALGORITHM = "HS256"
AUDIENCE = "authenticated"


def verify_token(token: str, secret: str) -> dict[str, Any]:
    """Verify and decode a provider access token. Returns the payload.

    Enforces presence of exp and sub. Raises ValueError if the token is
    invalid, expired, or missing required claims.

    Args:
        token: JWT string from the Authorization header.
        secret: Project JWT secret.

    Returns:
        Decoded payload dict.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            audience=AUDIENCE,
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if "sub" not in payload:
        raise ValueError("Token missing required claim: sub")
    return payload


def token_expiry(token: str) -> datetime | None:
    """Return the token's exp claim as UTC datetime without verifying the signature.

    Used only to bound how long a resolved session may be cached; returns
    None for malformed tokens or tokens without exp.
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return None
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return None
    return datetime.fromtimestamp(exp, UTC)
