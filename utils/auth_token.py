"""
Bearer token validation utility.

Tokens are issued by the identity provider and have the form
"<user_id>.<issued_at>.<signature>" where signature is the hex
HMAC-SHA256 of "<user_id>.<issued_at>" keyed with AUTH_TOKEN_SECRET.

Security features:
- HMAC-SHA256 signature verification
- Replay attack protection (timestamp validation)
- User ID extraction
"""

import hmac
import hashlib
import time
import logging

logger = logging.getLogger(__name__)


class AuthTokenValidationError(Exception):
    """Raised when bearer token validation fails."""
    pass


def _signature(payload: str, secret: str) -> str:
    return hmac.new(
        key=secret.encode('utf-8'),
        msg=payload.encode('utf-8'),
        digestmod=hashlib.sha256
    ).hexdigest()


def sign_auth_token(user_id: str, secret: str, issued_at: int | None = None) -> str:
    """
    Build a signed token for user_id.

    Used by the identity provider integration and by admin tooling/tests.
    """
    if issued_at is None:
        issued_at = int(time.time())
    payload = f"{user_id}.{issued_at}"
    return f"{payload}.{_signature(payload, secret)}"


def validate_auth_token(token: str, secret: str, max_age_seconds: int = 3600) -> str:
    """
    Validates the token signature and age.

    Args:
        token: Raw token from the Authorization header (without "Bearer ")
        secret: Shared signing secret
        max_age_seconds: Maximum token age (default: 1 hour)

    Returns:
        The authenticated user_id

    Raises:
        AuthTokenValidationError: If validation fails
    """
    if not token:
        raise AuthTokenValidationError("No token provided")

    if not secret:
        raise AuthTokenValidationError("Token secret not configured")

    parts = token.split('.')
    if len(parts) != 3:
        raise AuthTokenValidationError("Malformed token")
    user_id, issued_at_raw, received_signature = parts

    if not user_id:
        raise AuthTokenValidationError("No user ID in token")

    try:
        issued_at = int(issued_at_raw)
    except ValueError:
        raise AuthTokenValidationError("Invalid issued_at")

    age_seconds = time.time() - issued_at
    if age_seconds > max_age_seconds:
        raise AuthTokenValidationError(
            f"Token too old ({int(age_seconds)}s > {max_age_seconds}s max)"
        )

    if age_seconds < -60:  # Allow 60s clock skew
        raise AuthTokenValidationError("Token timestamp is in the future")

    expected_signature = _signature(f"{user_id}.{issued_at_raw}", secret)

    # Constant-time comparison to prevent timing attacks, on bytes since
    # compare_digest rejects non-ASCII str
    if not hmac.compare_digest(expected_signature.encode('utf-8'), received_signature.encode('utf-8')):
        logger.warning(
            f"Token signature mismatch | "
            f"Expected: {expected_signature[:16]}... | "
            f"Received: {received_signature[:16]}..."
        )
        raise AuthTokenValidationError("Invalid signature")

    logger.debug("Auth token validated successfully")
    return user_id


def extract_bearer_token(authorization: str | None) -> str:
    """
    Extracts the token from an "Authorization: Bearer <token>" header value.

    Raises:
        AuthTokenValidationError: If the header is missing or not a bearer token
    """
    if not authorization:
        raise AuthTokenValidationError("No Authorization header")

    scheme, _, token = authorization.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        raise AuthTokenValidationError("Authorization header is not a bearer token")
    return token.strip()
