from jose import JWTError, ExpiredSignatureError, jwt

from app.config import settings
from app.utils.exceptions import TokenExpiredException, UnauthorizedException


# ─── JWT ──────────────────────────────────────────────────────────────────────
# Tokens are issued by the remote auth service after a password sign-in.
# This service only verifies them; it never mints or refreshes tokens.
def verify_access_token(token: str) -> dict:
    """
    Decode and validate a backend-issued access token.
    Raises 401 if invalid, 401 (TOKEN_EXPIRED) if expired.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.ALGORITHM],
            audience=settings.SUPABASE_JWT_AUDIENCE,
        )
    except ExpiredSignatureError:
        raise TokenExpiredException()
    except JWTError:
        raise UnauthorizedException("Invalid or malformed token")

    if not payload.get("sub"):
        raise UnauthorizedException("Invalid token payload")
    return payload
