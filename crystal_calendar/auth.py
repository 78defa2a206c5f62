import logging
import time
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from .config import SUPABASE_JWT_AUDIENCE, SUPABASE_JWT_SECRET

logger = logging.getLogger(__name__)

security = HTTPBearer()

ALGORITHM = "HS256"
SERVICE_ROLE = "service_role"


@dataclass
class AuthenticatedUser:
    """Identity carried by a verified Supabase access token"""

    id: str
    email: Optional[str]
    role: str

    @property
    def is_service_role(self) -> bool:
        return self.role == SERVICE_ROLE


def verify_supabase_token(token: str) -> dict:
    """
    Verify a Supabase access token (HS256 signed with the project JWT secret).
    Service-role keys carry no audience, so the audience check is applied
    only to end-user tokens.
    """
    try:
        unverified = jwt.get_unverified_claims(token)
    except JWTError as e:
        logger.error(f"❌ Failed to decode token claims: {str(e)}")
        raise HTTPException(status_code=401, detail="Invalid token format") from e

    is_service_token = unverified.get("role") == SERVICE_ROLE

    try:
        payload = jwt.decode(
            token,
            SUPABASE_JWT_SECRET,
            algorithms=[ALGORITHM],
            audience=None if is_service_token else SUPABASE_JWT_AUDIENCE,
            options={"verify_aud": not is_service_token},
        )
    except ExpiredSignatureError as e:
        logger.info("ℹ️ Token expired")
        raise HTTPException(
            status_code=401,
            detail="Token has expired. Please refresh your session.",
            headers={"X-Token-Expired": "true"},
        ) from e
    except JWTError as e:
        logger.error(f"❌ Token verification failed: {str(e)}")
        raise HTTPException(status_code=401, detail="Invalid token signature") from e

    # Token should not be from the future (60 seconds clock skew)
    iat = payload.get("iat", 0)
    if iat > time.time() + 60:
        logger.warning("⚠️ Token issued in the future")
        raise HTTPException(status_code=401, detail="Invalid token")

    logger.debug(f"✅ Token verified for: {payload.get('email') or payload.get('role')}")
    return payload


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> AuthenticatedUser:
    """Get current user from a Supabase access token"""

    if not credentials:
        logger.error("❌ No credentials provided")
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    token = credentials.credentials
    if len(token.split(".")) != 3:
        logger.warning(f"⚠️ Malformed token received, token length: {len(token)}")
        raise HTTPException(
            status_code=401, detail="Invalid token format. Expected a valid JWT token."
        )

    payload = verify_supabase_token(token)
    role = payload.get("role", "authenticated")
    user_id = payload.get("sub")

    if not user_id and role != SERVICE_ROLE:
        logger.error(f"❌ Token missing user ID claim. Available claims: {list(payload.keys())}")
        raise HTTPException(status_code=401, detail="Invalid token claims")

    return AuthenticatedUser(id=user_id or SERVICE_ROLE, email=payload.get("email"), role=role)


async def require_service_role(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Database administration endpoints are limited to the service role"""
    if not user.is_service_role:
        logger.warning(f"⚠️ User {user.email or user.id} attempted a service-role operation")
        raise HTTPException(status_code=403, detail="Service role required")
    return user
