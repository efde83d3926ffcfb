from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.models.role import RoleName, INVENTORY_USERTYPE
from app.utils.security import verify_access_token
from app.utils.exceptions import (
    UnauthorizedException,
    ForbiddenException,
    ProfileNotFoundException,
)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


# ─── Get Current User ─────────────────────────────────────────────────────────
def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Validate the backend-issued Bearer token and return the matching profile.
    Raises 401 if token is missing, invalid, or expired.
    Raises 403 if the account has no row in ``users``.
    """
    if not credentials:
        raise UnauthorizedException("No authentication token provided")

    payload = verify_access_token(credentials.credentials)
    user_id: str = str(payload["sub"])

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise ProfileNotFoundException()

    return user


# ─── Role checks ──────────────────────────────────────────────────────────────
def is_inventory_user(user: User) -> bool:
    return (
        str(user.role).strip() == RoleName.INVENTORY.value
        and (user.usertype or "").strip().lower() == INVENTORY_USERTYPE
    )


def is_fleet_user(user: User) -> bool:
    return str(user.role).strip() == RoleName.FLEET.value


def actor_name(user: User | None) -> str:
    """Name recorded in ``system_logs.created_by`` for actions by this user."""
    if user is None:
        return "System"
    return user.user_name or user.email or "System"


# ─── Pre-built role dependencies ─────────────────────────────────────────────
# Use these directly in route decorators

def get_inventory_user(current_user: User = Depends(get_current_user)) -> User:
    if not is_inventory_user(current_user):
        raise ForbiddenException("This action requires inventory access")
    return current_user

def get_fleet_user(current_user: User = Depends(get_current_user)) -> User:
    if not is_fleet_user(current_user):
        raise ForbiddenException("This action requires fleet access")
    return current_user

def get_any_authenticated(current_user: User = Depends(get_current_user)) -> User:
    """Any authenticated user regardless of role."""
    return current_user
