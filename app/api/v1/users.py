from fastapi import APIRouter, Depends, status

from app.dependencies import get_any_authenticated, is_inventory_user, is_fleet_user
from app.models.user import User
from app.schemas.common import success_response

router = APIRouter(prefix="/users")


# GET /users/me: any authenticated user
@router.get("/me", status_code=status.HTTP_200_OK, summary="Get current user profile")
def get_me(current_user: User = Depends(get_any_authenticated)):
    return success_response("Profile retrieved", {
        "id":        current_user.id,
        "email":     current_user.email,
        "userName":  current_user.user_name,
        "role":      current_user.role,
        "usertype":  current_user.usertype,
        "access": {
            "inventory": is_inventory_user(current_user),
            "fleet":     is_fleet_user(current_user),
        },
        "createdAt": current_user.created_at.isoformat() if current_user.created_at else None,
    })
