from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_inventory_user
from app.models.user import User
from app.schemas.common import success_response
from app.services.dashboard_service import dashboard_service

router = APIRouter(prefix="/dashboard")


@router.get("", summary="Business overview: income, expenses, stock and recent activity")
def overview(
    db: Session = Depends(get_db),
    _:  User    = Depends(get_inventory_user),
):
    return success_response("Dashboard overview retrieved", dashboard_service.overview(db))
