from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.dependencies import get_inventory_user
from app.models.user import User
from app.schemas.common import success_response
from app.services.search_service import search_service

router = APIRouter(prefix="/search")


@router.get("", summary="Search suppliers, stock items, stock issuances and LPOs")
def search(
    q:  Optional[str] = Query(None, description="Matched case-insensitively against names, contacts and numbers"),
    db: Session       = Depends(get_db),
    _:  User          = Depends(get_inventory_user),
):
    return success_response("Search results retrieved", search_service.search(db, q))
