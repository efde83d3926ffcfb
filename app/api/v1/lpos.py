from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.dependencies import get_inventory_user, actor_name
from app.models.user import User
from app.models.purchase_lpo import LPOStatus
from app.schemas.lpo import LPOCreateRequest
from app.schemas.common import success_response
from app.services.lpo_service import lpo_service

router = APIRouter(prefix="/lpos")


@router.get("", summary="List LPOs")
def list_lpos(
    lpoStatus: Optional[LPOStatus] = Query(None, alias="status", description="Pending | Active | Cancelled | Used"),
    db:        Session             = Depends(get_db),
    _:         User                = Depends(get_inventory_user),
):
    return success_response("LPOs retrieved", lpo_service.list_lpos(db, lpoStatus))


@router.get("/active", summary="Active LPOs that stock can be received against")
def list_active_lpos(
    db: Session = Depends(get_db),
    _:  User    = Depends(get_inventory_user),
):
    return success_response("Active LPOs retrieved", lpo_service.list_active_lpos(db))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Raise an LPO")
def create_lpo(
    body: LPOCreateRequest,
    db:   Session = Depends(get_db),
    current_user: User = Depends(get_inventory_user),
):
    data = lpo_service.create_lpo(db, body, actor_name(current_user))
    return success_response("LPO created successfully", data)


@router.get("/{lpo_id}", summary="Get LPO detail")
def get_lpo(
    lpo_id: int,
    db:     Session = Depends(get_db),
    _:      User    = Depends(get_inventory_user),
):
    return success_response("LPO retrieved", lpo_service.get_lpo(db, lpo_id))


@router.get("/{lpo_id}/items", summary="Stock items received against an LPO")
def get_lpo_items(
    lpo_id: int,
    db:     Session = Depends(get_db),
    _:      User    = Depends(get_inventory_user),
):
    return success_response("LPO items retrieved", lpo_service.get_lpo_items(db, lpo_id))


@router.patch("/{lpo_id}/confirm", summary="Mark an Active LPO as Used")
def confirm_lpo(
    lpo_id: int,
    db:     Session = Depends(get_db),
    current_user: User = Depends(get_inventory_user),
):
    return success_response("LPO confirmed", lpo_service.confirm_lpo(db, lpo_id, actor_name(current_user)))


@router.patch("/{lpo_id}/cancel", summary="Cancel a Pending or Active LPO")
def cancel_lpo(
    lpo_id: int,
    db:     Session = Depends(get_db),
    current_user: User = Depends(get_inventory_user),
):
    return success_response("LPO cancelled", lpo_service.cancel_lpo(db, lpo_id, actor_name(current_user)))


@router.delete("/{lpo_id}", summary="Delete LPO")
def delete_lpo(
    lpo_id: int,
    db:     Session = Depends(get_db),
    current_user: User = Depends(get_inventory_user),
):
    lpo_service.delete_lpo(db, lpo_id, actor_name(current_user))
    return success_response("LPO deleted", None)
