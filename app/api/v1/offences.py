from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.dependencies import get_fleet_user
from app.models.user import User
from app.schemas.offence import OffenceCreateRequest, OffenceUpdateRequest
from app.schemas.common import success_response
from app.services.offence_service import offence_service

router = APIRouter(prefix="/offences")


@router.get("", summary="List offences, most recent first")
def list_offences(
    db: Session = Depends(get_db),
    _:  User    = Depends(get_fleet_user),
):
    return success_response("Offences retrieved", offence_service.list_offences(db))


@router.get("/grouped", summary="Offences grouped by vehicle")
def grouped_offences(
    db: Session = Depends(get_db),
    _:  User    = Depends(get_fleet_user),
):
    return success_response("Grouped offences retrieved", offence_service.grouped_offences(db))


@router.get("/suggestions", summary="Autocomplete values from existing offences")
def suggestions(
    field: str           = Query(..., pattern="^(vehicle_number|offence|charge)$"),
    q:     Optional[str] = Query(None),
    db:    Session       = Depends(get_db),
    _:     User          = Depends(get_fleet_user),
):
    return success_response("Suggestions retrieved", offence_service.suggestions(db, field, q))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Record an offence")
def create_offence(
    body: OffenceCreateRequest,
    db:   Session = Depends(get_db),
    _:    User    = Depends(get_fleet_user),
):
    return success_response("Offence recorded successfully", offence_service.create_offence(db, body))


@router.get("/{offence_id}", summary="Get offence detail")
def get_offence(
    offence_id: int,
    db:         Session = Depends(get_db),
    _:          User    = Depends(get_fleet_user),
):
    return success_response("Offence retrieved", offence_service.get_offence(db, offence_id))


@router.put("/{offence_id}", summary="Update offence")
def update_offence(
    offence_id: int,
    body:       OffenceUpdateRequest,
    db:         Session = Depends(get_db),
    _:          User    = Depends(get_fleet_user),
):
    return success_response("Offence updated", offence_service.update_offence(db, offence_id, body))


@router.delete("/{offence_id}", summary="Delete offence")
def delete_offence(
    offence_id: int,
    db:         Session = Depends(get_db),
    _:          User    = Depends(get_fleet_user),
):
    offence_service.delete_offence(db, offence_id)
    return success_response("Offence deleted", None)
