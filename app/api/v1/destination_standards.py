from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_fleet_user
from app.models.user import User
from app.schemas.destination_standard import DestinationStandardUpsert
from app.schemas.common import success_response
from app.services.destination_standard_service import destination_standard_service

router = APIRouter(prefix="/destination-standards")


@router.get("", summary="List expected fuel, hours and cost per destination")
def list_standards(
    db: Session = Depends(get_db),
    _:  User    = Depends(get_fleet_user),
):
    return success_response("Destination standards retrieved", destination_standard_service.list_standards(db))


@router.put("/{destination}", summary="Create or update a destination standard")
def upsert_standard(
    destination: str,
    body:        DestinationStandardUpsert,
    db:          Session = Depends(get_db),
    _:           User    = Depends(get_fleet_user),
):
    data = destination_standard_service.upsert_standard(db, destination, body)
    return success_response(f"Standard for '{data['destination']}' saved", data)


@router.delete("/{destination}", summary="Delete a destination standard")
def delete_standard(
    destination: str,
    db:          Session = Depends(get_db),
    _:           User    = Depends(get_fleet_user),
):
    destination_standard_service.delete_standard(db, destination)
    return success_response("Destination standard deleted", None)
