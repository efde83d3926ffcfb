from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.dependencies import get_fleet_user
from app.models.user import User
from app.schemas.trip import (
    TripCreateRequest,
    TripUpdateRequest,
    TripArrivalRequest,
    TripFuelRequest,
    ProofCreateRequest,
)
from app.schemas.common import success_response
from app.services.trip_service import trip_service
from app.utils.exports import file_response, CSV_MEDIA_TYPE, PDF_MEDIA_TYPE

router = APIRouter(prefix="/trips")

PERIOD_PATTERN = "^(All|Daily|Weekly|Monthly|Yearly)$"


@router.get("", summary="List trips for a period with fuel and mileage totals")
def list_trips(
    period: str           = Query("All", pattern=PERIOD_PATTERN),
    search: Optional[str] = Query(None, description="Match vehicle number, destination or route"),
    db:     Session       = Depends(get_db),
    _:      User          = Depends(get_fleet_user),
):
    return success_response("Trips retrieved", trip_service.list_trips(db, period, search))


@router.get("/export.csv", summary="Download trips as CSV")
def export_trips_csv(
    period: str           = Query("All", pattern=PERIOD_PATTERN),
    search: Optional[str] = Query(None),
    db:     Session       = Depends(get_db),
    _:      User          = Depends(get_fleet_user),
):
    content = trip_service.export_trips_csv(db, period, search)
    return file_response(content, "vehicle_entries.csv", CSV_MEDIA_TYPE)


@router.get("/export.pdf", summary="Download trips as PDF")
def export_trips_pdf(
    period: str           = Query("All", pattern=PERIOD_PATTERN),
    search: Optional[str] = Query(None),
    db:     Session       = Depends(get_db),
    _:      User          = Depends(get_fleet_user),
):
    content = trip_service.export_trips_pdf(db, period, search)
    return file_response(content, "vehicle_entries.pdf", PDF_MEDIA_TYPE)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Log a departure")
def create_trip(
    body: TripCreateRequest,
    db:   Session = Depends(get_db),
    _:    User    = Depends(get_fleet_user),
):
    return success_response("Trip logged successfully", trip_service.create_trip(db, body))


@router.get("/{trip_id}", summary="Get trip with proofs and comments")
def get_trip(
    trip_id: str,
    db:      Session = Depends(get_db),
    _:       User    = Depends(get_fleet_user),
):
    return success_response("Trip retrieved", trip_service.get_trip(db, trip_id))


@router.put("/{trip_id}", summary="Update trip")
def update_trip(
    trip_id: str,
    body:    TripUpdateRequest,
    db:      Session = Depends(get_db),
    _:       User    = Depends(get_fleet_user),
):
    return success_response("Trip updated", trip_service.update_trip(db, trip_id, body))


@router.delete("/{trip_id}", summary="Delete trip with its proofs and comments")
def delete_trip(
    trip_id: str,
    db:      Session = Depends(get_db),
    _:       User    = Depends(get_fleet_user),
):
    trip_service.delete_trip(db, trip_id)
    return success_response("Trip deleted", None)


@router.patch("/{trip_id}/confirm", summary="Confirm a trip")
def confirm_trip(
    trip_id: str,
    db:      Session = Depends(get_db),
    _:       User    = Depends(get_fleet_user),
):
    return success_response("Trip confirmed", trip_service.confirm_trip(db, trip_id))


@router.patch("/{trip_id}/arrival", summary="Record arrival, mileage and the driver's comment")
def record_arrival(
    trip_id: str,
    body:    TripArrivalRequest,
    db:      Session = Depends(get_db),
    _:       User    = Depends(get_fleet_user),
):
    return success_response("Arrival recorded", trip_service.record_arrival(db, trip_id, body))


@router.patch("/{trip_id}/fuel", summary="Record fuel used")
def record_fuel(
    trip_id: str,
    body:    TripFuelRequest,
    db:      Session = Depends(get_db),
    _:       User    = Depends(get_fleet_user),
):
    return success_response("Fuel recorded", trip_service.record_fuel(db, trip_id, body))


@router.get("/{trip_id}/proofs", summary="List delivery proofs")
def list_proofs(
    trip_id: str,
    db:      Session = Depends(get_db),
    _:       User    = Depends(get_fleet_user),
):
    return success_response("Proofs retrieved", trip_service.list_proofs(db, trip_id))


@router.post("/{trip_id}/proofs", status_code=status.HTTP_201_CREATED, summary="Attach a delivery proof URL")
def add_proof(
    trip_id: str,
    body:    ProofCreateRequest,
    db:      Session = Depends(get_db),
    _:       User    = Depends(get_fleet_user),
):
    return success_response("Proof added", trip_service.add_proof(db, trip_id, body))
