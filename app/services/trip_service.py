import logging
from datetime import datetime
from sqlalchemy.orm import Session

from app.analytics.common import as_utc, to_number, utc_now, within_period
from app.analytics.fleet import clean_entry
from app.models.vehicle_trip import VehicleTrip, Proof, TravelComment
from app.schemas.trip import (
    TripCreateRequest,
    TripUpdateRequest,
    TripArrivalRequest,
    TripFuelRequest,
    ProofCreateRequest,
)
from app.utils.exceptions import NotFoundException, InvalidDateRangeException
from app.utils.exports import build_csv, build_pdf_table

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Vehicle Number", "Departure Time", "Destination", "Package", "Route",
               "Arrival Time", "Status", "Fuel Used", "Mileage"]
PDF_HEADERS = ["Vehicle Number", "Departure Time", "Destination", "Route", "Status"]
EXPORT_TIME_FORMAT = "%b %d, %Y %H:%M"


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _number_text(value) -> str:
    n = to_number(value)
    return str(int(n)) if n.is_integer() else str(n)


def _serialize(t: VehicleTrip) -> dict:
    return {
        "id":                 t.id,
        "vehicleNumber":      t.vehicle_number,
        "departureTime":      _iso(t.departure_time),
        "arrivalTime":        _iso(t.arrival_time),
        "destination":        t.destination,
        "route":              t.route,
        "item":               t.item,
        "fuelUsed":           float(t.fuel_used) if t.fuel_used is not None else None,
        "mileage":            float(t.mileage) if t.mileage is not None else None,
        "comment":            t.comment,
        "confirmationStatus": bool(t.confirmation_status),
        "status":             "Confirmed" if t.confirmation_status else "Pending",
    }


def _serialize_proof(p: Proof) -> dict:
    return {"id": p.id, "proofUrl": p.proof_url, "createdAt": _iso(p.created_at)}


def _serialize_comment(c: TravelComment) -> dict:
    return {"id": c.id, "comment": c.comment, "imageUrl": c.image_url, "createdAt": _iso(c.created_at)}


class TripService:

    def _get_or_404(self, db: Session, trip_id: str) -> VehicleTrip:
        t = db.query(VehicleTrip).filter(VehicleTrip.id == trip_id).first()
        if not t:
            raise NotFoundException("Vehicle trip")
        return t

    def _filtered(self, db: Session, period: str, search: str | None, now: datetime | None) -> list[VehicleTrip]:
        now = now or utc_now()
        trips = db.query(VehicleTrip).order_by(VehicleTrip.departure_time.desc()).all()
        trips = [t for t in trips if within_period(t.departure_time, period, now)]

        q = (search or "").strip().lower()
        if q:
            trips = [
                t for t in trips
                if q in (t.vehicle_number or "").lower()
                or q in (t.destination or "").lower()
                or q in (t.route or "").lower()
            ]
        return trips

    # ─── Queries ──────────────────────────────────────────────────────────────
    def list_trips(self, db: Session, period: str = "All", search: str | None = None,
                   now: datetime | None = None) -> dict:
        trips = self._filtered(db, period, search, now)
        return {
            "period":        period,
            "entries":       [_serialize(t) for t in trips],
            "totalFuelUsed": sum(to_number(t.fuel_used) for t in trips),
            "totalMileage":  sum(to_number(t.mileage) for t in trips),
        }

    def get_trip(self, db: Session, trip_id: str) -> dict:
        t = self._get_or_404(db, trip_id)
        return {
            **_serialize(t),
            "proofs":   [_serialize_proof(p) for p in t.proofs],
            "comments": [_serialize_comment(c) for c in t.comments],
        }

    def analytics_entries(self, db: Session) -> list[dict]:
        """Every trip, cleaned for the analytics functions."""
        return [clean_entry(t) for t in db.query(VehicleTrip).all()]

    # ─── Writes ───────────────────────────────────────────────────────────────
    def create_trip(self, db: Session, data: TripCreateRequest) -> dict:
        t = VehicleTrip(
            vehicle_number=data.vehicleNumber,
            departure_time=data.departureTime,
            destination=data.destination,
            route=data.route,
            item=data.item,
            confirmation_status=False,
        )
        db.add(t)
        db.commit()
        db.refresh(t)
        logger.info(f"Trip logged: {t.vehicle_number} to {t.destination} (id={t.id})")
        return _serialize(t)

    def update_trip(self, db: Session, trip_id: str, data: TripUpdateRequest) -> dict:
        t = self._get_or_404(db, trip_id)
        columns = {
            "vehicleNumber": "vehicle_number",
            "departureTime": "departure_time",
            "arrivalTime":   "arrival_time",
            "destination":   "destination",
            "route":         "route",
            "item":          "item",
            "comment":       "comment",
        }
        for field, val in data.model_dump(exclude_unset=True).items():
            if val is None and field in ("vehicleNumber", "departureTime", "destination", "route"):
                continue
            setattr(t, columns[field], val)

        if t.arrival_time and as_utc(t.arrival_time) < as_utc(t.departure_time):
            raise InvalidDateRangeException()
        db.commit()
        db.refresh(t)
        return _serialize(t)

    def delete_trip(self, db: Session, trip_id: str) -> None:
        t = self._get_or_404(db, trip_id)
        # proofs and travel comments go with it (delete-orphan cascade)
        db.delete(t)
        db.commit()
        logger.info(f"Trip deleted: id={trip_id}")

    def confirm_trip(self, db: Session, trip_id: str) -> dict:
        t = self._get_or_404(db, trip_id)
        t.confirmation_status = True
        db.commit()
        db.refresh(t)
        logger.info(f"Trip confirmed: {t.vehicle_number} to {t.destination} (id={t.id})")
        return _serialize(t)

    def record_arrival(self, db: Session, trip_id: str, data: TripArrivalRequest) -> dict:
        t = self._get_or_404(db, trip_id)
        if as_utc(data.arrivalTime) < as_utc(t.departure_time):
            raise InvalidDateRangeException()

        t.arrival_time = data.arrivalTime
        t.mileage = data.mileage
        comment = (data.comment or "").strip()
        if comment:
            t.comment = comment
            db.add(TravelComment(vehicle_id=t.id, comment=comment, image_url=data.imageUrl))
        db.commit()
        db.refresh(t)
        logger.info(f"Arrival recorded: {t.vehicle_number} at {t.destination} (id={t.id})")
        return _serialize(t)

    def record_fuel(self, db: Session, trip_id: str, data: TripFuelRequest) -> dict:
        t = self._get_or_404(db, trip_id)
        t.fuel_used = data.fuelUsed
        db.commit()
        db.refresh(t)
        return _serialize(t)

    def add_proof(self, db: Session, trip_id: str, data: ProofCreateRequest) -> dict:
        t = self._get_or_404(db, trip_id)
        p = Proof(vehicle=t.id, proof_url=data.proofUrl)
        db.add(p)
        db.commit()
        db.refresh(p)
        return _serialize_proof(p)

    def list_proofs(self, db: Session, trip_id: str) -> list[dict]:
        self._get_or_404(db, trip_id)
        proofs = (
            db.query(Proof)
            .filter(Proof.vehicle == trip_id)
            .order_by(Proof.created_at.desc(), Proof.id.desc())
            .all()
        )
        return [_serialize_proof(p) for p in proofs]

    # ─── Exports ──────────────────────────────────────────────────────────────
    def export_trips_csv(self, db: Session, period: str = "All", search: str | None = None,
                         now: datetime | None = None) -> str:
        rows = [
            {
                "Vehicle Number": t.vehicle_number,
                "Departure Time": t.departure_time.strftime(EXPORT_TIME_FORMAT) if t.departure_time else "",
                "Destination":    t.destination,
                "Package":        t.item or "",
                "Route":          t.route,
                "Arrival Time":   t.arrival_time.strftime(EXPORT_TIME_FORMAT) if t.arrival_time else "",
                "Status":         "Confirmed" if t.confirmation_status else "Pending",
                "Fuel Used":      f"{_number_text(t.fuel_used)} Liters",
                "Mileage":        f"{_number_text(t.mileage)} KM",
            }
            for t in self._filtered(db, period, search, now)
        ]
        return build_csv(CSV_HEADERS, rows)

    def export_trips_pdf(self, db: Session, period: str = "All", search: str | None = None,
                         now: datetime | None = None) -> bytes:
        rows = [
            {
                "Vehicle Number": t.vehicle_number,
                "Departure Time": t.departure_time.strftime(EXPORT_TIME_FORMAT) if t.departure_time else "",
                "Destination":    t.destination,
                "Route":          t.route,
                "Status":         "Confirmed" if t.confirmation_status else "Pending",
            }
            for t in self._filtered(db, period, search, now)
        ]
        return build_pdf_table("Vehicle Entries", PDF_HEADERS, rows)


trip_service = TripService()
