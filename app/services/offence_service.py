import logging
from datetime import datetime
from sqlalchemy.orm import Session

from app.analytics.offences import (
    group_offences,
    offence_report,
    offence_suggestions,
    offence_time_filter,
)
from app.models.vehicle_offence import VehicleOffence
from app.schemas.offence import OffenceCreateRequest, OffenceUpdateRequest
from app.utils.exceptions import NotFoundException

logger = logging.getLogger(__name__)

_COLUMNS = {
    "vehicleNumber": "vehicle_number",
    "date":          "date",
    "offence":       "offence",
    "charge":        "charge",
    "status":        "status",
    "driver":        "driver",
    "location":      "location",
}


def _serialize(o: VehicleOffence) -> dict:
    return {
        "id":            o.id,
        "vehicleNumber": o.vehicle_number,
        "date":          o.date.isoformat() if o.date else None,
        "status":        o.status,
        "offence":       o.offence,
        "charge":        float(o.charge) if o.charge is not None else 0,
        "driver":        o.driver,
        "location":      o.location,
    }


def _as_row(o: VehicleOffence) -> dict:
    """Snake-case view consumed by the offence analytics functions."""
    return {
        "id":             o.id,
        "vehicle_number": o.vehicle_number,
        "date":           o.date,
        "status":         o.status,
        "offence":        o.offence,
        "charge":         o.charge,
    }


class OffenceService:

    def _get_or_404(self, db: Session, offence_id: int) -> VehicleOffence:
        o = db.query(VehicleOffence).filter(VehicleOffence.id == offence_id).first()
        if not o:
            raise NotFoundException("Offence")
        return o

    def _all(self, db: Session) -> list[VehicleOffence]:
        return db.query(VehicleOffence).order_by(VehicleOffence.date.desc(), VehicleOffence.id.desc()).all()

    def list_offences(self, db: Session) -> list[dict]:
        return [_serialize(o) for o in self._all(db)]

    def grouped_offences(self, db: Session) -> dict[str, list]:
        return {
            vehicle: [_serialize(o) for o in items]
            for vehicle, items in group_offences(self._all(db)).items()
        }

    def get_offence(self, db: Session, offence_id: int) -> dict:
        return _serialize(self._get_or_404(db, offence_id))

    def create_offence(self, db: Session, data: OffenceCreateRequest) -> dict:
        o = VehicleOffence(
            vehicle_number=data.vehicleNumber,
            date=data.date,
            offence=data.offence,
            charge=data.charge,
            status=data.status.value,
            driver=data.driver,
            location=data.location,
        )
        db.add(o)
        db.commit()
        db.refresh(o)
        logger.info(f"Offence recorded for {o.vehicle_number}: {o.offence}")
        return _serialize(o)

    def update_offence(self, db: Session, offence_id: int, data: OffenceUpdateRequest) -> dict:
        o = self._get_or_404(db, offence_id)
        for field, val in data.model_dump(exclude_none=True).items():
            setattr(o, _COLUMNS[field], val.value if field == "status" else val)
        db.commit()
        db.refresh(o)
        return _serialize(o)

    def delete_offence(self, db: Session, offence_id: int) -> None:
        o = self._get_or_404(db, offence_id)
        db.delete(o)
        db.commit()

    def suggestions(self, db: Session, field: str, query: str | None = None) -> list[str]:
        return offence_suggestions([_as_row(o) for o in self._all(db)], field, query)

    # ─── Reporting ────────────────────────────────────────────────────────────
    def report(self, db: Session, time_filter: str = "all", now: datetime | None = None) -> dict:
        offences = offence_time_filter(self._all(db), time_filter, now)
        report = offence_report([_as_row(o) for o in offences])
        report["timeFilter"] = time_filter
        report["grouped"] = {
            vehicle: [_serialize(o) for o in items]
            for vehicle, items in group_offences(offences).items()
        }
        return report

    def vehicle_offences(self, db: Session, vehicle: str) -> list[dict]:
        rows = (
            db.query(VehicleOffence)
            .filter(VehicleOffence.vehicle_number == vehicle)
            .order_by(VehicleOffence.date.desc(), VehicleOffence.id.desc())
            .all()
        )
        return [_serialize(o) for o in rows]


offence_service = OffenceService()
