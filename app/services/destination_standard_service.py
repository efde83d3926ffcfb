import logging
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.destination_standard import DestinationStandard
from app.schemas.destination_standard import DestinationStandardUpsert
from app.utils.exceptions import NotFoundException

logger = logging.getLogger(__name__)


# Expected fuel (litres), travel time (hours) and cost per destination
DEFAULT_STANDARDS = [
    {"destination": "Mbarara", "fuel": 390, "hours": 12, "cost": 100000},
    {"destination": "Arua",    "fuel": 510, "hours": 24, "cost": 100000},
    {"destination": "Lira",    "fuel": 220, "hours": 6,  "cost": 70000},
    {"destination": "Mityana", "fuel": 210, "hours": 7,  "cost": 70000},
    {"destination": "Kampala", "fuel": 170, "hours": 5,  "cost": 70000},
    {"destination": "Soroti",  "fuel": 100, "hours": 3,  "cost": 70000},
    {"destination": "Jinja",   "fuel": 90,  "hours": 3,  "cost": 50000},
    {"destination": "Mukono",  "fuel": 160, "hours": 4,  "cost": 70000},
    {"destination": "Mpigi",   "fuel": 175, "hours": 6,  "cost": 70000},
    {"destination": "Mbale",   "fuel": 15,  "hours": 1,  "cost": 15000},
    {"destination": "Gulu",    "fuel": 240, "hours": 7,  "cost": 100000},
]


def _serialize(s: DestinationStandard) -> dict:
    return {
        "destination": s.destination,
        "fuel":        float(s.fuel),
        "hours":       float(s.hours),
        "cost":        float(s.cost),
        "updatedAt":   s.updated_at.isoformat() if s.updated_at else None,
    }


class DestinationStandardService:

    def _find(self, db: Session, destination: str) -> DestinationStandard | None:
        key = destination.strip().lower()
        return (
            db.query(DestinationStandard)
            .filter(func.lower(DestinationStandard.destination) == key)
            .first()
        )

    def list_standards(self, db: Session) -> list[dict]:
        rows = db.query(DestinationStandard).order_by(DestinationStandard.destination).all()
        return [_serialize(s) for s in rows]

    def get_standards_map(self, db: Session) -> dict[str, dict]:
        """Lowercase destination -> {fuel, hours, cost}."""
        return {
            s.destination.strip().lower(): {
                "fuel":  float(s.fuel),
                "hours": float(s.hours),
                "cost":  float(s.cost),
            }
            for s in db.query(DestinationStandard).all()
        }

    def upsert_standard(self, db: Session, destination: str, data: DestinationStandardUpsert) -> dict:
        s = self._find(db, destination)
        if s:
            s.fuel  = data.fuel
            s.hours = data.hours
            s.cost  = data.cost
        else:
            s = DestinationStandard(destination=destination.strip(), fuel=data.fuel,
                                    hours=data.hours, cost=data.cost)
            db.add(s)
        db.commit()
        db.refresh(s)
        logger.info(f"Destination standard saved: {s.destination}")
        return _serialize(s)

    def delete_standard(self, db: Session, destination: str) -> None:
        s = self._find(db, destination)
        if not s:
            raise NotFoundException(f"Destination standard '{destination}'")
        db.delete(s)
        db.commit()

    def seed_defaults(self, db: Session) -> None:
        """Insert default standards if not already present."""
        for d in DEFAULT_STANDARDS:
            if not self._find(db, d["destination"]):
                db.add(DestinationStandard(**d))
        db.commit()


destination_standard_service = DestinationStandardService()
