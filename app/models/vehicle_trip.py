import uuid
from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, TIMESTAMP, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class VehicleTrip(Base):
    """A single dispatch of a vehicle to a destination."""
    __tablename__ = "vehicle_tracking"

    id                  = Column(String(36), primary_key=True, default=_uuid)
    vehicle_number      = Column(String(50), nullable=False, index=True)
    departure_time      = Column(TIMESTAMP(timezone=True), nullable=False)
    arrival_time        = Column(TIMESTAMP(timezone=True), nullable=True)
    destination         = Column(String(150), nullable=False)
    route               = Column(String(200), nullable=False)
    item                = Column(String(200), nullable=True)    # package carried
    fuel_used           = Column(Numeric(10, 2), nullable=True)
    mileage             = Column(Numeric(12, 2), nullable=True)
    comment             = Column(Text, nullable=True)           # "Reached" marks a successful trip
    confirmation_status = Column(Boolean, default=False, nullable=True)

    # ─── Relationships ─────────────────────────────────────────────────────────
    proofs   = relationship("Proof", back_populates="trip", cascade="all, delete-orphan")
    comments = relationship("TravelComment", back_populates="trip", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<VehicleTrip id={self.id} vehicle={self.vehicle_number} dest={self.destination}>"


class Proof(Base):
    __tablename__ = "proofs"

    id         = Column(Integer, primary_key=True, index=True)
    proof_url  = Column(String(500), nullable=True)
    vehicle    = Column(String(36), ForeignKey("vehicle_tracking.id", ondelete="CASCADE"), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    trip = relationship("VehicleTrip", back_populates="proofs")


class TravelComment(Base):
    __tablename__ = "travel_comments"

    id         = Column(Integer, primary_key=True, index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicle_tracking.id", ondelete="CASCADE"), nullable=True)
    comment    = Column(Text, nullable=True)
    image_url  = Column(String(500), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    trip = relationship("VehicleTrip", back_populates="comments")
