import enum
from sqlalchemy import Column, Integer, String, TIMESTAMP, Numeric
from app.database import Base


class OffenceStatus(str, enum.Enum):
    PENDING = "Pending"
    CLEARED = "Cleared"


class VehicleOffence(Base):
    __tablename__ = "vehicle_offences"

    id             = Column(Integer, primary_key=True, index=True)
    vehicle_number = Column(String(50), nullable=False, index=True)
    date           = Column(TIMESTAMP(timezone=True), nullable=False)
    status         = Column(String(20), nullable=False, default=OffenceStatus.PENDING.value)
    offence        = Column(String(200), nullable=False)
    charge         = Column(Numeric(14, 2), nullable=False)
    driver         = Column(String(150), nullable=True)
    location       = Column(String(200), nullable=True)

    def __repr__(self):
        return f"<VehicleOffence id={self.id} vehicle={self.vehicle_number} status={self.status}>"
