from sqlalchemy import Column, Integer, String, Numeric, TIMESTAMP
from sqlalchemy.sql import func
from app.database import Base


class DestinationStandard(Base):
    """Expected fuel (litres), duration (hours) and cost for a trip to a destination."""
    __tablename__ = "destination_standards"

    id          = Column(Integer, primary_key=True, index=True)
    destination = Column(String(150), unique=True, nullable=False, index=True)
    fuel        = Column(Numeric(10, 2), nullable=False)
    hours       = Column(Numeric(6, 2), nullable=False)
    cost        = Column(Numeric(14, 2), nullable=False)
    updated_at  = Column(TIMESTAMP(timezone=True), server_default=func.now(),
                         onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<DestinationStandard {self.destination} fuel={self.fuel} hours={self.hours}>"
