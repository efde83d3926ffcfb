from pydantic import BaseModel, field_validator, model_validator
from typing import Optional
from decimal import Decimal
from datetime import datetime


class TripCreateRequest(BaseModel):
    vehicleNumber: str
    departureTime: datetime
    destination:   str
    route:         str
    item:          Optional[str] = None

    @field_validator("vehicleNumber", "destination", "route")
    @classmethod
    def check_text(cls, v):
        if not v.strip(): raise ValueError("Value cannot be empty")
        return v.strip()


class TripUpdateRequest(BaseModel):
    vehicleNumber: Optional[str] = None
    departureTime: Optional[datetime] = None
    arrivalTime:   Optional[datetime] = None
    destination:   Optional[str] = None
    route:         Optional[str] = None
    item:          Optional[str] = None
    comment:       Optional[str] = None

    @field_validator("vehicleNumber", "destination", "route")
    @classmethod
    def check_text(cls, v):
        if v is not None and not v.strip(): raise ValueError("Value cannot be empty")
        return v.strip() if v else v


class TripArrivalRequest(BaseModel):
    """Driver's return report."""
    arrivalTime: datetime
    mileage:     Decimal
    comment:     Optional[str] = None
    imageUrl:    Optional[str] = None

    @field_validator("mileage")
    @classmethod
    def check_mileage(cls, v):
        if v < 0: raise ValueError("Mileage cannot be negative")
        return v

    @model_validator(mode="after")
    def check_image(self) -> "TripArrivalRequest":
        if self.imageUrl and not (self.comment and self.comment.strip()):
            raise ValueError("imageUrl requires a comment")
        return self


class TripFuelRequest(BaseModel):
    fuelUsed: Decimal

    @field_validator("fuelUsed")
    @classmethod
    def check_fuel(cls, v):
        if v < 0: raise ValueError("Fuel used cannot be negative")
        return v


class ProofCreateRequest(BaseModel):
    proofUrl: str

    @field_validator("proofUrl")
    @classmethod
    def check_url(cls, v):
        if not v.strip(): raise ValueError("Proof URL cannot be empty")
        return v.strip()
