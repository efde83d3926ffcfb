from pydantic import BaseModel, field_validator
from typing import Optional
from decimal import Decimal
from datetime import datetime
from app.models.vehicle_offence import OffenceStatus


class OffenceCreateRequest(BaseModel):
    vehicleNumber: str
    date:          datetime
    offence:       str
    charge:        Decimal
    status:        OffenceStatus = OffenceStatus.PENDING
    driver:        Optional[str] = None
    location:      Optional[str] = None

    @field_validator("vehicleNumber", "offence")
    @classmethod
    def check_text(cls, v):
        if not v.strip(): raise ValueError("Value cannot be empty")
        return v.strip()

    @field_validator("charge")
    @classmethod
    def check_charge(cls, v):
        if v <= 0: raise ValueError("Charge must be greater than 0")
        return v


class OffenceUpdateRequest(BaseModel):
    vehicleNumber: Optional[str] = None
    date:          Optional[datetime] = None
    offence:       Optional[str] = None
    charge:        Optional[Decimal] = None
    status:        Optional[OffenceStatus] = None
    driver:        Optional[str] = None
    location:      Optional[str] = None

    @field_validator("vehicleNumber", "offence")
    @classmethod
    def check_text(cls, v):
        if v is not None and not v.strip(): raise ValueError("Value cannot be empty")
        return v.strip() if v else v

    @field_validator("charge")
    @classmethod
    def check_charge(cls, v):
        if v is not None and v <= 0: raise ValueError("Charge must be greater than 0")
        return v
