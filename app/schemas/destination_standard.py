from pydantic import BaseModel, field_validator
from decimal import Decimal


class DestinationStandardUpsert(BaseModel):
    fuel:  Decimal   # litres
    hours: Decimal
    cost:  Decimal

    @field_validator("fuel", "hours", "cost")
    @classmethod
    def check_non_negative(cls, v):
        if v < 0: raise ValueError("Value cannot be negative")
        return v
