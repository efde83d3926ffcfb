from pydantic import BaseModel, field_validator
from typing import Optional
from decimal import Decimal


class StockInRequest(BaseModel):
    name:      str
    grnNumber: str
    lpoId:     int
    quantity:  int
    cost:      Decimal

    @field_validator("name", "grnNumber")
    @classmethod
    def check_text(cls, v):
        if not v.strip(): raise ValueError("Value cannot be empty")
        return v.strip()

    @field_validator("quantity")
    @classmethod
    def check_quantity(cls, v):
        if v <= 0: raise ValueError("Quantity must be greater than 0")
        return v

    @field_validator("cost")
    @classmethod
    def check_cost(cls, v):
        if v < 0: raise ValueError("Cost cannot be negative")
        return v


class StockOutRequest(BaseModel):
    stockId:  int
    quantity: int
    takenBy:  str
    issuedBy: Optional[str] = None   # defaults to the signed-in user's name

    @field_validator("quantity")
    @classmethod
    def check_quantity(cls, v):
        if v <= 0: raise ValueError("Quantity must be greater than 0")
        return v

    @field_validator("takenBy")
    @classmethod
    def check_taken_by(cls, v):
        if not v.strip(): raise ValueError("Recipient name cannot be empty")
        return v.strip()
