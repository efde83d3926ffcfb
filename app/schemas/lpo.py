from pydantic import BaseModel, field_validator
from decimal import Decimal
from app.models.purchase_lpo import LPOStatus


class LPOCreateRequest(BaseModel):
    lpoNumber:  str
    supplierId: int
    amount:     Decimal
    status:     LPOStatus = LPOStatus.ACTIVE

    @field_validator("lpoNumber")
    @classmethod
    def check_number(cls, v):
        if not v.strip(): raise ValueError("LPO number cannot be empty")
        return v.strip()

    @field_validator("amount")
    @classmethod
    def check_amount(cls, v):
        if v < 0: raise ValueError("Amount cannot be negative")
        return v
