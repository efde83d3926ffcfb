from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class SupplierCreateRequest(BaseModel):
    name:    str
    contact: Optional[str] = None
    email:   Optional[EmailStr] = None
    address: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if not v.strip(): raise ValueError("Supplier name cannot be empty")
        return v.strip()

    @field_validator("contact", "email", "address", mode="before")
    @classmethod
    def empty_as_none(cls, v): return _blank_to_none(v)


class SupplierUpdateRequest(BaseModel):
    name:    Optional[str] = None
    contact: Optional[str] = None
    email:   Optional[EmailStr] = None
    address: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if v is not None and not v.strip(): raise ValueError("Supplier name cannot be empty")
        return v.strip() if v else v

    @field_validator("contact", "email", "address", mode="before")
    @classmethod
    def empty_as_none(cls, v): return _blank_to_none(v)
