from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.dependencies import get_inventory_user
from app.models.user import User
from app.schemas.supplier import SupplierCreateRequest, SupplierUpdateRequest
from app.schemas.common import success_response
from app.services.supplier_service import supplier_service
from app.utils.exports import file_response, XLSX_MEDIA_TYPE

router = APIRouter(prefix="/suppliers")


@router.get("", summary="List suppliers, newest first")
def list_suppliers(
    search: Optional[str] = Query(None, description="Match name, contact, email or address"),
    db:     Session       = Depends(get_db),
    _:      User          = Depends(get_inventory_user),
):
    return success_response("Suppliers retrieved", supplier_service.list_suppliers(db, search))


@router.get("/export", summary="Download suppliers as an Excel workbook")
def export_suppliers(
    search: Optional[str] = Query(None),
    db:     Session       = Depends(get_db),
    _:      User          = Depends(get_inventory_user),
):
    content = supplier_service.export_suppliers(db, search)
    return file_response(content, "Suppliers_List.xlsx", XLSX_MEDIA_TYPE)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create supplier")
def create_supplier(
    body: SupplierCreateRequest,
    db:   Session = Depends(get_db),
    _:    User    = Depends(get_inventory_user),
):
    return success_response("Supplier created successfully", supplier_service.create_supplier(db, body))


@router.get("/{supplier_id}", summary="Get supplier detail")
def get_supplier(
    supplier_id: int,
    db:          Session = Depends(get_db),
    _:           User    = Depends(get_inventory_user),
):
    return success_response("Supplier retrieved", supplier_service.get_supplier(db, supplier_id))


@router.put("/{supplier_id}", summary="Update supplier")
def update_supplier(
    supplier_id: int,
    body:        SupplierUpdateRequest,
    db:          Session = Depends(get_db),
    _:           User    = Depends(get_inventory_user),
):
    return success_response("Supplier updated", supplier_service.update_supplier(db, supplier_id, body))


@router.delete("/{supplier_id}", summary="Delete supplier")
def delete_supplier(
    supplier_id: int,
    db:          Session = Depends(get_db),
    _:           User    = Depends(get_inventory_user),
):
    supplier_service.delete_supplier(db, supplier_id)
    return success_response("Supplier deleted", None)


@router.get("/{supplier_id}/lpos", summary="Supplier with its LPOs")
def list_supplier_lpos(
    supplier_id: int,
    db:          Session = Depends(get_db),
    _:           User    = Depends(get_inventory_user),
):
    return success_response("Supplier LPOs retrieved", supplier_service.list_supplier_lpos(db, supplier_id))
