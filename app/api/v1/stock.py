from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.dependencies import get_inventory_user, actor_name
from app.models.user import User
from app.schemas.stock import StockInRequest, StockOutRequest
from app.schemas.common import success_response
from app.services.stock_service import stock_service
from app.utils.exports import file_response, XLSX_MEDIA_TYPE

router = APIRouter(prefix="/stock")
logs_router = APIRouter(prefix="/system-logs")


# ─── Stock items ──────────────────────────────────────────────────────────────
@router.get("/items", summary="List stock items")
def list_stock_items(
    search: Optional[str] = Query(None, description="Match item name or GRN number"),
    db:     Session       = Depends(get_db),
    _:      User          = Depends(get_inventory_user),
):
    return success_response("Stock items retrieved", stock_service.list_stock_items(db, search))


@router.get("/items/low", summary="Items at or below the low-stock threshold")
def low_stock_items(
    db: Session = Depends(get_db),
    _:  User    = Depends(get_inventory_user),
):
    return success_response("Low stock items retrieved", stock_service.low_stock_items(db))


@router.get("/items/export", summary="Download stock-in records as Excel")
def export_stock_in(
    db: Session = Depends(get_db),
    _:  User    = Depends(get_inventory_user),
):
    return file_response(stock_service.export_stock_in(db), "Stock_In_Data.xlsx", XLSX_MEDIA_TYPE)


@router.get("/items/{item_id}", summary="Get stock item detail")
def get_stock_item(
    item_id: int,
    db:      Session = Depends(get_db),
    _:       User    = Depends(get_inventory_user),
):
    return success_response("Stock item retrieved", stock_service.get_stock_item(db, item_id))


@router.delete("/items/{item_id}", summary="Remove a stock item (soft delete)")
def delete_stock_item(
    item_id: int,
    db:      Session = Depends(get_db),
    current_user: User = Depends(get_inventory_user),
):
    stock_service.delete_stock_item(db, item_id, actor_name(current_user))
    return success_response("Stock item deleted", None)


@router.post("/in", status_code=status.HTTP_201_CREATED, summary="Receive stock against an Active LPO")
def stock_in(
    body: StockInRequest,
    db:   Session = Depends(get_db),
    current_user: User = Depends(get_inventory_user),
):
    data = stock_service.stock_in(db, body, actor_name(current_user))
    return success_response("Stock added successfully", data)


# ─── Stock out ────────────────────────────────────────────────────────────────
@router.post("/out", status_code=status.HTTP_201_CREATED, summary="Issue stock")
def stock_out(
    body: StockOutRequest,
    db:   Session = Depends(get_db),
    current_user: User = Depends(get_inventory_user),
):
    data = stock_service.stock_out(db, body, actor_name(current_user))
    return success_response("Stock issued successfully", data)


@router.get("/out", summary="List stock issuances")
def list_stock_out(
    db: Session = Depends(get_db),
    _:  User    = Depends(get_inventory_user),
):
    return success_response("Stock out records retrieved", stock_service.list_stock_out(db))


@router.get("/out/export", summary="Download stock-out records as Excel")
def export_stock_out(
    db: Session = Depends(get_db),
    _:  User    = Depends(get_inventory_user),
):
    return file_response(stock_service.export_stock_out(db), "Stock_Out_Data.xlsx", XLSX_MEDIA_TYPE)


@router.get("/out/{out_id}", summary="Get stock issuance detail")
def get_stock_out(
    out_id: int,
    db:     Session = Depends(get_db),
    _:      User    = Depends(get_inventory_user),
):
    return success_response("Stock out record retrieved", stock_service.get_stock_out(db, out_id))


# ─── System logs ──────────────────────────────────────────────────────────────
@logs_router.get("", summary="Recent system activity")
def recent_logs(
    limit: Optional[int] = Query(None, ge=1, le=100),
    db:    Session       = Depends(get_db),
    _:     User          = Depends(get_inventory_user),
):
    return success_response("System logs retrieved", stock_service.recent_logs(db, limit))
