import logging
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.config import settings
from app.models.purchase_lpo import PurchaseLPO, LPOStatus
from app.models.stock_item import StockItem
from app.models.stock_out import StockOut
from app.models.system_log import SystemLog
from app.schemas.stock import StockInRequest, StockOutRequest
from app.utils.audit import log_action
from app.utils.exports import build_xlsx
from app.utils.exceptions import (
    NotFoundException,
    LPONotActiveException,
    InsufficientStockException,
)

logger = logging.getLogger(__name__)

STOCK_IN_HEADERS  = ["Item Name", "LPO Number", "GRN Number", "Quantity", "Cost", "Supplier", "Date Added"]
STOCK_OUT_HEADERS = ["Item Name", "Quantity", "Taken By", "Issued By", "Date"]


def _serialize_item(i: StockItem) -> dict:
    quantity = i.quantity or 0
    return {
        "id":           i.id,
        "name":         i.name,
        "grnNumber":    i.grn_number,
        "lpoId":        i.lpo_id,
        "lpoNumber":    i.lpo.lpo_number if i.lpo and i.lpo.lpo_number else "",
        "supplierId":   i.supplier_id,
        "supplierName": i.supplier.name if i.supplier else "Unknown",
        "quantity":     quantity,
        "cost":         float(i.cost) if i.cost is not None else 0,
        "isLowStock":   quantity <= settings.LOW_STOCK_THRESHOLD,
        "createdAt":    i.created_at.isoformat() if i.created_at else None,
    }


def _serialize_out(o: StockOut) -> dict:
    return {
        "id":        o.id,
        "stockId":   o.stock_id,
        "name":      o.name,
        "quantity":  o.quantity,
        "takenBy":   o.takenby,
        "issuedBy":  o.issuedby,
        "createdAt": o.created_at.isoformat() if o.created_at else None,
    }


def _serialize_log(l: SystemLog) -> dict:
    return {
        "id":        l.id,
        "action":    l.action,
        "details":   l.details,
        "createdBy": l.created_by,
        "createdAt": l.created_at.isoformat() if l.created_at else None,
    }


def _date(value) -> str:
    return value.strftime("%Y-%m-%d") if value else ""


class StockService:

    def _live_items(self, db: Session):
        return db.query(StockItem).filter(StockItem.is_deleted.is_(False))

    def _get_item_or_404(self, db: Session, item_id: int) -> StockItem:
        item = self._live_items(db).filter(StockItem.id == item_id).first()
        if not item:
            raise NotFoundException("Stock item")
        return item

    # ─── Stock items ──────────────────────────────────────────────────────────
    def list_stock_items(self, db: Session, search: str | None = None) -> list[dict]:
        q = self._live_items(db)
        if search and search.strip():
            term = f"%{search.strip()}%"
            q = q.filter(or_(StockItem.name.ilike(term), StockItem.grn_number.ilike(term)))
        items = q.order_by(StockItem.created_at.desc(), StockItem.id.desc()).all()
        return [_serialize_item(i) for i in items]

    def get_stock_item(self, db: Session, item_id: int) -> dict:
        return _serialize_item(self._get_item_or_404(db, item_id))

    def stock_in(self, db: Session, data: StockInRequest, actor: str) -> dict:
        lpo = db.query(PurchaseLPO).filter(PurchaseLPO.id == data.lpoId).first()
        if not lpo:
            raise NotFoundException("LPO")
        if lpo.effective_status != LPOStatus.ACTIVE.value:
            raise LPONotActiveException()

        item = StockItem(
            name=data.name,
            grn_number=data.grnNumber,
            lpo_id=lpo.id,
            supplier_id=lpo.supplier_id,
            quantity=data.quantity,
            cost=data.cost,
            is_deleted=False,
        )
        db.add(item)
        log_action(db, "Stock In", f"Added {data.quantity} units of {data.name} to inventory", actor)
        db.commit()
        db.refresh(item)
        logger.info(f"Stock in: {data.quantity} x {data.name} against LPO {lpo.lpo_number}")
        return _serialize_item(item)

    def delete_stock_item(self, db: Session, item_id: int, actor: str) -> None:
        item = self._get_item_or_404(db, item_id)
        item.is_deleted = True
        log_action(db, "Stock Deleted", f"Removed {item.name} from inventory", actor)
        db.commit()
        logger.info(f"Stock item soft-deleted: id={item_id}")

    def low_stock_items(self, db: Session) -> list[dict]:
        items = (
            self._live_items(db)
            .filter(StockItem.quantity <= settings.LOW_STOCK_THRESHOLD)
            .order_by(StockItem.quantity.asc(), StockItem.id.asc())
            .limit(settings.LOW_STOCK_LIMIT)
            .all()
        )
        return [_serialize_item(i) for i in items]

    def count_items(self, db: Session) -> int:
        return self._live_items(db).count()

    # ─── Stock out ────────────────────────────────────────────────────────────
    def stock_out(self, db: Session, data: StockOutRequest, actor: str) -> dict:
        """
        Issue stock to a person. The issuance row, the quantity decrement and
        the system log entry are committed together or not at all.
        """
        item = (
            self._live_items(db)
            .filter(StockItem.id == data.stockId)
            .with_for_update()
            .first()
        )
        if not item:
            raise NotFoundException("Stock item")

        available = item.quantity or 0
        if data.quantity > available:
            raise InsufficientStockException(item.name, available, data.quantity)

        issuance = StockOut(
            stock_id=item.id,
            name=item.name,
            quantity=data.quantity,
            takenby=data.takenBy,
            issuedby=data.issuedBy or actor,
        )
        item.quantity = available - data.quantity
        db.add(issuance)
        log_action(db, "Stock Out", f"Issued {data.quantity} units of {item.name} to {data.takenBy}", actor)
        db.commit()
        db.refresh(issuance)
        logger.info(f"Stock out: {data.quantity} x {item.name} to {data.takenBy}, {item.quantity} left")
        return {**_serialize_out(issuance), "remaining": item.quantity}

    def list_stock_out(self, db: Session) -> list[dict]:
        rows = db.query(StockOut).order_by(StockOut.created_at.desc(), StockOut.id.desc()).all()
        return [_serialize_out(o) for o in rows]

    def get_stock_out(self, db: Session, out_id: int) -> dict:
        o = db.query(StockOut).filter(StockOut.id == out_id).first()
        if not o:
            raise NotFoundException("Stock out record")
        return _serialize_out(o)

    # ─── System logs ──────────────────────────────────────────────────────────
    def recent_logs(self, db: Session, limit: int | None = None) -> list[dict]:
        logs = (
            db.query(SystemLog)
            .order_by(SystemLog.created_at.desc(), SystemLog.id.desc())
            .limit(limit or settings.RECENT_LOG_LIMIT)
            .all()
        )
        return [_serialize_log(l) for l in logs]

    # ─── Exports ──────────────────────────────────────────────────────────────
    def export_stock_in(self, db: Session) -> bytes:
        rows = [
            {
                "Item Name":  i["name"],
                "LPO Number": i["lpoNumber"],
                "GRN Number": i["grnNumber"],
                "Quantity":   i["quantity"],
                "Cost":       f"{settings.CURRENCY} {i['cost']:,.2f}",
                "Supplier":   i["supplierName"],
                "Date Added": i["createdAt"][:10] if i["createdAt"] else "",
            }
            for i in self.list_stock_items(db)
        ]
        return build_xlsx("StockIn", STOCK_IN_HEADERS, rows)

    def export_stock_out(self, db: Session) -> bytes:
        rows = [
            {
                "Item Name": o.name,
                "Quantity":  o.quantity,
                "Taken By":  o.takenby,
                "Issued By": o.issuedby,
                "Date":      _date(o.created_at),
            }
            for o in db.query(StockOut).order_by(StockOut.created_at.desc(), StockOut.id.desc()).all()
        ]
        return build_xlsx("StockOut", STOCK_OUT_HEADERS, rows)


stock_service = StockService()
