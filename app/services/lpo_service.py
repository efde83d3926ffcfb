import logging
from sqlalchemy.orm import Session

from app.models.purchase_lpo import PurchaseLPO, LPOStatus
from app.models.supplier import Supplier
from app.models.stock_item import StockItem
from app.schemas.lpo import LPOCreateRequest
from app.utils.audit import log_action
from app.utils.exceptions import (
    NotFoundException,
    DuplicateEntryException,
    InvalidStatusTransitionException,
)

logger = logging.getLogger(__name__)

# target status -> statuses it may be reached from
TRANSITIONS = {
    LPOStatus.USED:      {LPOStatus.ACTIVE.value},
    LPOStatus.CANCELLED: {LPOStatus.PENDING.value, LPOStatus.ACTIVE.value},
}


def _serialize(lpo: PurchaseLPO) -> dict:
    return {
        "id":           lpo.id,
        "lpoNumber":    lpo.lpo_number,
        "amount":       float(lpo.amount) if lpo.amount is not None else 0,
        "status":       lpo.effective_status,
        "supplierId":   lpo.supplier_id,
        "supplierName": lpo.supplier.name if lpo.supplier else "Unknown",
        "createdAt":    lpo.created_at.isoformat() if lpo.created_at else None,
    }


def _serialize_item(item: StockItem) -> dict:
    quantity = item.quantity or 0
    cost = float(item.cost) if item.cost is not None else 0
    return {
        "id":        item.id,
        "name":      item.name,
        "grnNumber": item.grn_number,
        "quantity":  quantity,
        "cost":      cost,
        "total":     quantity * cost,
        "createdAt": item.created_at.isoformat() if item.created_at else None,
    }


class LPOService:

    def _get_or_404(self, db: Session, lpo_id: int) -> PurchaseLPO:
        lpo = db.query(PurchaseLPO).filter(PurchaseLPO.id == lpo_id).first()
        if not lpo:
            raise NotFoundException("LPO")
        return lpo

    def list_lpos(self, db: Session, status: LPOStatus | None = None) -> list[dict]:
        q = db.query(PurchaseLPO)
        if status == LPOStatus.PENDING:
            q = q.filter((PurchaseLPO.status == status.value) | (PurchaseLPO.status.is_(None)))
        elif status:
            q = q.filter(PurchaseLPO.status == status.value)
        lpos = q.order_by(PurchaseLPO.created_at.desc(), PurchaseLPO.id.desc()).all()
        return [_serialize(l) for l in lpos]

    def list_active_lpos(self, db: Session) -> list[dict]:
        return self.list_lpos(db, LPOStatus.ACTIVE)

    def get_lpo(self, db: Session, lpo_id: int) -> dict:
        return _serialize(self._get_or_404(db, lpo_id))

    def create_lpo(self, db: Session, data: LPOCreateRequest, actor: str) -> dict:
        supplier = db.query(Supplier).filter(Supplier.id == data.supplierId).first()
        if not supplier:
            raise NotFoundException("Supplier")

        if db.query(PurchaseLPO).filter(PurchaseLPO.lpo_number == data.lpoNumber).first():
            raise DuplicateEntryException(f"LPO number '{data.lpoNumber}' already exists", field="lpoNumber")

        lpo = PurchaseLPO(
            lpo_number=data.lpoNumber,
            supplier_id=data.supplierId,
            amount=data.amount,
            status=data.status.value,
        )
        db.add(lpo)
        log_action(db, "LPO Created", f"LPO {data.lpoNumber} raised for {supplier.name}", actor)
        db.commit()
        db.refresh(lpo)
        logger.info(f"LPO {lpo.lpo_number} created with status {lpo.status}")
        return _serialize(lpo)

    def _transition(self, db: Session, lpo_id: int, target: LPOStatus, actor: str) -> dict:
        lpo = self._get_or_404(db, lpo_id)
        current = lpo.effective_status
        if current not in TRANSITIONS[target]:
            raise InvalidStatusTransitionException("LPO", current, target.value)

        lpo.status = target.value
        log_action(db, "LPO Update", f"LPO {lpo.lpo_number} changed from {current} to {target.value}", actor)
        db.commit()
        db.refresh(lpo)
        logger.info(f"LPO {lpo.lpo_number}: {current} -> {target.value}")
        return _serialize(lpo)

    def confirm_lpo(self, db: Session, lpo_id: int, actor: str) -> dict:
        return self._transition(db, lpo_id, LPOStatus.USED, actor)

    def cancel_lpo(self, db: Session, lpo_id: int, actor: str) -> dict:
        return self._transition(db, lpo_id, LPOStatus.CANCELLED, actor)

    def delete_lpo(self, db: Session, lpo_id: int, actor: str) -> None:
        lpo = self._get_or_404(db, lpo_id)
        log_action(db, "LPO Deleted", f"LPO {lpo.lpo_number} deleted", actor)
        db.delete(lpo)
        db.commit()

    def get_lpo_items(self, db: Session, lpo_id: int) -> dict:
        lpo = self._get_or_404(db, lpo_id)
        items = (
            db.query(StockItem)
            .filter(StockItem.lpo_id == lpo_id)
            .order_by(StockItem.created_at.desc(), StockItem.id.desc())
            .all()
        )
        rows = [_serialize_item(i) for i in items]
        return {
            "lpo":        _serialize(lpo),
            "supplier":   {"id": lpo.supplier.id, "name": lpo.supplier.name,
                           "contact": lpo.supplier.contact, "email": lpo.supplier.email,
                           "address": lpo.supplier.address} if lpo.supplier else None,
            "items":      rows,
            "grandTotal": sum(r["total"] for r in rows),
        }


lpo_service = LPOService()
