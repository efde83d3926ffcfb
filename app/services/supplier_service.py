import logging
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models.supplier import Supplier
from app.models.purchase_lpo import PurchaseLPO
from app.schemas.supplier import SupplierCreateRequest, SupplierUpdateRequest
from app.utils.exceptions import NotFoundException
from app.utils.exports import build_xlsx

logger = logging.getLogger(__name__)

EXPORT_HEADERS = ["Name", "Contact", "Email", "Address", "Date Added"]


def _serialize(s: Supplier) -> dict:
    return {
        "id":        s.id,
        "name":      s.name,
        "contact":   s.contact,
        "email":     s.email,
        "address":   s.address,
        "createdAt": s.created_at.isoformat() if s.created_at else None,
    }


def _serialize_lpo(lpo: PurchaseLPO) -> dict:
    return {
        "id":        lpo.id,
        "lpoNumber": lpo.lpo_number,
        "amount":    float(lpo.amount) if lpo.amount is not None else 0,
        "status":    lpo.effective_status,
        "createdAt": lpo.created_at.isoformat() if lpo.created_at else None,
    }


class SupplierService:

    def _get_or_404(self, db: Session, supplier_id: int) -> Supplier:
        s = db.query(Supplier).filter(Supplier.id == supplier_id).first()
        if not s:
            raise NotFoundException("Supplier")
        return s

    def _query(self, db: Session, search: str | None):
        q = db.query(Supplier)
        if search and search.strip():
            term = f"%{search.strip()}%"
            q = q.filter(or_(
                Supplier.name.ilike(term),
                Supplier.contact.ilike(term),
                Supplier.email.ilike(term),
                Supplier.address.ilike(term),
            ))
        return q.order_by(Supplier.created_at.desc(), Supplier.id.desc())

    def list_suppliers(self, db: Session, search: str | None = None) -> list[dict]:
        return [_serialize(s) for s in self._query(db, search).all()]

    def get_supplier(self, db: Session, supplier_id: int) -> dict:
        return _serialize(self._get_or_404(db, supplier_id))

    def create_supplier(self, db: Session, data: SupplierCreateRequest) -> dict:
        s = Supplier(
            name=data.name,
            contact=data.contact,
            email=str(data.email) if data.email else None,
            address=data.address,
        )
        db.add(s)
        db.commit()
        db.refresh(s)
        logger.info(f"Supplier created: {s.name} (id={s.id})")
        return _serialize(s)

    def update_supplier(self, db: Session, supplier_id: int, data: SupplierUpdateRequest) -> dict:
        s = self._get_or_404(db, supplier_id)
        for field, val in data.model_dump(exclude_unset=True).items():
            if field == "name" and val is None:
                continue
            setattr(s, field, str(val) if field == "email" and val else val)
        db.commit()
        db.refresh(s)
        return _serialize(s)

    def delete_supplier(self, db: Session, supplier_id: int) -> None:
        s = self._get_or_404(db, supplier_id)
        db.delete(s)
        db.commit()
        logger.info(f"Supplier deleted: id={supplier_id}")

    def list_supplier_lpos(self, db: Session, supplier_id: int) -> dict:
        s = self._get_or_404(db, supplier_id)
        lpos = (
            db.query(PurchaseLPO)
            .filter(PurchaseLPO.supplier_id == supplier_id)
            .order_by(PurchaseLPO.created_at.desc(), PurchaseLPO.id.desc())
            .all()
        )
        return {"supplier": _serialize(s), "lpos": [_serialize_lpo(l) for l in lpos]}

    def export_suppliers(self, db: Session, search: str | None = None) -> bytes:
        rows = [
            {
                "Name":       s.name,
                "Contact":    s.contact or "",
                "Email":      s.email or "-",
                "Address":    s.address or "-",
                "Date Added": s.created_at.strftime("%Y-%m-%d") if s.created_at else "",
            }
            for s in self._query(db, search).all()
        ]
        return build_xlsx("Suppliers", EXPORT_HEADERS, rows)


supplier_service = SupplierService()
