import logging
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models.supplier import Supplier
from app.models.stock_item import StockItem
from app.models.stock_out import StockOut
from app.models.purchase_lpo import PurchaseLPO

logger = logging.getLogger(__name__)


def _result(kind: str, id: int, name: str | None, extra: str | None) -> dict:
    return {"type": kind, "id": id, "name": name or "", "extraInfo": extra}


class SearchService:

    def search(self, db: Session, query: str | None) -> list[dict]:
        """
        Search suppliers, stock items, stock issuances and LPOs at once.
        Results come grouped in that order; a blank query matches nothing.
        """
        q = (query or "").strip()
        if not q:
            return []
        term = f"%{q}%"

        suppliers = (
            db.query(Supplier)
            .filter(or_(Supplier.name.ilike(term), Supplier.contact.ilike(term), Supplier.email.ilike(term)))
            .order_by(Supplier.name)
            .all()
        )
        items = (
            db.query(StockItem)
            .filter(StockItem.is_deleted.is_(False), StockItem.name.ilike(term))
            .order_by(StockItem.name)
            .all()
        )
        issuances = (
            db.query(StockOut)
            .filter(or_(StockOut.name.ilike(term), StockOut.takenby.ilike(term)))
            .order_by(StockOut.created_at.desc(), StockOut.id.desc())
            .all()
        )
        lpos = (
            db.query(PurchaseLPO)
            .filter(or_(PurchaseLPO.lpo_number.ilike(term), PurchaseLPO.status.ilike(term)))
            .order_by(PurchaseLPO.created_at.desc(), PurchaseLPO.id.desc())
            .all()
        )

        results = (
            [_result("supplier", s.id, s.name, s.email) for s in suppliers]
            + [_result("stock_item", i.id, i.name, f"{i.quantity or 0} in stock") for i in items]
            + [_result("stock_out", o.id, o.name, f"Taken by {o.takenby}") for o in issuances]
            + [_result("lpo", l.id, f"LPO #{l.lpo_number}", l.effective_status) for l in lpos]
        )
        logger.debug(f"Inventory search '{q}': {len(results)} results")
        return results


search_service = SearchService()
