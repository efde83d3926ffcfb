import enum
from sqlalchemy import Column, Integer, String, ForeignKey, TIMESTAMP, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class LPOStatus(str, enum.Enum):
    PENDING   = "Pending"
    ACTIVE    = "Active"
    CANCELLED = "Cancelled"
    USED      = "Used"


class PurchaseLPO(Base):
    """Local Purchase Order raised against a supplier."""
    __tablename__ = "purchase_lpo"

    id          = Column(Integer, primary_key=True, index=True)
    lpo_number  = Column(String(100), unique=True, nullable=True, index=True)
    amount      = Column(Numeric(14, 2), nullable=True)
    # Free text on the remote side; NULL reads as Pending
    status      = Column(String(20), nullable=True, default=LPOStatus.ACTIVE.value)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True)
    created_at  = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    supplier    = relationship("Supplier", back_populates="lpos")
    stock_items = relationship("StockItem", back_populates="lpo")

    @property
    def effective_status(self) -> str:
        return self.status or LPOStatus.PENDING.value

    def __repr__(self):
        return f"<PurchaseLPO id={self.id} number={self.lpo_number} status={self.status}>"
