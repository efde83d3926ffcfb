from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, TIMESTAMP, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class StockItem(Base):
    __tablename__ = "stock_items"

    id          = Column(Integer, primary_key=True, index=True)
    name        = Column(String(200), nullable=True)
    grn_number  = Column(String(100), nullable=True)   # Goods Received Note
    lpo_id      = Column(Integer, ForeignKey("purchase_lpo.id"), nullable=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True)
    quantity    = Column(Integer, default=0, nullable=False)
    cost        = Column(Numeric(14, 2), nullable=True)
    is_deleted  = Column(Boolean, default=False, nullable=False)
    created_at  = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    lpo        = relationship("PurchaseLPO", back_populates="stock_items")
    supplier   = relationship("Supplier", back_populates="stock_items")
    issuances  = relationship("StockOut", back_populates="stock_item")

    def __repr__(self):
        return f"<StockItem id={self.id} name={self.name} qty={self.quantity}>"
