from sqlalchemy import Column, Integer, String, ForeignKey, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class StockOut(Base):
    """One issuance of stock to a person."""
    __tablename__ = "stock_out"

    id         = Column(Integer, primary_key=True, index=True)
    stock_id   = Column(Integer, ForeignKey("stock_items.id"), nullable=True)
    name       = Column(String(200), nullable=True)   # copied from the item at issue time
    quantity   = Column(Integer, nullable=False)
    takenby    = Column(String(150), nullable=True)
    issuedby   = Column(String(150), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    stock_item = relationship("StockItem", back_populates="issuances")

    def __repr__(self):
        return f"<StockOut id={self.id} stock={self.stock_id} qty={self.quantity}>"
