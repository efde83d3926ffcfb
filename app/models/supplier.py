from sqlalchemy import Column, Integer, String, Text, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class Supplier(Base):
    __tablename__ = "suppliers"

    id         = Column(Integer, primary_key=True, index=True)
    name       = Column(String(200), nullable=False)
    contact    = Column(String(100), nullable=True)
    email      = Column(String(255), nullable=True)
    address    = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    lpos        = relationship("PurchaseLPO", back_populates="supplier")
    stock_items = relationship("StockItem", back_populates="supplier")

    def __repr__(self):
        return f"<Supplier id={self.id} name={self.name}>"
