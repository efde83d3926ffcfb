from sqlalchemy import Column, Integer, String, TIMESTAMP, Numeric
from sqlalchemy.sql import func
from app.database import Base


class Order(Base):
    __tablename__ = "orders"

    id           = Column(Integer, primary_key=True, index=True)
    item         = Column(String(200), nullable=True)
    quantity     = Column(Integer, nullable=True)
    status       = Column(String(30), nullable=True)    # Pending | Completed
    total_amount = Column(Numeric(14, 2), nullable=True)
    created_at   = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)


class Expense(Base):
    __tablename__ = "expenses"

    id         = Column(Integer, primary_key=True, index=True)
    item       = Column(String(200), nullable=True)
    amount     = Column(Numeric(14, 2), nullable=True)
    spent_by   = Column(String(150), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
