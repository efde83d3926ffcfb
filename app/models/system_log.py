from sqlalchemy import Column, Integer, String, Text, TIMESTAMP
from sqlalchemy.sql import func
from app.database import Base


class SystemLog(Base):
    __tablename__ = "system_logs"

    id         = Column(Integer, primary_key=True, index=True)
    action     = Column(String(100), nullable=True)    # e.g. Stock In, Stock Out
    details    = Column(Text, nullable=True)
    created_by = Column(String(150), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<SystemLog id={self.id} action={self.action}>"
