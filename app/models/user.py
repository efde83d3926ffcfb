from sqlalchemy import Column, String, TIMESTAMP
from sqlalchemy.sql import func
from app.database import Base


class User(Base):
    """
    Profile row for an account managed by the remote auth service.
    ``id`` is the auth user's UUID; ``role`` is stored as text ("1", "2").
    """
    __tablename__ = "users"

    id        = Column(String(36), primary_key=True)
    email     = Column(String(255), unique=True, nullable=False, index=True)
    role      = Column(String(20), nullable=False)
    user_name = Column(String(150), nullable=True)
    usertype  = Column(String(50), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=True)

    def __repr__(self):
        return f"<User id={self.id} email={self.email} role={self.role}>"
