"""Medicine table."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func

from app.infrastructure.database import Base


class Medicine(Base):
    __tablename__ = "medicines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(300), nullable=False)
    expiry_date = Column(DateTime, nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=0)
    batch_number = Column(String(100), nullable=True)

    # Set only by the daily reminder after a consolidated send
    notified = Column(Boolean, nullable=False, default=False, index=True)
    last_notification_date = Column(DateTime, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Medicine {self.id} - {self.name}>"
