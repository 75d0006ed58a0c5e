"""Notification log — append-only record of every delivery attempt."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from app.infrastructure.database import Base


class NotificationLog(Base):
    __tablename__ = "notification_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    medicine_id = Column(Integer, ForeignKey("medicines.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # DAILY, WEEKLY, MONTHLY
    channel = Column(String(20), nullable=False)  # EMAIL, PUSH
    status = Column(String(20), nullable=False)  # success, failed
    message = Column(Text, nullable=False)
    email = Column(String(255), nullable=True)
    error = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<NotificationLog {self.type}/{self.channel} - {self.status}>"
