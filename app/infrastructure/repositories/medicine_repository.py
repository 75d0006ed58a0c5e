"""
SQLAlchemy Implementation of Medicine Repository.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import update

from app.domain.models.medicine import Medicine
from app.domain.repositories.medicine_repository import MedicineRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyMedicineRepository(SQLAlchemyRepository[Medicine], MedicineRepository):
    """Medicine repository implementation using SQLAlchemy."""

    def __init__(self, db, model=Medicine):
        super().__init__(db, model)

    def find_expiring_between(
        self, start: datetime, end: datetime, notified: Optional[bool] = None
    ) -> List[Medicine]:
        query = self.db.query(Medicine).filter(
            Medicine.expiry_date >= start,
            Medicine.expiry_date <= end,
        )
        if notified is not None:
            query = query.filter(Medicine.notified == notified)
        return query.order_by(Medicine.expiry_date.asc(), Medicine.id.asc()).all()

    def mark_notified(self, ids: Iterable[int], notified_at: datetime) -> None:
        ids = list(ids)
        if not ids:
            return
        self.db.execute(
            update(Medicine)
            .where(Medicine.id.in_(ids))
            .values(notified=True, last_notification_date=notified_at)
            .execution_options(synchronize_session="fetch")
        )
        self.db.commit()

    def update_one(self, id: int, notified: bool, notified_at: datetime) -> None:
        medicine = self.get_by_id(id)
        if medicine is None:
            return
        medicine.notified = notified
        medicine.last_notification_date = notified_at
        self.db.commit()
