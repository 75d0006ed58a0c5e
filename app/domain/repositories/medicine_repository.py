"""
Medicine Repository Interface.
Point-in-time queries over medicine records plus the notified-state updates.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.medicine import Medicine


class MedicineRepository(BaseRepository[Medicine]):
    """Interface for Medicine-specific operations."""

    def find_expiring_between(
        self, start: datetime, end: datetime, notified: Optional[bool] = None
    ) -> List[Medicine]:
        """Medicines with start <= expiry_date <= end, soonest first.

        ``notified`` filters on the flag when given; ``None`` ignores it.
        """
        ...

    def mark_notified(self, ids: Iterable[int], notified_at: datetime) -> None:
        """Set notified=True and stamp last_notification_date for every id."""
        ...

    def update_one(self, id: int, notified: bool, notified_at: datetime) -> None:
        """Update the notified state of a single medicine."""
        ...
