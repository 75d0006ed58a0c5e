"""Pydantic schemas for Medicine domain."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class MedicineBase(BaseModel):
    name: str
    expiry_date: datetime
    quantity: int = 0
    batch_number: Optional[str] = None


class MedicineCreate(MedicineBase):
    pass

