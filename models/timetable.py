# models/timetable.py

from typing import Optional
from datetime import date, datetime
from pydantic import BaseModel, Field

from models.enums import TimetableStatus


class TimetableBase(BaseModel):
    title: str
    week_start: date = Field(..., description="First day of the week covered")
    week_end: date = Field(..., description="Last day of the week covered")


class TimetableCreate(TimetableBase):
    pass


class TimetableRead(TimetableBase):
    id: str
    tenant_id: Optional[str] = None
    status: TimetableStatus
    creator_id: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
