# models/dashboard.py

from typing import Optional, List
from pydantic import BaseModel

from models.profile import ProfileRead


class StatsRead(BaseModel):
    students: int = 0
    teachers: int = 0
    classes: int = 0
    announcements: int = 0
    timetables: int = 0


class DashboardTab(BaseModel):
    key: str
    label: str
    can_create: bool = False
    can_approve: bool = False


class DashboardRead(BaseModel):
    profile: ProfileRead
    tabs: List[DashboardTab]
    stats: Optional[StatsRead] = None
    notices: List[str] = []
