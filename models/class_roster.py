# models/class_roster.py

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field

from models.enums import ClassStatus


class ClassRosterBase(BaseModel):
    name: str = Field(..., description="Class name, e.g. 'Terminale A'")
    level: str = Field(..., description="Level, e.g. 'Terminale', '3ème', 'CM2'")
    school_year: str = Field("2025-2026", description="School year label")


class ClassRosterCreate(ClassRosterBase):
    # Many-to-many via class_memberships
    student_ids: List[str] = Field(default_factory=list, description="Student profile ids. Get from GET /students.")


class ClassRosterRead(ClassRosterBase):
    id: str
    tenant_id: Optional[str] = None
    status: ClassStatus = ClassStatus.active
    creator_id: str
    created_at: Optional[datetime] = None
    student_ids: List[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class ClassMembershipRead(BaseModel):
    id: str
    class_id: str
    student_id: str
    tenant_id: Optional[str] = None
    created_at: Optional[datetime] = None
