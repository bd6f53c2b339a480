# models/announcement.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class AnnouncementBase(BaseModel):
    title: str = Field(..., description="Announcement title")
    body: str = Field(..., description="Announcement text")
    urgent: bool = Field(False, description="Highlight as urgent")


class AnnouncementCreate(AnnouncementBase):
    """Tenant and author are taken from the session, never from the payload."""
    pass


class AnnouncementRead(AnnouncementBase):
    id: str
    tenant_id: Optional[str] = None
    author_id: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
