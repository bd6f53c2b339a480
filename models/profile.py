# models/profile.py

from typing import Optional
from pydantic import BaseModel


class ProfileRead(BaseModel):
    """Session profile as returned to the dashboard."""
    id: str
    display_name: str
    role: str
    role_label: str
    tenant_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class StudentRead(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
