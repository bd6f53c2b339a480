# services/announcements_service.py

from typing import Optional

from dependencies.auth import SessionContext
from core.errors import ValidationError
from core.permissions import CREATE
from models.announcement import AnnouncementCreate
from models.enums import Feature
from services.panels import FeaturePanel


class AnnouncementsPanel(FeaturePanel):
    """Tenant-wide notices. Immutable once published (no edit/delete path)."""

    feature = Feature.announcements
    entity_name = "Announcement"

    def create(self, ctx: SessionContext, payload: AnnouncementCreate) -> dict:
        self.require(ctx, CREATE)

        title = payload.title.strip()
        body = payload.body.strip()
        if not title or not body:
            raise ValidationError("Title and body are required")

        return self._insert(ctx, {
            "title": title,
            "body": body,
            "urgent": bool(payload.urgent),
        })

    def list_urgent(self, ctx: SessionContext, limit: Optional[int] = None) -> list[dict]:
        return self.list(ctx, limit=limit, filters={"urgent": True})
