# services/timetables_service.py

from dependencies.auth import SessionContext
from core.errors import ValidationError
from core.permissions import CREATE
from models.enums import Feature, TimetableStatus
from models.timetable import TimetableCreate
from services.panels import FeaturePanel


# draft → submitted → validated
NEXT_STATUS = {
    TimetableStatus.draft.value: TimetableStatus.submitted.value,
    TimetableStatus.submitted.value: TimetableStatus.validated.value,
}


class TimetablesPanel(FeaturePanel):
    feature = Feature.timetables
    entity_name = "Timetable"

    def create(self, ctx: SessionContext, payload: TimetableCreate) -> dict:
        self.require(ctx, CREATE)

        title = payload.title.strip()
        if not title or not payload.week_start or not payload.week_end:
            raise ValidationError("Title, week start and week end are required")
        if payload.week_end < payload.week_start:
            raise ValidationError("Week end cannot be before week start")

        return self._insert(ctx, {
            "title": title,
            "week_start": payload.week_start,
            "week_end": payload.week_end,
            "status": TimetableStatus.draft,
        })

    def submit(self, ctx: SessionContext, timetable_id: str) -> dict:
        return self._advance(ctx, timetable_id, TimetableStatus.draft.value)

    def validate(self, ctx: SessionContext, timetable_id: str) -> dict:
        return self._advance(ctx, timetable_id, TimetableStatus.submitted.value)

    def _advance(self, ctx: SessionContext, timetable_id: str, from_status: str) -> dict:
        self.require(ctx, CREATE)
        return self._transition(
            ctx,
            timetable_id,
            from_status=from_status,
            patch={"status": NEXT_STATUS[from_status]},
        )
