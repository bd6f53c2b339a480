# services/classes_service.py

from dependencies.auth import SessionContext
from core.errors import StoreError, ValidationError
from core.logging_config import logger
from core.permissions import CREATE
from core.row_store import RowStore
from core.scoping import tenant_filters
from models.class_roster import ClassRosterCreate
from models.enums import ClassStatus, Feature
from services.directory_service import StudentDirectory
from services.panels import FeaturePanel


MEMBERSHIPS_TABLE = "class_memberships"


class ClassesPanel(FeaturePanel):
    """
    Class rosters and their student memberships (class_memberships).
    """

    feature = Feature.classes
    entity_name = "Class"

    def __init__(self, store: RowStore):
        super().__init__(store)
        self.directory = StudentDirectory(store)

    def create(self, ctx: SessionContext, payload: ClassRosterCreate) -> dict:
        self.require(ctx, CREATE)

        name = payload.name.strip()
        level = payload.level.strip()
        school_year = (payload.school_year or "").strip()
        if not name or not level or not school_year:
            raise ValidationError("Name, level and school year are required")

        student_ids = self.directory.require_students(ctx, payload.student_ids)

        roster = self._insert(ctx, {
            "name": name,
            "level": level,
            "school_year": school_year,
            "status": ClassStatus.active,
        })

        try:
            self.store.insert_many(MEMBERSHIPS_TABLE, [
                {
                    "class_id": roster["id"],
                    "student_id": student_id,
                    "tenant_id": ctx.tenant_id,
                }
                for student_id in student_ids
            ])
        except StoreError:
            # roster without its members is not kept
            logger.error(f"Membership insert failed for class {roster['id']}; removing roster")
            self.store.delete(self.table, roster["id"])
            raise

        return {**roster, "student_ids": student_ids}

    def list_members(self, ctx: SessionContext, class_id: str) -> list[dict]:
        self.get(ctx, class_id)
        return self.store.select(
            MEMBERSHIPS_TABLE,
            {"class_id": class_id, **tenant_filters(ctx)},
            order="created_at",
            desc=False,
        )
