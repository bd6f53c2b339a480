# ============================================
# CENTRALIZED ROLE → PERMISSIONS MAP
# ============================================
#
# Permission strings are "<feature>:<capability>" where capability is one of
#   create   : may create rows for the feature
#   approve  : may move a pending request to a terminal state
#   view_all : reads are tenant-wide instead of own-records-only
#
# Roles missing from this map (unknown / future roles) get nothing.

from dataclasses import dataclass

from models.enums import Feature


CREATE = "create"
APPROVE = "approve"
VIEW_ALL = "view_all"

CAPABILITIES = (CREATE, APPROVE, VIEW_ALL)


ROLE_PERMISSIONS = {

    # =====================================================
    # DIRECTION: head of school
    # =====================================================
    "direction": [
        "announcements:create", "announcements:view_all",
        "permissions:approve", "permissions:view_all",
        "receipts:create", "receipts:view_all",
        "timetables:create", "timetables:view_all",
        "classes:create", "classes:view_all",
    ],

    # =====================================================
    # CENSEUR: academic supervisor
    # =====================================================
    "censeur": [
        "announcements:create", "announcements:view_all",
        "permissions:approve", "permissions:view_all",
        "timetables:create", "timetables:view_all",
        "classes:create", "classes:view_all",
    ],

    # =====================================================
    # EDUCATEUR: discipline / attendance
    # =====================================================
    "educateur": [
        "announcements:view_all",
        "permissions:approve", "permissions:view_all",
        "timetables:create", "timetables:view_all",
        "classes:view_all",
    ],

    # =====================================================
    # SECRETARIAT
    # =====================================================
    "secretariat": [
        "announcements:create", "announcements:view_all",
        "timetables:create", "timetables:view_all",
        "classes:create", "classes:view_all",
    ],

    # =====================================================
    # RH: human resources
    # =====================================================
    "rh": [
        "announcements:view_all",
        "receipts:create", "receipts:view_all",
        "timetables:view_all",
        "classes:view_all",
    ],

    # =====================================================
    # ECONOME: bursar
    # =====================================================
    "econome": [
        "announcements:view_all",
        "receipts:create", "receipts:view_all",
        "timetables:view_all",
        "classes:view_all",
    ],

    # =====================================================
    # ENSEIGNANT: teacher
    # =====================================================
    "enseignant": [
        "announcements:view_all",
        "permissions:create",
        "timetables:view_all",
        "classes:view_all",
    ],

    # =====================================================
    # ELEVE: student (own receipts, own requests)
    # =====================================================
    "eleve": [
        "announcements:view_all",
        "permissions:create",
        "timetables:view_all",
        "classes:view_all",
    ],

    # =====================================================
    # PARENT
    # =====================================================
    "parent": [
        "announcements:view_all",
        "permissions:create",
        "timetables:view_all",
        "classes:view_all",
    ],
}


@dataclass(frozen=True)
class Capabilities:
    can_create: bool = False
    can_approve: bool = False
    can_view_all: bool = False

    def allows(self, capability: str) -> bool:
        return {
            CREATE: self.can_create,
            APPROVE: self.can_approve,
            VIEW_ALL: self.can_view_all,
        }.get(capability, False)


# Minimal set: view-own only
NO_CAPABILITIES = Capabilities()


def permission_name(feature: Feature | str, capability: str) -> str:
    return f"{Feature(feature).value}:{capability}"


def capabilities_for(role: str | None, feature: Feature | str) -> Capabilities:
    """
    Total over every (role, feature) pair.
    Unknown roles resolve to NO_CAPABILITIES instead of failing, so an
    authenticated user with an unrecognized role is never locked out.
    An unknown feature raises ValueError whatever the role.
    """
    feature = Feature(feature)

    granted = ROLE_PERMISSIONS.get(role or "")
    if not granted:
        return NO_CAPABILITIES

    return Capabilities(
        can_create=permission_name(feature, CREATE) in granted,
        can_approve=permission_name(feature, APPROVE) in granted,
        can_view_all=permission_name(feature, VIEW_ALL) in granted,
    )
