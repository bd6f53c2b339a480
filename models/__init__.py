# -------------------------
# Enums
# -------------------------
from .enums import (
    Role,
    Feature,
    PermissionKind,
    PermissionStatus,
    PaymentKind,
    ReceiptStatus,
    TimetableStatus,
    ClassStatus,
    DocumentKind,
    DocumentStatus,
)

# -------------------------
# Panel Models
# -------------------------
from .announcement import AnnouncementCreate, AnnouncementRead
from .permission_request import (
    PermissionRequestCreate,
    PermissionRequestRead,
    PermissionDecision,
)
from .receipt import ReceiptCreate, ReceiptUpdate, ReceiptRead
from .timetable import TimetableCreate, TimetableRead
from .class_roster import ClassRosterCreate, ClassRosterRead, ClassMembershipRead
from .imported_document import ImportedDocumentRead

# -------------------------
# Session / Dashboard
# -------------------------
from .profile import ProfileRead, StudentRead
from .dashboard import DashboardRead, DashboardTab, StatsRead
from .auth import LoginRequest, RegisterRequest, TokenResponse

__all__ = [
    # enums
    "Role",
    "Feature",
    "PermissionKind",
    "PermissionStatus",
    "PaymentKind",
    "ReceiptStatus",
    "TimetableStatus",
    "ClassStatus",
    "DocumentKind",
    "DocumentStatus",

    # panels
    "AnnouncementCreate",
    "AnnouncementRead",
    "PermissionRequestCreate",
    "PermissionRequestRead",
    "PermissionDecision",
    "ReceiptCreate",
    "ReceiptUpdate",
    "ReceiptRead",
    "TimetableCreate",
    "TimetableRead",
    "ClassRosterCreate",
    "ClassRosterRead",
    "ClassMembershipRead",
    "ImportedDocumentRead",

    # session / dashboard
    "ProfileRead",
    "StudentRead",
    "DashboardRead",
    "DashboardTab",
    "StatsRead",
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
]
