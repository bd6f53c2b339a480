from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Known school roles. Profiles may carry other strings (open set)."""

    direction = "direction"
    censeur = "censeur"
    educateur = "educateur"
    secretariat = "secretariat"
    rh = "rh"
    econome = "econome"
    enseignant = "enseignant"
    eleve = "eleve"
    parent = "parent"


# -----------------------------------------------------
# FEATURE (one per dashboard panel)
# -----------------------------------------------------
class Feature(BaseStrEnum):
    announcements = "announcements"
    permissions = "permissions"
    receipts = "receipts"
    timetables = "timetables"
    classes = "classes"


# -----------------------------------------------------
# PERMISSION REQUEST
# -----------------------------------------------------
class PermissionKind(BaseStrEnum):
    absence_eleve = "absence_eleve"
    absence_enseignant = "absence_enseignant"
    sortie_anticipee = "sortie_anticipee"
    autre = "autre"


class PermissionStatus(BaseStrEnum):
    """pending → approved | rejected (terminal)."""

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


# -----------------------------------------------------
# RECEIPT
# -----------------------------------------------------
class PaymentKind(BaseStrEnum):
    inscription = "inscription"
    scolarite = "scolarite"
    cantine = "cantine"
    transport = "transport"
    evenement = "evenement"
    autre = "autre"


class ReceiptStatus(BaseStrEnum):
    issued = "issued"


# -----------------------------------------------------
# TIMETABLE
# -----------------------------------------------------
class TimetableStatus(BaseStrEnum):
    """draft → submitted → validated."""

    draft = "draft"
    submitted = "submitted"
    validated = "validated"


# -----------------------------------------------------
# CLASS ROSTER
# -----------------------------------------------------
class ClassStatus(BaseStrEnum):
    active = "active"


# -----------------------------------------------------
# IMPORTED DOCUMENT
# -----------------------------------------------------
class DocumentKind(BaseStrEnum):
    class_roster = "class_roster"
    timetable = "timetable"


class DocumentStatus(BaseStrEnum):
    imported = "imported"
