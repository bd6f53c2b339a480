# core/roles.py

from models.enums import Role


# Students and parents: read-only "mine" views on the dashboard
FAMILY_ROLES = frozenset({Role.eleve.value, Role.parent.value})

# Every other known role is school staff
STAFF_ROLES = frozenset(r.value for r in Role) - FAMILY_ROLES


ROLE_LABELS = {
    "direction": "Direction",
    "censeur": "Censeur",
    "educateur": "Éducateur",
    "secretariat": "Secrétariat",
    "rh": "RH",
    "econome": "Économe",
    "enseignant": "Enseignant",
    "eleve": "Élève",
    "parent": "Parent",
}


def role_label(role: str) -> str:
    """Display label; unknown roles are shown verbatim."""
    return ROLE_LABELS.get(role, role)


def is_staff(role: str) -> bool:
    return role in STAFF_ROLES


def is_family(role: str) -> bool:
    return role in FAMILY_ROLES
