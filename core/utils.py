# core/utils.py

import re
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


def sanitize(data: dict) -> dict:
    """
    Sanitize a row before it is sent to the store:
    - Empty strings → None
    - Strip string whitespace
    - Enums → their value
    - date / datetime → ISO string
    - Decimal → string (never float, amounts must not drift)
    - Preserve booleans, None values and everything else
    """
    clean = {}

    for k, v in data.items():
        if v is None or isinstance(v, bool):
            clean[k] = v
            continue

        if isinstance(v, Enum):
            clean[k] = v.value
            continue

        if isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped or None
            continue

        if isinstance(v, (date, datetime)):
            clean[k] = v.isoformat()
            continue

        if isinstance(v, Decimal):
            clean[k] = str(v)
            continue

        clean[k] = v

    return clean


def safe_filename(filename: str) -> str:
    return re.sub(r"[^A-Za-z0-9._-]", "_", filename)
