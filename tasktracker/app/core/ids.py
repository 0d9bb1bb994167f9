import re
from typing import Optional

_ID_RE = re.compile(r"-?[0-9]+")

# Row ids are stored as signed 64-bit integers
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


def parse_row_id(raw: str) -> Optional[int]:
    """Return the id in ``raw`` or None when it is not a plain in-range integer."""

    text = raw.strip()
    if not _ID_RE.fullmatch(text):
        return None
    value = int(text)
    if not MIN_ID <= value <= MAX_ID:
        return None
    return value
