"""Safety Settings Parsing: blocked-user ids from a profile's safety_settings blob.

Invariants:
    - Pure: no IO, no DB
    - Anything that is not a mapping with a list under blocked_user_ids yields []
    - Entries are stringified and stripped; empty entries dropped; order preserved
"""

from collections.abc import Mapping
from typing import Any


def extract_blocked_user_ids(safety_settings: Any) -> list[str]:
    """Return the blocked user ids recorded in safety_settings."""
    if not isinstance(safety_settings, Mapping):
        return []
    raw = safety_settings.get("blocked_user_ids")
    if not isinstance(raw, list):
        return []
    ids = []
    for entry in raw:
        value = "" if entry is None else str(entry).strip()
        if value:
            ids.append(value)
    return ids
