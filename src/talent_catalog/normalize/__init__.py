"""Row normalization: alias resolution, Drive links, profile building and write-back mapping."""

from .aliases import FIELD_ALIASES, KNOWN_COLUMNS, resolve, resolve_field
from .drive_links import convert_drive_link
from .profile import build_id, normalize_all, normalize_profile
from .reverse import EDITABLE_FIELDS, build_update_request, build_updates, column_for, editable_state

__all__ = [
    "EDITABLE_FIELDS",
    "FIELD_ALIASES",
    "KNOWN_COLUMNS",
    "build_id",
    "build_update_request",
    "build_updates",
    "column_for",
    "convert_drive_link",
    "editable_state",
    "normalize_all",
    "normalize_profile",
    "resolve",
    "resolve_field",
]
