from __future__ import annotations

from collections.abc import Mapping

from ..models.profile import NormalizedProfile, RowRef
from .aliases import FIELD_ALIASES

"""Reverse field mapping for the admin save path.

Edits are made on logical fields; the remote sheet only understands its own
header texts. Each edit is written back under the header variant the row
already has, so a sheet using "IDOMAS" keeps using "IDOMAS" and no duplicate
column is created. Rows that carry no variant get the canonical header.
"""

__all__ = [
    "EDITABLE_FIELDS",
    "build_update_request",
    "build_updates",
    "column_for",
    "editable_state",
]

# editable field -> (alias group, canonical header for rows without any variant)
EDITABLE_FIELDS: dict[str, tuple[str, str]] = {
    "phones": ("phone", "NÚMERO DE CONTACTO"),
    "email": ("email", "MAIL"),
    "notes": ("notes", "OBSERVACIÓN DE CONTACTO"),
    "skills": ("skills", "HABILIDADES"),
    "languages": ("languages", "IDIOMAS"),
    "acting_experience": ("acting_experience", "EXPERIENCIA ACTORAL"),
    "reel_link": ("reel_link", "LINK A REEL"),
    "social_links": ("social_links", "LINK A TU REDES"),
    "availability": ("availability", "DISPONIBILIDAD HORARIA"),
    "wants_extras": ("wants_extras", "TE INTERESA SER EXTRA"),
    "driver_license": ("driver_license", "LIBRETA DE CONDUCIR"),
}


def column_for(raw: Mapping[str, str], field: str) -> str:
    """Header an edit of ``field`` must be written to for this row.

    The first alias present as a key in ``raw`` (empty or not), in alias
    priority order; otherwise the canonical header.

    Raises:
        KeyError: if ``field`` is not editable
    """
    group, canonical = EDITABLE_FIELDS[field]
    for name in FIELD_ALIASES[group]:
        if name in raw:
            return name
    return canonical


def build_updates(
    raw: Mapping[str, str],
    edits: Mapping[str, str | None],
    current: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Translate edited logical fields into ``{exact header: new text}``.

    Fields mapped to None were not edited and are left out, and so are fields
    whose value equals ``current`` (the editable_state() the form was filled
    from). Unknown field names are ignored.
    """
    updates: dict[str, str] = {}
    for field, value in edits.items():
        if value is None or field not in EDITABLE_FIELDS:
            continue
        if current is not None and value == current.get(field):
            continue
        updates[column_for(raw, field)] = value
    return updates


def editable_state(profile: NormalizedProfile) -> dict[str, str]:
    """Shadow copy of the editable fields used to pre-fill the admin form."""
    return {field: getattr(profile, field) or "" for field in EDITABLE_FIELDS}


def build_update_request(row_ref: RowRef, updates: Mapping[str, str], admin_secret: str) -> dict[str, object]:
    """Body of the update POST sent to the remote endpoint."""
    return {
        "action": "update",
        "rowRef": row_ref.to_payload(),
        "updates": dict(updates),
        "adminSecret": admin_secret,
    }
