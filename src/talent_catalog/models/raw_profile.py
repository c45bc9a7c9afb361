from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .profile import RowRef

"""RawProfile envelope: one row as delivered by a source, before normalization."""

__all__ = [
    "RawProfile",
    "coerce_raw_row",
]


def coerce_raw_row(data: Any) -> dict[str, str]:
    """Turn a decoded JSON object into a RawRow (column -> cell text).

    Cells may arrive as numbers or booleans; ``None`` becomes the empty string.
    Anything that is not a mapping yields an empty row.
    """
    if not isinstance(data, dict):
        return {}
    row: dict[str, str] = {}
    for key, value in data.items():
        row[str(key)] = "" if value is None else str(value)
    return row


@dataclass(frozen=True)
class RawProfile:
    location: str
    category: str
    row_ref: RowRef
    raw: dict[str, str]

    @staticmethod
    def from_payload(item: Any) -> RawProfile:
        """Build an envelope from one element of the remote ``profiles`` array.

        Missing pieces default the same way the remote client always has:
        empty sheet key, row index 0, empty row.
        """
        if not isinstance(item, dict):
            item = {}
        ref = item.get("rowRef") or {}
        if not isinstance(ref, dict):
            ref = {}
        try:
            row_index = int(ref.get("rowIndex") or 0)
        except (TypeError, ValueError, OverflowError):
            row_index = 0
        return RawProfile(
            location=str(item.get("location") or ""),
            category=str(item.get("category") or ""),
            row_ref=RowRef(sheet_key=str(ref.get("sheetKey") or ""), row_index=row_index),
            raw=coerce_raw_row(item.get("raw")),
        )
