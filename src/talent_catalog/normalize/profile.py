from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Mapping
from datetime import date

import pandas as pd

from ..models.profile import NormalizedProfile, RowRef
from ..models.raw_profile import RawProfile
from .aliases import FIELD_ALIASES, KNOWN_COLUMNS, populated_aliases, resolve_field
from .drive_links import convert_drive_link

"""Row -> NormalizedProfile normalization.

normalize_profile() is total: any row, however sparse or malformed, produces a
profile. Values that cannot be parsed become None; nothing here raises on bad
cell content.
"""

logger = logging.getLogger(__name__)

NO_NAME = "Sin nombre"
MAX_AGE = 120
PHONE_SEPARATOR = " / "

TRUE_VALUES = frozenset({"si", "sí", "true", "x"})
FALSE_VALUES = frozenset({"no", "false"})

_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_NON_NUMERIC_RE = re.compile(r"[^\d.]")
_PHOTO_SPLIT_RE = re.compile(r"\s*,\s*|\s+")
_ISO_DATE_RE = re.compile(r"\d{4}-\d{1,2}-\d{1,2}")


def parse_number(value: str | None) -> float | None:
    """Parse a loosely written number ("1,75", "70 kg", "1.80m").

    The first comma is read as a decimal point, every other non-numeric character is
    dropped, and the leading decimal number is taken. Returns None when nothing
    numeric remains.
    """
    if not value:
        return None
    cleaned = _NON_NUMERIC_RE.sub("", value.replace(",", ".", 1))
    match = _NUMBER_RE.match(cleaned)
    if not match:
        return None
    number = float(match.group())
    return number if math.isfinite(number) else None


def parse_bool(text: str | None) -> bool | None:
    """Three-valued yes/no parsing: True, False, or None when undecided."""
    if not text:
        return None
    norm = text.strip().lower()
    if norm in TRUE_VALUES:
        return True
    if norm in FALSE_VALUES:
        return False
    return None


def parse_date(text: str | None) -> date | None:
    """Parse a birth date as typed in the sheet (ISO, dd/mm/yyyy, timestamps)."""
    if not text or not text.strip():
        return None
    text = text.strip()
    try:
        ts = pd.to_datetime(text, dayfirst=not _ISO_DATE_RE.match(text), errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    return ts.date()


def compute_age(birth: date, today: date) -> int | None:
    """Whole years between ``birth`` and ``today``; None outside [0, 120)."""
    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age if 0 <= age < MAX_AGE else None


def compute_age_from_text(text: str | None, today: date | None = None) -> int | None:
    birth = parse_date(text)
    if birth is None:
        return None
    return compute_age(birth, today or date.today())


def build_id(location: str, category: str, row_ref: RowRef) -> str:
    return f"{location}-{category}-{row_ref.sheet_key}-{row_ref.row_index}"


def split_photo_links(text: str | None) -> list[str]:
    """Split the additional-photos cell and convert each link, dropping the unusable ones."""
    if not text:
        return []
    photos: list[str] = []
    for token in _PHOTO_SPLIT_RE.split(text):
        if not token:
            continue
        url = convert_drive_link(token)
        if url:
            photos.append(url)
    return photos


def collect_extra_fields(row: Mapping[str, str]) -> dict[str, str]:
    """Non-empty cells under headers the alias tables do not know about."""
    return {k: v for k, v in row.items() if v and k not in KNOWN_COLUMNS}


def _resolve_age(row: Mapping[str, str], today: date | None) -> int | None:
    explicit = parse_number(resolve_field(row, "age"))
    if explicit is not None:
        return int(explicit)
    # each birth date column is tried in turn; an unparseable one falls through
    for column in FIELD_ALIASES["birth_date"]:
        age = compute_age_from_text(row.get(column), today)
        if age is not None:
            return age
    return None


def _resolve_bool(row: Mapping[str, str], field: str) -> bool | None:
    # an undecided answer in one variant does not hide a yes/no in the next
    for column in FIELD_ALIASES[field]:
        value = parse_bool(row.get(column))
        if value is not None:
            return value
    return None


def _join_phones(row: Mapping[str, str]) -> str | None:
    phones = [p for p in (resolve_field(row, "phone"), resolve_field(row, "alt_phone")) if p]
    return PHONE_SEPARATOR.join(phones) or None


def _log_shadowed_aliases(row: Mapping[str, str], profile_id: str) -> None:
    for field in FIELD_ALIASES:
        populated = populated_aliases(row, field)
        if len(populated) > 1:
            logger.debug(f"{profile_id}: '{field}' uses '{populated[0]}', ignoring {populated[1:]}")


def normalize_profile(
    location: str,
    category: str,
    sheet_key: str,
    row_index: int,
    row: Mapping[str, str],
    today: date | None = None,
) -> NormalizedProfile:
    """Build a NormalizedProfile from one raw spreadsheet row.

    Args:
        location: Site the row belongs to (e.g. "Montevideo")
        category: Talent category of the sheet (e.g. "ACTORES")
        sheet_key: Remote sheet identifier, echoed back on save
        row_index: Row number within that sheet
        row: Header text -> cell text
        today: Reference date for ages computed from birth dates (defaults to today)

    Returns:
        A profile whose ``id`` depends only on location, category, sheet_key and row_index.
    """
    row_ref = RowRef(sheet_key=sheet_key, row_index=row_index)
    profile_id = build_id(location, category, row_ref)
    raw = dict(row)

    first = resolve_field(raw, "first_name") or ""
    last = resolve_field(raw, "last_name") or ""
    full_name = " ".join(p for p in (first, last) if p).strip() or NO_NAME

    if logger.isEnabledFor(logging.DEBUG):
        _log_shadowed_aliases(raw, profile_id)

    return NormalizedProfile(
        id=profile_id,
        location=location,
        category=category,
        row_ref=row_ref,
        raw=raw,
        full_name=full_name,
        extra_fields=collect_extra_fields(raw),
        age=_resolve_age(raw, today),
        gender=resolve_field(raw, "gender"),
        nationality=resolve_field(raw, "nationality"),
        city_country=resolve_field(raw, "city_country"),
        height_meters=parse_number(resolve_field(raw, "height_meters")),
        weight_kg=parse_number(resolve_field(raw, "weight_kg")),
        shirt_size=resolve_field(raw, "shirt_size"),
        pants_size=resolve_field(raw, "pants_size"),
        shoe_size=resolve_field(raw, "shoe_size"),
        ethnicity=resolve_field(raw, "ethnicity"),
        eye_color=resolve_field(raw, "eye_color"),
        hair_color=resolve_field(raw, "hair_color"),
        skin_color=resolve_field(raw, "skin_color"),
        tattoos=_resolve_bool(raw, "tattoos"),
        tattoos_where=resolve_field(raw, "tattoos_where"),
        skills=resolve_field(raw, "skills"),
        languages=resolve_field(raw, "languages"),
        acting_experience=resolve_field(raw, "acting_experience"),
        is_professional_actor=resolve_field(raw, "is_professional_actor"),
        knows_acting=resolve_field(raw, "knows_acting"),
        wants_extras=resolve_field(raw, "wants_extras"),
        driver_license=resolve_field(raw, "driver_license"),
        availability=resolve_field(raw, "availability"),
        health_restrictions=resolve_field(raw, "health_restrictions"),
        health_issues=resolve_field(raw, "health_issues"),
        disability=resolve_field(raw, "disability"),
        main_photo=convert_drive_link(resolve_field(raw, "main_photo")),
        headshot_photo=convert_drive_link(resolve_field(raw, "headshot_photo")),
        medium_photo=convert_drive_link(resolve_field(raw, "medium_photo")),
        extra_photos=split_photo_links(resolve_field(raw, "extra_photos")),
        reel_link=resolve_field(raw, "reel_link"),
        social_links=resolve_field(raw, "social_links"),
        phones=_join_phones(raw),
        email=resolve_field(raw, "email"),
        notes=resolve_field(raw, "notes"),
    )


def normalize_all(envelopes: Iterable[RawProfile], today: date | None = None) -> list[NormalizedProfile]:
    """Normalize a batch of envelopes, preserving their order."""
    return [
        normalize_profile(
            e.location, e.category, e.row_ref.sheet_key, e.row_ref.row_index, e.raw, today=today
        )
        for e in envelopes
    ]
