from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""Profile domain models for the talent catalog.

RowRef locates a row inside the remote spreadsheet and is echoed back on save.
NormalizedProfile is the typed record built from one raw row; it is rebuilt on
every fetch and never persisted.
"""

__all__ = [
    "Category",
    "Location",
    "NormalizedProfile",
    "RowRef",
]


class Location(str, Enum):
    """Sites the agency casts for."""
    MONTEVIDEO = "Montevideo"
    PUNTA_DEL_ESTE = "Punta del Este"


class Category(str, Enum):
    """Talent categories, one spreadsheet tab family each."""
    ACTORES = "ACTORES"
    CASTING = "CASTING"
    EXTRAS = "EXTRAS"
    MENORES = "MENORES"


@dataclass(frozen=True)
class RowRef:
    """Opaque locator of a row in the remote spreadsheet."""
    sheet_key: str
    row_index: int

    def to_payload(self) -> dict[str, object]:
        return {"sheetKey": self.sheet_key, "rowIndex": self.row_index}


@dataclass(frozen=True)
class NormalizedProfile:
    """Typed talent profile derived from a single spreadsheet row.

    Every optional attribute is ``None`` when the row does not carry it (or it
    cannot be parsed). ``raw`` keeps the original row so the admin save path can
    detect which column variant the sheet uses.
    """
    id: str
    location: str
    category: str
    row_ref: RowRef
    raw: dict[str, str]
    full_name: str
    extra_fields: dict[str, str] = field(default_factory=dict)
    # personal
    age: int | None = None
    gender: str | None = None
    nationality: str | None = None
    city_country: str | None = None
    # measurements
    height_meters: float | None = None
    weight_kg: float | None = None
    shirt_size: str | None = None
    pants_size: str | None = None
    shoe_size: str | None = None
    # appearance
    ethnicity: str | None = None
    eye_color: str | None = None
    hair_color: str | None = None
    skin_color: str | None = None
    tattoos: bool | None = None  # True / False / unknown
    tattoos_where: str | None = None
    # skills and experience
    skills: str | None = None
    languages: str | None = None
    acting_experience: str | None = None
    is_professional_actor: str | None = None
    knows_acting: str | None = None
    wants_extras: str | None = None
    # logistics
    driver_license: str | None = None
    availability: str | None = None
    # health
    health_restrictions: str | None = None
    health_issues: str | None = None
    disability: str | None = None
    # photos
    main_photo: str | None = None
    headshot_photo: str | None = None
    medium_photo: str | None = None
    extra_photos: list[str] = field(default_factory=list)
    # links and contact
    reel_link: str | None = None
    social_links: str | None = None
    phones: str | None = None
    email: str | None = None
    notes: str | None = None

    @property
    def card_photo(self) -> str | None:
        """Photo used on catalog cards (close-up first)."""
        return self.headshot_photo or self.main_photo

    @property
    def cover_photo(self) -> str | None:
        """Photo used at the top of the detail view (full body first)."""
        return self.main_photo or self.headshot_photo
