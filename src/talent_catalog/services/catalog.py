from __future__ import annotations

import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace

from ..models.profile import NormalizedProfile

"""In-memory catalog filtering, search and paging.

Everything here works on the list returned by one fetch; nothing is cached
between requests.
"""

__all__ = [
    "CatalogFilters",
    "admin_search",
    "available_genders",
    "filter_profiles",
    "shuffle_profiles",
    "visible_page",
]

_MULTI_KEYS = ("locations", "categories", "genders")
# query string parameter -> filter attribute
_QUERY_KEYS = {"q": "search", "location": "locations", "category": "categories", "gender": "genders"}


@dataclass(frozen=True)
class CatalogFilters:
    search: str = ""
    locations: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    genders: tuple[str, ...] = ()

    @classmethod
    def from_query(cls, args: Mapping) -> CatalogFilters:
        """Build filters from a query-string mapping (a werkzeug MultiDict or a plain dict)."""
        def _many(name: str) -> tuple[str, ...]:
            if hasattr(args, "getlist"):
                values = args.getlist(name)
            else:
                value = args.get(name)
                values = value if isinstance(value, (list, tuple)) else ([value] if value else [])
            seen: list[str] = []
            for v in values:
                if v and v not in seen:
                    seen.append(v)
            return tuple(seen)

        return cls(
            search=(args.get("q") or "").strip(),
            locations=_many("location"),
            categories=_many("category"),
            genders=_many("gender"),
        )

    def to_query(self) -> dict[str, object]:
        query: dict[str, object] = {}
        for param, attr in _QUERY_KEYS.items():
            value = getattr(self, attr)
            if value:
                query[param] = list(value) if isinstance(value, tuple) else value
        return query

    def toggled(self, key: str, value: str) -> CatalogFilters:
        """Copy with ``value`` added to / removed from the ``key`` selection."""
        if key not in _MULTI_KEYS:
            raise ValueError(f"not a multi-value filter: {key}")
        current: tuple[str, ...] = getattr(self, key)
        if value in current:
            updated = tuple(v for v in current if v != value)
        else:
            updated = current + (value,)
        return replace(self, **{key: updated})

    def cleared(self) -> CatalogFilters:
        return CatalogFilters()

    def is_empty(self) -> bool:
        return not (self.search or self.locations or self.categories or self.genders)


def _haystack(values: Iterable[str | None]) -> str:
    return " ".join(v for v in values if v).lower()


def filter_profiles(profiles: list[NormalizedProfile], filters: CatalogFilters) -> list[NormalizedProfile]:
    """Apply the catalog filters, keeping the input order.

    The gender filter only excludes profiles that declare a gender; profiles
    without one stay visible.
    """
    query = filters.search.strip().lower()
    result: list[NormalizedProfile] = []
    for p in profiles:
        if filters.locations and p.location not in filters.locations:
            continue
        if filters.categories and p.category not in filters.categories:
            continue
        if filters.genders and p.gender and p.gender not in filters.genders:
            continue
        if query:
            haystack = _haystack((p.full_name, p.city_country, p.nationality, p.skills, p.languages))
            if query not in haystack:
                continue
        result.append(p)
    return result


def available_genders(profiles: Iterable[NormalizedProfile]) -> list[str]:
    return sorted({p.gender.strip() for p in profiles if p.gender and p.gender.strip()})


def visible_page(profiles: list[NormalizedProfile], page: int, page_size: int) -> list[NormalizedProfile]:
    """First ``page * page_size`` profiles ("load more" paging); page < 1 counts as 1."""
    return profiles[: max(page, 1) * page_size]


def admin_search(profiles: list[NormalizedProfile], query: str) -> list[NormalizedProfile]:
    """Admin list search over name, city, email and phones."""
    q = query.strip().lower()
    if not q:
        return list(profiles)
    return [
        p for p in profiles
        if q in _haystack((p.full_name, p.city_country, p.email, p.phones))
    ]


def shuffle_profiles(profiles: list[NormalizedProfile], rng: random.Random | None = None) -> list[NormalizedProfile]:
    """Shuffled copy, so no talent is always first in the catalog."""
    shuffled = list(profiles)
    (rng or random.Random()).shuffle(shuffled)
    return shuffled
