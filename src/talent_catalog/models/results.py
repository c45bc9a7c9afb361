from __future__ import annotations

from dataclasses import dataclass, field

from .profile import NormalizedProfile

"""Result models returned by the remote client.

Neither the fetch nor the save path raises past the views: every failure ends
up as a user-visible message on one of these records.
"""

__all__ = [
    "CatalogLoad",
    "SaveResult",
]


@dataclass(frozen=True)
class CatalogLoad:
    """Outcome of one bulk fetch.

    ``error`` set means the fetch failed and ``profiles`` is empty.
    ``warnings`` are advisory; the profiles are still usable.
    """
    profiles: list[NormalizedProfile] = field(default_factory=list)
    error: str | None = None
    warnings: list[str] = field(default_factory=list)
    debug: list[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None

    def find(self, profile_id: str) -> NormalizedProfile | None:
        for profile in self.profiles:
            if profile.id == profile_id:
                return profile
        return None


@dataclass(frozen=True)
class SaveResult:
    ok: bool
    message: str
