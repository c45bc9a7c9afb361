from __future__ import annotations

from dataclasses import dataclass, field

from .profile import Category, Location

"""Config dataclasses for the talent catalog.

CatalogConfig comes from config/catalog.yml (see src/talent_catalog/config/loader.py);
Settings comes from the environment, after .env has been loaded.
"""

DEFAULT_PAGE_SIZE = 24
DEFAULT_CONFIG_PATH = "config/catalog.yml"


@dataclass(frozen=True)
class WorkbookSheetConfig:
    """Where the rows of one exported workbook sheet belong."""
    sheet_name: str
    location: str
    category: str


@dataclass(frozen=True)
class CatalogConfig:
    """Root configuration object for the catalog views."""
    title: str = "Catálogo de talentos"
    brand: str = "Montecristo Casting"
    page_size: int = DEFAULT_PAGE_SIZE  # cards added per "Cargar más"
    shuffle: bool = True  # randomize catalog order on each load
    locations: list[str] = field(default_factory=lambda: [loc.value for loc in Location])
    categories: list[str] = field(default_factory=lambda: [cat.value for cat in Category])
    error_log_dir: str | None = None  # JSON Lines error log directory (disabled when None)
    workbook_sheets: dict[str, WorkbookSheetConfig] = field(default_factory=dict)


@dataclass(frozen=True)
class Settings:
    """Environment-supplied settings.

    ``endpoint_url`` may be missing; that is reported to the user as a
    configuration error instead of failing at startup.
    """
    endpoint_url: str | None
    config_path: str = DEFAULT_CONFIG_PATH
    secret_key: str | None = None
