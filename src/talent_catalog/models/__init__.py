"""Domain models for the talent catalog.

This package contains the domain model classes used throughout the application:
profiles and their row locators, the raw envelopes they are built from, result
records of the remote client, and configuration.
"""

from .config_models import CatalogConfig, Settings, WorkbookSheetConfig
from .error_record import ErrorRecord
from .profile import Category, Location, NormalizedProfile, RowRef
from .raw_profile import RawProfile
from .results import CatalogLoad, SaveResult

__all__ = [
    # Configuration models
    "CatalogConfig",
    "Settings",
    "WorkbookSheetConfig",
    # Profile models
    "Category",
    "Location",
    "NormalizedProfile",
    "RawProfile",
    "RowRef",
    # Results
    "CatalogLoad",
    "ErrorRecord",
    "SaveResult",
]
