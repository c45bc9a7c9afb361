from __future__ import annotations

import logging
import zipfile
from collections.abc import Mapping
from pathlib import Path

import pandas as pd

from ..models.config_models import WorkbookSheetConfig
from ..models.profile import RowRef
from ..models.raw_profile import RawProfile

"""Exported workbook reader.

Reads an .xlsx download of the talent spreadsheet so rows can be inspected
offline, without the remote endpoint. The first row of each sheet is the header
(the form question text); data rows are numbered from 2 the same way the sheet
numbers them, so the RowRef matches the live sheet.
"""

logger = logging.getLogger(__name__)

FIRST_DATA_ROW = 2


class WorkbookError(Exception):
    """Raised when the workbook cannot be read or a mapped sheet is missing."""


def read_workbook(path: Path, sheet_mappings: Mapping[str, WorkbookSheetConfig]) -> list[RawProfile]:
    """Read every mapped sheet of ``path`` into RawProfile envelopes.

    Cells are read as text and blank cells become "". Sheets without a mapping
    are skipped; rows whose cells are all blank are dropped.

    Raises:
        WorkbookError: the file cannot be opened, or a mapped sheet is absent
    """
    try:
        xls = pd.ExcelFile(path)
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        raise WorkbookError(f"cannot read workbook {path}: {e}") from e

    names = [str(n) for n in xls.sheet_names]
    missing = sorted(set(sheet_mappings) - set(names))
    if missing:
        raise WorkbookError(f"workbook {path.name} missing sheets: {missing}")

    envelopes: list[RawProfile] = []
    for name in names:
        mapping = sheet_mappings.get(name)
        if mapping is None:
            logger.info(f"skip sheet without mapping: {name}")
            continue
        df = xls.parse(name, header=0, dtype=str, keep_default_na=False)
        columns = [str(c) for c in df.columns]
        count = 0
        for offset, values in enumerate(df.itertuples(index=False, name=None)):
            raw = {col: ("" if v is None else str(v)) for col, v in zip(columns, values, strict=False)}
            if not any(v.strip() for v in raw.values()):
                continue
            envelopes.append(
                RawProfile(
                    location=mapping.location,
                    category=mapping.category,
                    row_ref=RowRef(sheet_key=name, row_index=FIRST_DATA_ROW + offset),
                    raw=raw,
                )
            )
            count += 1
        logger.info(f"sheet {name}: rows={count} location={mapping.location} category={mapping.category}")
    return envelopes
