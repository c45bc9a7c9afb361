from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for error logging.

Structured record of a failed fetch or save, written as one JSON Lines entry.
``row_index`` is -1 for failures that are not tied to a specific row (the bulk
fetch, configuration problems).
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        operation: "fetch" or "save"
        sheet_key: Sheet key of the row involved ("" when not row-specific)
        row_index: Row index, or -1 when the error is not row-specific
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Message shown to the user
    """
    timestamp: str
    operation: str
    sheet_key: str
    row_index: int
    error_type: str
    message: str

    @staticmethod
    def create(
        operation: str, error_type: str, message: str, sheet_key: str = "", row_index: int = -1
    ) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            operation=operation,
            sheet_key=sheet_key,
            row_index=row_index,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
