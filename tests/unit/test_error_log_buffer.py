from __future__ import annotations

import json
import re
from pathlib import Path

from talent_catalog.logging.error_log import ErrorLogBuffer, ErrorRecord

KEYS = {"timestamp", "operation", "sheet_key", "row_index", "error_type", "message"}


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("fetch", "HTTP_ERROR", "Error al cargar datos: 500 Internal Server Error"))
    buf.append(ErrorRecord.create("save", "SAVE_FAILED", "Unauthorized", sheet_key="actores_mvd", row_index=4))
    path = buf.flush()

    assert path.parent == Path("logs")
    assert re.fullmatch(r"errors-\d{8}-\d{6}\.log", path.name)
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        assert set(json.loads(raw)) == KEYS
    assert json.loads(lines[1])["row_index"] == 4
    assert len(buf) == 0


def test_error_log_buffer_multiple_flushes_append_to_same_file(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("fetch", "NETWORK_ERROR", "timeout"))
    path = buf.flush()
    size1 = path.stat().st_size

    buf.append(ErrorRecord.create("fetch", "NETWORK_ERROR", "timeout again"))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1


def test_empty_flush_writes_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path / "nested" / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "nested").exists()


def test_non_ascii_messages_kept_readable(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path)
    buf.append(ErrorRecord.create("fetch", "INVALID_JSON", "Respuesta inválida"))
    path = buf.flush()
    assert "Respuesta inválida" in path.read_text(encoding="utf-8")
