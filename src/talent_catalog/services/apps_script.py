from __future__ import annotations

import json
import logging
import random
import time
from collections.abc import Mapping
from typing import Any

import requests

from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary
from ..models.error_record import ErrorRecord
from ..models.profile import RowRef
from ..models.raw_profile import RawProfile
from ..models.results import CatalogLoad, SaveResult
from ..normalize.profile import normalize_all
from ..normalize.reverse import build_update_request
from .catalog import shuffle_profiles
from .summary import render_summary_line

"""Client for the spreadsheet scripting endpoint.

GET returns every row as ``{profiles: [{location, category, rowRef, raw}]}``
plus optional ``error`` / ``warnings`` / ``debug`` diagnostics. POST with an
update body writes one row and answers with plain text.

Neither call retries, and neither raises: failures are reported as messages on
the returned CatalogLoad / SaveResult.
"""

logger = logging.getLogger(__name__)

MISSING_ENDPOINT_MESSAGE = "Falta configurar APPS_SCRIPT_URL"
SAVE_OK_MESSAGE = "Cambios guardados correctamente"
SAVE_FAILED_MESSAGE = "Error al guardar"
UNKNOWN_ERROR_MESSAGE = "Error desconocido"


def _record(error_log: ErrorLogBuffer | None, record: ErrorRecord) -> None:
    if error_log is None:
        return
    error_log.append(record)
    try:
        error_log.flush()
    except OSError as e:
        logger.warning(f"could not write error log: {e}")


def _fetch_failed(error_log: ErrorLogBuffer | None, error_type: str, message: str, started: float) -> CatalogLoad:
    logger.error(f"fetch: {message}")
    _record(error_log, ErrorRecord.create("fetch", error_type, message))
    return CatalogLoad(profiles=[], error=message, elapsed_seconds=time.perf_counter() - started)


def _as_text_list(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, list):
        return [v if isinstance(v, str) else json.dumps(v, ensure_ascii=False) for v in value]
    return [str(value)]


def fetch_catalog(
    endpoint_url: str | None,
    http: Any = None,
    shuffle: bool = False,
    rng: random.Random | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> CatalogLoad:
    """Fetch every row from the endpoint and normalize it.

    Args:
        endpoint_url: Endpoint URL; None reports a configuration error
        http: requests-compatible session (defaults to the ``requests`` module)
        shuffle: Return the profiles in random order
        rng: Random source used when shuffling
        error_log: Buffer receiving an ErrorRecord for every failure

    Returns:
        CatalogLoad; on failure ``error`` holds the user-facing message and
        ``profiles`` is empty.
    """
    started = time.perf_counter()
    if not endpoint_url:
        return _fetch_failed(error_log, "CONFIG_MISSING", MISSING_ENDPOINT_MESSAGE, started)

    client = http or requests
    try:
        res = client.get(endpoint_url, allow_redirects=True)
    except requests.exceptions.RequestException as e:
        return _fetch_failed(error_log, "NETWORK_ERROR", f"Error al cargar datos: {e}", started)

    if not res.ok:
        logger.debug(f"fetch: error body={res.text[:500]!r}")
        message = f"Error al cargar datos: {res.status_code} {res.reason}"
        return _fetch_failed(error_log, "HTTP_ERROR", message, started)

    try:
        data = res.json()
    except ValueError as e:
        return _fetch_failed(error_log, "INVALID_JSON", f"Respuesta inválida: {e}", started)
    if not isinstance(data, dict):
        return _fetch_failed(error_log, "INVALID_JSON", "Respuesta inválida: se esperaba un objeto", started)

    if data.get("error"):
        return _fetch_failed(error_log, "REMOTE_ERROR", f"Error del Apps Script: {data['error']}", started)

    warnings = _as_text_list(data.get("warnings"))
    for w in warnings:
        logger.warning(f"remote: {w}")
    debug = _as_text_list(data.get("debug"))
    for d in debug:
        logger.debug(f"remote debug: {d}")

    items = data.get("profiles")
    if not isinstance(items, list):
        items = []
    if not items:
        logger.warning(f"fetch: no profiles in response (keys={sorted(data.keys())})")

    profiles = normalize_all(RawProfile.from_payload(item) for item in items)
    if shuffle:
        profiles = shuffle_profiles(profiles, rng)

    load = CatalogLoad(
        profiles=profiles,
        warnings=warnings,
        debug=debug,
        elapsed_seconds=time.perf_counter() - started,
    )
    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(load)[len("SUMMARY "):])
    return load


def _save_failed(error_log: ErrorLogBuffer | None, row_ref: RowRef, error_type: str, message: str) -> SaveResult:
    logger.error(f"save {row_ref.sheet_key}#{row_ref.row_index}: {message}")
    _record(
        error_log,
        ErrorRecord.create("save", error_type, message, sheet_key=row_ref.sheet_key, row_index=row_ref.row_index),
    )
    return SaveResult(ok=False, message=message)


def submit_update(
    endpoint_url: str | None,
    row_ref: RowRef,
    updates: Mapping[str, str],
    admin_secret: str,
    http: Any = None,
    error_log: ErrorLogBuffer | None = None,
) -> SaveResult:
    """Send one update request for ``row_ref``.

    The body goes out as plain text (the script reads the raw POST contents).
    On a non-success status the response body becomes the error message.
    """
    if not endpoint_url:
        return _save_failed(error_log, row_ref, "CONFIG_MISSING", MISSING_ENDPOINT_MESSAGE)

    body = build_update_request(row_ref, updates, admin_secret)
    client = http or requests
    try:
        res = client.post(
            endpoint_url,
            data=json.dumps(body, ensure_ascii=False).encode("utf-8"),
            headers={"Content-Type": "text/plain;charset=utf-8"},
            allow_redirects=True,
        )
    except requests.exceptions.RequestException as e:
        return _save_failed(error_log, row_ref, "NETWORK_ERROR", str(e) or UNKNOWN_ERROR_MESSAGE)

    if not res.ok:
        return _save_failed(error_log, row_ref, "SAVE_FAILED", res.text or SAVE_FAILED_MESSAGE)

    logger.info(f"saved {row_ref.sheet_key}#{row_ref.row_index} columns={sorted(updates)}")
    return SaveResult(ok=True, message=SAVE_OK_MESSAGE)
