from __future__ import annotations

import json
import random
from pathlib import Path

import requests

from talent_catalog.logging.error_log import ErrorLogBuffer
from talent_catalog.logging.init import setup_logging
from talent_catalog.models.profile import RowRef
from talent_catalog.services.apps_script import (
    MISSING_ENDPOINT_MESSAGE,
    SAVE_FAILED_MESSAGE,
    SAVE_OK_MESSAGE,
    fetch_catalog,
    submit_update,
)

from fakes import ENDPOINT, make_payload, make_response


def test_fetch_normalizes_profiles(http, actor_row):
    http.get.return_value = make_response(json_data=make_payload(actor_row, {"NOMBRES": "Ana"}))

    load = fetch_catalog(ENDPOINT, http=http)

    http.get.assert_called_once_with(ENDPOINT, allow_redirects=True)
    assert load.ok
    assert [p.id for p in load.profiles] == [
        "Montevideo-ACTORES-actores_mvd-2",
        "Montevideo-ACTORES-actores_mvd-3",
    ]
    assert load.profiles[0].full_name == "Lucía Pérez"
    assert load.elapsed_seconds >= 0


def test_fetch_without_endpoint(http):
    load = fetch_catalog(None, http=http)
    assert load.error == MISSING_ENDPOINT_MESSAGE
    assert load.profiles == []
    http.get.assert_not_called()


def test_fetch_http_error(http):
    http.get.return_value = make_response(status=500, text="boom")
    load = fetch_catalog(ENDPOINT, http=http)
    assert load.error == "Error al cargar datos: 500 Internal Server Error"
    assert load.profiles == []


def test_fetch_network_error(http):
    http.get.side_effect = requests.exceptions.ConnectionError("connection refused")
    load = fetch_catalog(ENDPOINT, http=http)
    assert not load.ok
    assert load.error.startswith("Error al cargar datos: ")
    assert "connection refused" in load.error


def test_fetch_invalid_json(http):
    http.get.return_value = make_response(json_error=ValueError("Expecting value"))
    load = fetch_catalog(ENDPOINT, http=http)
    assert load.error.startswith("Respuesta inválida")


def test_fetch_non_object_json(http):
    http.get.return_value = make_response(json_data=["not", "an", "object"])
    load = fetch_catalog(ENDPOINT, http=http)
    assert load.error.startswith("Respuesta inválida")


def test_fetch_remote_error(http, actor_row):
    http.get.return_value = make_response(json_data=make_payload(actor_row, error="Sheet not found"))
    load = fetch_catalog(ENDPOINT, http=http)
    assert load.error == "Error del Apps Script: Sheet not found"
    assert load.profiles == []


def test_fetch_warnings_are_advisory(http, actor_row, capsys):
    setup_logging()
    payload = make_payload(actor_row, warnings=["Hoja vacía: extras_pde"], debug=[{"sheet": "x"}])
    http.get.return_value = make_response(json_data=payload)

    load = fetch_catalog(ENDPOINT, http=http)

    assert load.ok
    assert len(load.profiles) == 1
    assert load.warnings == ["Hoja vacía: extras_pde"]
    assert load.debug == ['{"sheet": "x"}']
    out = capsys.readouterr().out
    assert "WARN remote: Hoja vacía: extras_pde" in out
    assert "SUMMARY profiles=1 warnings=1 extra_fields=1 " in out


def test_fetch_missing_profiles_key_is_empty_catalog(http):
    http.get.return_value = make_response(json_data={})
    load = fetch_catalog(ENDPOINT, http=http)
    assert load.ok
    assert load.profiles == []


def test_fetch_coerces_cell_values(http):
    payload = make_payload({"NOMBRES": "Ana", "EDAD": 30, "TATUAJES": None})
    http.get.return_value = make_response(json_data=payload)
    profile = fetch_catalog(ENDPOINT, http=http).profiles[0]
    assert profile.raw == {"NOMBRES": "Ana", "EDAD": "30", "TATUAJES": ""}
    assert profile.age == 30
    assert profile.tattoos is None


def test_fetch_shuffle_uses_rng(http):
    rows = [{"NOMBRES": f"P{i}"} for i in range(8)]
    http.get.return_value = make_response(json_data=make_payload(*rows))
    a = fetch_catalog(ENDPOINT, http=http, shuffle=True, rng=random.Random(3))
    b = fetch_catalog(ENDPOINT, http=http, shuffle=True, rng=random.Random(3))
    assert [p.id for p in a.profiles] == [p.id for p in b.profiles]
    assert sorted(p.full_name for p in a.profiles) == sorted(r["NOMBRES"] for r in rows)


def test_fetch_failure_is_written_to_error_log(http, tmp_path: Path):
    http.get.return_value = make_response(status=503)
    buf = ErrorLogBuffer(tmp_path)
    fetch_catalog(ENDPOINT, http=http, error_log=buf)

    lines = buf.file_path.read_text(encoding="utf-8").splitlines()
    record = json.loads(lines[0])
    assert record["operation"] == "fetch"
    assert record["error_type"] == "HTTP_ERROR"
    assert record["row_index"] == -1


def test_submit_update_posts_plain_text_body(http):
    http.post.return_value = make_response(text="OK")

    result = submit_update(ENDPOINT, RowRef("actores_mvd", 4), {"IDOMAS": "Inglés"}, "s3cret", http=http)

    assert result.ok
    assert result.message == SAVE_OK_MESSAGE
    args, kwargs = http.post.call_args
    assert args == (ENDPOINT,)
    assert kwargs["headers"] == {"Content-Type": "text/plain;charset=utf-8"}
    assert kwargs["allow_redirects"] is True
    assert json.loads(kwargs["data"].decode("utf-8")) == {
        "action": "update",
        "rowRef": {"sheetKey": "actores_mvd", "rowIndex": 4},
        "updates": {"IDOMAS": "Inglés"},
        "adminSecret": "s3cret",
    }


def test_submit_update_failure_uses_response_text(http):
    http.post.return_value = make_response(status=403, text="Unauthorized")
    result = submit_update(ENDPOINT, RowRef("actores_mvd", 4), {}, "wrong", http=http)
    assert not result.ok
    assert result.message == "Unauthorized"


def test_submit_update_failure_without_body(http):
    http.post.return_value = make_response(status=500, text="")
    result = submit_update(ENDPOINT, RowRef("actores_mvd", 4), {}, "s", http=http)
    assert result.message == SAVE_FAILED_MESSAGE


def test_submit_update_network_error(http, tmp_path: Path):
    http.post.side_effect = requests.exceptions.Timeout("read timed out")
    buf = ErrorLogBuffer(tmp_path)
    result = submit_update(ENDPOINT, RowRef("menores_pde", 9), {"MAIL": "x"}, "s", http=http, error_log=buf)

    assert not result.ok
    assert "read timed out" in result.message
    record = json.loads(buf.file_path.read_text(encoding="utf-8").splitlines()[0])
    assert (record["sheet_key"], record["row_index"], record["error_type"]) == ("menores_pde", 9, "NETWORK_ERROR")


def test_submit_update_without_endpoint(http):
    result = submit_update(None, RowRef("a", 2), {}, "s", http=http)
    assert result.message == MISSING_ENDPOINT_MESSAGE
    http.post.assert_not_called()


def test_fetch_tolerates_non_finite_row_index(http):
    payload = {"profiles": [{"location": "Montevideo", "category": "ACTORES",
                             "rowRef": {"sheetKey": "s", "rowIndex": float("nan")}, "raw": {"NOMBRES": "Ana"}}]}
    http.get.return_value = make_response(json_data=payload)
    load = fetch_catalog(ENDPOINT, http=http)
    assert load.ok
    assert load.profiles[0].id == "Montevideo-ACTORES-s-0"
