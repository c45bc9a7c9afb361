from __future__ import annotations

import re

from talent_catalog.logging.init import setup_logging
from talent_catalog.services.apps_script import fetch_catalog

from fakes import ENDPOINT, make_payload, make_response

"""SUMMARY line format logged after every catalog fetch."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+profiles=([0-9]+)\s+warnings=([0-9]+)\s+extra_fields=([0-9]+)\s+"
    r"elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_line():
    line = "SUMMARY profiles=120 warnings=1 extra_fields=7 elapsed_sec=0.84"
    assert SUMMARY_PATTERN.match(line)


def test_fetch_logs_exactly_one_summary_line(http, actor_row, capsys):
    setup_logging()
    http.get.return_value = make_response(json_data=make_payload(actor_row, {"NOMBRES": "Ana"}))

    fetch_catalog(ENDPOINT, http=http)

    summary = [line for line in capsys.readouterr().out.splitlines() if line.startswith("SUMMARY")]
    assert len(summary) == 1
    m = SUMMARY_PATTERN.match(summary[0])
    assert m, summary[0]
    assert m.group(1) == "2"
    assert m.group(3) == "1"


def test_failed_fetch_logs_no_summary(http, capsys):
    setup_logging()
    http.get.return_value = make_response(status=500)
    fetch_catalog(ENDPOINT, http=http)
    out = capsys.readouterr().out
    assert "SUMMARY" not in out
    assert "ERROR fetch: Error al cargar datos: 500" in out
