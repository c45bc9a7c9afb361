from __future__ import annotations

from pathlib import Path

import talent_catalog.cli.__main__ as cli_module
from talent_catalog.cli import main as cli_main
from talent_catalog.models.results import CatalogLoad

"""Exit codes: 0 success, 1 fatal, 2 success with remote warnings."""


def test_exit_code_values():
    assert (cli_module.EXIT_SUCCESS, cli_module.EXIT_FATAL, cli_module.EXIT_WARNINGS) == (0, 1, 2)


def test_exit_code_fatal_startup(temp_workdir: Path, capsys):
    code = cli_main(["--inspect-data"])
    assert code == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_success(write_config, monkeypatch):
    monkeypatch.setattr(cli_module, "fetch_catalog", lambda url, **kw: CatalogLoad())
    assert cli_main(["--inspect-data"]) == 0


def test_exit_code_warnings(write_config, monkeypatch):
    monkeypatch.setattr(cli_module, "fetch_catalog", lambda url, **kw: CatalogLoad(warnings=["x"]))
    assert cli_main(["--inspect-data"]) == 2


def test_exit_code_fetch_failure(write_config, monkeypatch):
    monkeypatch.setattr(cli_module, "fetch_catalog", lambda url, **kw: CatalogLoad(error="Error al cargar datos: 500"))
    assert cli_main(["--inspect-data"]) == 1
