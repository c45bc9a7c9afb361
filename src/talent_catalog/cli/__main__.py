from __future__ import annotations

import argparse
import sys
from pathlib import Path

from talent_catalog.config.loader import ConfigError, load_config, load_env_file, load_settings
from talent_catalog.excel.reader import WorkbookError, read_workbook
from talent_catalog.logging.error_log import ErrorLogBuffer
from talent_catalog.logging.init import setup_logging
from talent_catalog.models.config_models import CatalogConfig
from talent_catalog.models.profile import NormalizedProfile
from talent_catalog.models.results import CatalogLoad
from talent_catalog.normalize.profile import normalize_all
from talent_catalog.services.apps_script import fetch_catalog

"""CLI entrypoint.

- Load .env, settings and config/catalog.yml
- --inspect-data: fetch (or read an exported workbook), print a few normalized
  profiles and exit
- otherwise: serve the Flask app
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_WARNINGS = 2

SAMPLE_SIZE = 3

_SAMPLE_FIELDS = ("full_name", "age", "gender", "city_country", "languages", "main_photo")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Talent catalog and admin editor")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print a few normalized profiles then exit")
    p.add_argument("--workbook", type=Path, help="With --inspect-data: read an exported .xlsx instead of the endpoint")
    p.add_argument("--host", default="127.0.0.1", help="Bind address for the web server")
    p.add_argument("--port", type=int, default=5000, help="Port for the web server")
    return p.parse_args(argv)


def _print_sample(profiles: list[NormalizedProfile]) -> None:
    for profile in profiles[:SAMPLE_SIZE]:
        print(f"PROFILE: {profile.id}")
        for name in _SAMPLE_FIELDS:
            print(f"  {name}={getattr(profile, name)!r}")
        if profile.extra_fields:
            print(f"  extra_fields={sorted(profile.extra_fields)}")


def _inspect_data(cfg: CatalogConfig, endpoint_url: str | None, workbook: Path | None) -> int:
    if workbook is not None:
        if not cfg.workbook_sheets:
            print("inspect: workbook_sheets is not configured")
            return EXIT_FATAL
        try:
            envelopes = read_workbook(workbook, cfg.workbook_sheets)
        except WorkbookError as e:
            print(f"inspect: {e}")
            return EXIT_FATAL
        load = CatalogLoad(profiles=normalize_all(envelopes))
    else:
        error_log = ErrorLogBuffer(Path(cfg.error_log_dir)) if cfg.error_log_dir else None
        load = fetch_catalog(endpoint_url, error_log=error_log)
        if not load.ok:
            print(f"inspect: {load.error}")
            return EXIT_FATAL

    print(f"inspect: profiles={len(load.profiles)}")
    _print_sample(load.profiles)
    for w in load.warnings:
        print(f"inspect: warning={w}")
    return EXIT_WARNINGS if load.warnings else EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    # None only: an explicit [] must not fall back to sys.argv (pytest args)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)

    load_env_file(Path(".env"))
    settings = load_settings()
    try:
        cfg = load_config(Path(settings.config_path))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg, settings.endpoint_url, args.workbook)

    from talent_catalog.web.app import create_app

    app = create_app(config=cfg, settings=settings)
    logger.info(f"Serving catalog on http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=args.debug)
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
