from __future__ import annotations

import logging
import random
import secrets
from datetime import timedelta
from pathlib import Path
from typing import Any

from flask import Flask, abort, current_app, flash, redirect, render_template, request, session, url_for

from ..config.loader import load_config, load_settings
from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import CatalogConfig, Settings
from ..models.results import CatalogLoad
from ..normalize.reverse import EDITABLE_FIELDS, build_updates, editable_state
from ..services.apps_script import fetch_catalog, submit_update
from ..services.catalog import (
    CatalogFilters,
    admin_search,
    available_genders,
    filter_profiles,
    visible_page,
)
from . import presenters

"""Flask application: public catalog and password-gated admin editor.

Application state (config, settings, HTTP session) lives on the app; the admin
secret lives in a permanent signed session cookie and is only ever checked by
the remote endpoint. Every page render fetches the rows again.
"""

logger = logging.getLogger(__name__)

SESSION_SECRET = "admin_secret"
SECRET_LIFETIME = timedelta(days=365)
NO_CHANGES_MESSAGE = "No hay cambios para guardar"


def _catalog_config() -> CatalogConfig:
    return current_app.config["CATALOG"]


def _settings() -> Settings:
    return current_app.config["SETTINGS"]


def _error_log() -> ErrorLogBuffer | None:
    log_dir = _catalog_config().error_log_dir
    return ErrorLogBuffer(Path(log_dir)) if log_dir else None


def _load(shuffle: bool = False, seed: int | None = None) -> CatalogLoad:
    return fetch_catalog(
        _settings().endpoint_url,
        http=current_app.extensions.get("talent_catalog.http"),
        shuffle=shuffle,
        rng=random.Random(seed),
        error_log=_error_log(),
    )


def catalog():
    cfg = _catalog_config()
    filters = CatalogFilters.from_query(request.args)
    page = max(request.args.get("page", 1, type=int) or 1, 1)
    # the seed keeps the shuffled order stable while paging
    seed = request.args.get("seed", type=int)
    if seed is None:
        seed = random.randrange(1_000_000)

    load = _load(shuffle=cfg.shuffle, seed=seed)
    filtered = filter_profiles(load.profiles, filters)
    visible = visible_page(filtered, page, cfg.page_size)

    def toggle_url(key: str, value: str) -> str:
        return url_for("catalog", seed=seed, **filters.toggled(key, value).to_query())

    return render_template(
        "catalog.html",
        cfg=cfg,
        load=load,
        filters=filters,
        genders=available_genders(load.profiles),
        filtered=filtered,
        visible=visible,
        toggle_url=toggle_url,
        clear_url=url_for("catalog", seed=seed),
        more_url=url_for("catalog", seed=seed, page=page + 1, **filters.to_query()),
        p=presenters,
    )


def profile_detail(profile_id: str):
    load = _load()
    profile = load.find(profile_id)
    if load.ok and profile is None:
        abort(404)
    return render_template(
        "profile.html",
        cfg=_catalog_config(),
        load=load,
        profile=profile,
        p=presenters,
    )


def admin():
    admin_secret = session.get(SESSION_SECRET)
    if not admin_secret:
        return render_template("admin_login.html", cfg=_catalog_config())

    query = request.args.get("q", "")
    selected_id = request.args.get("selected")
    load = _load()
    selected = load.find(selected_id) if selected_id else None
    return render_template(
        "admin.html",
        cfg=_catalog_config(),
        load=load,
        query=query,
        listed=admin_search(load.profiles, query),
        selected=selected,
        editable=editable_state(selected) if selected else {},
        labels=presenters.EDITABLE_LABELS,
    )


def admin_login():
    password = (request.form.get("password") or "").strip()
    if password:
        session.permanent = True
        session[SESSION_SECRET] = password
    return redirect(url_for("admin"))


def admin_logout():
    session.pop(SESSION_SECRET, None)
    return redirect(url_for("admin"))


def _admin_redirect(profile_id: str | None = None, query: str | None = None):
    params: dict[str, Any] = {}
    if profile_id:
        params["selected"] = profile_id
    if query:
        params["q"] = query
    return redirect(url_for("admin", **params))


def _form_value(name: str) -> str | None:
    value = request.form.get(name)
    # textareas post CRLF line breaks
    return value.replace("\r\n", "\n") if value is not None else None


def admin_save(profile_id: str):
    admin_secret = session.get(SESSION_SECRET)
    if not admin_secret:
        return redirect(url_for("admin"))
    query = request.form.get("q")

    load = _load()
    if not load.ok:
        flash(load.error, "error")
        return _admin_redirect(profile_id, query)
    profile = load.find(profile_id)
    if profile is None:
        abort(404)

    edits = {field: _form_value(field) for field in EDITABLE_FIELDS}
    # the form posts every field; only the ones that differ from what it showed are written
    updates = build_updates(profile.raw, edits, current=editable_state(profile))
    if not updates:
        flash(NO_CHANGES_MESSAGE, "success")
        return _admin_redirect(profile_id, query)
    result = submit_update(
        _settings().endpoint_url,
        profile.row_ref,
        updates,
        admin_secret,
        http=current_app.extensions.get("talent_catalog.http"),
        error_log=_error_log(),
    )
    flash(result.message, "success" if result.ok else "error")
    return _admin_redirect(profile_id, query)


def create_app(
    config: CatalogConfig | None = None,
    settings: Settings | None = None,
    http: Any = None,
) -> Flask:
    """Build the Flask app.

    Args:
        config: Catalog config; loaded from ``settings.config_path`` when omitted
        settings: Environment settings; read from os.environ when omitted
        http: requests-compatible session used for the remote endpoint

    Raises:
        ConfigError: if the config file has to be loaded and is missing or invalid
    """
    settings = settings or load_settings()
    config = config or load_config(Path(settings.config_path))

    app = Flask(__name__)
    secret_key = settings.secret_key
    if not secret_key:
        logger.warning("FLASK_SECRET_KEY not set; admin logins will not survive a restart")
        secret_key = secrets.token_hex(32)
    app.config.update(
        SECRET_KEY=secret_key,
        PERMANENT_SESSION_LIFETIME=SECRET_LIFETIME,
        CATALOG=config,
        SETTINGS=settings,
    )
    if http is not None:
        app.extensions["talent_catalog.http"] = http
    if not settings.endpoint_url:
        logger.error("APPS_SCRIPT_URL not set; pages will show a configuration error")

    app.add_url_rule("/", "catalog", catalog)
    app.add_url_rule("/profiles/<path:profile_id>", "profile_detail", profile_detail)
    app.add_url_rule("/admin", "admin", admin)
    app.add_url_rule("/admin/login", "admin_login", admin_login, methods=["POST"])
    app.add_url_rule("/admin/logout", "admin_logout", admin_logout, methods=["POST"])
    app.add_url_rule("/admin/profiles/<path:profile_id>", "admin_save", admin_save, methods=["POST"])
    return app
