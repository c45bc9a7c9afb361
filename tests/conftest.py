# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from talent_catalog.logging.init import reset_logging
from talent_catalog.models.config_models import CatalogConfig, Settings
from talent_catalog.web import create_app

from fakes import ENDPOINT


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """title: Catálogo de talentos
brand: Montecristo Casting
page_size: 2
shuffle: false
locations: [Montevideo, Punta del Este]
categories: [ACTORES, CASTING, EXTRAS, MENORES]
workbook_sheets:
  ACTORES MVD:
    location: Montevideo
    category: ACTORES
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "catalog.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def actor_row() -> dict[str, str]:
    return {
        "Marca temporal": "2024-03-01 10:00:00",
        "NOMBRES": "Lucía",
        "APELLIDOS": "Pérez",
        "EDAD": "",
        "FECHA DE NACIMIENTO": "1990-06-15",
        "GÉNERO": "Femenino",
        "NACIONALIDAD": "Uruguaya",
        "CIUDAD Y PAÍS DE RESIDENCIA": "Montevideo, Uruguay",
        "ALTURA EN METROS": "1,68",
        "PESO EN KG": "60 kg",
        "TTALLE DE CAMISA": "M",
        "TATUAJES": "Sí",
        "IDOMAS": "Español, Inglés",
        "HABILIDADES": "Canto, danza",
        "FOTO INDIVIDUAL PRIMER PLANO FONDO LISO": "https://drive.google.com/open?id=HEADSHOT_1234",
        "FOTOS ADICIONALES": "https://drive.google.com/file/d/EXTRA_AAAA1/view, https://example.com/a.png",
        "NÚMERO DE CONTACTO": "099 123 456",
        "OTRO NÚMERO DE CONTACTO": "",
        "MAIL": "lucia@example.com",
        "CEDULA DE IDENTIDAD (SIN PUNTOS NI GUIONES)": "12345678",
        "¿TENÉS PASAPORTE VIGENTE?": "Sí",
    }


@pytest.fixture()
def http():
    """requests-compatible session double."""
    return MagicMock()


@pytest.fixture()
def catalog_config() -> CatalogConfig:
    return CatalogConfig(page_size=2, shuffle=False)


@pytest.fixture()
def settings() -> Settings:
    return Settings(endpoint_url=ENDPOINT, secret_key="test-secret")


@pytest.fixture()
def app(catalog_config: CatalogConfig, settings: Settings, http):
    return create_app(config=catalog_config, settings=settings, http=http)


@pytest.fixture()
def client(app):
    return app.test_client()
