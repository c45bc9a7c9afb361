from __future__ import annotations

from collections.abc import Iterable, Mapping

"""Column alias tables and resolver.

The registration forms were edited many times; the same logical field shows up
under several header spellings (typos included) depending on the sheet. Each
logical field lists its candidate headers in priority order: when more than one
is populated in a row, the first one wins and the others are ignored.
"""

__all__ = [
    "FIELD_ALIASES",
    "HIDDEN_COLUMNS",
    "KNOWN_COLUMNS",
    "resolve",
    "resolve_field",
    "populated_aliases",
]


FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    # identity
    "first_name": ("NOMBRES", "NOMBRE", "NOMBRES DEL MENOR"),
    "last_name": ("APELLIDOS", "APELLIDOS DEL MENOR"),
    "age": ("EDAD",),
    "birth_date": ("FECHA DE NACIMIENTO", "FECHA DE NACIMIENTO DEL MENOR"),
    "gender": ("GÉNERO",),
    "nationality": ("NACIONALIDAD",),
    "city_country": ("CIUDAD Y PAÍS DE RESIDENCIA",),
    # measurements
    "height_meters": ("ALTURA EN METROS",),
    "weight_kg": ("PESO EN KG",),
    "shirt_size": ("TALLE DE CAMISA", "TTALLE DE CAMISA"),
    "pants_size": ("TALLE DE PANTALÓN",),
    "shoe_size": ("TALLE DE CALZADO",),
    # appearance
    "ethnicity": ("ETNIA",),
    "eye_color": ("COLOR DE OJOS",),
    "hair_color": ("COLOR DE PELO", "COLOR DE CABELLO"),
    "skin_color": ("COLOR DE PIEL",),
    "tattoos": ("TATUAJES", "TUTUAJES"),
    "tattoos_where": ("SI TU RESPUESTA ANTERIOR FUE SI, DÓNDE TENÉS",),
    # skills and experience
    "skills": ("HABILIDADES",),
    "languages": ("IDIOMAS", "IDOMAS"),
    "acting_experience": ("EXPERIENCIA ACTORAL", "EXPERIENCIA EN ACTUACIÓN"),
    "is_professional_actor": ("SOS ACTOR PROFESIONAL",),
    "knows_acting": ("SABES ACTUAR",),
    "wants_extras": ("TE INTERESA SER EXTRA", "INTERES EN SER EXTRA"),
    # logistics
    "driver_license": ("LIBRETA DE CONDUCIR",),
    "availability": ("DISPONIBILIDAD HORARIA", "QUE DISPONIBILIDAD HORARIA TENES"),
    # health
    "health_restrictions": ("RESTRICCIONES ALIMENTICIAS",),
    "health_issues": ("PROBLEMA DE SALUD A SABER",),
    "disability": ("DISCAPACIDAD A SABER",),
    # photos
    "main_photo": (
        "FOTO INDIVIDUAL PLANO ENTERO FONDO LISO",
        "FOTO INDIVIDUAL PRIMER PLANO FONDO LISO",
    ),
    "headshot_photo": ("FOTO INDIVIDUAL PRIMER PLANO FONDO LISO",),
    "medium_photo": ("FOTO INDIVIDUAL PLANO MEDIO FONDO LISO",),
    "extra_photos": ("FOTOS ADICIONALES",),
    # links and contact
    "reel_link": ("LINK A REEL",),
    "social_links": ("LINK A TU REDES",),
    "phone": ("NÚMERO DE CONTACTO",),
    "alt_phone": ("OTRO NÚMERO DE CONTACTO",),
    "email": ("MAIL", "Dirección de correo electrónico"),
    "notes": ("OBSERVACION DE CONTACTO", "OBSERVACIÓN DE CONTACTO", "Observaciones"),
}

# Recognized columns that are never shown: identity documents, addresses,
# guardian data and form bookkeeping.
HIDDEN_COLUMNS: frozenset[str] = frozenset({
    "Marca temporal",
    "DÓNDE ESTUDIASTE ACTUACIÓN",
    "CEDULA DE IDENTIDAD (SIN PUNTOS NI GUIONES)",
    "CÉDULA DE IDENTIDAD (SIN PUNTOS NI GUIONES)",
    "DOCUMENTO DE IDENTIDAD (SIN PUNTOS NI GUIONES)",
    "OTRO DOCUMENTO DE IDENTIDAD",
    "DOMICILIO",
    "DOMICILIO DEL MENOR",
    "BARRIO",
    "PROFESIÓN U OCUPACIÓN",
    "NOMBRE Y APELLIDO DE AMBOS PADRES O MADRES",
    "FOTO DE LA CEDULA DEL PADRE/MADRE/TUTOR A CARGO",
})


def _known_columns(tables: Iterable[tuple[str, ...]], hidden: Iterable[str]) -> frozenset[str]:
    columns: set[str] = set(hidden)
    for aliases in tables:
        columns.update(aliases)
    return frozenset(columns)


# Derived from the tables above so a new alias can never leak into extra fields.
KNOWN_COLUMNS: frozenset[str] = _known_columns(FIELD_ALIASES.values(), HIDDEN_COLUMNS)


def resolve(row: Mapping[str, str], aliases: Iterable[str]) -> str | None:
    """Return the value of the first alias present in ``row`` with a non-empty value.

    Pure and total: a row without any of the aliases simply yields ``None``.

    Examples:
        >>> resolve({"IDIOMAS": "English", "IDOMAS": "French"}, ("IDIOMAS", "IDOMAS"))
        'English'
        >>> resolve({"IDIOMAS": "", "IDOMAS": "French"}, ("IDIOMAS", "IDOMAS"))
        'French'
        >>> resolve({}, ("IDIOMAS", "IDOMAS")) is None
        True
    """
    for name in aliases:
        value = row.get(name)
        if value:
            return value
    return None


def resolve_field(row: Mapping[str, str], field: str) -> str | None:
    """Resolve a logical field through its alias table entry."""
    return resolve(row, FIELD_ALIASES[field])


def populated_aliases(row: Mapping[str, str], field: str) -> list[str]:
    """Aliases of ``field`` that carry a value in ``row`` (all of them, in priority order)."""
    return [name for name in FIELD_ALIASES[field] if row.get(name)]
