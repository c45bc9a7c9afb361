from __future__ import annotations

from ..models.profile import NormalizedProfile

"""Display helpers for the catalog and admin templates."""

# editable field -> (label, multiline)
EDITABLE_LABELS: dict[str, tuple[str, bool]] = {
    "phones": ("Teléfonos", False),
    "email": ("Mail", False),
    "notes": ("Observaciones de contacto", True),
    "skills": ("Habilidades", True),
    "languages": ("Idiomas", False),
    "acting_experience": ("Experiencia actoral", True),
    "reel_link": ("Link a reel", False),
    "social_links": ("Redes", False),
    "availability": ("Disponibilidad horaria", False),
    "wants_extras": ("Interés en ser extra", False),
    "driver_license": ("Libreta de conducir", False),
}


def format_age(age: int | None) -> str:
    return f"{age} años" if age is not None else ""


def format_height(height: float | None) -> str:
    return f"{height:.2f} m" if height else ""


def format_weight(weight: float | None) -> str:
    if not weight:
        return ""
    return f"{weight:g} kg"


def format_tattoos(tattoos: bool | None) -> str:
    if tattoos is None:
        return ""
    return "Tiene" if tattoos else "No tiene"


def gallery(profile: NormalizedProfile) -> list[tuple[str, str]]:
    """Secondary photos as (url, alt) pairs; the close-up only when it is not the cover."""
    photos: list[tuple[str, str]] = []
    if profile.headshot_photo and profile.headshot_photo != profile.main_photo:
        photos.append((profile.headshot_photo, "Primer plano"))
    if profile.medium_photo:
        photos.append((profile.medium_photo, "Plano medio"))
    for i, url in enumerate(profile.extra_photos, start=1):
        photos.append((url, f"Foto adicional {i}"))
    return photos


def detail_sections(profile: NormalizedProfile) -> list[tuple[str, list[tuple[str, str]]]]:
    """Sections of the detail view; empty values are dropped and so are empty sections."""
    p = profile
    sections = [
        ("Datos personales", [
            ("Nombre completo", p.full_name),
            ("Edad", format_age(p.age)),
            ("Género", p.gender),
            ("Nacionalidad", p.nationality),
            ("Ciudad y país", p.city_country),
        ]),
        ("Medidas", [
            ("Altura", format_height(p.height_meters)),
            ("Peso", format_weight(p.weight_kg)),
            ("Camisa", p.shirt_size),
            ("Pantalón", p.pants_size),
            ("Calzado", p.shoe_size),
        ]),
        ("Apariencia", [
            ("Etnia", p.ethnicity),
            ("Ojos", p.eye_color),
            ("Pelo", p.hair_color),
            ("Piel", p.skin_color),
            ("Tatuajes", format_tattoos(p.tattoos)),
            ("Ubicación tatuajes", p.tattoos_where),
        ]),
        ("Skills e idiomas", [
            ("Habilidades", p.skills),
            ("Idiomas", p.languages),
        ]),
        ("Experiencia", [
            ("Experiencia actoral", p.acting_experience),
            ("Actor profesional", p.is_professional_actor),
            ("Sabe actuar", p.knows_acting),
            ("Interés en ser extra", p.wants_extras),
        ]),
        ("Logística", [
            ("Libreta de conducir", p.driver_license),
            ("Disponibilidad horaria", p.availability),
        ]),
        ("Salud", [
            ("Restricciones alimenticias", p.health_restrictions),
            ("Problemas de salud", p.health_issues),
            ("Discapacidad", p.disability),
        ]),
        ("Contacto", [
            ("Teléfonos", p.phones),
            ("Mail", p.email),
            ("Redes", p.social_links),
            ("Observaciones", p.notes),
        ]),
        ("Otros datos", sorted(p.extra_fields.items())),
    ]
    result = []
    for title, fields in sections:
        shown = [(label, value) for label, value in fields if value]
        if shown:
            result.append((title, shown))
    return result
