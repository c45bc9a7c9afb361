from __future__ import annotations

from ..models.results import CatalogLoad

"""Summary line rendering for catalog fetches.

Format:
SUMMARY profiles={n} warnings={w} extra_fields={k} elapsed_sec={s}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(load: CatalogLoad) -> str:
    """Render the SUMMARY line for one fetch.

    ``extra_fields`` counts profiles carrying at least one unrecognized column,
    which is how new form questions show up.

    Examples:
        >>> render_summary_line(CatalogLoad(elapsed_seconds=2.0))
        'SUMMARY profiles=0 warnings=0 extra_fields=0 elapsed_sec=2'
    """
    with_extras = sum(1 for p in load.profiles if p.extra_fields)
    return (
        f"SUMMARY profiles={len(load.profiles)} "
        f"warnings={len(load.warnings)} "
        f"extra_fields={with_extras} "
        f"elapsed_sec={_format_seconds(load.elapsed_seconds)}"
    )
