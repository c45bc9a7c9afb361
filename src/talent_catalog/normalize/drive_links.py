from __future__ import annotations

import re

"""Google Drive link conversion.

Photos are uploaded through the registration form, so the sheet holds Drive
sharing links in several shapes (or bare file ids). Browsers cannot embed those
directly; the googleusercontent CDN endpoint can.
"""

__all__ = [
    "THUMBNAIL_URL",
    "convert_drive_link",
]

THUMBNAIL_URL = "https://lh3.googleusercontent.com/d/{file_id}"

# Bare ids shorter than this are not trusted.
MIN_BARE_ID_LENGTH = 11

_DIRECT_IMAGE_RE = re.compile(r"\.(jpg|jpeg|png|gif|webp)(\?|$)", re.IGNORECASE)
_FILE_PATH_RE = re.compile(r"/file/d/([a-zA-Z0-9_-]+)")
_ID_PARAM_RE = re.compile(r"[?&]id=([a-zA-Z0-9_-]+)")
_NON_ID_CHARS_RE = re.compile(r"[^a-zA-Z0-9_-]")


def convert_drive_link(link: str | None) -> str | None:
    """Convert a Drive sharing link (or bare file id) into an embeddable image URL.

    Accepted shapes:
        - https://drive.google.com/file/d/FILE_ID/view (or /preview)
        - https://drive.google.com/open?id=FILE_ID
        - https://docs.google.com/uc?export=view&id=FILE_ID
        - FILE_ID on its own

    Direct image URLs and unrecognized http(s) URLs pass through unchanged.
    Returns None for empty input or bare strings too short to be an id; never raises.

    Examples:
        >>> convert_drive_link("https://drive.google.com/file/d/ABC123XYZ/view")
        'https://lh3.googleusercontent.com/d/ABC123XYZ'
        >>> convert_drive_link("https://example.com/photo.jpg")
        'https://example.com/photo.jpg'
        >>> convert_drive_link("short") is None
        True
    """
    if not link:
        return None
    trimmed = link.strip()
    if not trimmed:
        return None

    if trimmed.startswith(("http://", "https://")):
        if _DIRECT_IMAGE_RE.search(trimmed):
            return trimmed
        match = _FILE_PATH_RE.search(trimmed) or _ID_PARAM_RE.search(trimmed)
        if match:
            return THUMBNAIL_URL.format(file_id=match.group(1))
        # some other public host
        return trimmed

    clean_id = _NON_ID_CHARS_RE.sub("", trimmed)
    if len(clean_id) >= MIN_BARE_ID_LENGTH:
        return THUMBNAIL_URL.format(file_id=clean_id)
    return None
