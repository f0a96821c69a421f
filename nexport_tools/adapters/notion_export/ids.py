"""Notion block identifier helpers."""

import re

_BLOCK_ID_RE = re.compile(r"^[0-9a-z]{32}$")


def strip_dashes(raw: str) -> str:
    """Remove every dash from a block id."""
    return raw.replace("-", "")


def to_uuid(raw: str) -> str:
    """Convert a block id into the dashed 8-4-4-4-12 form Notion expects.

    Dashes already present are ignored, so the conversion is idempotent.
    The hex content is not validated; callers check the shape first
    (see ``is_block_id``).

    Example:
        >>> to_uuid("abcdefabcdefabcdefabcdefabcdef12")
        'abcdefab-cdef-abcd-efab-cdefabcdef12'
    """
    uuid = strip_dashes(raw)
    return f"{uuid[:8]}-{uuid[8:12]}-{uuid[12:16]}-{uuid[16:20]}-{uuid[20:]}"


def is_block_id(raw: str) -> bool:
    """True if ``raw`` is 32 lowercase alphanumeric chars once dashes are removed."""
    return bool(_BLOCK_ID_RE.match(strip_dashes(raw)))
