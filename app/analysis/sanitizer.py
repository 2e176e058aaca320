from __future__ import annotations

import re

_HEADING_MARKER_RE = re.compile(r"^#{1,6}\s+", re.MULTILINE)


def sanitize_document(text: str | None) -> str:
    """Strip markdown heading markers and surrounding whitespace."""
    return _HEADING_MARKER_RE.sub("", text or "").strip()
