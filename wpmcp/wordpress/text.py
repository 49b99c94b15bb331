# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""HTML → plain text helper for WordPress rendered fields."""

from __future__ import annotations

import html
import re

_TAG_RE = re.compile(r"<[^>]*>")


def strip_html(value: str) -> str:
    """Drop tags and decode entities; used for titles and excerpts."""
    if not value:
        return ""
    text = _TAG_RE.sub("", value)
    return html.unescape(text).replace("\xa0", " ").strip()
