"""Utility helpers for string normalization."""

from __future__ import annotations

import re
from typing import Optional

SPACE_RUN_PATTERN = re.compile(r" +")


def normalize_profile_type(value: Optional[str], collapse_all: bool = False) -> Optional[str]:
    """Turn a profile label such as ``Media Partner`` into ``media-partner``.

    Only the first run of spaces is replaced unless ``collapse_all`` is set,
    which keeps existing ``data/settings.yml`` output stable.
    """
    if value is None:
        return None
    count = 0 if collapse_all else 1
    return SPACE_RUN_PATTERN.sub("-", value.lower(), count=count)
