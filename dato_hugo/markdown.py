"""Serialization helpers for data files and frontmatter Markdown documents."""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

import tomlkit
import yaml

FORMAT_ALIASES = {"yml": "yaml", "yaml": "yaml", "toml": "toml", "json": "json"}

FRONTMATTER_DELIMITERS = {"yaml": "---", "toml": "+++"}


def normalize_format(fmt: str) -> str:
    """Map a declared format tag onto one of ``yaml``, ``toml`` or ``json``."""
    try:
        return FORMAT_ALIASES[fmt.lower()]
    except KeyError:
        raise ValueError(f"Unsupported format: {fmt!r}") from None


def _drop_none(value: Any) -> Any:
    # TOML has no null.
    if isinstance(value, Mapping):
        return {key: _drop_none(item) for key, item in value.items() if item is not None}
    if isinstance(value, (list, tuple)):
        return [_drop_none(item) for item in value if item is not None]
    return value


def dump_data(data: Mapping[str, Any], fmt: str) -> str:
    """Serialize a mapping using the given format tag."""
    fmt = normalize_format(fmt)
    if fmt == "yaml":
        return yaml.safe_dump(dict(data), sort_keys=False, allow_unicode=True)
    if fmt == "toml":
        return tomlkit.dumps(_drop_none(data))
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def load_data(text: str, fmt: str) -> Dict[str, Any]:
    """Parse structured text; TOML keeps its comments and layout."""
    fmt = normalize_format(fmt)
    if not text.strip():
        return tomlkit.document() if fmt == "toml" else {}
    if fmt == "yaml":
        return yaml.safe_load(text) or {}
    if fmt == "toml":
        return tomlkit.parse(text)
    return json.loads(text)


def merge_data(text: str, fmt: str, patch: Mapping[str, Any]) -> str:
    """Shallow-merge ``patch`` into the serialized document ``text``."""
    fmt = normalize_format(fmt)
    document = load_data(text, fmt)
    if fmt == "toml":
        patch = _drop_none(patch)
        for key, value in patch.items():
            document[key] = value
        return tomlkit.dumps(document)
    document.update(patch)
    return dump_data(document, fmt)


def compose_markdown(frontmatter: Mapping[str, Any], content: Optional[str], fmt: str = "yaml") -> str:
    """Generate a document made of a frontmatter block followed by the raw body."""
    fmt = normalize_format(fmt)
    if fmt == "json":
        header = json.dumps(frontmatter, indent=2, ensure_ascii=False) + "\n"
    else:
        delimiter = FRONTMATTER_DELIMITERS[fmt]
        dumped = dump_data(frontmatter, fmt).rstrip()
        header = f"{delimiter}\n{dumped}\n{delimiter}\n"
    if not content:
        return header
    return header + "\n" + content.rstrip("\n") + "\n"
