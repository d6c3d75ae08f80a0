"""File-emission helpers rooted at the Hugo project directory."""

from __future__ import annotations

import logging
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Optional, Union

from .markdown import compose_markdown, dump_data, merge_data

logger = logging.getLogger("dato_hugo")

PathLike = Union[str, Path]


class SiteRoot:
    """Writes data files and posts below a base directory.

    Every written path is appended to ``written``, which nested roots created
    through :meth:`directory` share with their parent.
    """

    def __init__(self, path: PathLike, written: Optional[List[Path]] = None) -> None:
        self.path = Path(path)
        self.written: List[Path] = [] if written is None else written

    def _target(self, relative: PathLike) -> Path:
        target = self.path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        return target

    def _write(self, target: Path, text: str) -> Path:
        target.write_text(text, encoding="utf-8")
        self.written.append(target)
        logger.debug("Wrote %s", target)
        return target

    def add_to_data_file(self, relative: PathLike, fmt: str, patch: Mapping[str, Any]) -> Path:
        """Shallow-merge ``patch`` into an existing structured file."""
        target = self._target(relative)
        existing = target.read_text(encoding="utf-8") if target.exists() else ""
        return self._write(target, merge_data(existing, fmt, patch))

    def create_data_file(self, relative: PathLike, fmt: str, data: Mapping[str, Any]) -> Path:
        """Write a structured data file, replacing any previous one."""
        return self._write(self._target(relative), dump_data(data, fmt))

    def create_post(self, relative: PathLike, fmt: str, document: Mapping[str, Any]) -> Path:
        """Write a Markdown file from ``{"frontmatter": ..., "content": ...}``."""
        text = compose_markdown(
            document.get("frontmatter") or {},
            document.get("content"),
            fmt,
        )
        return self._write(self._target(relative), text)

    @contextmanager
    def directory(self, relative: PathLike) -> Iterator["SiteRoot"]:
        """Yield a root for an emptied (or freshly created) directory."""
        target = self.path / relative
        if target.exists():
            logger.debug("Clearing %s", target)
            shutil.rmtree(target)
        target.mkdir(parents=True)
        yield SiteRoot(target, written=self.written)
