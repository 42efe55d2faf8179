"""Loaders - resolve a logical template name to source bytes.

Names get the loader's suffix appended unless they already end with it, so
`@include("partials/header")` and `stem.load("partials/header.leaf")` both
load `partials/header.leaf`. A leading `/` is ignored.

Templates loaded by name lose one final line break (see `strip_final_newline`):
files saved by editors end with one, and keeping it would add a blank line
wherever the file is included. Source handed to `Stem.compile` is never trimmed.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Mapping, Optional

from leaf.exceptions import TemplateLoadError, TemplateNotFoundError

log = logging.getLogger(__name__)

SUFFIX = ".leaf"


def strip_final_newline(data: bytes) -> bytes:
    if data.endswith(b"\r\n"):
        return data[:-2]
    if data.endswith(b"\n"):
        return data[:-1]
    return data


class Loader(ABC):
    """Base class for template loaders."""

    def __init__(self, suffix: str = SUFFIX):
        self.suffix = suffix

    def finish(self, name: str) -> str:
        """Normalise a template name: no leading `/`, suffix applied."""
        name = name.lstrip("/")
        if self.suffix and not name.endswith(self.suffix):
            return name + self.suffix
        return name

    @abstractmethod
    def load(self, name: str) -> bytes:
        """Return the source bytes for `name`.

        Raises:
            TemplateNotFoundError: If nothing is stored under `name`.
            TemplateLoadError: If the name is not allowed or unreadable.
        """
        ...


class FileSystemLoader(Loader):
    """Loads templates from files below a root directory."""

    def __init__(self, root: Path | str, suffix: str = SUFFIX):
        super().__init__(suffix)
        self.root = Path(root)

    def __repr__(self) -> str:
        return f"FileSystemLoader(root={str(self.root)!r}, suffix={self.suffix!r})"

    def resolve(self, name: str) -> Path:
        """Map a template name to a path inside root, refusing traversal."""
        subpath = self.finish(name)
        root = self.root.resolve()
        path = (root / subpath).resolve()
        if not path.is_relative_to(root):
            raise TemplateLoadError(f"Template path escapes the template root: {name}")
        return path

    def load(self, name: str) -> bytes:
        path = self.resolve(name)
        if not path.exists():
            raise TemplateNotFoundError(name)
        if not path.is_file():
            raise TemplateLoadError(f"Template path is not a file: {path}")

        try:
            data = path.read_bytes()
        except OSError as exc:
            raise TemplateLoadError(f"Could not read template {path}: {exc}") from exc

        log.debug(f"Loaded template '{name}' from {path} ({len(data)} bytes)")
        return data


class DictLoader(Loader):
    """Loads templates from an in-memory mapping (tests, embedded templates)."""

    def __init__(self, templates: Optional[Mapping[str, bytes | str]] = None, suffix: str = SUFFIX):
        super().__init__(suffix)
        self.templates: Dict[str, bytes] = {}
        for name, source in (templates or {}).items():
            self.add(name, source)

    def add(self, name: str, source: bytes | str) -> None:
        if isinstance(source, str):
            source = source.encode("utf-8")
        self.templates[self.finish(name)] = source

    def load(self, name: str) -> bytes:
        key = self.finish(name)
        if key not in self.templates:
            raise TemplateNotFoundError(name)
        return self.templates[key]
