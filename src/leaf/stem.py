"""Stem - the entry point that ties the tag registry, loader and cache together.

Usage:
    stem = Stem(FileSystemLoader("templates"))
    stem.register(MyTag())
    output = stem.render_named("index", {"name": "World"})
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence

from leaf.ast.parser import Parser
from leaf.ast.spec import Leaf
from leaf.compiler.compiler import Compiler
from leaf.compiler.loader import FileSystemLoader, Loader, strip_final_newline
from leaf.compiler.renderer import Renderer
from leaf.scope import Scope, is_fuzzy
from leaf.tags.base import Tag
from leaf.tags.registry import TagRegistry

if TYPE_CHECKING:
    from leaf.config import LeafConfig

log = logging.getLogger(__name__)


class Stem:
    """Compiles and renders templates against one tag registry."""

    def __init__(
        self,
        loader: Optional[Loader] = None,
        tags: Optional[TagRegistry] = None,
        cache: bool = True,
    ):
        """Initialize a stem.

        Args:
            loader: Where `load` and `@include` find templates. Defaults to
                the current directory.
            tags: Tag registry; the built-in tags when not given.
            cache: Memoise compiled templates by name.
        """
        self.loader: Loader = loader if loader is not None else FileSystemLoader(Path.cwd())
        self.tags = tags if tags is not None else TagRegistry.default()
        self.cache = cache
        self.parser = Parser()
        self.renderer = Renderer(self)
        self._leaves: Dict[str, Leaf] = {}

    @classmethod
    def from_config(cls, config: "LeafConfig") -> "Stem":
        loader = FileSystemLoader(config.root, suffix=config.suffix)
        return cls(loader=loader, cache=config.cache)

    def __repr__(self) -> str:
        return f"Stem(loader={self.loader!r}, tags={self.tags.names()!r})"

    def register(self, tag: Tag) -> None:
        """Add a tag; only allowed before the first compile."""
        self.tags.register(tag)

    def compiler(self, name: str = "<string>", parents: Sequence[str] = ()) -> Compiler:
        self.tags.freeze()
        return Compiler(self, name=name, parents=parents)

    def compile(self, source: bytes | str, name: str = "<string>") -> Leaf:
        """Compile template source. The source is not trimmed."""
        return self.compiler(name).compile(source)

    def load(self, name: str, parents: Sequence[str] = ()) -> Leaf:
        """Load and compile a template by name.

        One final line break of the loaded file is dropped.

        Args:
            name: Template name, with or without the loader's suffix.
            parents: Include chain leading to this template.

        Raises:
            LoaderError: If the template cannot be found or read.
            ParseError: If the template is malformed.
            CompileError: If post-compilation fails.
        """
        finished = self.loader.finish(name)
        if self.cache and finished in self._leaves:
            log.debug(f"Cache hit for template '{finished}'")
            return self._leaves[finished]

        source = strip_final_newline(self.loader.load(name))
        leaf = self.compiler(finished, parents).compile(source)
        if self.cache:
            self._leaves[finished] = leaf
        log.debug(f"Compiled template '{finished}' ({len(leaf.components)} components)")
        return leaf

    def clear_cache(self) -> None:
        self._leaves.clear()

    def render(self, leaf: Leaf, context: Any = None) -> bytes:
        """Render a compiled Leaf with a fresh scope built from `context`."""
        if context is None:
            frame: Any = {}
        elif is_fuzzy(context):
            frame = context
        else:
            frame = {"self": context}
        return self.render_leaf(leaf, Scope(frame))

    def render_leaf(self, leaf: Leaf, scope: Scope) -> bytes:
        return self.renderer.render(leaf, scope)

    def render_named(self, name: str, context: Any = None) -> bytes:
        return self.render(self.load(name), context)
