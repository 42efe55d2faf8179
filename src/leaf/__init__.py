"""Leaf - a small template language built from `@tag(args) { body }` calls.

Example:
    from leaf import Stem

    stem = Stem()
    leaf = stem.compile("Hello, @(name)!")
    stem.render(leaf, {"name": "World"})  # b"Hello, World!"
"""

from leaf._version import __version__
from leaf.ast.spec import Leaf
from leaf.compiler.loader import DictLoader, FileSystemLoader, Loader
from leaf.exceptions import (
    CompileError,
    ConfigError,
    LeafError,
    LoaderError,
    ParseError,
    RegistryError,
    RenderError,
    TagError,
)
from leaf.scope import Renderable, Scope
from leaf.stem import Stem
from leaf.tags.base import Tag
from leaf.tags.registry import TagRegistry

__all__ = [
    "__version__",
    "Stem",
    "Leaf",
    "Scope",
    "Renderable",
    "Tag",
    "TagRegistry",
    "Loader",
    "FileSystemLoader",
    "DictLoader",
    "LeafError",
    "ParseError",
    "CompileError",
    "TagError",
    "RenderError",
    "LoaderError",
    "RegistryError",
    "ConfigError",
]
