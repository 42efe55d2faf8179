"""Leaf compiler - post-compile pass, template loading and rendering."""

from leaf.compiler.compiler import Compiler
from leaf.compiler.loader import DictLoader, FileSystemLoader, Loader
from leaf.compiler.renderer import Renderer

__all__ = ["Compiler", "Renderer", "Loader", "FileSystemLoader", "DictLoader"]
