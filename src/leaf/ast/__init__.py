"""Leaf AST - parsing template source into components."""

from leaf.ast.parser import Parser
from leaf.ast.spec import (
    Chain,
    Component,
    Constant,
    Invocation,
    Leaf,
    Parameter,
    Raw,
    TagTemplate,
    Variable,
)

__all__ = [
    "Parser",
    "Chain",
    "Component",
    "Constant",
    "Invocation",
    "Leaf",
    "Parameter",
    "Raw",
    "TagTemplate",
    "Variable",
]
