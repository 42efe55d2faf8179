"""Leaf tags - the pluggable behaviours behind `@name(...)`."""

from leaf.tags.base import Argument, ConstantArgument, Tag, VariableArgument
from leaf.tags.builtin import (
    ElseTag,
    IfTag,
    IncludeTag,
    LoopTag,
    UppercasedTag,
    VariableTag,
    builtin_tags,
    is_truthy,
)
from leaf.tags.registry import TagRegistry

__all__ = [
    "Argument",
    "ConstantArgument",
    "VariableArgument",
    "Tag",
    "TagRegistry",
    "VariableTag",
    "IfTag",
    "ElseTag",
    "LoopTag",
    "UppercasedTag",
    "IncludeTag",
    "builtin_tags",
    "is_truthy",
]
