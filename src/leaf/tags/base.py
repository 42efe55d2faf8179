"""Tag capability - the protocol every `@name(...)` implementation follows.

A tag is consulted twice:

- at compile time, `post_compile` may validate or rewrite its TagTemplate
  (the built-in `include` inlines its target here);
- at render time, the renderer calls `resolve_arguments`, `evaluate`,
  `should_render` and, for tags with a body, `render_body`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Union

from leaf.ast.spec import Constant, Leaf, TagTemplate, Variable
from leaf.scope import Scope

if TYPE_CHECKING:
    from leaf.compiler.compiler import Compiler
    from leaf.stem import Stem


@dataclass(frozen=True)
class VariableArgument:
    """A Variable parameter resolved against the scope; value may be None."""

    key: str
    value: Any = None


@dataclass(frozen=True)
class ConstantArgument:
    """A Constant parameter's literal text."""

    value: str


Argument = Union[VariableArgument, ConstantArgument]


class Tag(ABC):
    """Base class for tags."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry key; the empty string is the bare `@(...)` tag."""
        ...

    def post_compile(self, compiler: "Compiler", template: TagTemplate) -> TagTemplate:
        """Validate or rewrite a parsed TagTemplate. Identity by default."""
        return template

    def resolve_arguments(
        self, stem: "Stem", scope: Scope, template: TagTemplate
    ) -> List[Argument]:
        arguments: List[Argument] = []
        for parameter in template.parameters:
            if isinstance(parameter, Variable):
                arguments.append(VariableArgument(parameter.path, scope.get(parameter.path)))
            elif isinstance(parameter, Constant):
                arguments.append(ConstantArgument(parameter.text))
        return arguments

    @abstractmethod
    def evaluate(
        self,
        stem: "Stem",
        scope: Scope,
        template: TagTemplate,
        arguments: List[Argument],
    ) -> Any:
        """Compute the tag's value; None means "no value"."""
        ...

    def should_render(
        self,
        stem: "Stem",
        scope: Scope,
        template: TagTemplate,
        arguments: List[Argument],
        value: Any,
    ) -> bool:
        """Gate deciding whether this node produces output."""
        return value is not None

    def render_body(self, stem: "Stem", scope: Scope, value: Any, body: Leaf) -> bytes:
        """Render the tag's body. The default ignores `value`."""
        return stem.render_leaf(body, scope)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} @{self.name}>"
