"""AST spec - the immutable tree produced by parsing and compiling templates."""

from __future__ import annotations

from typing import Optional, Tuple, Union

import msgspec


class Variable(msgspec.Struct, frozen=True, tag="variable"):
    """A dotted lookup path into the render scope, e.g. `friend.name`."""

    path: str

    def __str__(self) -> str:
        return f".variable({self.path})"


class Constant(msgspec.Struct, frozen=True, tag="constant"):
    """A quoted literal, stored without its quotes."""

    text: str

    def __str__(self) -> str:
        return f".constant({self.text})"


Parameter = Union[Variable, Constant]


class TagTemplate(msgspec.Struct, frozen=True):
    """A single tag call: `@name(parameters) { body }`.

    The parser keeps the body as unparsed bytes in `raw_body`; the compiler
    replaces it with a compiled `body`.
    """

    name: str
    parameters: Tuple[Parameter, ...] = ()
    body: Optional[Leaf] = None
    raw_body: Optional[bytes] = None

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"(name: {self.name}, parameters: [{params}], body: {self.body})"


class Raw(msgspec.Struct, frozen=True, tag="raw"):
    """Verbatim output bytes."""

    data: bytes

    def __str__(self) -> str:
        return f".raw({self.data.decode('utf-8', errors='replace')})"


class Invocation(msgspec.Struct, frozen=True, tag="tag"):
    """A single tag invocation."""

    template: TagTemplate

    def __str__(self) -> str:
        return f".tag({self.template})"


class Chain(msgspec.Struct, frozen=True, tag="chain"):
    """Alternatives rendered first-match-wins (if / else-if / else)."""

    templates: Tuple[TagTemplate, ...]

    def __str__(self) -> str:
        return f".chain([{', '.join(str(t) for t in self.templates)}])"

    def extended(self, template: TagTemplate) -> Chain:
        return Chain(templates=self.templates + (template,))


Component = Union[Raw, Invocation, Chain]


class Leaf(msgspec.Struct, frozen=True):
    """A compiled template, ready to render."""

    source: str
    components: Tuple[Component, ...] = ()

    def __str__(self) -> str:
        return "Leaf: " + ", ".join(str(c) for c in self.components)

    def to_json(self) -> bytes:
        """Serialize the tree for inspection (e.g. `leaf parse`)."""
        return msgspec.json.encode(self)

    @classmethod
    def from_json(cls, data: bytes | str) -> Leaf:
        return msgspec.json.decode(data, type=cls)
