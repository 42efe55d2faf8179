"""Parser - scans template source into a flat list of components.

The scanner walks an owned byte buffer by index. Tag bodies are not parsed
here: their bytes are kept on the TagTemplate (`raw_body`) and compiled into
a sub-Leaf by the compiler.

Syntax:
    raw text @name(var.path, "constant") { body } more raw text
    @(var)          bare value substitution
    @()             a literal `@`
"""

from __future__ import annotations

import logging
from typing import FrozenSet, List, Optional, Tuple

from leaf.ast.spec import (
    Chain,
    Component,
    Constant,
    Invocation,
    Parameter,
    Raw,
    TagTemplate,
    Variable,
)
from leaf.exceptions import ParseError

log = logging.getLogger(__name__)

TOKEN = ord("@")
QUOTE = ord('"')
COMMA = ord(",")
OPEN_PAREN = ord("(")
CLOSE_PAREN = ord(")")
OPEN_BRACE = ord("{")
CLOSE_BRACE = ord("}")
INLINE_SPACE = b" \t"
IDENTIFIER = frozenset(
    b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-"
)

# Tags that merge into a Chain when written back to back.
CHAIN_FAMILY: FrozenSet[str] = frozenset({"if", "else"})
# Family members that may only continue a chain, and end it.
CHAIN_TERMINALS: FrozenSet[str] = frozenset({"else"})


def to_bytes(source: bytes | str) -> bytes:
    if isinstance(source, str):
        return source.encode("utf-8")
    return bytes(source)


def parse_parameter(raw: bytes) -> Parameter:
    """Turn one comma-separated item of a parameter list into a Parameter."""
    text = raw.strip()
    if not text:
        raise ValueError("invalid argument: empty")
    if text[0] == QUOTE:
        if len(text) < 2 or text[-1] != QUOTE:
            raise ValueError("invalid argument: missing trailing quotation mark")
        return Constant(text[1:-1].decode("utf-8"))
    return Variable(text.decode("utf-8"))


class Parser:
    """Recursive-descent scanner for the `@tag(args) { body }` notation."""

    def __init__(
        self,
        chain_family: FrozenSet[str] = CHAIN_FAMILY,
        chain_terminals: FrozenSet[str] = CHAIN_TERMINALS,
    ):
        self.chain_family = chain_family
        self.chain_terminals = chain_terminals

    def parse(self, source: bytes | str) -> List[Component]:
        """Parse template source into components.

        Args:
            source: Template text or bytes.

        Returns:
            Components in source order.

        Raises:
            ParseError: On unterminated quotes, parentheses or braces, empty
                parameters, or an `else` with nothing to chain onto.
        """
        return _Scan(to_bytes(source), self).components()


class _Scan:
    """Single-use scanning state over one source buffer."""

    def __init__(self, data: bytes, parser: Parser):
        self.data = data
        self.pos = 0
        self.parser = parser

    # -- positions ---------------------------------------------------------

    def error(self, message: str, position: Optional[int] = None) -> ParseError:
        position = self.pos if position is None else position
        line = self.data.count(b"\n", 0, position) + 1
        column = position - (self.data.rfind(b"\n", 0, position) + 1) + 1
        return ParseError(message, position, line, column)

    def peek(self) -> Optional[int]:
        if self.pos < len(self.data):
            return self.data[self.pos]
        return None

    # -- top level ---------------------------------------------------------

    def components(self) -> List[Component]:
        if TOKEN not in self.data:
            return [Raw(self.data)]

        components: List[Component] = []
        while self.pos < len(self.data):
            marker = self.data.find(b"@", self.pos)
            if marker == -1:
                components.append(Raw(self.data[self.pos :]))
                break
            if marker > self.pos:
                components.append(Raw(self.data[self.pos : marker]))
            start = marker
            self.pos = marker + 1
            template = self.tag_template()
            self.append(components, template, start)

        log.debug(f"Parsed {len(components)} components")
        return components

    def append(self, components: List[Component], template: TagTemplate, start: int) -> None:
        family = self.parser.chain_family
        terminals = self.parser.chain_terminals

        if template.name not in family:
            components.append(Invocation(template))
            return

        if template.name in terminals:
            # `} @else() {` - whitespace between the two tags is not output
            if (
                len(components) >= 2
                and isinstance(components[-1], Raw)
                and not components[-1].data.strip()
                and self.chainable(components[-2])
            ):
                components.pop()
            if not components or not self.chainable(components[-1]):
                raise self.error(
                    f"illegal chain continuation: @{template.name} must directly "
                    "follow @if or another chained tag",
                    start,
                )
        elif not components or not self.chainable(components[-1]):
            components.append(Invocation(template))
            return

        previous = components[-1]
        if isinstance(previous, Invocation):
            components[-1] = Chain((previous.template, template))
        elif isinstance(previous, Chain):
            components[-1] = previous.extended(template)

    def chainable(self, component: Component) -> bool:
        family = self.parser.chain_family
        terminals = self.parser.chain_terminals
        if isinstance(component, Invocation):
            name = component.template.name
            return name in family and name not in terminals
        if isinstance(component, Chain):
            return component.templates[-1].name not in terminals
        return False

    # -- a single tag ------------------------------------------------------

    def tag_template(self) -> TagTemplate:
        name = self.identifier()

        parameters: Tuple[Parameter, ...] = ()
        if self.peek() == OPEN_PAREN:
            self.pos += 1
            parameters = self.parameters()

        raw_body = self.body()
        return TagTemplate(name=name, parameters=parameters, raw_body=raw_body)

    def identifier(self) -> str:
        start = self.pos
        while self.pos < len(self.data) and self.data[self.pos] in IDENTIFIER:
            self.pos += 1
        return self.data[start : self.pos].decode("ascii")

    def parameters(self) -> Tuple[Parameter, ...]:
        """Read up to and including the closing `)`; pos starts after `(`."""
        open_at = self.pos - 1
        items: List[Tuple[int, bytes]] = []
        item_start = self.pos
        quoted_at: Optional[int] = None

        while self.pos < len(self.data):
            byte = self.data[self.pos]
            if quoted_at is not None:
                if byte == QUOTE:
                    quoted_at = None
            elif byte == QUOTE:
                quoted_at = self.pos
            elif byte == COMMA:
                items.append((item_start, self.data[item_start : self.pos]))
                item_start = self.pos + 1
            elif byte == CLOSE_PAREN:
                items.append((item_start, self.data[item_start : self.pos]))
                self.pos += 1
                break
            self.pos += 1
        else:
            if quoted_at is not None:
                raise self.error("unterminated quotation mark", quoted_at)
            raise self.error("unterminated parameter list", open_at)

        if len(items) == 1 and not items[0][1].strip():
            return ()

        parameters: List[Parameter] = []
        for offset, item in items:
            try:
                parameters.append(parse_parameter(item))
            except ValueError as exc:
                raise self.error(str(exc), offset) from exc
        return tuple(parameters)

    def body(self) -> Optional[bytes]:
        """Read an optional `{ ... }` body, honouring nested braces."""
        lookahead = self.pos
        while lookahead < len(self.data) and self.data[lookahead] in INLINE_SPACE:
            lookahead += 1
        if lookahead >= len(self.data) or self.data[lookahead] != OPEN_BRACE:
            return None

        open_at = lookahead
        self.pos = lookahead + 1
        depth = 1
        while self.pos < len(self.data):
            byte = self.data[self.pos]
            if byte == OPEN_BRACE:
                depth += 1
            elif byte == CLOSE_BRACE:
                depth -= 1
                if depth == 0:
                    body = self.data[open_at + 1 : self.pos]
                    self.pos += 1
                    return body
            self.pos += 1
        raise self.error("unbalanced braces: body is never closed", open_at)
