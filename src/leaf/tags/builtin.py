"""Built-in tags.

- `@(value)`: value substitution; `@()` prints a literal `@`
- `@if(flag) { ... }`: conditional, chains with further `@if`s and `@else`
- `@else() { ... }`: fallback member of an if-chain
- `@loop(items, "item") { ... }`: renders the body once per element
- `@uppercased(value)`: example filter
- `@include("name")`: static inclusion, resolved at compile time
"""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any, List

from leaf.ast.spec import Constant, Leaf, TagTemplate, Variable
from leaf.exceptions import InvalidIncludeError, TagError
from leaf.scope import Renderable, Scope, is_fuzzy, text_form
from leaf.tags.base import Argument, ConstantArgument, Tag, VariableArgument

if TYPE_CHECKING:
    from leaf.compiler.compiler import Compiler
    from leaf.stem import Stem

log = logging.getLogger(__name__)

TOKEN = "@"


def is_truthy(argument: Argument) -> bool:
    """The `@if` truth table.

    Constant: only the literal "true". Variable: booleans as-is, strings only
    when "true", integers when 1, floats when 1.0, any other value when
    present, and false when absent.
    """
    if isinstance(argument, ConstantArgument):
        return argument.value == "true"

    value = argument.value
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value == "true"
    if isinstance(value, int):
        return value == 1
    if isinstance(value, float):
        return value == 1.0
    return True


class VariableTag(Tag):
    """`@(path)` / `@("text")` / `@()` - print a value."""

    @property
    def name(self) -> str:
        return ""

    def evaluate(self, stem, scope, template, arguments) -> Any:
        # `name@()example.com` is how a literal @ is written
        if not arguments:
            return TOKEN
        if len(arguments) != 1:
            raise TagError(self.name, f"expected at most one argument, got {len(arguments)}")
        return arguments[0].value

    def should_render(self, stem, scope, template, arguments, value) -> bool:
        return True


class IfTag(Tag):
    """`@if(flag) { ... }`"""

    @property
    def name(self) -> str:
        return "if"

    def evaluate(self, stem, scope, template, arguments) -> Any:
        if len(arguments) != 1:
            raise TagError(self.name, f"expected exactly one argument, got {len(arguments)}")
        return None

    def should_render(self, stem, scope, template, arguments, value) -> bool:
        if len(arguments) != 1:
            return False
        return is_truthy(arguments[0])


class ElseTag(Tag):
    """`@else() { ... }` - always renders once reached."""

    @property
    def name(self) -> str:
        return "else"

    def evaluate(self, stem, scope, template, arguments) -> Any:
        return None

    def should_render(self, stem, scope, template, arguments, value) -> bool:
        return True


class LoopTag(Tag):
    """`@loop(items, "item") { ... }`

    Each element is bound under the given name. A single non-list value is
    looped over as a one-element list. Every rendered body is followed by a
    newline.
    """

    @property
    def name(self) -> str:
        return "loop"

    def evaluate(self, stem, scope, template, arguments) -> Any:
        if len(arguments) != 2:
            raise TagError(
                self.name,
                "requires two arguments: a variable holding a list and a constant "
                f"naming each element, got {len(arguments)}",
            )

        items, binding = arguments
        if not isinstance(items, VariableArgument) or items.value is None:
            return None
        if not isinstance(binding, ConstantArgument):
            return None

        value = items.value
        elements = list(value) if isinstance(value, (list, tuple)) else [value]
        return [{binding.value: element} for element in elements]

    def render_body(self, stem: "Stem", scope: Scope, value: Any, body: Leaf) -> bytes:
        if not isinstance(value, list):
            raise TagError(self.name, "body rendered without a list value")

        buffer = bytearray()
        for item in value:
            frame = item if is_fuzzy(item) else {"self": item}
            with scope.frame(frame):
                buffer += stem.render_leaf(body, scope)
            buffer += b"\n"
        return bytes(buffer)


class UppercasedTag(Tag):
    """`@uppercased(value)` - example filter."""

    @property
    def name(self) -> str:
        return "uppercased"

    def evaluate(self, stem, scope, template, arguments) -> Any:
        if len(arguments) != 1:
            raise TagError(self.name, f"only accepts a single argument, got {len(arguments)}")

        argument = arguments[0]
        if isinstance(argument, ConstantArgument):
            return argument.value.upper()

        value = argument.value
        if value is None:
            return None
        if isinstance(value, str):
            return value.upper()
        if isinstance(value, Renderable):
            return value.rendered().decode("utf-8", errors="replace").upper()
        return text_form(value).upper()


class IncludeTag(Tag):
    """`@include("name")` - inline another template at compile time."""

    @property
    def name(self) -> str:
        return "include"

    def post_compile(self, compiler: "Compiler", template: TagTemplate) -> TagTemplate:
        if len(template.parameters) != 1:
            raise InvalidIncludeError(
                f"@include takes exactly one constant argument, got {len(template.parameters)}"
            )

        parameter = template.parameters[0]
        if isinstance(parameter, Variable):
            raise InvalidIncludeError(
                f'includes must not be dynamic, try `@include("{parameter.path}")`'
            )
        assert isinstance(parameter, Constant)

        target = parameter.text
        if not target or PurePosixPath(target).is_absolute():
            raise InvalidIncludeError(
                f"include target must be a relative template name, got '{target}'"
            )

        log.debug(f"Including '{target}' into '{compiler.name}'")
        body = compiler.include(target)
        # parameters are no longer needed once the target is inlined
        return TagTemplate(name=template.name, parameters=(), body=body)

    def evaluate(self, stem, scope, template, arguments) -> Any:
        return None

    def should_render(self, stem, scope, template, arguments, value) -> bool:
        return True


def builtin_tags() -> List[Tag]:
    return [
        VariableTag(),
        IfTag(),
        ElseTag(),
        LoopTag(),
        UppercasedTag(),
        IncludeTag(),
    ]
