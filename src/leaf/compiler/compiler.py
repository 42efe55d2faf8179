"""Compiler - turns parsed components into a compiled Leaf.

The post-compile pass runs once per template:
1. every tag name is checked against the registry
2. every tag body is parsed and compiled into a sub-Leaf
3. each tag's `post_compile` hook runs (e.g. `include` inlines its target)

A Compiler instance lives for a single compile call and carries the chain
of templates currently being included, so cycle detection never touches
state shared between concurrent compiles.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence, Tuple

from leaf.ast.parser import to_bytes
from leaf.ast.spec import Chain, Component, Invocation, Leaf, Raw, TagTemplate
from leaf.exceptions import (
    IncludeCycleError,
    IncludeError,
    LeafError,
    UnsupportedTagError,
)

if TYPE_CHECKING:
    from leaf.stem import Stem

log = logging.getLogger(__name__)


class Compiler:
    """Compiles template source against a stem's registry and loader."""

    def __init__(self, stem: "Stem", name: str = "<string>", parents: Sequence[str] = ()):
        """Initialize a compiler for one template.

        Args:
            stem: Provides the parser, tag registry and loader.
            name: Identity of the template being compiled, for diagnostics.
            parents: Names of the templates that (transitively) include it.
        """
        self.stem = stem
        self.name = name
        self.parents: Tuple[str, ...] = tuple(parents)

    def compile(self, source: bytes | str) -> Leaf:
        """Parse and post-compile `source`.

        Returns:
            The compiled Leaf.

        Raises:
            ParseError: If the source is malformed.
            CompileError: If a tag is unknown or an include fails.
        """
        data = to_bytes(source)
        components = self.stem.parser.parse(data)
        compiled = tuple(self.post_compile(component) for component in components)
        return Leaf(source=data.decode("utf-8", errors="replace"), components=compiled)

    def post_compile(self, component: Component) -> Component:
        if isinstance(component, Invocation):
            return Invocation(self.post_compile_template(component.template))
        if isinstance(component, Chain):
            return Chain(tuple(self.post_compile_template(t) for t in component.templates))
        assert isinstance(component, Raw)
        return component

    def post_compile_template(self, template: TagTemplate) -> TagTemplate:
        tag = self.stem.tags.get(template.name)
        if tag is None:
            raise UnsupportedTagError(template.name)

        if template.raw_body is not None:
            body = self.compile(template.raw_body.strip())
            template = TagTemplate(
                name=template.name,
                parameters=template.parameters,
                body=body,
            )

        return tag.post_compile(self, template)

    def include(self, target: str) -> Leaf:
        """Load and compile `target` as a template included by this one.

        Raises:
            IncludeCycleError: If `target` is already being compiled further up.
            IncludeError: If `target` cannot be loaded or compiled.
        """
        finished = self.stem.loader.finish(target)
        chain = self.parents + (self.name,)
        if finished in chain:
            raise IncludeCycleError(chain[chain.index(finished) :] + (finished,))

        log.debug(f"Include chain: {' -> '.join(chain + (finished,))}")
        try:
            return self.stem.load(target, parents=chain)
        except IncludeCycleError:
            raise
        except LeafError as exc:
            raise IncludeError(target, self.name, str(exc)) from exc
