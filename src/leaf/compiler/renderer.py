"""Renderer - interprets a compiled Leaf against a Scope."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from leaf.ast.spec import Chain, Invocation, Leaf, Raw, TagTemplate
from leaf.exceptions import MissingTagError
from leaf.scope import Scope

if TYPE_CHECKING:
    from leaf.stem import Stem


class Renderer:
    """Walks a Leaf's components and executes the tag protocol per node."""

    def __init__(self, stem: "Stem"):
        self.stem = stem

    def render(self, leaf: Leaf, scope: Scope) -> bytes:
        """Render `leaf`; the scope is back at its entry depth afterwards.

        Raises:
            TagError: If a tag rejects its arguments.
            RenderError: If a tag is not registered.
        """
        buffer = bytearray()
        with scope.preserved():
            for component in leaf.components:
                if isinstance(component, Raw):
                    buffer += component.data
                elif isinstance(component, Invocation):
                    buffer += self.render_alternatives((component.template,), scope)
                elif isinstance(component, Chain):
                    buffer += self.render_alternatives(component.templates, scope)
        return bytes(buffer)

    def render_alternatives(self, templates: Sequence[TagTemplate], scope: Scope) -> bytes:
        """First alternative whose gate passes wins; the rest are not evaluated."""
        for template in templates:
            rendered = self.render_template(template, scope)
            if rendered is not None:
                return rendered
        return b""

    def render_template(self, template: TagTemplate, scope: Scope) -> Optional[bytes]:
        """Run one tag; None when its gate fails."""
        stem = self.stem
        tag = stem.tags.get(template.name)
        if tag is None:
            raise MissingTagError(template.name)

        arguments = tag.resolve_arguments(stem, scope, template)
        value = tag.evaluate(stem, scope, template, arguments)
        if not tag.should_render(stem, scope, template, arguments, value):
            return None

        with scope.frame({"self": value}):
            if template.body is not None:
                return tag.render_body(stem, scope, value, template.body)
            return scope.render("self") or b""
