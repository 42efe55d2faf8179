"""Leaf Exceptions

Error taxonomy for parsing, compiling and rendering templates.
"""

from __future__ import annotations

from typing import Sequence


class LeafError(Exception):
    """Base exception for all leaf errors.

    `exit_code` is what the CLI exits with when the error reaches it; families
    follow the sysexits.h numbering.
    """

    exit_code = 1


# =============================================================================
# Parse
# =============================================================================


class ParseError(LeafError):
    """Raised when template source cannot be turned into components."""

    exit_code = 65

    def __init__(self, message: str, position: int = 0, line: int = 1, column: int = 1):
        self.message = message
        self.position = position
        self.line = line
        self.column = column
        super().__init__(f"{message} (line {line}, column {column})")


# =============================================================================
# Compile
# =============================================================================


class CompileError(LeafError):
    """Raised when the post-compile pass rejects a template."""

    exit_code = 65


class UnsupportedTagError(CompileError):
    """Raised when a template references a tag missing from the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unsupported tag: @{name}")


class InvalidIncludeError(CompileError):
    """Raised when an include target is dynamic, absolute or missing."""

    pass


class IncludeError(CompileError):
    """Raised when an included template fails to load or compile."""

    def __init__(self, target: str, including: str, reason: str):
        self.target = target
        self.including = including
        super().__init__(f"Failed to include '{target}' from '{including}': {reason}")


class IncludeCycleError(CompileError):
    """Raised when templates include each other recursively."""

    def __init__(self, chain: Sequence[str]):
        self.chain = list(chain)
        super().__init__(f"Include cycle: {' -> '.join(self.chain)}")


# =============================================================================
# Render
# =============================================================================


class TagError(LeafError):
    """Raised when a tag's argument contract is violated at render time."""

    def __init__(self, tag: str, message: str):
        self.tag = tag
        super().__init__(f"@{tag}: {message}")


class RenderError(LeafError):
    """Raised when a compiled template cannot be rendered."""

    pass


class MissingTagError(RenderError):
    """Raised when a compiled template references an unregistered tag."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tag not registered at render time: @{name}")


# =============================================================================
# Loading, registry and configuration
# =============================================================================


class LoaderError(LeafError):
    """Base exception for template loading failures."""

    exit_code = 66


class TemplateNotFoundError(LoaderError):
    """Raised when a template name does not resolve to any source."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Template not found: {name}")


class TemplateLoadError(LoaderError):
    """Raised when a template exists but may not or cannot be read."""

    pass


class RegistryError(LeafError):
    """Base exception for tag registry misuse."""

    pass


class DuplicateTagError(RegistryError):
    """Raised when registering a tag name twice."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tag already registered: @{name}")


class RegistryFrozenError(RegistryError):
    """Raised when registering a tag after compilation has started."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Cannot register @{name}: the registry is frozen once compilation starts"
        )


class ConfigError(LeafError):
    """Raised when leaf.yaml is missing or invalid."""

    exit_code = 78
