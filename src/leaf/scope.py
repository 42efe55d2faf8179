"""Scope - the frame stack templates resolve variables against.

Frames are arbitrary nested values (mappings, lists, scalars). Lookups are
"fuzzy": a dotted path such as `path.to.person.0.name` walks mapping keys and
list indices segment by segment and yields None on any mismatch instead of
raising.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Protocol, runtime_checkable

_MISSING = object()


@runtime_checkable
class Renderable(Protocol):
    """A value that knows how to render itself to output bytes."""

    def rendered(self) -> bytes: ...


def is_fuzzy(value: Any) -> bool:
    """True for values a dotted path can descend into."""
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (Mapping, Sequence))


def lookup(value: Any, key: str) -> Any:
    """Resolve one path segment against a mapping or list.

    Returns the module-private sentinel when `value` does not contain `key`,
    so that a key bound to None still counts as present.
    """
    if isinstance(value, Mapping):
        if key in value:
            return value[key]
        return _MISSING
    if is_fuzzy(value):
        if key.isascii() and key.isdigit():
            index = int(key)
            if index < len(value):
                return value[index]
        return _MISSING
    return _MISSING


def get_path(value: Any, path: str) -> Any:
    """Resolve a dotted path strictly inside `value`; None if any segment fails."""
    current = value
    for segment in path.split("."):
        current = lookup(current, segment)
        if current is _MISSING:
            return None
    return current


def text_form(value: Any) -> str:
    """Default text form used when printing a non-renderable value."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


class Scope:
    """A stack of value frames, innermost last."""

    def __init__(self, *frames: Any):
        self._frames: List[Any] = list(frames)

    def __repr__(self) -> str:
        return f"Scope(depth={self.depth})"

    @property
    def depth(self) -> int:
        return len(self._frames)

    def push(self, frame: Any) -> None:
        self._frames.append(frame)

    def pop(self) -> Any:
        if not self._frames:
            raise IndexError("pop from an empty scope")
        return self._frames.pop()

    @contextmanager
    def frame(self, frame: Any) -> Iterator[Scope]:
        """Push `frame` for the duration of the block."""
        self.push(frame)
        try:
            yield self
        finally:
            self.pop()

    @contextmanager
    def preserved(self) -> Iterator[Scope]:
        """Restore the current depth on exit, whatever the block left behind."""
        depth = self.depth
        try:
            yield self
        finally:
            del self._frames[depth:]

    def get(self, path: str) -> Any:
        """Resolve `path` against the innermost frame holding its first segment.

        Args:
            path: Dotted path, e.g. `friend.name` or `people.0`.

        Returns:
            The resolved value, or None when any segment does not resolve.
        """
        first, _, rest = path.partition(".")
        for frame in reversed(self._frames):
            value = lookup(frame, first)
            if value is _MISSING:
                continue
            if not rest:
                return value
            return get_path(value, rest)
        return None

    def render(self, path: str) -> Optional[bytes]:
        """Render the value at `path`, or None when there is no value."""
        value = self.get(path)
        if value is None:
            return None
        if isinstance(value, Renderable):
            return value.rendered()
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        return text_form(value).encode("utf-8")
