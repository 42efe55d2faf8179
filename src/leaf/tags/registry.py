"""Tag registry - maps tag names to Tag implementations.

A registry is built once (built-ins plus any host tags), then frozen when
the first template is compiled. After that it is only read, so it can be
shared by concurrent compiles and renders.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from leaf.exceptions import DuplicateTagError, RegistryFrozenError
from leaf.tags.base import Tag
from leaf.tags.builtin import builtin_tags

log = logging.getLogger(__name__)


class TagRegistry:
    """Name -> Tag mapping with a one-way freeze."""

    def __init__(self, tags: Iterable[Tag] = ()):
        self._tags: Dict[str, Tag] = {}
        self._frozen = False
        for tag in tags:
            self.register(tag)

    @classmethod
    def default(cls) -> "TagRegistry":
        """A registry holding the built-in tags."""
        return cls(builtin_tags())

    def register(self, tag: Tag, *, replace: bool = False) -> None:
        """Register a tag.

        Args:
            tag: The tag to add.
            replace: Allow overriding an existing tag of the same name.

        Raises:
            RegistryFrozenError: If compilation has already started.
            DuplicateTagError: If the name is taken and `replace` is False.
        """
        if self._frozen:
            raise RegistryFrozenError(tag.name)
        if tag.name in self._tags and not replace:
            raise DuplicateTagError(tag.name)
        self._tags[tag.name] = tag
        log.debug(f"Registered tag @{tag.name} ({type(tag).__name__})")

    def freeze(self) -> None:
        if not self._frozen:
            self._frozen = True
            log.debug(f"Tag registry frozen with {len(self._tags)} tags")

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Optional[Tag]:
        return self._tags.get(name)

    def names(self) -> List[str]:
        return list(self._tags)

    def __contains__(self, name: object) -> bool:
        return name in self._tags

    def __getitem__(self, name: str) -> Tag:
        return self._tags[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)
