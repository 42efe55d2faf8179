import pytest

from leaf.exceptions import DuplicateTagError, RegistryFrozenError
from leaf.stem import Stem
from leaf.tags import IfTag, Tag, TagRegistry


class ShoutTag(Tag):
    @property
    def name(self) -> str:
        return "shout"

    def evaluate(self, stem, scope, template, arguments):
        return "!!!"


def test_default_registry_has_builtins():
    registry = TagRegistry.default()
    assert set(registry.names()) == {"", "if", "else", "loop", "uppercased", "include"}
    assert "" in registry
    assert isinstance(registry["if"], IfTag)
    assert registry.get("missing") is None


def test_duplicate_registration():
    registry = TagRegistry.default()
    with pytest.raises(DuplicateTagError):
        registry.register(IfTag())

    replacement = IfTag()
    registry.register(replacement, replace=True)
    assert registry["if"] is replacement


def test_frozen_registry_rejects_tags():
    registry = TagRegistry()
    registry.freeze()
    assert registry.frozen
    with pytest.raises(RegistryFrozenError):
        registry.register(ShoutTag())


def test_stem_freezes_registry_on_first_compile():
    stem = Stem()
    stem.register(ShoutTag())
    assert stem.render(stem.compile("@shout()")) == b"!!!"

    with pytest.raises(RegistryFrozenError):
        stem.register(ShoutTag())
