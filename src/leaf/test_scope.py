import pytest

from leaf.scope import Scope, get_path, is_fuzzy, text_form


class Badge:
    def rendered(self) -> bytes:
        return b"<badge>"


def test_fuzzy_path_through_maps_and_lists():
    scope = Scope({"path": {"to": {"person": [{"name": "Ada"}, {"name": "Bob"}]}}})
    assert scope.get("path.to.person.0.name") == "Ada"
    assert scope.get("path.to.person.1.name") == "Bob"


@pytest.mark.parametrize(
    "path",
    ["missing", "path.nope", "path.to.person.5", "path.to.person.-1", "path.to.person.٣"],
)
def test_unresolvable_paths_yield_none(path):
    scope = Scope({"path": {"to": {"person": ["Ada"]}}})
    assert scope.get(path) is None


def test_innermost_frame_wins():
    scope = Scope({"name": "outer", "other": 1}, {"name": "inner"})
    assert scope.get("name") == "inner"
    assert scope.get("other") == 1


def test_none_binding_shadows_outer_frame():
    scope = Scope({"name": "outer"}, {"name": None})
    assert scope.get("name") is None


def test_descent_is_strict_after_first_segment():
    scope = Scope({"user": {"name": "Ada"}}, {"user": {}})
    assert scope.get("user.name") is None


def test_push_pop_and_frame():
    scope = Scope()
    assert scope.depth == 0

    with scope.frame({"a": 1}):
        assert scope.depth == 1
        assert scope.get("a") == 1
    assert scope.depth == 0

    with pytest.raises(IndexError):
        scope.pop()


def test_preserved_restores_depth_on_error():
    scope = Scope({"base": True})
    with pytest.raises(RuntimeError):
        with scope.preserved():
            scope.push({"a": 1})
            scope.push({"b": 2})
            raise RuntimeError("boom")
    assert scope.depth == 1


def test_render_forms():
    scope = Scope(
        {
            "text": "hi",
            "flag": True,
            "off": False,
            "count": 3,
            "data": b"\x00raw",
            "badge": Badge(),
            "nothing": None,
        }
    )
    assert scope.render("text") == b"hi"
    assert scope.render("flag") == b"true"
    assert scope.render("off") == b"false"
    assert scope.render("count") == b"3"
    assert scope.render("data") == b"\x00raw"
    assert scope.render("badge") == b"<badge>"
    assert scope.render("nothing") is None
    assert scope.render("missing") is None


def test_helpers():
    assert is_fuzzy({"a": 1})
    assert is_fuzzy([1, 2])
    assert not is_fuzzy("text")
    assert not is_fuzzy(b"bytes")
    assert not is_fuzzy(42)

    assert get_path({"a": [{"b": "c"}]}, "a.0.b") == "c"
    assert get_path({"a": 1}, "a.b") is None

    assert text_form(1.5) == "1.5"
    assert text_form(b"caf\xc3\xa9") == "café"
