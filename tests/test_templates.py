"""End-to-end rendering of the template files under tests/resources."""

import pytest

from leaf.exceptions import IncludeCycleError


def test_basic_loop(stem):
    context = {"people": [{"name": "Ada"}, {"name": "Bob"}]}
    assert stem.render_named("basic-loop", context) == b"People:\n- Ada\n- Bob\n"


def test_complex_loop(stem):
    context = {
        "teams": [
            {"name": "Red", "members": ["ada", "bob"]},
            {"name": "Blue", "members": ["cy"]},
        ]
    }
    expected = b"Red: ADA\nBOB\n\nBlue: CY\n\n"
    assert stem.render_named("complex-loop", context) == expected


@pytest.mark.parametrize(
    "user, expected",
    [
        ({"admin": True, "name": "Ada"}, b"Admin Ada"),
        ({"signed_in": True, "name": "Bob"}, b"User Bob"),
        ({"admin": "no", "signed_in": 0}, b"Guest"),
        (None, b"Guest"),
    ],
)
def test_nested_if_else(stem, user, expected):
    assert stem.render_named("nested-if-else", {"user": user}) == expected


def test_include_partial(stem):
    context = {"title": "Leaf", "user": {"name": "Ada"}}
    assert stem.render_named("page", context) == b"<h1>Leaf</h1>\nBody for Ada"


def test_include_cycle_between_files(stem):
    with pytest.raises(IncludeCycleError) as exc_info:
        stem.load("cycle-a")
    assert exc_info.value.chain == ["cycle-a.leaf", "cycle-b.leaf", "cycle-a.leaf"]


def test_rendering_is_repeatable(stem):
    leaf = stem.load("basic-loop")
    first = stem.render(leaf, {"people": [{"name": "Ada"}]})
    second = stem.render(leaf, {"people": [{"name": "Ada"}]})
    assert first == second == b"People:\n- Ada\n"
    assert stem.load("basic-loop") is leaf
