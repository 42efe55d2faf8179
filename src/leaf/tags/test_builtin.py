import pytest

from leaf.ast.spec import TagTemplate
from leaf.exceptions import TagError
from leaf.scope import Scope
from leaf.stem import Stem
from leaf.tags import (
    ConstantArgument,
    IfTag,
    LoopTag,
    UppercasedTag,
    VariableArgument,
    VariableTag,
    is_truthy,
)


@pytest.mark.parametrize(
    "argument, expected",
    [
        (ConstantArgument("true"), True),
        (ConstantArgument("false"), False),
        (ConstantArgument("yes"), False),
        (VariableArgument("flag", True), True),
        (VariableArgument("flag", False), False),
        (VariableArgument("flag", "true"), True),
        (VariableArgument("flag", "yes"), False),
        (VariableArgument("flag", 1), True),
        (VariableArgument("flag", 2), False),
        (VariableArgument("flag", 0), False),
        (VariableArgument("flag", 1.0), True),
        (VariableArgument("flag", 0.5), False),
        (VariableArgument("flag", []), True),
        (VariableArgument("flag", {"a": 1}), True),
        (VariableArgument("flag", None), False),
    ],
)
def test_if_truth_table(argument, expected):
    assert is_truthy(argument) is expected


def evaluate(tag, *arguments):
    template = TagTemplate(name=tag.name)
    return tag.evaluate(Stem(), Scope(), template, list(arguments))


def test_variable_tag():
    assert evaluate(VariableTag()) == "@"
    assert evaluate(VariableTag(), VariableArgument("name", "Ada")) == "Ada"
    with pytest.raises(TagError):
        evaluate(VariableTag(), ConstantArgument("a"), ConstantArgument("b"))


def test_if_tag_arity():
    with pytest.raises(TagError, match="@if"):
        evaluate(IfTag())
    assert evaluate(IfTag(), ConstantArgument("true")) is None


def test_loop_tag_values():
    tag = LoopTag()
    items = VariableArgument("people", ["Ada", "Bob"])

    assert evaluate(tag, items, ConstantArgument("p")) == [{"p": "Ada"}, {"p": "Bob"}]
    assert evaluate(tag, VariableArgument("one", "Ada"), ConstantArgument("p")) == [
        {"p": "Ada"}
    ]
    assert evaluate(tag, VariableArgument("gone", None), ConstantArgument("p")) is None
    assert evaluate(tag, items, VariableArgument("p", None)) is None

    with pytest.raises(TagError, match="requires two arguments"):
        evaluate(tag, items)


def test_uppercased_tag():
    tag = UppercasedTag()
    assert evaluate(tag, ConstantArgument("hi")) == "HI"
    assert evaluate(tag, VariableArgument("name", "ada")) == "ADA"
    assert evaluate(tag, VariableArgument("flag", True)) == "TRUE"
    assert evaluate(tag, VariableArgument("gone", None)) is None

    with pytest.raises(TagError, match="single argument"):
        evaluate(tag)
