import pytest

from void.void_ast import BlockStatement, FunctionLiteral, Identifier
from void.void_object import (
    FALSE,
    NULL,
    TRUE,
    Array,
    Boolean,
    Builtin,
    Environment,
    Error,
    Function,
    Integer,
    ReturnValue,
    String,
    is_error,
    is_truthy,
    native_bool,
)


def test_inspect_forms() -> None:
    assert Integer(-5).inspect() == "-5"
    assert TRUE.inspect() == "true"
    assert FALSE.inspect() == "false"
    assert String("hi there").inspect() == "hi there"
    assert NULL.inspect() == "null"
    assert Error("boom").inspect() == "<error: boom>"
    assert Array([Integer(1), String("a"), NULL]).inspect() == "[1, a, null]"
    assert Array().inspect() == "[]"
    assert ReturnValue(Integer(3)).inspect() == "3"


def test_function_inspect_is_its_literal() -> None:
    literal = FunctionLiteral((Identifier("a"),), BlockStatement())
    fn = Function(literal, Environment())
    assert fn.inspect() == "fn (a) {}"
    assert fn.parameters == ["a"]
    assert fn.type == "FUNCTION"


def test_builtin_requires_callable() -> None:
    with pytest.raises(TypeError, match="must be callable"):
        Builtin("nope", 42)  # type: ignore[arg-type]


def test_builtin_call_and_inspect() -> None:
    echo = Builtin("echo", lambda args: args[0])
    assert echo([Integer(7)]).inspect() == "7"
    assert echo.inspect() == "<builtin: echo>"


def test_type_tags() -> None:
    assert [v.type for v in (Integer(1), TRUE, String(""), Array(), NULL, Error(""))] == [
        "INTEGER",
        "BOOLEAN",
        "STRING",
        "ARRAY",
        "NULL",
        "ERROR",
    ]


def test_native_bool_returns_singletons() -> None:
    assert native_bool(True) is TRUE
    assert native_bool(False) is FALSE


def test_truthiness() -> None:
    assert is_truthy(Integer(0))
    assert is_truthy(String(""))
    assert is_truthy(Array())
    assert is_truthy(TRUE)
    assert not is_truthy(FALSE)
    assert not is_truthy(NULL)


def test_truthiness_uses_identity() -> None:
    # Only the shared FALSE singleton is falsy.
    assert is_truthy(Boolean(False))


def test_is_error() -> None:
    assert is_error(Error("x"))
    assert not is_error(NULL)


def test_array_copies_its_input_list() -> None:
    items = [Integer(1)]
    arr = Array(items)
    items.append(Integer(2))
    assert len(arr.elements) == 1


def test_environment_get_and_set() -> None:
    env = Environment()
    assert env.get("x") is NULL
    value = Integer(1)
    assert env.set("x", value) is value
    assert env.get("x") is value
    assert "x" in env
    assert "y" not in env


def test_environment_lookup_walks_outward() -> None:
    outer = Environment()
    outer.set("x", Integer(1))
    inner = Environment(outer=outer)
    assert inner.get("x").inspect() == "1"
    assert "x" in inner


def test_environment_set_shadows_without_touching_outer() -> None:
    outer = Environment()
    outer.set("x", Integer(1))
    inner = Environment(outer=outer)
    inner.set("x", Integer(2))
    assert inner.get("x").inspect() == "2"
    assert outer.get("x").inspect() == "1"
    assert "x" not in Environment(outer=None)


def test_environment_repr() -> None:
    env = Environment(Environment())
    env.set("b", NULL)
    env.set("a", NULL)
    assert repr(env) == "Environment([a, b], outer=yes)"
