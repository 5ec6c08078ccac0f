import pytest

from void.void_builtins import BUILTINS, lookup_builtin
from void.void_object import NULL, Array, Error, Integer, String, Value


def call(name: str, *args: Value) -> Value:
    return BUILTINS[name](list(args))


def ints(*values: int) -> Array:
    return Array([Integer(v) for v in values])


def test_registry_names() -> None:
    assert sorted(BUILTINS) == ["first", "last", "len", "pop", "push", "puts"]
    for name, builtin in BUILTINS.items():
        assert builtin.name == name
        assert lookup_builtin(name) is builtin
    assert lookup_builtin("print") is None


def test_len() -> None:
    assert call("len", String("abcd")).inspect() == "4"
    assert call("len", String("")).inspect() == "0"
    assert call("len", ints(1, 2, 3)).inspect() == "3"


def test_first_and_last() -> None:
    assert call("first", ints(1, 2, 3)).inspect() == "1"
    assert call("last", ints(1, 2, 3)).inspect() == "3"


@pytest.mark.parametrize("name", ["first", "last", "pop"])
def test_empty_array_is_an_error(name: str) -> None:
    result = call(name, Array())
    assert isinstance(result, Error)
    assert result.message == f"`{name}` called on an empty array"


def test_push_returns_new_array() -> None:
    original = ints(1, 2)
    result = call("push", original, Integer(3))
    assert result.inspect() == "[1, 2, 3]"
    assert original.inspect() == "[1, 2]"
    assert result is not original


def test_push_shares_element_references() -> None:
    inner = ints(9)
    result = call("push", Array(), inner)
    assert isinstance(result, Array)
    assert result.elements[0] is inner


def test_pop_returns_new_array() -> None:
    original = ints(1, 2, 3)
    assert call("pop", original).inspect() == "[1, 2]"
    assert original.inspect() == "[1, 2, 3]"
    assert call("pop", ints(1)).inspect() == "[]"


@pytest.mark.parametrize(
    "name,args,want",
    [
        ("len", (), 1),
        ("len", (String("a"), String("b")), 1),
        ("first", (), 1),
        ("last", (ints(1), ints(2)), 1),
        ("push", (ints(1),), 2),
        ("pop", (), 1),
        ("puts", (), 1),
    ],
)
def test_wrong_arity(name: str, args: tuple[Value, ...], want: int) -> None:
    result = call(name, *args)
    assert isinstance(result, Error)
    assert result.message == f"wrong number of arguments: want={want}, got={len(args)}"


@pytest.mark.parametrize(
    "name,args,got",
    [
        ("len", (Integer(1),), "INTEGER"),
        ("len", (NULL,), "NULL"),
        ("first", (String("abc"),), "STRING"),
        ("last", (Integer(1),), "INTEGER"),
        ("push", (Integer(1), Integer(2)), "INTEGER"),
        ("pop", (String("x"),), "STRING"),
    ],
)
def test_unsupported_argument(name: str, args: tuple[Value, ...], got: str) -> None:
    result = call(name, *args)
    assert isinstance(result, Error)
    assert result.message == f"argument to `{name}` not supported, got {got}"


def test_puts_writes_inspect_form(capsys: pytest.CaptureFixture[str]) -> None:
    assert call("puts", String("hi")) is NULL
    assert call("puts", ints(1, 2)) is NULL
    assert capsys.readouterr().out == "<puts: hi>\n<puts: [1, 2]>\n"
