"""
Native functions available under fixed names in every Void scope.

A user binding always shadows a builtin: the evaluator only consults
`BUILTINS` after environment lookup comes back empty.

Builtins:
    len(string|array) -> integer
    first(array)      -> first element, error if empty
    last(array)       -> last element, error if empty
    push(array, v)    -> new array with v appended (argument untouched)
    pop(array)        -> new array without the last element, error if empty
    puts(v)           -> null, writes `<puts: INSPECT>` to stdout

Every builtin returns an Error value on wrong arity or argument type.
"""

import logging

from void.void_object import (
    NULL,
    Array,
    Builtin,
    Error,
    Integer,
    String,
    Value,
)

logger = logging.getLogger(__name__)


def wrong_arity(want: int, args: list[Value]) -> Error:
    return Error(f"wrong number of arguments: want={want}, got={len(args)}")


def unsupported(name: str, arg: Value) -> Error:
    return Error(f"argument to `{name}` not supported, got {arg.type}")


def builtin_len(args: list[Value]) -> Value:
    if len(args) != 1:
        return wrong_arity(1, args)
    arg = args[0]
    if isinstance(arg, String):
        return Integer(len(arg.value))
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    return unsupported("len", arg)


def builtin_first(args: list[Value]) -> Value:
    if len(args) != 1:
        return wrong_arity(1, args)
    arg = args[0]
    if not isinstance(arg, Array):
        return unsupported("first", arg)
    if not arg.elements:
        return Error("`first` called on an empty array")
    return arg.elements[0]


def builtin_last(args: list[Value]) -> Value:
    if len(args) != 1:
        return wrong_arity(1, args)
    arg = args[0]
    if not isinstance(arg, Array):
        return unsupported("last", arg)
    if not arg.elements:
        return Error("`last` called on an empty array")
    return arg.elements[-1]


def builtin_push(args: list[Value]) -> Value:
    if len(args) != 2:
        return wrong_arity(2, args)
    arr, value = args
    if not isinstance(arr, Array):
        return unsupported("push", arr)
    return Array([*arr.elements, value])


def builtin_pop(args: list[Value]) -> Value:
    if len(args) != 1:
        return wrong_arity(1, args)
    arg = args[0]
    if not isinstance(arg, Array):
        return unsupported("pop", arg)
    if not arg.elements:
        return Error("`pop` called on an empty array")
    return Array(arg.elements[:-1])


def builtin_puts(args: list[Value]) -> Value:
    if len(args) != 1:
        return wrong_arity(1, args)
    print(f"<puts: {args[0].inspect()}>", flush=True)
    return NULL


BUILTINS: dict[str, Builtin] = {
    "len": Builtin("len", builtin_len),
    "first": Builtin("first", builtin_first),
    "last": Builtin("last", builtin_last),
    "push": Builtin("push", builtin_push),
    "pop": Builtin("pop", builtin_pop),
    "puts": Builtin("puts", builtin_puts),
}


def lookup_builtin(name: str) -> Builtin | None:
    builtin = BUILTINS.get(name)
    if builtin is not None:
        logger.debug("resolved %r to builtin", name)
    return builtin


__all__ = ["BUILTINS", "lookup_builtin"]
