"""
Runtime values and lexical environments for the Void evaluator.

Classes:
    Value: Base class; every value has a `type` tag and an `inspect()` rendering.
    Integer, Boolean, String, Array: Data values.
    Function: A FunctionLiteral paired with the one Environment it closes over.
    Builtin: A native handler exposed under a fixed name.
    ReturnValue: Internal control signal wrapping the value of a `return`.
    Error: Evaluation failure carrying a message.
    Null: The absence of a value.
    Environment: Name -> Value mapping with an optional enclosing scope.

Singletons:
    TRUE, FALSE, NULL: Truthiness and identity equality rely on these being unique.

Values are immutable apart from Array (its element list) and Environment.
Composite values share element references; nothing is deep-copied.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from void.void_ast import FunctionLiteral

INTEGER_OBJ = "INTEGER"
BOOLEAN_OBJ = "BOOLEAN"
STRING_OBJ = "STRING"
ARRAY_OBJ = "ARRAY"
FUNCTION_OBJ = "FUNCTION"
BUILTIN_OBJ = "BUILTIN"
RETURN_VALUE_OBJ = "RETURN_VALUE"
ERROR_OBJ = "ERROR"
NULL_OBJ = "NULL"


class Value:
    type: str = ""

    def inspect(self) -> str:
        raise NotImplementedError()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.inspect()})"


class Integer(Value):
    type = INTEGER_OBJ

    def __init__(self, value: int) -> None:
        self.value = value

    def inspect(self) -> str:
        return str(self.value)


class Boolean(Value):
    type = BOOLEAN_OBJ

    def __init__(self, value: bool) -> None:
        self.value = value

    def inspect(self) -> str:
        return "true" if self.value else "false"


class String(Value):
    type = STRING_OBJ

    def __init__(self, value: str) -> None:
        self.value = value

    def inspect(self) -> str:
        return self.value


class Array(Value):
    type = ARRAY_OBJ

    def __init__(self, elements: Sequence[Value] = ()) -> None:
        self.elements: list[Value] = list(elements)

    def inspect(self) -> str:
        return "[" + ", ".join(e.inspect() for e in self.elements) + "]"


class Null(Value):
    type = NULL_OBJ

    def inspect(self) -> str:
        return "null"


class Error(Value):
    type = ERROR_OBJ

    def __init__(self, message: str) -> None:
        self.message = message

    def inspect(self) -> str:
        return f"<error: {self.message}>"


class ReturnValue(Value):
    type = RETURN_VALUE_OBJ

    def __init__(self, value: Value) -> None:
        self.value = value

    def inspect(self) -> str:
        return self.value.inspect()


class Function(Value):
    """A user function.

    `env` is created once, when the literal is evaluated, and encloses the
    defining scope. Every call binds its parameters into this same
    Environment, so a call overwrites the bindings of any earlier (or still
    running) call of the same Function value.
    """

    type = FUNCTION_OBJ

    def __init__(self, literal: FunctionLiteral, env: Environment) -> None:
        self.literal = literal
        self.env = env

    @property
    def parameters(self) -> list[str]:
        return [p.value for p in self.literal.parameters]

    def inspect(self) -> str:
        return str(self.literal)


BuiltinHandler = Callable[[list[Value]], Value]


class Builtin(Value):
    type = BUILTIN_OBJ

    def __init__(self, name: str, handler: BuiltinHandler) -> None:
        if not callable(handler):
            raise TypeError(f"Builtin handler for {name!r} must be callable.")
        self.name = name
        self.handler = handler

    def __call__(self, args: list[Value]) -> Value:
        return self.handler(args)

    def inspect(self) -> str:
        return f"<builtin: {self.name}>"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_truthy(value: Value) -> bool:
    """Only the FALSE and NULL singletons are falsy."""
    return value is not FALSE and value is not NULL


def is_error(value: Value) -> bool:
    return value.type == ERROR_OBJ


class Environment:
    """Chained lexical scope.

    Attributes:
        store (dict[str, Value]): Bindings of this scope only.
        outer (Environment | None): The enclosing scope, if any.
    """

    def __init__(self, outer: Environment | None = None) -> None:
        self.store: dict[str, Value] = {}
        self.outer = outer

    def get(self, name: str) -> Value:
        """Innermost-first lookup; NULL when no scope in the chain binds `name`."""
        if name in self.store:
            return self.store[name]
        if self.outer is not None:
            return self.outer.get(name)
        return NULL

    def set(self, name: str, value: Value) -> Value:
        """Binds `name` in this scope only; enclosing scopes are never written."""
        self.store[name] = value
        return value

    def __contains__(self, name: object) -> bool:
        return name in self.store or (self.outer is not None and name in self.outer)

    def __repr__(self) -> str:
        names = ", ".join(sorted(self.store))
        return f"Environment([{names}], outer={'yes' if self.outer else 'no'})"
