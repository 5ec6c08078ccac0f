"""
Defines the abstract syntax tree (AST) node structure for the Void programming language.

The node set is closed: every statement and expression kind is a frozen dataclass
tagged with a class-level `kind` string. The evaluator dispatches on that tag
(`eval_<kind>`), and `str(node)` yields the canonical, fully parenthesized form
used by the parser tests, e.g. `(((-1) + (2 * 3)) <= false)`.

Classes:
    Node: Base of all nodes; provides `to_dict()` for JSON dumps and debugging.
    Statement / Expression: The two node categories.
    Program: Root of a parsed source unit.

    Statements:
        LetStatement, ReturnStatement, ExpressionStatement, BlockStatement

    Expressions:
        Identifier, IntegerLiteral, BooleanLiteral, StringLiteral, ArrayLiteral,
        FunctionLiteral, IfExpression, CallExpression, IndexExpression,
        PrefixExpression, InfixExpression

Each node tracks the line and column of its first token. Positions are
informational only and excluded from equality.

Example:
    >>> node = InfixExpression(IntegerLiteral(1), "+", IntegerLiteral(2))
    >>> str(node)
    '(1 + 2)'
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, TypedDict


class NodeDict(TypedDict, total=False):
    """
    TypedDict representation of a Node used for serialization.

    Fields:
        kind (str): The node kind (e.g. "let", "call", "if").
        line (int): Line number of the node's first token.
        col (int): Column number of the node's first token.

    Any remaining keys are the node's own fields, recursively serialized.
    """

    kind: str
    line: int
    col: int


def _serialize(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize(v) for v in value]
    return value


@dataclass(frozen=True)
class Node:
    kind: ClassVar[str] = "node"

    line: int = field(default=0, kw_only=True, compare=False)
    col: int = field(default=0, kw_only=True, compare=False)

    def to_dict(self) -> NodeDict:
        """Converts the node (and all descendants) into a nested dictionary."""
        result: dict[str, Any] = {"kind": self.kind, "line": self.line, "col": self.col}
        for f in fields(self):
            if f.name in ("line", "col"):
                continue
            result[f.name] = _serialize(getattr(self, f.name))
        return result  # type: ignore[return-value]


@dataclass(frozen=True)
class Statement(Node):
    kind: ClassVar[str] = "statement"


@dataclass(frozen=True)
class Expression(Node):
    kind: ClassVar[str] = "expression"


# Expressions


@dataclass(frozen=True)
class Identifier(Expression):
    kind: ClassVar[str] = "identifier"

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    kind: ClassVar[str] = "integer"

    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    kind: ClassVar[str] = "boolean"

    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class StringLiteral(Expression):
    kind: ClassVar[str] = "string"

    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class ArrayLiteral(Expression):
    kind: ClassVar[str] = "array"

    elements: tuple[Expression, ...] = ()

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


@dataclass(frozen=True)
class PrefixExpression(Expression):
    kind: ClassVar[str] = "prefix"

    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    kind: ClassVar[str] = "infix"

    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class CallExpression(Expression):
    kind: ClassVar[str] = "call"

    function: Expression
    arguments: tuple[Expression, ...] = ()

    def __str__(self) -> str:
        return f"{self.function}(" + ", ".join(str(a) for a in self.arguments) + ")"


@dataclass(frozen=True)
class IndexExpression(Expression):
    kind: ClassVar[str] = "index"

    left: Expression
    index: Expression

    def __str__(self) -> str:
        return f"{self.left}[{self.index}]"


# Statements


@dataclass(frozen=True)
class LetStatement(Statement):
    kind: ClassVar[str] = "let"

    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"let {self.name} = {self.value}"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    kind: ClassVar[str] = "return"

    value: Expression

    def __str__(self) -> str:
        return f"return {self.value}"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    kind: ClassVar[str] = "expression_statement"

    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True)
class BlockStatement(Statement):
    kind: ClassVar[str] = "block"

    statements: tuple[Statement, ...] = ()

    def __str__(self) -> str:
        if not self.statements:
            return "{}"
        return "{ " + "".join(str(s) for s in self.statements) + " }"


# Expressions that own blocks


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    kind: ClassVar[str] = "function"

    parameters: tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn ({params}) {self.body}"


@dataclass(frozen=True)
class IfExpression(Expression):
    kind: ClassVar[str] = "if"

    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def __str__(self) -> str:
        text = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            text += f" else {self.alternative}"
        return text


@dataclass(frozen=True)
class Program(Node):
    kind: ClassVar[str] = "program"

    statements: tuple[Statement, ...] = ()

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


__all__ = [
    "ArrayLiteral",
    "BlockStatement",
    "BooleanLiteral",
    "CallExpression",
    "Expression",
    "ExpressionStatement",
    "FunctionLiteral",
    "Identifier",
    "IfExpression",
    "IndexExpression",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "NodeDict",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
    "StringLiteral",
]
