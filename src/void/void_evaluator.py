"""
Tree-walking evaluator for the Void language.

`Evaluator.eval(node, env)` dispatches on `node.kind` to the matching
`eval_<kind>` method. Recursion depth follows AST depth.

Control flow uses values, not exceptions:
    - `ReturnValue` stops the enclosing statement sequence and is unwrapped there.
    - `Error` stops every enclosing sequence and propagates unchanged.

`Session` is the embedding surface: it owns the root Environment and retains
every parsed Program for its own lifetime, since Function values keep
references into those trees.

Example:
    >>> session = Session()
    >>> session.evaluate("let add = fn(a, b) { a + b };").inspect()
    'null'
    >>> session.evaluate("add(1, 2)").inspect()
    '3'
"""

import logging
import sys
from collections.abc import Sequence

from void.void_ast import (
    ArrayLiteral,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
)
from void.void_builtins import lookup_builtin
from void.void_object import (
    FALSE,
    NULL,
    TRUE,
    Array,
    Builtin,
    Environment,
    Error,
    Function,
    Integer,
    ReturnValue,
    String,
    Value,
    is_error,
    is_truthy,
    native_bool,
)
from void.void_parser import Parser

logger = logging.getLogger(__name__)

# Each Void call nests about a dozen Python frames.
RECURSION_LIMIT = 10_000


def int_divide(left: int, right: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


COMPARISONS = {
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
    ">": lambda a, b: a > b,
    ">=": lambda a, b: a >= b,
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
}


class Evaluator:
    """Evaluates Void AST nodes against an Environment."""

    def eval(self, node: Node, env: Environment) -> Value:
        method = getattr(self, f"eval_{node.kind}", None)
        if method is None:
            raise NotImplementedError(
                f"No evaluator method for node kind '{node.kind}' "
                f"(line {node.line}, col {node.col})"
            )
        return method(node, env)

    def eval_sequence(self, statements: Sequence[Statement], env: Environment) -> Value:
        result: Value = NULL
        for stmt in statements:
            result = self.eval(stmt, env)
            if isinstance(result, ReturnValue):
                return result.value
            if is_error(result):
                return result
        return result

    # Statements

    def eval_program(self, node: Program, env: Environment) -> Value:
        return self.eval_sequence(node.statements, env)

    def eval_block(self, node: BlockStatement, env: Environment) -> Value:
        # Blocks unwrap too: a `return` inside an `if` only leaves that block.
        return self.eval_sequence(node.statements, env)

    def eval_let(self, node: LetStatement, env: Environment) -> Value:
        value = self.eval(node.value, env)
        if is_error(value):
            return value
        env.set(node.name.value, value)
        return NULL

    def eval_return(self, node: ReturnStatement, env: Environment) -> Value:
        value = self.eval(node.value, env)
        if is_error(value):
            return value
        return ReturnValue(value)

    def eval_expression_statement(
        self, node: ExpressionStatement, env: Environment
    ) -> Value:
        return self.eval(node.expression, env)

    # Literals

    def eval_integer(self, node: IntegerLiteral, env: Environment) -> Value:
        return Integer(node.value)

    def eval_boolean(self, node: BooleanLiteral, env: Environment) -> Value:
        return native_bool(node.value)

    def eval_string(self, node: StringLiteral, env: Environment) -> Value:
        return String(node.value)

    def eval_array(self, node: ArrayLiteral, env: Environment) -> Value:
        elements: list[Value] = []
        for expr in node.elements:
            value = self.eval(expr, env)
            if is_error(value):
                return value
            elements.append(value)
        return Array(elements)

    def eval_function(self, node: FunctionLiteral, env: Environment) -> Value:
        return Function(node, Environment(outer=env))

    # Names

    def eval_identifier(self, node: Identifier, env: Environment) -> Value:
        value = env.get(node.value)
        if value is not NULL:
            return value
        builtin = lookup_builtin(node.value)
        if builtin is not None:
            return builtin
        if node.value in env:
            # Bound, but to null.
            return NULL
        return Error(f"identifier not found: {node.value}")

    # Control flow

    def eval_if(self, node: IfExpression, env: Environment) -> Value:
        condition = self.eval(node.condition, env)
        if is_error(condition):
            return condition
        if is_truthy(condition):
            return self.eval(node.consequence, env)
        if node.alternative is not None:
            return self.eval(node.alternative, env)
        return NULL

    def eval_call(self, node: CallExpression, env: Environment) -> Value:
        function = self.eval(node.function, env)
        if is_error(function):
            return function
        if not isinstance(function, (Function, Builtin)):
            return Error(f"not a function: {function.type}")

        # Arguments are all evaluated first; an Error argument is passed on as a value.
        args = [self.eval(arg, env) for arg in node.arguments]

        if isinstance(function, Builtin):
            return function(args)
        return self.apply_function(function, args)

    def apply_function(self, function: Function, args: list[Value]) -> Value:
        params = function.parameters
        if len(args) != len(params):
            return Error(
                f"wrong number of arguments: want={len(params)}, got={len(args)}"
            )
        for name, value in zip(params, args):
            function.env.set(name, value)
        return self.eval(function.literal.body, function.env)

    # Operators

    def eval_prefix(self, node: PrefixExpression, env: Environment) -> Value:
        right = self.eval(node.right, env)
        if is_error(right):
            return right
        if node.operator == "!":
            return FALSE if is_truthy(right) else TRUE
        if node.operator == "-":
            if not isinstance(right, Integer):
                return Error(f"unknown operator: -{right.type}")
            return Integer(-right.value)
        return Error(f"unknown operator: {node.operator}{right.type}")

    def eval_infix(self, node: InfixExpression, env: Environment) -> Value:
        left = self.eval(node.left, env)
        if is_error(left):
            return left
        right = self.eval(node.right, env)
        if is_error(right):
            return right
        return self.infix_operation(node.operator, left, right)

    def infix_operation(self, op: str, left: Value, right: Value) -> Value:
        if left.type != right.type:
            return Error(f"type mismatch: {left.type} {op} {right.type}")
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self.integer_infix(op, left, right)
        if isinstance(left, String) and isinstance(right, String):
            return self.string_infix(op, left, right)
        if isinstance(left, Array) and isinstance(right, Array) and op == "+":
            return Array([*left.elements, *right.elements])
        if op == "==":
            return native_bool(left is right)
        if op == "!=":
            return native_bool(left is not right)
        return Error(f"unknown operator: {left.type} {op} {right.type}")

    def integer_infix(self, op: str, left: Integer, right: Integer) -> Value:
        a, b = left.value, right.value
        if op == "+":
            return Integer(a + b)
        if op == "-":
            return Integer(a - b)
        if op == "*":
            return Integer(a * b)
        if op == "/":
            if b == 0:
                return Error("division by zero")
            return Integer(int_divide(a, b))
        if op in COMPARISONS:
            return native_bool(COMPARISONS[op](a, b))
        return Error(f"unknown operator: {left.type} {op} {right.type}")

    def string_infix(self, op: str, left: String, right: String) -> Value:
        if op == "+":
            return String(left.value + right.value)
        if op in COMPARISONS:
            return native_bool(COMPARISONS[op](left.value, right.value))
        return Error(f"unknown operator: {left.type} {op} {right.type}")

    def eval_index(self, node: IndexExpression, env: Environment) -> Value:
        left = self.eval(node.left, env)
        if is_error(left):
            return left
        if not isinstance(left, Array):
            return Error(f"index operator not supported: {left.type}")
        index = self.eval(node.index, env)
        if is_error(index):
            return index
        if not isinstance(index, Integer):
            return Error(f"index must be INTEGER, got {index.type}")
        if not 0 <= index.value < len(left.elements):
            return Error(f"index out of range: {index.value}")
        return left.elements[index.value]


class Session:
    """A persistent evaluation context.

    Attributes:
        env (Environment): The long-lived root scope.
        programs (list[Program]): Every successfully parsed unit, in order.
        evaluator (Evaluator): The tree walker.
    """

    def __init__(self) -> None:
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)
        self.env = Environment()
        self.programs: list[Program] = []
        self.evaluator = Evaluator()

    def evaluate(self, source: str) -> Value:
        """Parse `source` and evaluate it against the root scope.

        A unit with parse errors is not run; its errors come back as one Error
        value, joined with `; `.
        """
        parser = Parser.from_source(source)
        program = parser.parse()
        if parser.errors:
            logger.debug("rejecting unit with %d parse error(s)", len(parser.errors))
            return Error("; ".join(parser.errors))

        self.programs.append(program)
        logger.debug(
            "evaluating unit #%d (%d statement(s))",
            len(self.programs),
            len(program.statements),
        )
        try:
            return self.evaluator.eval(program, self.env)
        except RecursionError:
            logger.debug("unit #%d exceeded the recursion limit", len(self.programs))
            return Error("maximum recursion depth exceeded")


def evaluate(source: str, session: Session | None = None) -> Value:
    """Evaluate `source` in `session`, or in a fresh one-off session."""
    return (session or Session()).evaluate(source)


__all__ = ["Evaluator", "Session", "evaluate", "int_divide"]
