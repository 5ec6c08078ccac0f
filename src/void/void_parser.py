"""
Void Language Parser

Parses Void source tokens into a `Program` abstract syntax tree.

This module implements a recursive-descent parser with Pratt (precedence
climbing) expression parsing. Each token kind that can start an expression
has a registered prefix handler; each token kind that can continue one has a
registered infix handler, bound with the precedence from
`void_constants.PRECEDENCES`.

Supported Constructs
--------------------
- Statements:
    * `let IDENT = EXPR`
    * `return EXPR`
    * bare expression statements
    * a trailing `;` is optional and consumed when present
- Expressions:
    * literals: integers, strings, `true`, `false`, arrays `[a, b]`
    * prefix `-x`, `!x` and infix `+ - * / < <= > >= == !=`
    * grouping `( expr )`
    * `if (cond) { ... } else { ... }` (alternative optional)
    * `fn (a, b) { ... }`, calls `f(a, b)` and indexing `a[i]`

Parser Behavior
---------------
- Never raises on malformed input. Errors are appended to `Parser.errors` in
  the order they are found and the failing construct degrades to `None`, so
  parsing resumes with the next token.
- After an error the parser stays in panic mode, suppressing follow-on errors,
  until it crosses a `;` or starts a `let`/`return` statement.
- A block that runs into end of input without `}` is not reported by the block
  itself; `if` and `fn` still expect their closing brace.

Error Formats
-------------
- ``expected next token to be `<KIND>`, got `<KIND>` instead at literal `<LITERAL>` ``
- ``no `<KIND>` found for `<NAME>` ``

Callers must inspect `errors` before trusting the returned tree.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from void import void_constants as tk
from void.void_ast import (
    ArrayLiteral,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
)
from void.void_constants import PRECEDENCES, Precedence
from void.void_lexer import CharacterStream, Lexer, Token

logger = logging.getLogger(__name__)

PrefixParseFn = Callable[[], Expression | None]
InfixParseFn = Callable[[Expression], Expression | None]


class Parser:
    """
    Void Parser Class

    Transforms a token stream into a `Program`. Tokens are pulled lazily from a
    `Lexer`, or read from an already materialized token list.

    Attributes
    ----------
    tokens : list[Token]
        Tokens read so far (the whole stream when a list was given).
    position : int
        Index of the current token.
    errors : list[str]
        Ordered parse errors.
    panic_mode : bool
        True while follow-on errors are being suppressed.
    prefix_parse_fns : dict[str, PrefixParseFn]
        Token kind -> handler for expressions starting with that token.
    infix_parse_fns : dict[str, InfixParseFn]
        Token kind -> handler extending an already parsed left operand.
    """

    def __init__(self, source: Lexer | list[Token]) -> None:
        self.lexer: Lexer | None
        if isinstance(source, Lexer):
            self.lexer = source
            self.tokens: list[Token] = []
        else:
            self.lexer = None
            self.tokens = list(source)
        self.position: int = 0
        self.errors: list[str] = []
        self.panic_mode: bool = False

        self.prefix_parse_fns: dict[str, PrefixParseFn] = {
            tk.IDENT: self.parse_identifier,
            tk.INT: self.parse_integer_literal,
            tk.STRING: self.parse_string_literal,
            tk.TRUE: self.parse_boolean_literal,
            tk.FALSE: self.parse_boolean_literal,
            tk.BANG: self.parse_prefix_expression,
            tk.MINUS: self.parse_prefix_expression,
            tk.LPAREN: self.parse_grouped_expression,
            tk.IF: self.parse_if_expression,
            tk.FUNCTION: self.parse_function_literal,
            tk.LBRACKET: self.parse_array_literal,
        }

        self.infix_parse_fns: dict[str, InfixParseFn] = {
            tk.PLUS: self.parse_infix_expression,
            tk.MINUS: self.parse_infix_expression,
            tk.ASTERISK: self.parse_infix_expression,
            tk.SLASH: self.parse_infix_expression,
            tk.LT: self.parse_infix_expression,
            tk.LE: self.parse_infix_expression,
            tk.GT: self.parse_infix_expression,
            tk.GE: self.parse_infix_expression,
            tk.EQ: self.parse_infix_expression,
            tk.NOT_EQ: self.parse_infix_expression,
            tk.LPAREN: self.parse_call_expression,
            tk.LBRACKET: self.parse_index_expression,
        }

    @classmethod
    def from_source(cls, source: str) -> Parser:
        return cls(Lexer(CharacterStream(source)))

    # Token cursor

    def token_at(self, index: int) -> Token:
        while self.lexer is not None and len(self.tokens) <= index:
            tok = self.lexer.next_token()
            self.tokens.append(tok)
            if tok.type == tk.EOF:
                self.lexer = None
        if index < len(self.tokens):
            return self.tokens[index]
        return Token(tk.EOF, "EOF")

    def current(self) -> Token:
        return self.token_at(self.position)

    def peek(self, offset: int = 1) -> Token:
        return self.token_at(self.position + offset)

    def advance(self) -> Token:
        if self.current().type == tk.SEMICOLON:
            self.panic_mode = False
        self.position += 1
        return self.current()

    def expect_peek(self, type_: str) -> bool:
        """Advances onto the next token if it has kind `type_`, else records an error."""
        if self.peek().type == type_:
            self.advance()
            return True
        self.peek_error(type_)
        return False

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek().type, Precedence.LOWEST)

    def current_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.current().type, Precedence.LOWEST)

    # Errors

    def record_error(self, message: str) -> None:
        if self.panic_mode:
            logger.debug("suppressed follow-on parse error: %s", message)
            return
        logger.debug("parse error: %s", message)
        self.errors.append(message)
        self.panic_mode = True

    def peek_error(self, type_: str) -> None:
        tok = self.peek()
        self.record_error(
            f"expected next token to be `{type_}`, got `{tok.type}` instead at literal `{tok.value}`"
        )

    def missing_error(self, what: str, name: str) -> None:
        self.record_error(f"no `{what}` found for `{name}`")

    # Statements

    def parse(self) -> Program:
        """Parse a full Void source unit."""
        statements: list[Statement] = []
        while self.current().type != tk.EOF:
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.advance()
        return Program(tuple(statements), line=1, col=1)

    def parse_statement(self) -> Statement | None:
        tok = self.current()
        if tok.type in (tk.LET, tk.RETURN):
            self.panic_mode = False
        if tok.type == tk.LET:
            return self.parse_let_statement()
        if tok.type == tk.RETURN:
            return self.parse_return_statement()
        if tok.type == tk.SEMICOLON:
            return None
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        let_tok = self.current()
        if not self.expect_peek(tk.IDENT):
            return None
        name_tok = self.current()
        name = Identifier(name_tok.value, line=name_tok.line, col=name_tok.col)

        if not self.expect_peek(tk.ASSIGN):
            return None
        self.advance()

        value = self.parse_required_expression("let")
        if value is None:
            return None

        if self.peek().type == tk.SEMICOLON:
            self.advance()
        return LetStatement(name, value, line=let_tok.line, col=let_tok.col)

    def parse_return_statement(self) -> ReturnStatement | None:
        ret_tok = self.current()
        self.advance()

        value = self.parse_required_expression("return")
        if value is None:
            return None

        if self.peek().type == tk.SEMICOLON:
            self.advance()
        return ReturnStatement(value, line=ret_tok.line, col=ret_tok.col)

    def parse_expression_statement(self) -> ExpressionStatement | None:
        tok = self.current()
        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None:
            return None
        if self.peek().type == tk.SEMICOLON:
            self.advance()
        return ExpressionStatement(expr, line=tok.line, col=tok.col)

    def parse_block_statement(self) -> BlockStatement:
        """Parse statements after the current `{` up to (not including) `}` or EOF."""
        brace = self.current()
        statements: list[Statement] = []
        while self.peek().type not in (tk.RBRACE, tk.EOF):
            self.advance()
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
        return BlockStatement(tuple(statements), line=brace.line, col=brace.col)

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        tok = self.current()
        prefix = self.prefix_parse_fns.get(tok.type)
        if prefix is None:
            self.missing_error("prefix parse function", tok.value)
            return None

        left = prefix()
        while (
            left is not None
            and self.peek().type != tk.SEMICOLON
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek().type)
            if infix is None:
                return left
            self.advance()
            left = infix(left)
        return left

    def parse_required_expression(self, owner: str) -> Expression | None:
        """Parse an expression that must be present, reporting `owner` if it is not."""
        if self.current().type not in self.prefix_parse_fns:
            self.missing_error("expression", owner)
            return None
        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None:
            self.missing_error("expression", owner)
        return expr

    def parse_identifier(self) -> Expression:
        tok = self.current()
        return Identifier(tok.value, line=tok.line, col=tok.col)

    def parse_integer_literal(self) -> Expression:
        tok = self.current()
        return IntegerLiteral(int(tok.value), line=tok.line, col=tok.col)

    def parse_string_literal(self) -> Expression:
        tok = self.current()
        return StringLiteral(tok.value, line=tok.line, col=tok.col)

    def parse_boolean_literal(self) -> Expression:
        tok = self.current()
        return BooleanLiteral(tok.type == tk.TRUE, line=tok.line, col=tok.col)

    def parse_prefix_expression(self) -> Expression | None:
        tok = self.current()
        self.advance()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(tok.value, right, line=tok.line, col=tok.col)

    def parse_infix_expression(self, left: Expression) -> Expression | None:
        tok = self.current()
        precedence = self.current_precedence()
        self.advance()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(left, tok.value, right, line=left.line, col=left.col)

    def parse_grouped_expression(self) -> Expression | None:
        self.advance()
        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None:
            return None
        if not self.expect_peek(tk.RPAREN):
            return None
        return expr

    def parse_if_expression(self) -> Expression | None:
        if_tok = self.current()
        if not self.expect_peek(tk.LPAREN):
            return None
        self.advance()

        condition = self.parse_required_expression("if")
        if condition is None:
            return None

        if not self.expect_peek(tk.RPAREN):
            return None
        if not self.expect_peek(tk.LBRACE):
            return None
        consequence = self.parse_block_statement()
        if not self.expect_peek(tk.RBRACE):
            return None

        alternative = None
        if self.peek().type == tk.ELSE:
            self.advance()
            if not self.expect_peek(tk.LBRACE):
                return None
            alternative = self.parse_block_statement()
            if not self.expect_peek(tk.RBRACE):
                return None

        return IfExpression(
            condition, consequence, alternative, line=if_tok.line, col=if_tok.col
        )

    def parse_function_literal(self) -> Expression | None:
        fn_tok = self.current()
        if not self.expect_peek(tk.LPAREN):
            return None

        parameters: list[Identifier] = []
        while self.peek().type not in (tk.RPAREN, tk.EOF):
            if not self.expect_peek(tk.IDENT):
                return None
            tok = self.current()
            parameters.append(Identifier(tok.value, line=tok.line, col=tok.col))
            if self.peek().type != tk.RPAREN and not self.expect_peek(tk.COMMA):
                return None

        if not self.expect_peek(tk.RPAREN):
            return None
        if not self.expect_peek(tk.LBRACE):
            return None
        body = self.parse_block_statement()
        if not self.expect_peek(tk.RBRACE):
            return None

        return FunctionLiteral(
            tuple(parameters), body, line=fn_tok.line, col=fn_tok.col
        )

    def parse_expression_list(self, end: str) -> list[Expression] | None:
        """Parse comma-separated expressions after the current token, through `end`."""
        items: list[Expression] = []
        while self.peek().type not in (end, tk.EOF):
            self.advance()
            item = self.parse_expression(Precedence.LOWEST)
            if item is None:
                return None
            items.append(item)
            if self.peek().type != end and not self.expect_peek(tk.COMMA):
                return None

        if not self.expect_peek(end):
            return None
        return items

    def parse_array_literal(self) -> Expression | None:
        tok = self.current()
        elements = self.parse_expression_list(tk.RBRACKET)
        if elements is None:
            return None
        return ArrayLiteral(tuple(elements), line=tok.line, col=tok.col)

    def parse_call_expression(self, function: Expression) -> Expression | None:
        arguments = self.parse_expression_list(tk.RPAREN)
        if arguments is None:
            return None
        return CallExpression(
            function, tuple(arguments), line=function.line, col=function.col
        )

    def parse_index_expression(self, left: Expression) -> Expression | None:
        self.advance()
        index = self.parse_required_expression("index")
        if index is None:
            return None
        if not self.expect_peek(tk.RBRACKET):
            return None
        return IndexExpression(left, index, line=left.line, col=left.col)


def parse_program(source: str) -> tuple[Program, list[str]]:
    """Parse `source` and return the program together with its error list."""
    parser = Parser.from_source(source)
    program = parser.parse()
    return program, parser.errors


__all__ = ["Parser", "parse_program"]
