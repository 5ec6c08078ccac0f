"""
Shared lexical and grammatical constants for the Void language.

Token kinds are plain uppercase strings, the same way the lexer, parser and
tests refer to them. The tables here are the single source of truth for:

    - KEYWORDS: reserved words mapped to their token kind
    - token_hashmap: operator and punctuation spellings mapped to token kinds
      (two-character spellings included, longest match wins)
    - Precedence / PRECEDENCES: the Pratt binding-power ladder

Exports:
    - Token kind names (ILLEGAL, EOF, IDENT, ...)
    - KEYWORDS
    - token_hashmap
    - Precedence
    - PRECEDENCES
"""

from enum import IntEnum

ILLEGAL = "ILLEGAL"
EOF = "EOF"

# Identifiers and literals
IDENT = "IDENT"
INT = "INT"
STRING = "STRING"

# Operators
ASSIGN = "ASSIGN"
PLUS = "PLUS"
MINUS = "MINUS"
BANG = "BANG"
ASTERISK = "ASTERISK"
SLASH = "SLASH"
LT = "LT"
LE = "LE"
GT = "GT"
GE = "GE"
EQ = "EQ"
NOT_EQ = "NOT_EQ"

# Delimiters
COMMA = "COMMA"
COLON = "COLON"
SEMICOLON = "SEMICOLON"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
LBRACE = "LBRACE"
RBRACE = "RBRACE"
LBRACKET = "LBRACKET"
RBRACKET = "RBRACKET"

# Keywords
LET = "LET"
FUNCTION = "FUNCTION"
TRUE = "TRUE"
FALSE = "FALSE"
IF = "IF"
ELSE = "ELSE"
RETURN = "RETURN"

KEYWORDS: dict[str, str] = {
    "let": LET,
    "fn": FUNCTION,
    "true": TRUE,
    "false": FALSE,
    "if": IF,
    "else": ELSE,
    "return": RETURN,
}

token_hashmap: dict[str, str] = {
    "==": EQ,
    "!=": NOT_EQ,
    "<=": LE,
    ">=": GE,
    "=": ASSIGN,
    "+": PLUS,
    "-": MINUS,
    "!": BANG,
    "*": ASTERISK,
    "/": SLASH,
    "<": LT,
    ">": GT,
    ",": COMMA,
    ":": COLON,
    ";": SEMICOLON,
    "(": LPAREN,
    ")": RPAREN,
    "{": LBRACE,
    "}": RBRACE,
    "[": LBRACKET,
    "]": RBRACKET,
}

WHITESPACE = " \t\r\n"


class Precedence(IntEnum):
    """Binding power of infix-capable tokens, lowest to highest."""

    LOWEST = 1
    EQUALS = 2  # == !=
    LESSGREATER = 3  # < <= > >=
    SUM = 4  # + -
    PRODUCT = 5  # * /
    PREFIX = 6  # -x !x
    CALL = 7  # fn(x)
    INDEX = 8  # array[index]


PRECEDENCES: dict[str, Precedence] = {
    EQ: Precedence.EQUALS,
    NOT_EQ: Precedence.EQUALS,
    LT: Precedence.LESSGREATER,
    LE: Precedence.LESSGREATER,
    GT: Precedence.LESSGREATER,
    GE: Precedence.LESSGREATER,
    PLUS: Precedence.SUM,
    MINUS: Precedence.SUM,
    ASTERISK: Precedence.PRODUCT,
    SLASH: Precedence.PRODUCT,
    LPAREN: Precedence.CALL,
    LBRACKET: Precedence.INDEX,
}
