"""
Lexical analyzer for the Void programming language.

This module provides core components for converting raw source code into token streams:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with type, value, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens, one per call.

Features:
    - Skips whitespace (space, tab, carriage return, newline)
    - Longest-match recognition of operators (`==`, `!=`, `<=`, `>=` before `=`, `!`, `<`, `>`)
    - Recognizes:
        * Identifiers and keywords (`let fn true false if else return`)
        * Integer literals (maximal digit run, no sign)
        * Strings delimited by `"` (no escape processing)
        * Operators and punctuation
    - Never raises: unknown characters and unterminated strings become ILLEGAL tokens.

Example:
    >>> lexer = Lexer(CharacterStream("let x = 42;"))
    >>> lexer.next_token()
    Token(LET, let)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

import logging
from typing import Any

from void.void_constants import (
    EOF,
    IDENT,
    ILLEGAL,
    INT,
    KEYWORDS,
    STRING,
    WHITESPACE,
    token_hashmap,
)

logger = logging.getLogger(__name__)

MAX_OPERATOR_LENGTH = max(len(op) for op in token_hashmap)


def is_letter(ch: str) -> bool:
    return ch.isascii() and (ch.isalpha() or ch == "_")


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            Exception: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise Exception(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def current(self) -> str | None:
        return self.source[self.position] if self.position < len(self.source) else None

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the Void language.

    Attributes:
        type (str): The token kind (e.g. 'IDENT', 'INT', 'EOF').
        value (str): The literal text of the token.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: str, value: str, line: int = 0, col: int = 0):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))


class Lexer:
    """Lexical analyzer for the Void language.

    The Lexer pulls characters from a CharacterStream and produces one Token per
    call to `next_token()`. Once the source is exhausted every further call
    returns an EOF token.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek() in WHITESPACE:
            self.advance()

    def match_operator(self) -> Token | None:
        """Attempts to match the longest valid operator from the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        match_len = 0
        candidate = ""

        for i in range(MAX_OPERATOR_LENGTH):
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in token_hashmap:
                max_token = candidate
                match_len = i + 1

        if max_token:
            for _ in range(match_len):
                self.advance()
            return Token(token_hashmap[max_token], max_token, line, col)

        return None

    def read_identifier(self) -> str:
        ident = ""
        while not self.stream.end_of_file() and (
            is_letter(self.peek()) or is_digit(self.peek())
        ):
            ident += self.advance()
        return ident

    def read_number(self) -> str:
        num = ""
        while not self.stream.end_of_file() and is_digit(self.peek()):
            num += self.advance()
        return num

    def read_string(self, line: int, col: int) -> Token:
        """Reads a `"`-delimited string; the opening quote is the current character."""
        quote = self.advance()
        val = ""
        while not self.stream.end_of_file() and self.peek() != quote:
            val += self.advance()
        if self.stream.end_of_file():
            logger.debug("unterminated string at line %d, col %d", line, col)
            return Token(ILLEGAL, quote + val, line, col)
        self.advance()
        return Token(STRING, val, line, col)

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream."""
        self.skip_whitespace()

        if self.stream.end_of_file():
            return Token(EOF, "EOF", self.stream.line, self.stream.column)

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        # 1. Identifier or keyword
        if is_letter(ch):
            ident = self.read_identifier()
            return Token(KEYWORDS.get(ident, IDENT), ident, line, col)

        # 2. Integer
        if is_digit(ch):
            return Token(INT, self.read_number(), line, col)

        # 3. String
        if ch == '"':
            return self.read_string(line, col)

        # 4. Operator or punctuation
        token = self.match_operator()
        if token:
            return token

        # 5. Unknown character
        logger.debug("illegal character %r at line %d, col %d", ch, line, col)
        return Token(ILLEGAL, self.advance(), line, col)


def tokenize(source: str) -> list[Token]:
    """Lexes `source` completely; the returned list always ends with one EOF token."""
    lexer = Lexer(CharacterStream(source))
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == EOF:
            return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
