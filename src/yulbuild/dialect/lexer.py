# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for Yul and Yul+ source text.

Tokens carry their character offsets into the source so that the transpiler
can rewrite individual spans while leaving all other text, including comments
and whitespace, untouched.
"""

import enum
from dataclasses import dataclass

from yulbuild.errors import DialectSyntaxError

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the Yul+ lexer."""

    # Keywords
    OBJECT = "object"
    CODE = "code"
    FUNCTION = "function"
    LET = "let"
    ENUM = "enum"
    CONST = "const"
    MSTRUCT = "mstruct"

    # Symbols and operators
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    COLON = ":"
    ASSIGN = ":="
    ARROW = "->"

    # Literals
    STRING = "STRING"
    NUMBER = "NUMBER"
    SIG = "SIG"
    TOPIC = "TOPIC"

    # Identifiers
    IDENTIFIER = "IDENTIFIER"

    # End of file
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The raw text of the token. For SIG and TOPIC tokens this is the
            text between the quotes.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
        start: Offset of the first character of the token.
        end: Offset one past the last character of the token.
    """

    type: TokenType
    value: str
    line: int
    column: int
    start: int
    end: int


def tokenize(source: str) -> list[Token]:
    """Tokenize Yul+ source text.

    Comments and whitespace are consumed and not included in the output.

    Args:
        source: The full text of a .yul or .yulp file.

    Returns:
        A list of Token objects ending with a single EOF token.

    Raises:
        DialectSyntaxError: On unexpected characters, unterminated string
            literals, or unterminated block comments.
    """
    return _Lexer(source).tokenize()


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "object": TokenType.OBJECT,
    "code": TokenType.CODE,
    "function": TokenType.FUNCTION,
    "let": TokenType.LET,
    "enum": TokenType.ENUM,
    "const": TokenType.CONST,
    "mstruct": TokenType.MSTRUCT,
}

# Identifier prefixes that turn an immediately following string literal into a
# Yul+ hashing literal.
_HASH_PREFIXES: dict[str, TokenType] = {
    "sig": TokenType.SIG,
    "topic": TokenType.TOPIC,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _is_identifier_start(ch: str) -> bool:
    return ch.isalpha() or ch in "_$"


def _is_identifier_part(ch: str) -> bool:
    return ch.isalnum() or ch in "_$."


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens including the terminal EOF."""
        while self._pos < len(self._source):
            self._skip_whitespace_and_comments()
            if self._pos >= len(self._source):
                break
            self._scan_token()
        self._tokens.append(Token(TokenType.EOF, "", self._line, self._column, self._pos, self._pos))
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self) -> str:
        if self._pos + 1 < len(self._source):
            return self._source[self._pos + 1]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _emit(self, token_type: TokenType, value: str, line: int, col: int, start: int) -> None:
        self._tokens.append(Token(token_type, value, line, col, start, self._pos))

    # ------------------------------------------------------------------
    # Whitespace and comment skipping
    # ------------------------------------------------------------------

    def _skip_whitespace_and_comments(self) -> None:
        while self._pos < len(self._source):
            ch = self._current()
            if ch in " \t\r\n":
                self._advance()
            elif ch == "/" and self._peek() == "/":
                while self._pos < len(self._source) and self._current() != "\n":
                    self._advance()
            elif ch == "/" and self._peek() == "*":
                self._skip_block_comment()
            else:
                break

    def _skip_block_comment(self) -> None:
        start_line = self._line
        start_col = self._column
        self._advance()  # /
        self._advance()  # *
        while self._pos < len(self._source):
            if self._current() == "*" and self._peek() == "/":
                self._advance()  # *
                self._advance()  # /
                return
            self._advance()
        raise DialectSyntaxError("Unterminated block comment", start_line, start_col)

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        ch = self._current()
        line = self._line
        col = self._column
        start = self._pos

        if ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            self._emit(_SINGLE_CHAR_TOKENS[ch], ch, line, col, start)
        elif ch == ":":
            self._advance()
            if self._current() == "=":
                self._advance()
                self._emit(TokenType.ASSIGN, ":=", line, col, start)
            else:
                self._emit(TokenType.COLON, ":", line, col, start)
        elif ch == "-" and self._peek() == ">":
            self._advance()  # -
            self._advance()  # >
            self._emit(TokenType.ARROW, "->", line, col, start)
        elif ch == '"':
            self._scan_string(line, col, start)
        elif ch.isdigit():
            self._scan_number(line, col, start)
        elif _is_identifier_start(ch):
            self._scan_identifier_or_keyword(line, col, start)
        else:
            raise DialectSyntaxError(f"Unexpected character: {ch!r}", line, col)

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _read_quoted(self, line: int, col: int) -> str:
        """Consume a double-quoted literal and return its raw inner text.

        Escape sequences are kept verbatim since the output is Yul text again.
        """
        self._advance()  # opening "
        inner_start = self._pos
        while self._pos < len(self._source):
            ch = self._current()
            if ch == '"':
                inner = self._source[inner_start : self._pos]
                self._advance()  # closing "
                return inner
            if ch == "\n":
                break
            if ch == "\\":
                self._advance()
                if self._pos >= len(self._source):
                    break
            self._advance()
        raise DialectSyntaxError("Unterminated string literal", line, col)

    def _scan_string(self, line: int, col: int, start: int) -> None:
        self._read_quoted(line, col)
        self._emit(TokenType.STRING, self._source[start : self._pos], line, col, start)

    def _scan_number(self, line: int, col: int, start: int) -> None:
        """Scan a decimal or ``0x``-prefixed hexadecimal literal."""
        if self._current() == "0" and self._peek() == "x":
            self._advance()  # 0
            self._advance()  # x
            if self._current() not in _HEX_DIGITS:
                raise DialectSyntaxError("Hexadecimal literal without digits", line, col)
            while self._pos < len(self._source) and self._current() in _HEX_DIGITS:
                self._advance()
        else:
            while self._pos < len(self._source) and self._current().isdigit():
                self._advance()
        if self._pos < len(self._source) and _is_identifier_part(self._current()):
            raise DialectSyntaxError(f"Invalid character in number literal: {self._current()!r}", line, col)
        self._emit(TokenType.NUMBER, self._source[start : self._pos], line, col, start)

    def _scan_identifier_or_keyword(self, line: int, col: int, start: int) -> None:
        while self._pos < len(self._source) and _is_identifier_part(self._current()):
            self._advance()
        value = self._source[start : self._pos]
        if value in _HASH_PREFIXES and self._current() == '"':
            inner = self._read_quoted(line, col)
            self._emit(_HASH_PREFIXES[value], inner, line, col, start)
            return
        self._emit(_KEYWORDS.get(value, TokenType.IDENTIFIER), value, line, col, start)
