# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Yul+ to Yul transpiler.

Rewrites the Yul+ extensions into plain Yul and records the declared function
signatures and event topics for ABI synthesis:

* ``sig"function f(uint a)"`` becomes the 4-byte selector literal.
* ``topic"event E(uint a)"`` becomes the 32-byte topic literal.
* ``enum Name (a, b)`` declares ``Name.a`` = 0 and ``Name.b`` = 1.
* ``const name := expr`` substitutes *expr* wherever *name* is used.
* ``mstruct Name (field: size, ...)`` declares memory slice accessors.
* ``mslice`` and ``require`` helpers are injected on demand.

Declarations are scoped to the enclosing ``code { ... }`` block, or to a
top-level block for files that do not use object notation.  The rewrite
works on character spans, so comments and layout outside the rewritten
constructs are preserved exactly.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from yulbuild.dialect.lexer import Token, TokenType, tokenize
from yulbuild.dialect.signatures import SignatureError, event_topic, function_selector, parse_signature
from yulbuild.errors import DialectSyntaxError

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class SignatureDecl:
    """A ``sig"..."`` literal found in the source.

    Attributes:
        abi: The literal exactly as written, including the ``sig"`` framing.
        name: The function name.
        signature: The canonical signature, e.g. ``transfer(address,uint256)``.
        selector: The ``0x``-prefixed 4-byte selector.
    """

    abi: str
    name: str
    signature: str
    selector: str


@dataclass(frozen=True)
class TopicDecl:
    """A ``topic"..."`` literal found in the source.

    Attributes:
        abi: The literal exactly as written, including the ``topic"`` framing.
        name: The event name.
        signature: The canonical signature, e.g. ``Transfer(address,uint256)``.
        topic: The ``0x``-prefixed 32-byte topic hash.
    """

    abi: str
    name: str
    signature: str
    topic: str


@dataclass(frozen=True)
class TranspileResult:
    """Plain Yul text plus the interface side table of the source."""

    code: str
    signatures: tuple[SignatureDecl, ...] = ()
    topics: tuple[TopicDecl, ...] = ()


def transpile(source: str) -> TranspileResult:
    """Transpile Yul+ source text into plain Yul.

    The result depends on *source* only: equal inputs give equal outputs.

    Args:
        source: The full text of a .yulp file.

    Returns:
        The transpiled code and the signatures and topics in order of first
        appearance, each distinct literal listed once.

    Raises:
        DialectSyntaxError: If the source cannot be tokenized, its braces are
            unbalanced, a declaration is malformed or duplicated, or a
            signature literal cannot be parsed.
    """
    return _Transpiler(source).run()


# ################
# Implementation
# ################

MSLICE_HELPER = (
    "function mslice(position, length) -> result {\n"
    "  result := shr(sub(256, mul(length, 8)), mload(position))\n"
    "}"
)

REQUIRE_HELPER = "function require(arg) {\n  if lt(arg, 1) {\n    revert(0, 0)\n  }\n}"

_DECLARATION_TYPES = frozenset({TokenType.ENUM, TokenType.CONST, TokenType.MSTRUCT})

_MAX_SLICE_BYTES = 32


@dataclass
class _MStruct:
    name: str
    fields: list[tuple[str, int]]


@dataclass
class _Scope:
    """One ``code`` block: token index range of its braces and its declarations."""

    open_index: int
    close_index: int
    substitutions: dict[str, str] = field(default_factory=dict)
    structs: list[_MStruct] = field(default_factory=list)
    declared_spans: list[tuple[int, int]] = field(default_factory=list)


class _Transpiler:
    """Span-rewriting transpiler over a token stream."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._tokens = tokenize(source)
        self._edits: list[tuple[int, int, str]] = []
        self._hashes: dict[str, str] = {}
        self._signatures: list[SignatureDecl] = []
        self._topics: list[TopicDecl] = []

    def run(self) -> TranspileResult:
        self._check_balanced()
        self._collect_hash_literals()
        scopes = self._find_scopes()
        self._check_declarations_scoped(scopes)
        for scope in scopes:
            self._process_scope(scope)
        self._rewrite_unscoped_hashes(scopes)
        return TranspileResult(
            code=self._apply_edits(),
            signatures=tuple(self._signatures),
            topics=tuple(self._topics),
        )

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _error(self, message: str, tok: Token) -> DialectSyntaxError:
        return DialectSyntaxError(message, tok.line, tok.column)

    def _expect(self, index: int, *types: TokenType) -> Token:
        tok = self._tokens[index]
        if tok.type not in types:
            expected = ", ".join(repr(t.value) for t in types)
            raise self._error(f"Expected {expected}, got {tok.value!r}", tok)
        return tok

    def _matching_brace(self, open_index: int) -> int:
        depth = 0
        for i in range(open_index, len(self._tokens)):
            tok_type = self._tokens[i].type
            if tok_type == TokenType.LBRACE:
                depth += 1
            elif tok_type == TokenType.RBRACE:
                depth -= 1
                if depth == 0:
                    return i
        raise self._error("Unterminated block", self._tokens[open_index])

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def _check_balanced(self) -> None:
        stack: list[Token] = []
        for tok in self._tokens:
            if tok.type in (TokenType.LBRACE, TokenType.LPAREN):
                stack.append(tok)
            elif tok.type in (TokenType.RBRACE, TokenType.RPAREN):
                opener = TokenType.LBRACE if tok.type == TokenType.RBRACE else TokenType.LPAREN
                if not stack or stack[-1].type != opener:
                    raise self._error(f"Unexpected {tok.value!r}", tok)
                stack.pop()
        if stack:
            raise self._error(f"Unclosed {stack[-1].value!r}", stack[-1])

    def _find_scopes(self) -> list[_Scope]:
        """Return the code blocks, or the top-level blocks when there are none."""
        scopes: list[_Scope] = []
        uses_objects = any(tok.type == TokenType.OBJECT for tok in self._tokens)
        i = 0
        depth = 0
        while i < len(self._tokens):
            tok = self._tokens[i]
            if uses_objects and tok.type == TokenType.CODE:
                open_index = i + 1
                self._expect(open_index, TokenType.LBRACE)
                close_index = self._matching_brace(open_index)
                scopes.append(_Scope(open_index, close_index))
                i = close_index + 1
                continue
            if not uses_objects and tok.type == TokenType.LBRACE and depth == 0:
                close_index = self._matching_brace(i)
                scopes.append(_Scope(i, close_index))
                i = close_index + 1
                continue
            if tok.type == TokenType.LBRACE:
                depth += 1
            elif tok.type == TokenType.RBRACE:
                depth -= 1
            i += 1
        return scopes

    def _check_declarations_scoped(self, scopes: list[_Scope]) -> None:
        for index, tok in enumerate(self._tokens):
            if tok.type in _DECLARATION_TYPES and not any(
                s.open_index < index < s.close_index for s in scopes
            ):
                raise self._error(f"'{tok.value}' declaration outside of a code block", tok)

    # ------------------------------------------------------------------
    # Signature and topic literals
    # ------------------------------------------------------------------

    def _collect_hash_literals(self) -> None:
        for tok in self._tokens:
            if tok.type not in (TokenType.SIG, TokenType.TOPIC):
                continue
            raw = self._source[tok.start : tok.end]
            if raw in self._hashes:
                continue
            kind = "function" if tok.type == TokenType.SIG else "event"
            try:
                parsed = parse_signature(tok.value, kind)
            except SignatureError as exc:
                raise self._error(str(exc), tok) from exc
            if tok.type == TokenType.SIG:
                selector = function_selector(parsed)
                self._hashes[raw] = selector
                self._signatures.append(SignatureDecl(raw, parsed.name, parsed.canonical, selector))
            else:
                topic = event_topic(parsed)
                self._hashes[raw] = topic
                self._topics.append(TopicDecl(raw, parsed.name, parsed.canonical, topic))

    def _hash_for(self, tok: Token) -> str:
        return self._hashes[self._source[tok.start : tok.end]]

    def _rewrite_unscoped_hashes(self, scopes: list[_Scope]) -> None:
        for index, tok in enumerate(self._tokens):
            if tok.type in (TokenType.SIG, TokenType.TOPIC) and not any(
                s.open_index < index < s.close_index for s in scopes
            ):
                self._edits.append((tok.start, tok.end, self._hash_for(tok)))

    # ------------------------------------------------------------------
    # Scope processing
    # ------------------------------------------------------------------

    def _process_scope(self, scope: _Scope) -> None:
        user_functions: set[str] = set()
        i = scope.open_index + 1
        while i < scope.close_index:
            tok = self._tokens[i]
            if tok.type == TokenType.ENUM:
                i = self._parse_enum(i, scope)
            elif tok.type == TokenType.CONST:
                i = self._parse_const(i, scope)
            elif tok.type == TokenType.MSTRUCT:
                i = self._parse_mstruct(i, scope)
            else:
                if tok.type == TokenType.FUNCTION and self._tokens[i + 1].type == TokenType.IDENTIFIER:
                    user_functions.add(self._tokens[i + 1].value)
                i += 1

        helpers_used: set[str] = set()
        for index in range(scope.open_index + 1, scope.close_index):
            if any(start <= index <= end for start, end in scope.declared_spans):
                continue
            tok = self._tokens[index]
            if tok.type in (TokenType.SIG, TokenType.TOPIC):
                self._edits.append((tok.start, tok.end, self._hash_for(tok)))
            elif tok.type == TokenType.IDENTIFIER:
                if tok.value in scope.substitutions:
                    self._edits.append((tok.start, tok.end, scope.substitutions[tok.value]))
                elif tok.value in ("mslice", "require") and self._tokens[index + 1].type == TokenType.LPAREN:
                    helpers_used.add(tok.value)

        helpers: list[str] = []
        for struct in scope.structs:
            helpers.extend(_struct_accessors(struct))
        if (scope.structs or "mslice" in helpers_used) and "mslice" not in user_functions:
            helpers.append(MSLICE_HELPER)
        if "require" in helpers_used and "require" not in user_functions:
            helpers.append(REQUIRE_HELPER)
        if helpers:
            insert_at = self._tokens[scope.open_index].end
            self._edits.append((insert_at, insert_at, "\n" + "\n".join(helpers) + "\n"))

    def _declare(self, scope: _Scope, name_tok: Token, name: str, value: str) -> None:
        if name in scope.substitutions or any(s.name == name for s in scope.structs):
            raise self._error(f"Duplicate declaration of {name!r}", name_tok)
        scope.substitutions[name] = value

    def _remove(self, scope: _Scope, first: int, last: int) -> None:
        scope.declared_spans.append((first, last))
        self._edits.append((self._tokens[first].start, self._tokens[last].end, ""))

    def _parse_enum(self, index: int, scope: _Scope) -> int:
        """Parse ``enum Name (a, b, ...)`` and return the index after it."""
        name_tok = self._expect(index + 1, TokenType.IDENTIFIER)
        self._expect(index + 2, TokenType.LPAREN)
        i = index + 3
        position = 0
        while True:
            member = self._expect(i, TokenType.IDENTIFIER)
            self._declare(scope, member, f"{name_tok.value}.{member.value}", str(position))
            position += 1
            sep = self._expect(i + 1, TokenType.COMMA, TokenType.RPAREN)
            i += 2
            if sep.type == TokenType.RPAREN:
                break
        self._remove(scope, index, i - 1)
        return i

    def _parse_const(self, index: int, scope: _Scope) -> int:
        """Parse ``const name := expr`` and return the index after it."""
        name_tok = self._expect(index + 1, TokenType.IDENTIFIER)
        self._expect(index + 2, TokenType.ASSIGN)
        end = self._parse_expression(index + 3)
        value = self._render(scope, index + 3, end)
        self._declare(scope, name_tok, name_tok.value, value)
        self._remove(scope, index, end - 1)
        return end

    def _parse_mstruct(self, index: int, scope: _Scope) -> int:
        """Parse ``mstruct Name (field: size, ...)`` and return the index after it."""
        name_tok = self._expect(index + 1, TokenType.IDENTIFIER)
        self._expect(index + 2, TokenType.LPAREN)
        fields: list[tuple[str, int]] = []
        i = index + 3
        while True:
            field_tok = self._expect(i, TokenType.IDENTIFIER)
            self._expect(i + 1, TokenType.COLON)
            size_tok = self._expect(i + 2, TokenType.NUMBER)
            size = _literal_int(size_tok.value)
            if not 1 <= size <= _MAX_SLICE_BYTES:
                raise self._error(f"mstruct field size must be between 1 and {_MAX_SLICE_BYTES}", size_tok)
            if any(name == field_tok.value for name, _ in fields):
                raise self._error(f"Duplicate mstruct field {field_tok.value!r}", field_tok)
            fields.append((field_tok.value, size))
            sep = self._expect(i + 3, TokenType.COMMA, TokenType.RPAREN)
            i += 4
            if sep.type == TokenType.RPAREN:
                break
        if name_tok.value in scope.substitutions or any(s.name == name_tok.value for s in scope.structs):
            raise self._error(f"Duplicate declaration of {name_tok.value!r}", name_tok)
        scope.structs.append(_MStruct(name_tok.value, fields))
        self._remove(scope, index, i - 1)
        return i

    def _parse_expression(self, index: int) -> int:
        """Skip one expression (literal, identifier, or call) and return the index after it."""
        tok = self._expect(
            index,
            TokenType.NUMBER,
            TokenType.STRING,
            TokenType.SIG,
            TokenType.TOPIC,
            TokenType.IDENTIFIER,
        )
        if tok.type != TokenType.IDENTIFIER or self._tokens[index + 1].type != TokenType.LPAREN:
            return index + 1
        i = index + 2
        if self._tokens[i].type == TokenType.RPAREN:
            return i + 1
        while True:
            i = self._parse_expression(i)
            sep = self._expect(i, TokenType.COMMA, TokenType.RPAREN)
            i += 1
            if sep.type == TokenType.RPAREN:
                return i

    def _render(self, scope: _Scope, first: int, end: int) -> str:
        """Return the source text of tokens ``[first, end)`` with substitutions applied."""
        parts: list[str] = []
        cursor = self._tokens[first].start
        for tok in self._tokens[first:end]:
            replacement: str | None = None
            if tok.type in (TokenType.SIG, TokenType.TOPIC):
                replacement = self._hash_for(tok)
            elif tok.type == TokenType.IDENTIFIER and tok.value in scope.substitutions:
                replacement = scope.substitutions[tok.value]
            if replacement is not None:
                parts.append(self._source[cursor : tok.start])
                parts.append(replacement)
                cursor = tok.end
        parts.append(self._source[cursor : self._tokens[end - 1].end])
        return "".join(parts)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _apply_edits(self) -> str:
        parts: list[str] = []
        cursor = 0
        for start, end, text in sorted(self._edits, key=lambda e: (e[0], e[1])):
            parts.append(self._source[cursor:start])
            parts.append(text)
            cursor = end
        parts.append(self._source[cursor:])
        return "".join(parts)


def _struct_accessors(struct: _MStruct) -> list[str]:
    """Return the Yul accessor functions for one mstruct declaration."""
    functions: list[str] = []
    offset = 0
    for name, size in struct.fields:
        prefix = f"{struct.name}.{name}"
        functions.append(f"function {prefix}.position(_pos) -> _offset {{ _offset := add(_pos, {offset}) }}")
        functions.append(f"function {prefix}.size() -> _size {{ _size := {size} }}")
        functions.append(f"function {prefix}(_pos) -> _value {{ _value := mslice({prefix}.position(_pos), {size}) }}")
        offset += size
    functions.append(f"function {struct.name}.size() -> _size {{ _size := {offset} }}")
    return functions


def _literal_int(text: str) -> int:
    return int(text, 16) if text.startswith("0x") else int(text)
