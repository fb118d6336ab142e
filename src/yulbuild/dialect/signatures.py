# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Human-readable ABI signatures: parsing, canonicalization, and hashing.

Supports the forms accepted inside ``sig"..."`` and ``topic"..."`` literals::

    function transfer(address to, uint amount) returns (bool)
    event Transfer(address indexed from, address indexed to, uint256 value)

The canonical form drops the keyword, parameter names, ``indexed`` markers,
data locations, and the return clause, and expands ``uint``/``int`` aliases:
``transfer(address,uint256)``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from Crypto.Hash import keccak

# ###############
# Public Interface
# ###############


class SignatureError(ValueError):
    """Raised when a human-readable signature cannot be parsed."""


@dataclass(frozen=True)
class ParsedSignature:
    """A parsed function or event signature.

    Attributes:
        kind: ``"function"`` or ``"event"``.
        name: The function or event name.
        input_types: Canonical parameter types in declaration order.
    """

    kind: str
    name: str
    input_types: tuple[str, ...]

    @property
    def canonical(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"


def parse_signature(text: str, kind: str) -> ParsedSignature:
    """Parse a human-readable signature of the given *kind*.

    The leading ``function``/``event`` keyword is optional.

    Raises:
        SignatureError: If the text is not a well-formed signature.
    """
    text = text.strip()
    if text.startswith(kind + " ") or text.startswith(kind + "("):
        text = text[len(kind) :].lstrip()

    match = _NAME_RE.match(text)
    if match is None:
        raise SignatureError(f"Expected {kind} name in {text!r}")
    name = match.group(0)

    rest = text[match.end() :].lstrip()
    if not rest.startswith("("):
        raise SignatureError(f"Expected '(' after {kind} name {name!r}")
    close = _matching_paren(rest, 0)
    params = rest[1:close]
    trailer = rest[close + 1 :].strip()
    _check_trailer(trailer, kind)

    input_types = tuple(_canonical_param(p) for p in _split_top_level(params))
    return ParsedSignature(kind=kind, name=name, input_types=input_types)


def keccak256(data: bytes) -> bytes:
    """Return the Keccak-256 digest of *data* (Ethereum flavour, not SHA3-256)."""
    return keccak.new(digest_bits=256, data=data).digest()


def function_selector(signature: ParsedSignature) -> str:
    """Return the 4-byte selector of a function signature as ``0x``-prefixed hex."""
    return "0x" + keccak256(signature.canonical.encode("utf-8"))[:4].hex()


def event_topic(signature: ParsedSignature) -> str:
    """Return the 32-byte topic of an event signature as ``0x``-prefixed hex."""
    return "0x" + keccak256(signature.canonical.encode("utf-8")).hex()


# ################
# Implementation
# ################

_NAME_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_ELEMENTARY_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)((?:\[[0-9]*\])*)$")
_ARRAY_SUFFIX_RE = re.compile(r"^(?:\[[0-9]*\])*$")

_TYPE_ALIASES: dict[str, str] = {
    "uint": "uint256",
    "int": "int256",
    "byte": "bytes1",
}

_PARAM_MODIFIERS = frozenset({"indexed", "memory", "calldata", "storage", "payable"})
_FUNCTION_MUTABILITY = frozenset({"external", "public", "view", "pure", "payable", "nonpayable"})


def _matching_paren(text: str, open_pos: int) -> int:
    depth = 0
    for i in range(open_pos, len(text)):
        if text[i] == "(":
            depth += 1
        elif text[i] == ")":
            depth -= 1
            if depth == 0:
                return i
    raise SignatureError(f"Unbalanced parentheses in {text!r}")


def _split_top_level(params: str) -> list[str]:
    """Split a parameter list on commas that are not nested in a tuple."""
    if not params.strip():
        return []
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in params:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    for part in parts:
        if not part.strip():
            raise SignatureError(f"Empty parameter in {params!r}")
    return parts


def _canonical_param(param: str) -> str:
    """Return the canonical type of one parameter declaration."""
    param = param.strip()
    if param.startswith("tuple("):
        param = param[len("tuple") :]
    if param.startswith("("):
        close = _matching_paren(param, 0)
        inner = ",".join(_canonical_param(p) for p in _split_top_level(param[1:close]))
        words = param[close + 1 :].split()
        suffix = words[0] if words and _ARRAY_SUFFIX_RE.match(words[0]) else ""
        _check_param_words(words[1:] if suffix else words, param)
        return f"({inner}){suffix}"

    words = param.split()
    match = _ELEMENTARY_RE.match(words[0])
    if match is None:
        raise SignatureError(f"Invalid parameter type {words[0]!r}")
    base, suffix = match.groups()
    _check_param_words(words[1:], param)
    return _TYPE_ALIASES.get(base, base) + suffix


def _check_param_words(words: list[str], param: str) -> None:
    """Allow modifiers followed by at most one parameter name."""
    names = [w for w in words if w not in _PARAM_MODIFIERS]
    if len(names) > 1 or any(_NAME_RE.fullmatch(n) is None for n in names):
        raise SignatureError(f"Invalid parameter declaration {param!r}")


def _check_trailer(trailer: str, kind: str) -> None:
    if not trailer:
        return
    if kind == "event":
        if trailer != "anonymous":
            raise SignatureError(f"Unexpected text after event parameters: {trailer!r}")
        return
    returns_pos = trailer.find("returns")
    head = trailer if returns_pos == -1 else trailer[:returns_pos]
    for word in head.split():
        if word not in _FUNCTION_MUTABILITY:
            raise SignatureError(f"Unexpected text after function parameters: {word!r}")
    if returns_pos != -1:
        tail = trailer[returns_pos + len("returns") :].strip()
        if not tail.startswith("(") or _matching_paren(tail, 0) != len(tail) - 1:
            raise SignatureError(f"Malformed returns clause: {trailer!r}")
        for part in _split_top_level(tail[1:-1]):
            _canonical_param(part)
