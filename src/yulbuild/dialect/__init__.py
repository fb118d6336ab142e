# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Yul+ front end: scanning, signature hashing, and transpilation to Yul."""

from yulbuild.dialect.lexer import Token, TokenType, tokenize
from yulbuild.dialect.signatures import ParsedSignature, SignatureError, event_topic, function_selector, parse_signature
from yulbuild.dialect.transpiler import SignatureDecl, TopicDecl, TranspileResult, transpile

__all__ = [
    "tokenize",
    "Token",
    "TokenType",
    "parse_signature",
    "ParsedSignature",
    "SignatureError",
    "function_selector",
    "event_topic",
    "transpile",
    "TranspileResult",
    "SignatureDecl",
    "TopicDecl",
]
