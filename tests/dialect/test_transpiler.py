# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the Yul+ to Yul transpiler."""

import pytest

from yulbuild.dialect.transpiler import MSLICE_HELPER, REQUIRE_HELPER, transpile
from yulbuild.errors import DialectSyntaxError

# ###############
# Test data
# ###############

SIMPLE_STORE = """\
object "SimpleStore" {
  code {
    datacopy(0, dataoffset("Runtime"), datasize("Runtime"))
    return(0, datasize("Runtime"))
  }
  object "Runtime" {
    code {
      calldatacopy(0, 0, 36)
      mstruct StoreCalldata(sig: 4, val: 32)

      switch StoreCalldata.sig(0)

      case sig"function store(uint256 val)" {
        sstore(0, StoreCalldata.val(0))
        log2(0, 0, topic"event Store(uint256 value)", StoreCalldata.val(0))
      }

      case sig"function get() returns (uint256)" {
        mstore(100, sload(0))
        return (100, 32)
      }
    }
  }
}
"""

# ###############
# Signature and topic literals
# ###############


class TestHashLiterals:
    def test_sig_is_replaced_by_selector(self) -> None:
        result = transpile('{\n  let s := sig"function transfer(address to, uint amount)"\n}\n')
        assert result.code == "{\n  let s := 0xa9059cbb\n}\n"

    def test_sig_is_recorded(self) -> None:
        result = transpile('{\n  let s := sig"function transfer(address to, uint amount)"\n}\n')
        assert len(result.signatures) == 1
        decl = result.signatures[0]
        assert decl.abi == 'sig"function transfer(address to, uint amount)"'
        assert decl.name == "transfer"
        assert decl.signature == "transfer(address,uint256)"
        assert decl.selector == "0xa9059cbb"

    def test_topic_is_replaced_and_recorded(self) -> None:
        source = '{\n  log1(0, 0, topic"event Transfer(address indexed from, address indexed to, uint256 value)")\n}'
        result = transpile(source)
        topic = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
        assert result.code == "{\n  log1(0, 0, " + topic + ")\n}"
        assert [t.signature for t in result.topics] == ["Transfer(address,address,uint256)"]
        assert result.topics[0].topic == topic

    def test_repeated_literal_recorded_once(self) -> None:
        result = transpile('{\n  let a := sig"function get()"\n  let b := sig"function get()"\n}')
        assert len(result.signatures) == 1
        assert result.code.count("0x6d4ce63c") == 2

    def test_signatures_in_order_of_appearance(self) -> None:
        result = transpile(SIMPLE_STORE)
        assert [s.signature for s in result.signatures] == ["store(uint256)", "get()"]
        assert [t.signature for t in result.topics] == ["Store(uint256)"]

    def test_malformed_sig_raises_with_location(self) -> None:
        with pytest.raises(DialectSyntaxError) as exc_info:
            transpile('{\n  let s := sig"function (uint256)"\n}')
        assert exc_info.value.line == 2
        assert exc_info.value.column == 12

    def test_plain_yul_is_unchanged(self) -> None:
        source = "{\n  // keep me\n  mstore(0, 1) /* and me */\n  return(0, 32)\n}\n"
        result = transpile(source)
        assert result.code == source
        assert result.signatures == ()
        assert result.topics == ()


# ###############
# Enums and constants
# ###############


class TestEnumAndConst:
    def test_enum_members_are_numbered(self) -> None:
        result = transpile("{\n  enum Colors (red, green, blue)\n  let c := Colors.blue\n}")
        assert result.code == "{\n  \n  let c := 2\n}"

    def test_const_is_substituted(self) -> None:
        result = transpile("{\n  const one := 0x01\n  let x := add(one, one)\n}")
        assert result.code == "{\n  \n  let x := add(0x01, 0x01)\n}"

    def test_const_may_use_earlier_const(self) -> None:
        result = transpile("{\n  const a := 1\n  const b := add(a, 2)\n  let x := b\n}")
        assert result.code == "{\n  \n  \n  let x := add(1, 2)\n}"

    def test_const_may_hold_sig(self) -> None:
        result = transpile('{\n  const GET := sig"function get()"\n  let x := GET\n}')
        assert result.code == "{\n  \n  let x := 0x6d4ce63c\n}"
        assert [s.signature for s in result.signatures] == ["get()"]

    def test_duplicate_declaration_raises(self) -> None:
        with pytest.raises(DialectSyntaxError, match="Duplicate declaration"):
            transpile("{\n  const a := 1\n  const a := 2\n}")

    def test_malformed_enum_raises(self) -> None:
        with pytest.raises(DialectSyntaxError):
            transpile("{\n  enum Colors red\n}")

    def test_declarations_are_scoped_to_code_block(self) -> None:
        source = """\
object "A" {
  code {
    const x := 1
    let a := x
  }
  object "B" {
    code {
      let b := x
    }
  }
}
"""
        result = transpile(source)
        assert "let a := 1" in result.code
        assert "let b := x" in result.code

    def test_declaration_outside_code_block_raises(self) -> None:
        with pytest.raises(DialectSyntaxError, match="outside of a code block"):
            transpile('object "A" {\n  enum E (a)\n  code { }\n}')


# ###############
# Memory structures and helpers
# ###############


class TestMStruct:
    def test_accessors_are_injected(self) -> None:
        result = transpile(SIMPLE_STORE)
        code = result.code
        assert "mstruct" not in code
        assert "function StoreCalldata.sig.position(_pos) -> _offset { _offset := add(_pos, 0) }" in code
        assert "function StoreCalldata.val.position(_pos) -> _offset { _offset := add(_pos, 4) }" in code
        assert "function StoreCalldata.val.size() -> _size { _size := 32 }" in code
        assert (
            "function StoreCalldata.val(_pos) -> _value { _value := mslice(StoreCalldata.val.position(_pos), 32) }"
            in code
        )
        assert "function StoreCalldata.size() -> _size { _size := 36 }" in code
        assert code.count(MSLICE_HELPER) == 1

    def test_accessors_only_in_declaring_block(self) -> None:
        code = transpile(SIMPLE_STORE).code
        runtime_start = code.index('object "Runtime"')
        assert code.index("function StoreCalldata.size()") > runtime_start

    def test_literals_replaced_in_simple_store(self) -> None:
        code = transpile(SIMPLE_STORE).code
        assert "case 0x6057361d {" in code
        assert "case 0x6d4ce63c {" in code
        assert 'sig"' not in code
        assert 'topic"' not in code

    def test_field_size_over_32_raises(self) -> None:
        with pytest.raises(DialectSyntaxError, match="between 1 and 32"):
            transpile("{\n  mstruct Big(word: 33)\n}")

    def test_duplicate_field_raises(self) -> None:
        with pytest.raises(DialectSyntaxError, match="Duplicate mstruct field"):
            transpile("{\n  mstruct S(a: 1, a: 2)\n}")


class TestHelpers:
    def test_require_is_injected_when_used(self) -> None:
        code = transpile("{\n  require(callvalue())\n}").code
        assert code.startswith("{\n" + REQUIRE_HELPER + "\n")
        assert code.count("function require") == 1

    def test_user_defined_require_is_kept(self) -> None:
        source = "{\n  function require(x) { if iszero(x) { invalid() } }\n  require(1)\n}"
        assert transpile(source).code == source

    def test_mslice_is_injected_when_used(self) -> None:
        code = transpile("{\n  let v := mslice(0, 4)\n}").code
        assert MSLICE_HELPER in code

    def test_unused_helpers_not_injected(self) -> None:
        code = transpile("{\n  mstore(0, 1)\n}").code
        assert "function" not in code


# ###############
# Structure and purity
# ###############


class TestStructure:
    def test_unclosed_brace_raises(self) -> None:
        with pytest.raises(DialectSyntaxError, match="Unclosed"):
            transpile("{\n  let x := 1\n")

    def test_stray_closing_brace_raises(self) -> None:
        with pytest.raises(DialectSyntaxError, match="Unexpected"):
            transpile("{ }\n}")

    def test_transpile_is_deterministic(self) -> None:
        first = transpile(SIMPLE_STORE)
        second = transpile(SIMPLE_STORE)
        assert first.code == second.code
        assert first.signatures == second.signatures
        assert first.topics == second.topics
