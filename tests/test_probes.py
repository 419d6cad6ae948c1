"""Tests for probe name parsing, bit access and the probe registry."""

import pytest

from logic_vcd.bits import get_bit
from logic_vcd.errors import ConfigError, TooManyProbesError
from logic_vcd.names import parse_vector_name
from logic_vcd.probes import MAX_PROBES, BitIndex, ProbeRegistry, next_symbol


def test_parse_vector_name():
    """Test vector bit suffix detection."""
    assert parse_vector_name("data<3>") == ("data", 3)
    assert parse_vector_name("addr<12>") == ("addr", 12)
    # Only the last suffix is the bit index
    assert parse_vector_name("a<1><2>") == ("a<1>", 2)


def test_parse_vector_name_scalars():
    """Test names without a well formed suffix are scalars."""
    assert parse_vector_name("clk") is None
    assert parse_vector_name("<3>") is None  # empty base
    assert parse_vector_name("data<>") is None
    assert parse_vector_name("data<x>") is None
    assert parse_vector_name("data<3") is None
    assert parse_vector_name("data<3>\n") is None
    assert parse_vector_name("data<3>_n") is None


def test_get_bit():
    """Test bit extraction across byte boundaries."""
    buf = bytes([0b10000001, 0b00000100])
    assert get_bit(buf, 0) == 1
    assert get_bit(buf, 1) == 0
    assert get_bit(buf, 7) == 1
    assert get_bit(buf, 8) == 0
    assert get_bit(buf, 10) == 1


def test_next_symbol():
    """Test symbols run through printable ASCII."""
    assert next_symbol(0) == "!"
    assert next_symbol(1) == '"'
    assert next_symbol(93) == "~"
    with pytest.raises(TooManyProbesError):
        next_symbol(94)
    with pytest.raises(ValueError):
        next_symbol(-1)


def test_registry_scalars():
    """Test scalar probes get sequential symbols in insertion order."""
    registry = ProbeRegistry.build([("A", 0), ("B", 1), ("C", 2)])
    assert [(p.name, p.symbol) for p in registry] == [("A", "!"), ("B", '"'), ("C", "#")]
    for probe in registry:
        assert not probe.is_vector
        assert probe.width == 1


def test_registry_groups_interleaved_vector_bits():
    """Test vector bits merge into one probe regardless of interleaving."""
    registry = ProbeRegistry.build([("a<0>", 0), ("b", 1), ("a<1>", 2), ("c", 3)])
    assert [(p.name, p.symbol) for p in registry] == [("a", "!"), ("b", '"'), ("c", "#")]

    vector = registry.get("a")
    assert vector.is_vector
    assert vector.width == 2
    # Highest bit first
    assert vector.bits == [BitIndex(bit=1, sample=2), BitIndex(bit=0, sample=0)]
    assert vector.msb == 1


def test_registry_scalar_and_vector_with_same_name():
    """Test a scalar never absorbs vector bits of the same base name."""
    registry = ProbeRegistry.build([("d", 0), ("d<0>", 1), ("d<1>", 2)])
    probes = registry.probes
    assert len(probes) == 2
    assert not probes[0].is_vector
    assert probes[1].is_vector
    assert probes[1].width == 2


def test_registry_duplicate_bit_keeps_first():
    """Test a repeated vector bit keeps the first physical position."""
    registry = ProbeRegistry.build([("v<1>", 0), ("v<1>", 5), ("v<0>", 1)])
    vector = registry.get("v")
    assert vector.bits == [BitIndex(bit=1, sample=0), BitIndex(bit=0, sample=1)]


def test_registry_probe_limit():
    """Test 94 probes fit and 95 do not."""
    registry = ProbeRegistry.build([(f"p{i}", i) for i in range(MAX_PROBES)])
    assert len(registry) == 94
    assert registry.probes[-1].symbol == "~"

    with pytest.raises(TooManyProbesError) as excinfo:
        ProbeRegistry.build([(f"p{i}", i) for i in range(MAX_PROBES + 1)])
    assert excinfo.value.count == 95
    assert isinstance(excinfo.value, ConfigError)


def test_registry_limit_counts_logical_probes():
    """Test vector bits do not count against the probe limit individually."""
    bits = [(f"bus<{i}>", i) for i in range(8)]
    bits += [(f"p{i}", 8 + i) for i in range(MAX_PROBES - 1)]
    registry = ProbeRegistry.build(bits)
    assert len(registry) == MAX_PROBES


def test_vector_layout():
    """Test the output layout maps each vector position MSB first."""
    registry = ProbeRegistry.build([("v<0>", 1), ("v<3>", 0)])
    vector = registry.get("v")
    assert vector.msb == 3
    assert vector.layout == (0, None, None, 1)

    scalar = ProbeRegistry.build([("clk", 4)]).get("clk")
    assert scalar.msb == 0
    assert scalar.layout == (4,)
