#!/usr/bin/env python3
"""
Tests for factor table lookup, validation and the table locators.
"""
import logging

import pytest

from ppfactor.services.factor_table import (
    FACTOR_TABLE_NAMES,
    FileSystemTableLocator,
    InMemoryTableLocator,
    lookup_table,
    parse_factor_spec,
    read_logical_lines,
)
from ppfactor.utils.errors import CorruptTableData, MissingFactorTable
from ppfactor.utils.integers import BigInt, UInt64

HEADER = "Test table\n\n    n  #Fac  Factorisation\n"


def as_pairs(factors):
    return [(int(f.prime), f.multiplicity) for f in factors]


# ==================== Logical lines ====================

def test_lines_before_header_are_ignored():
    text = "comment 1 2 3\n 5 3 2.11^2\n" + HEADER + "  4  5  2^4.5\n"
    assert list(read_logical_lines(text.splitlines())) == ["4  5  2^4.5"]


def test_dot_continuation_is_joined():
    text = HEADER + "  20  10  2^4.5^2.11^2.\n          61.1181\n  12  8  2^4.5.7.13.73\n"
    assert list(read_logical_lines(text.splitlines())) == [
        "20  10  2^4.5^2.11^2.61.1181",
        "12  8  2^4.5.7.13.73",
    ]


def test_backslash_continuation_joins_digits():
    text = HEADER + "  7  2  2.10\\\n        9\\\n        3\n"
    assert list(read_logical_lines(text.splitlines())) == ["7  2  2.1093"]


def test_blank_lines_skipped():
    text = HEADER + "\n  2  3  2^3\n\n  3  2  2.13\n"
    assert list(read_logical_lines(text.splitlines())) == ["2  3  2^3", "3  2  2.13"]


def test_parse_factor_spec():
    assert as_pairs(parse_factor_spec("2^4.5^2.11^2.61.1181")) == [
        (2, 4), (5, 2), (11, 2), (61, 1), (1181, 1)
    ]
    with pytest.raises(CorruptTableData):
        parse_factor_spec("2^4.5x.7")


# ==================== Lookup ====================

@pytest.mark.parametrize("kind", [int, UInt64, BigInt])
def test_lookup_3_to_the_20(table_locator, kind):
    """3^20 - 1 = 3486784400 = 2^4 5^2 11^2 61 1181"""
    factors = lookup_table(3, 20, table_locator, kind=kind)
    assert as_pairs(factors) == [(2, 4), (5, 2), (11, 2), (61, 1), (1181, 1)]
    assert all(isinstance(f.prime, kind) for f in factors)


def test_lookup_backslash_entry(table_locator):
    assert as_pairs(lookup_table(3, 7, table_locator)) == [(2, 1), (1093, 1)]


def test_lookup_2_to_the_36(table_locator):
    factors = lookup_table(2, 36, table_locator, kind=BigInt)
    assert as_pairs(factors) == [
        (3, 3), (5, 1), (7, 1), (13, 1), (19, 1), (37, 1), (73, 1), (109, 1)
    ]


def test_missing_entry_is_not_found(table_locator):
    assert lookup_table(3, 400, table_locator) is None


def test_incomplete_entry_is_skipped(table_locator):
    """3^15 - 1 is marked with '+' in the test table"""
    assert lookup_table(3, 15, table_locator) is None


def test_uncovered_base_is_not_found_without_io():
    class ExplodingLocator:
        def logical_lines(self, p):
            raise AssertionError("locator must not be consulted")

    assert lookup_table(13, 4, ExplodingLocator()) is None
    assert lookup_table(4, 4, ExplodingLocator()) is None


def test_covered_base_without_file_raises(tmp_path):
    locator = FileSystemTableLocator(tmp_path)
    with pytest.raises(MissingFactorTable) as excinfo:
        lookup_table(5, 4, locator)
    assert excinfo.value.file_name == "c05minus.txt"
    assert isinstance(excinfo.value, FileNotFoundError)


def test_table_found_in_subdirectory(tmp_path, data_dir):
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    (nested / "c03minus.txt").write_text((data_dir / "c03minus.txt").read_text())
    locator = FileSystemTableLocator(tmp_path)
    assert as_pairs(lookup_table(3, 4, locator)) == [(2, 4), (5, 1)]


def test_duplicate_tables_are_reported(tmp_path, data_dir, caplog):
    for sub in ("one", "two"):
        (tmp_path / sub).mkdir()
        (tmp_path / sub / "c03minus.txt").write_text((data_dir / "c03minus.txt").read_text())
    locator = FileSystemTableLocator(tmp_path)
    with caplog.at_level(logging.WARNING):
        assert lookup_table(3, 5, locator) is not None
    assert "Found 2 factor tables named c03minus.txt" in caplog.text


def test_table_names():
    assert FACTOR_TABLE_NAMES[2] == "c02minus.txt"
    assert FACTOR_TABLE_NAMES[12] == "c12minus.txt"
    assert sorted(FACTOR_TABLE_NAMES) == [2, 3, 5, 6, 7, 10, 11, 12]


# ==================== Corruption ====================

def test_wrong_product_is_corrupt():
    locator = InMemoryTableLocator({3: HEADER + "  20  10  2^4.5^2.11^2.61.1183\n"})
    with pytest.raises(CorruptTableData, match="Product of factors"):
        lookup_table(3, 20, locator)


def test_non_prime_factor_is_corrupt():
    """25 in place of 5^2 keeps the product but is not prime"""
    locator = InMemoryTableLocator({3: HEADER + "  20  9  2^4.25.11^2.61.1181\n"})
    with pytest.raises(CorruptTableData, match="fails the primality test"):
        lookup_table(3, 20, locator)


def test_malformed_matching_line_is_corrupt():
    locator = InMemoryTableLocator({3: HEADER + "  20  10  2^4.5^2.11^2.61.11?81\n"})
    with pytest.raises(CorruptTableData):
        lookup_table(3, 20, locator)


def test_unrelated_malformed_lines_do_not_break_lookup():
    text = HEADER + "  295  9  2.5^2.1181...68349\n  bogus\n  4  5  2^4.5\n"
    locator = InMemoryTableLocator({3: text})
    assert as_pairs(lookup_table(3, 4, locator)) == [(2, 4), (5, 1)]


def test_factor_count_mismatch_only_warns(caplog):
    locator = InMemoryTableLocator({3: HEADER + "  4  2  2^4.5\n"})
    with caplog.at_level(logging.WARNING):
        assert as_pairs(lookup_table(3, 4, locator)) == [(2, 4), (5, 1)]
    assert "says 2 factors but lists 5" in caplog.text


def test_in_memory_locator_missing_table():
    with pytest.raises(MissingFactorTable):
        lookup_table(2, 4, InMemoryTableLocator({3: HEADER}))


# ==================== Fixed-width edge ====================

MERSENNE_64 = HEADER + "   64     7  3.5.17.257.641.65537.6700417\n"


@pytest.mark.parametrize("kind", [int, UInt64, BigInt])
def test_entry_filling_64_bits(kind):
    """2^64 - 1 fits UInt64 even though 2^64 does not"""
    factors = lookup_table(2, 64, InMemoryTableLocator({2: MERSENNE_64}), kind=kind)
    assert as_pairs(factors) == [
        (3, 1), (5, 1), (17, 1), (257, 1), (641, 1), (65537, 1), (6700417, 1)
    ]
    assert all(isinstance(f.prime, kind) for f in factors)


@pytest.mark.parametrize("spec", ["2..5", "1181...68349", ".2^4.5"])
def test_empty_factor_is_corrupt(spec):
    with pytest.raises(CorruptTableData, match="Empty factor"):
        parse_factor_spec(spec)


def test_trailing_dot_is_allowed():
    assert as_pairs(parse_factor_spec("2^4.5.")) == [(2, 4), (5, 1)]


def test_abbreviated_matching_line_is_corrupt():
    locator = InMemoryTableLocator({3: HEADER + "  20  10  2^4.5^2.11^2...1181\n"})
    with pytest.raises(CorruptTableData, match="Empty factor"):
        lookup_table(3, 20, locator)
