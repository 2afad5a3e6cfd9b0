# -*- coding: utf-8 -*-
"""Unit tests for the format and separator heuristics."""

from itertools import permutations

import pytest

from schema_scout.data.detection import detect_format, detect_separator
from schema_scout.data.formats import Format


# --- detect_format --- #

@pytest.mark.parametrize("first,last,expected", [
    ('{"a":1}', '{"a":1}', Format.JSON),
    ('{"a":1}', '{"a":2', Format.JSON),
    ("[1,2", "...,3]", Format.ARRAY_JSON),
    ('[{"a":1},', '{"a":2}]', Format.ARRAY_JSON),
    ("[1,2,3]", "[1,2,3]", Format.ARRAY_JSON),
    ("a,b,c", "1,2,3", Format.DSV),
    ("[1,2", "3,4", Format.DSV),
    ('{"a":1', '{"a":1}', Format.DSV),
    ("", "", Format.DSV),
])
def test_detect_format(first, last, expected):
    assert detect_format(first, last) is expected


def test_detect_format_keeps_whitespace():
    """Lines are classified as read, without stripping."""
    assert detect_format(' {"a":1}', ' {"a":1}') is Format.DSV
    assert detect_format('{"a":1} ', '{"a":1} ') is Format.DSV
    assert detect_format("[1,", "2] ") is Format.DSV


def test_detect_format_is_deterministic():
    results = {detect_format("[1,2", "3]") for _ in range(20)}
    assert results == {Format.ARRAY_JSON}


# --- detect_separator --- #

def test_detect_separator_semicolon():
    assert detect_separator(["a;b;c", "d;e;f"]) == ";"


@pytest.mark.parametrize("lines", list(permutations(["a;b;c", "d;e;f", "1;2|3"])))
def test_detect_separator_ignores_line_order(lines):
    assert detect_separator(list(lines)) == ";"


@pytest.mark.parametrize("lines,expected", [
    (["id\tname\tprice", "1\tpen\t2"], "\t"),
    (["id|name|price", "1|pen|2"], "|"),
    (["id,name", "1,pen"], ","),
    (['"a b";"c d";"e"', "'x';(y);z"], ";"),
    (["é;è;î", "à;À;É", "È;ç;+"], ";"),
    (["who@where?;now!;yes"], ";"),
])
def test_detect_separator_candidates(lines, expected):
    assert detect_separator(lines) == expected


@pytest.mark.parametrize("lines", [
    [],
    [""],
    ["hello world 42", "foo bar baz"],
    ['"quoted" (text) @ home? yes! 1+1'],
])
def test_detect_separator_without_candidate_is_none(lines):
    """No candidate left means no delimiter, not a default one."""
    assert detect_separator(lines) is None


def test_detect_separator_tie_goes_to_first_seen():
    assert detect_separator(["a|b,c"]) == "|"
    assert detect_separator(["a,b|c"]) == ","
    assert detect_separator(["a:b", "c;d", "e;f:g"]) == ":"


def test_detect_separator_counts_across_lines():
    """A character frequent on one line loses to one present on every line."""
    lines = ["a,b,c,d,e,f", "g|h", "i|j", "k|l", "m|n", "o|p", "q|r"]
    assert detect_separator(lines) == "|"


def test_detect_separator_accepts_any_iterable():
    assert detect_separator(line for line in ["a;b", "c;d"]) == ";"
