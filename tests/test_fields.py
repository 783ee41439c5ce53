from __future__ import annotations

import pytest

from ingest_core.fields import (
    KeyValueFieldNameMapper,
    LowerCaseFieldNameMapper,
    NoOpFieldNameMapper,
    safe_name,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("name", "name"),
        ("  first name  ", "first_name"),
        ("a b  c", "a_b__c"),
        ("", ""),
        ("   ", ""),
        (None, ""),
    ],
)
def test_safe_name(raw, expected):
    assert safe_name(raw) == expected


@pytest.mark.parametrize("raw", ["x", " Post Code ", "a  b", "", None, "\tTab Name"])
def test_safe_name_idempotent(raw):
    once = safe_name(raw)
    assert safe_name(once) == once


def test_noop_mapper_is_identity():
    m = NoOpFieldNameMapper()
    assert m.map("Post_Code") == "Post_Code"
    assert m.map("") == ""


def test_key_value_mapper_renames_and_passes_through():
    m = KeyValueFieldNameMapper(mappings={"First_Name": "first", "Surname": "last"})
    assert m.map("First_Name") == "first"
    assert m.map("Surname") == "last"
    assert m.map("Age") == "Age"
    assert m.map("") == ""


def test_lowercase_mapper():
    assert LowerCaseFieldNameMapper().map("Post_Code") == "post_code"
