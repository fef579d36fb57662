"""Tests for Authorization header parsing."""

import pytest

from kalistheniks.api.middleware.auth import extract_bearer_token


@pytest.mark.parametrize("header,expected", [
    ("Bearer abc.def.ghi", "abc.def.ghi"),
    ("Bearer  padded ", "padded"),
    (None, ""),
    ("", ""),
    ("Bearer ", ""),
    ("Basic dXNlcjpwYXNz", ""),
])
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


@pytest.mark.parametrize("header", ["bearer abc", "BEARER abc", "Bearer\tabc"])
def test_scheme_must_match_exactly(header):
    assert extract_bearer_token(header) == ""
