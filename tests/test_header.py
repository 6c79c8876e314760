"""Tests for declaration header parsing."""

from __future__ import annotations

import pytest

from declcritic.header import HeaderError, parse_header, parse_header_or_fail


def test_parses_name_version_and_metadata() -> None:
    header = parse_header_or_fail(
        "// Type definitions for foo 1.2\n"
        "// Project: https://github.com/example/foo, https://foo.example\n"
        "// TypeScript Version: 3.1\n"
        "export = foo;\n"
    )
    assert header.name == "foo"
    assert (header.library_major_version, header.library_minor_version) == (1, 2)
    assert header.requested_version == "1.2"
    assert header.projects == ["https://github.com/example/foo", "https://foo.example"]
    assert header.typescript_version == "3.1"
    assert not header.non_npm


def test_non_npm_header() -> None:
    header = parse_header_or_fail("\ufeff// Type definitions for non-npm package foo-browser 0.3\n")
    assert header.non_npm
    assert header.name == "foo-browser"


def test_zero_version_means_no_request() -> None:
    assert parse_header_or_fail("// Type definitions for foo 0.0\n").requested_version is None
    assert parse_header_or_fail("// Type definitions for foo\n").requested_version is None


def test_missing_header() -> None:
    with pytest.raises(HeaderError):
        parse_header_or_fail("export = foo;\n")
    assert parse_header("declare const x: number;") is None
