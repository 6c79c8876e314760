"""Tests for package name derivation and mangling."""

from __future__ import annotations

from pathlib import Path

import pytest

from declcritic.names import DEFAULT_PACKAGE_NAME, dt_to_npm_name, find_dts_name, npm_to_dt_name


@pytest.mark.parametrize("suffix", [".d.ts", ".d.mts", ".d.cts"])
def test_index_declarations_use_parent_directory(suffix: str) -> None:
    assert find_dts_name(Path("types") / "jquery" / f"index{suffix}") == "jquery"


def test_named_declaration_uses_file_name() -> None:
    assert find_dts_name("types/lodash.debounce.d.ts") == "lodash.debounce"


def test_bare_index_falls_back_to_default() -> None:
    assert find_dts_name("index.d.ts") == DEFAULT_PACKAGE_NAME


def test_scoped_names_are_unmangled() -> None:
    assert dt_to_npm_name("babel__core") == "@babel/core"
    assert dt_to_npm_name("left-pad") == "left-pad"


@pytest.mark.parametrize("name", ["@babel/core", "@types/node", "@a/b__c"])
def test_mangling_round_trips(name: str) -> None:
    assert dt_to_npm_name(npm_to_dt_name(name)) == name


def test_unscoped_names_are_unchanged_by_inverse() -> None:
    assert npm_to_dt_name("express") == "express"
