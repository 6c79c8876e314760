"""Tests for the registry lookup cache."""

from __future__ import annotations

import json
from pathlib import Path

from declcritic.registry.base import PackageInfo
from declcritic.registry.cache import RegistryCache


def test_cache_round_trips_through_disk(tmp_path: Path) -> None:
    path = tmp_path / "cache" / "registry.json"
    cache = RegistryCache(path)
    cache.store("left-pad", PackageInfo(exists=True, versions=["1.0.0"], tags={"latest": "1.0.0"}))
    cache.store("nope", PackageInfo.not_found())
    cache.persist()

    reloaded = RegistryCache(path)

    assert reloaded.get("left-pad") == PackageInfo(exists=True, versions=["1.0.0"], tags={"latest": "1.0.0"})
    assert reloaded.get("nope") == PackageInfo.not_found()
    assert len(reloaded) == 2


def test_cache_is_written_only_on_persist(tmp_path: Path) -> None:
    path = tmp_path / "registry.json"
    cache = RegistryCache(path)
    cache.store("pkg", PackageInfo.not_found())
    assert not path.exists()
    cache.persist()
    assert path.exists()


def test_cache_ignores_invalid_snapshots(tmp_path: Path) -> None:
    path = tmp_path / "registry.json"
    path.write_text("not json", encoding="utf-8")
    assert len(RegistryCache(path)) == 0

    path.write_text(json.dumps({"version": 99, "entries": {"pkg": {"info": {}}}}), encoding="utf-8")
    assert RegistryCache(path).get("pkg") is None

    path.write_text(json.dumps({"version": 1, "entries": {"pkg": {"info": {"exists": "yes"}}}}), encoding="utf-8")
    assert RegistryCache(path).get("pkg") is None


def test_cache_without_path_is_memory_only() -> None:
    cache = RegistryCache(None)
    cache.store("pkg", PackageInfo.not_found())
    cache.persist()
    assert cache.get("pkg") == PackageInfo.not_found()
