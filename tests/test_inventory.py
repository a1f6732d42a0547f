"""Tests for Inventory: cache-backed repository lookup and the ignore list."""

import shutil
from pathlib import Path

import pytest

from pygit_global import AlreadyIgnoredError, IgnoreList, Inventory, Repository


def _paths(base: Path, *names: str) -> list[Repository]:
    return [Repository(str(base / name)) for name in names]


class TestGetRepositories:
    def test_scan_then_list(self, three_repos):
        base, config = three_repos
        inventory = Inventory(config)

        assert inventory.get_repositories() == _paths(base, "a", "b", "c")
        lines = config.cache_path.read_text().splitlines()
        assert len(lines) == 4

    def test_uses_cache_when_valid(self, three_repos, init_repo):
        base, config = three_repos
        inventory = Inventory(config)
        inventory.get_repositories()

        init_repo(base / "d")
        # not rescanned: the cache still matches this configuration
        assert inventory.get_repositories() == _paths(base, "a", "b", "c")

    def test_rescan_picks_up_new_repo(self, three_repos, init_repo):
        base, config = three_repos
        inventory = Inventory(config)
        inventory.get_repositories()

        init_repo(base / "d")
        assert inventory.rescan() == _paths(base, "a", "b", "c", "d")

    def test_config_change_triggers_rescan(self, three_repos):
        base, config = three_repos
        Inventory(config).get_repositories()

        narrowed = config.with_updates(ignored_patterns=(str(base / "c"),))
        assert Inventory(narrowed).get_repositories() == _paths(base, "a", "b")

    def test_deleted_repo_pruned_from_cached_list(self, three_repos):
        base, config = three_repos
        inventory = Inventory(config)
        inventory.get_repositories()

        shutil.rmtree(base / "b")
        assert inventory.get_repositories() == _paths(base, "a", "c")
        assert inventory.cache.is_valid(config)

    def test_clear_cache(self, three_repos):
        _base, config = three_repos
        inventory = Inventory(config)
        inventory.get_repositories()
        inventory.clear_cache()
        assert not config.cache_path.exists()


class TestIgnoreRepository:
    def test_ignore_then_rescan(self, three_repos):
        base, config = three_repos
        inventory = Inventory(config)
        inventory.get_repositories()

        inventory.ignore_repository(str(base / "b"))
        inventory.clear_cache()
        assert inventory.get_repositories() == _paths(base, "a", "c")

    def test_ignore_filters_fresh_cache(self, three_repos):
        base, config = three_repos
        inventory = Inventory(config)
        inventory.get_repositories()

        inventory.ignore_repository(str(base / "a"))
        assert inventory.get_repositories() == _paths(base, "b", "c")

    def test_ignore_stores_canonical_path(self, three_repos, tmp_path: Path):
        base, config = three_repos
        link = tmp_path / "shortcut"
        link.symlink_to(base / "b")

        stored = Inventory(config).ignore_repository(str(link))
        assert stored == str((base / "b").resolve())
        assert config.ignore_path.read_text().splitlines() == [stored]

    def test_ignore_twice_rejected(self, three_repos):
        base, config = three_repos
        inventory = Inventory(config)
        inventory.ignore_repository(str(base / "a"))
        with pytest.raises(AlreadyIgnoredError):
            inventory.ignore_repository(str(base / "a"))
        assert inventory.ignored_repositories() == [str((base / "a").resolve())]

    def test_ignored_repositories_empty(self, three_repos):
        _base, config = three_repos
        assert Inventory(config).ignored_repositories() == []


class TestIgnoreList:
    def test_creates_parent_directory(self, tmp_path: Path):
        ignore_file = tmp_path / "nested" / "dir" / "ignored.txt"
        IgnoreList(ignore_file).add(tmp_path)
        assert ignore_file.is_file()

    def test_load_skips_blanks_and_duplicates(self, tmp_path: Path):
        ignore_file = tmp_path / "ignored.txt"
        ignore_file.write_text("/x\n\n/y\n/x\n")
        assert IgnoreList(ignore_file).load() == ["/x", "/y"]

    def test_add_after_missing_final_newline(self, tmp_path: Path):
        ignore_file = tmp_path / "ignored.txt"
        ignore_file.write_text("/x")
        IgnoreList(ignore_file).add(tmp_path)
        assert ignore_file.read_text().splitlines() == ["/x", str(tmp_path.resolve())]
