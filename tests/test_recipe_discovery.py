"""Tests for recipe file discovery"""
import os
import sys
from pathlib import Path

import pytest

from lib.recipe_discovery import (
    RECIPE_EXTENSION,
    SkipPolicy,
    SkippedEntry,
    is_recipe_file,
    iter_recipe_files,
)


def write(path: Path, content: str = "@salt") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class TestIsRecipeFile:
    def test_cook_extension(self):
        assert is_recipe_file(Path("soup.cook"))
        assert RECIPE_EXTENSION == ".cook"

    def test_backup_suffix_rejected(self):
        assert not is_recipe_file(Path("soup.cook.bak"))

    def test_extension_is_case_sensitive(self):
        assert not is_recipe_file(Path("soup.COOK"))

    def test_other_extensions_rejected(self):
        assert not is_recipe_file(Path("notes.md"))
        assert not is_recipe_file(Path("cook"))


class TestIterRecipeFiles:
    def test_recurses_into_subdirectories(self, tmp_path):
        write(tmp_path / "bread.cook")
        write(tmp_path / "soup" / "leek.cook")
        write(tmp_path / "soup" / "winter" / "borscht.cook")

        found = sorted(p.relative_to(tmp_path).as_posix() for p in iter_recipe_files(tmp_path))
        assert found == ["bread.cook", "soup/leek.cook", "soup/winter/borscht.cook"]

    def test_only_exact_extension_yielded(self, tmp_path):
        write(tmp_path / "keep.cook")
        write(tmp_path / "old.cook.bak")
        write(tmp_path / "README.md")
        write(tmp_path / "SHOUT.COOK")

        found = [p.name for p in iter_recipe_files(tmp_path)]
        assert found == ["keep.cook"]

    def test_directory_named_like_recipe_not_yielded(self, tmp_path):
        (tmp_path / "folder.cook").mkdir()
        write(tmp_path / "folder.cook" / "inside.cook")

        found = [p.name for p in iter_recipe_files(tmp_path)]
        assert found == ["inside.cook"]

    def test_empty_directory(self, tmp_path):
        assert list(iter_recipe_files(tmp_path)) == []

    def test_returns_generator(self, tmp_path):
        write(tmp_path / "a.cook")
        result = iter_recipe_files(tmp_path)
        assert iter(result) is result


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
class TestSymlinks:
    def test_follows_directory_symlinks(self, tmp_path):
        outside = tmp_path / "shared"
        write(outside / "pesto.cook")
        root = tmp_path / "recipes"
        root.mkdir()
        (root / "linked").symlink_to(outside, target_is_directory=True)

        found = [p.relative_to(root).as_posix() for p in iter_recipe_files(root)]
        assert found == ["linked/pesto.cook"]

    def test_symlink_cycle_terminates(self, tmp_path):
        write(tmp_path / "a.cook")
        (tmp_path / "loop").symlink_to(tmp_path, target_is_directory=True)

        found = [p.name for p in iter_recipe_files(tmp_path)]
        assert found == ["a.cook"]

    def test_nested_cycle_terminates(self, tmp_path):
        write(tmp_path / "soup" / "leek.cook")
        (tmp_path / "soup" / "back").symlink_to(tmp_path, target_is_directory=True)

        found = [p.relative_to(tmp_path).as_posix() for p in iter_recipe_files(tmp_path)]
        assert found == ["soup/leek.cook"]

    def test_alias_sorting_first_does_not_hide_real_directory(self, tmp_path):
        """Both the alias and the real folder are scanned."""
        write(tmp_path / "soup" / "leek.cook")
        (tmp_path / "0-favourites").symlink_to(tmp_path / "soup", target_is_directory=True)

        found = [p.relative_to(tmp_path).as_posix() for p in iter_recipe_files(tmp_path)]
        assert found == ["0-favourites/leek.cook", "soup/leek.cook"]

    def test_broken_symlink_is_skipped_and_recorded(self, tmp_path):
        write(tmp_path / "good.cook")
        (tmp_path / "gone.cook").symlink_to(tmp_path / "missing.cook")
        policy = SkipPolicy()

        found = [p.name for p in iter_recipe_files(tmp_path, policy)]

        assert found == ["good.cook"]
        assert [entry.path.name for entry in policy.skipped] == ["gone.cook"]
        assert "Broken symbolic link" in policy.skipped[0].reason


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="named pipes not available")
def test_non_regular_file_is_skipped_and_recorded(tmp_path):
    write(tmp_path / "good.cook")
    os.mkfifo(tmp_path / "pipe.cook")
    policy = SkipPolicy()

    found = [p.name for p in iter_recipe_files(tmp_path, policy)]

    assert found == ["good.cook"]
    assert [entry.path.name for entry in policy.skipped] == ["pipe.cook"]
    assert "Not a regular file" in policy.skipped[0].reason
    assert "symbolic link" not in policy.skipped[0].reason


@pytest.mark.skipif(
    sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
    reason="permission bits are not enforced",
)
def test_unreadable_subdirectory_does_not_abort_scan(tmp_path):
    write(tmp_path / "ok.cook")
    locked = tmp_path / "locked"
    write(locked / "hidden.cook")
    locked.chmod(0)
    policy = SkipPolicy()
    try:
        found = [p.name for p in iter_recipe_files(tmp_path, policy)]
    finally:
        locked.chmod(0o755)

    assert found == ["ok.cook"]
    assert len(policy.skipped) == 1


class TestSkipPolicy:
    def test_record_keeps_path_and_reason(self):
        policy = SkipPolicy()
        policy.record("recipes/bad.cook", PermissionError("Permission denied"))

        assert policy.skipped == [
            SkippedEntry(path=Path("recipes/bad.cook"), reason="PermissionError: Permission denied")
        ]

    def test_policies_do_not_share_state(self):
        first = SkipPolicy()
        first.record("x.cook", OSError("boom"))
        assert SkipPolicy().skipped == []
