"""Tests for collision resolution."""

import pytest

from dirbackup import CollisionPolicy, Skip, WriteTo, resolve_collision
import dirbackup.backup._resolve as resolve_mod


class TestCollisionPolicy:
    @pytest.mark.parametrize("value, expected", [
        ("overwrite", CollisionPolicy.OVERWRITE),
        ("skip", CollisionPolicy.SKIP),
        ("RENAME", CollisionPolicy.RENAME),
        ("bogus", CollisionPolicy.OVERWRITE),
        (None, CollisionPolicy.OVERWRITE),
        (CollisionPolicy.SKIP, CollisionPolicy.SKIP),
    ])
    def test_parse(self, value, expected):
        assert CollisionPolicy.parse(value) is expected

    def test_str(self):
        assert str(CollisionPolicy.RENAME) == "rename"


class TestResolveCollision:
    def test_missing_destination(self, tmp_path):
        dest = tmp_path / "report.csv"
        for policy in CollisionPolicy:
            assert resolve_collision(dest, policy) == WriteTo(dest)

    def test_overwrite(self, tmp_path):
        dest = tmp_path / "report.csv"
        dest.write_text("old")
        assert resolve_collision(dest, CollisionPolicy.OVERWRITE) == WriteTo(dest)

    def test_unknown_policy_overwrites(self, tmp_path):
        dest = tmp_path / "report.csv"
        dest.write_text("old")
        assert resolve_collision(dest, "clobber") == WriteTo(dest)

    def test_skip(self, tmp_path):
        dest = tmp_path / "report.csv"
        dest.write_text("old")
        assert resolve_collision(dest, CollisionPolicy.SKIP) == Skip()

    def test_rename_first_free(self, tmp_path):
        dest = tmp_path / "report.csv"
        dest.write_text("old")
        assert resolve_collision(dest, "rename") == WriteTo(tmp_path / "report_1.csv")
        (tmp_path / "report_1.csv").write_text("older")
        assert resolve_collision(dest, "rename") == WriteTo(tmp_path / "report_2.csv")

    def test_rename_no_extension(self, tmp_path):
        dest = tmp_path / "Makefile"
        dest.write_text("all:")
        assert resolve_collision(dest, "rename") == WriteTo(tmp_path / "Makefile_1")

    def test_rename_dotfile(self, tmp_path):
        dest = tmp_path / ".bashrc"
        dest.write_text("x")
        assert resolve_collision(dest, "rename") == WriteTo(tmp_path / ".bashrc_1")

    def test_rename_uses_last_suffix(self, tmp_path):
        dest = tmp_path / "a.tar.gz"
        dest.write_bytes(b"x")
        assert resolve_collision(dest, "rename") == WriteTo(tmp_path / "a.tar_1.gz")

    def test_rename_gives_up(self, tmp_path, monkeypatch):
        monkeypatch.setattr(resolve_mod, "_MAX_RENAME_ATTEMPTS", 2)
        dest = tmp_path / "n.txt"
        for name in ("n.txt", "n_1.txt", "n_2.txt"):
            (tmp_path / name).write_text(name)
        assert resolve_collision(dest, "rename") == WriteTo(dest)

    def test_resolution_does_not_touch_disk(self, tmp_path):
        dest = tmp_path / "report.csv"
        dest.write_text("old")
        resolve_collision(dest, "rename")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["report.csv"]
