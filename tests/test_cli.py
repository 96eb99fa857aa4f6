"""Tests for the dirbackup CLI."""

from dirbackup.cli import main

from conftest import files_under


class TestBackupCommand:
    def test_basic(self, runner, source_tree, target):
        result = runner.invoke(main, ["backup", str(source_tree), str(target)])
        assert result.exit_code == 0, result.output
        assert "Successfully copied 7 files" in result.output
        assert (target / "proj" / "a.txt").read_text() == "a"

    def test_exclude(self, runner, source_tree, target):
        result = runner.invoke(main, [
            "backup", "-x", "node_modules", "--exclude", "*.o",
            str(source_tree), str(target),
        ])
        assert result.exit_code == 0, result.output
        assert files_under(target) == {
            "proj/.hidden", "proj/a.txt", "proj/docs/guide.md", "proj/src/main.py",
        }

    def test_exclude_from(self, runner, source_tree, target, tmp_path):
        pfile = tmp_path / "excludes.txt"
        pfile.write_text("# generated stuff\nbuild\n\nnode_modules\n")
        result = runner.invoke(main, [
            "backup", "--exclude-from", str(pfile), str(source_tree), str(target),
        ])
        assert result.exit_code == 0, result.output
        assert "Successfully copied 4 files" in result.output

    def test_default_excludes(self, runner, source_tree, target):
        result = runner.invoke(main, [
            "backup", "--default-excludes", str(source_tree), str(target),
        ])
        assert result.exit_code == 0, result.output
        assert not (target / "proj" / "build").exists()
        assert not (target / "proj" / "node_modules").exists()

    def test_no_root_name(self, runner, source_tree, target):
        result = runner.invoke(main, [
            "backup", "--no-root-name", str(source_tree), str(target),
        ])
        assert result.exit_code == 0, result.output
        assert (target / "a.txt").exists()

    def test_gitignore(self, runner, source_tree, target):
        (source_tree / ".gitignore").write_text("src/\n")
        result = runner.invoke(main, [
            "backup", "--gitignore", str(source_tree), str(target),
        ])
        assert result.exit_code == 0, result.output
        assert not (target / "proj" / "src").exists()

    def test_on_collision_skip(self, runner, source_tree, target):
        runner.invoke(main, ["backup", str(source_tree), str(target)])
        result = runner.invoke(main, [
            "backup", "--on-collision", "skip", str(source_tree), str(target),
        ])
        assert result.exit_code == 0, result.output
        assert "Copied 0 files, skipped 7" in result.output

    def test_on_collision_from_env(self, runner, source_tree, target):
        runner.invoke(main, ["backup", str(source_tree), str(target)])
        result = runner.invoke(
            main, ["backup", str(source_tree), str(target)],
            env={"DIRBACKUP_ON_COLLISION": "rename"},
        )
        assert result.exit_code == 0, result.output
        assert (target / "proj" / "a_1.txt").exists()

    def test_invalid_collision_choice(self, runner, source_tree, target):
        result = runner.invoke(main, [
            "backup", "--on-collision", "clobber", str(source_tree), str(target),
        ])
        assert result.exit_code != 0

    def test_missing_source(self, runner, tmp_path, target):
        result = runner.invoke(main, ["backup", str(tmp_path / "nope"), str(target)])
        assert result.exit_code == 1
        assert "does not exist" in result.output
        assert not target.exists()

    def test_requires_target(self, runner, source_tree):
        result = runner.invoke(main, ["backup", str(source_tree)])
        assert result.exit_code != 0

    def test_errors_exit_nonzero(self, runner, source_tree, target):
        target.mkdir()
        (target / "proj").mkdir()
        (target / "proj" / "docs").write_text("in the way")
        result = runner.invoke(main, ["backup", str(source_tree), str(target)])
        assert result.exit_code == 1
        assert "ERROR:" in result.output
        assert "with 2 errors" in result.output

    def test_verbose_progress(self, runner, source_tree, target):
        result = runner.invoke(main, [
            "-v", "backup", "-x", "node_modules", "-x", "build",
            str(source_tree), str(target),
        ])
        assert result.exit_code == 0, result.output
        assert "[4/4] src/main.py" in result.output


class TestCountCommand:
    def test_count(self, runner, source_tree):
        result = runner.invoke(main, ["count", str(source_tree)])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "7"

    def test_count_with_excludes(self, runner, source_tree):
        result = runner.invoke(main, [
            "count", "-x", "node_modules", "-x", "build", str(source_tree),
        ])
        assert result.output.strip() == "4"

    def test_count_missing_source(self, runner, tmp_path):
        result = runner.invoke(main, ["count", str(tmp_path / "nope")])
        assert result.exit_code == 1
        assert "does not exist" in result.output
