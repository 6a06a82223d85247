"""Tests for the command line interface."""

import json

import pytest

from npm_semver.cli import EXIT_ERROR, EXIT_FINDINGS, EXIT_OK, EXIT_UNSATISFIED, main


class TestParseCommands:
    def test_version(self, capsys):
        assert main(["version", "1.2.3-rc.1+b.5"]) == EXIT_OK
        assert capsys.readouterr().out == "1.2.3-rc.1+b.5\n"

    def test_range(self, capsys):
        assert main(["range", "^1.2.3 || ~0.4"]) == EXIT_OK
        assert capsys.readouterr().out == ">=1.2.3 <2.0.0 || >=0.4.0 <0.5.0\n"

    @pytest.mark.parametrize(
        "version, expr, code",
        [
            ("1.9.0", "^1.2.3", EXIT_OK),
            ("2.0.0", "^1.2.3", EXIT_UNSATISFIED),
            ("1.2.2", "<1.2.3", EXIT_OK),
        ],
    )
    def test_satisfies(self, version, expr, code):
        assert main(["satisfies", version, expr]) == code

    @pytest.mark.parametrize("argv", [["version", "1.2"], ["range", "1..2"], ["satisfies", "1.0.0", "^"]])
    def test_syntax_error(self, argv, capsys):
        assert main(argv) == EXIT_ERROR
        assert capsys.readouterr().err.startswith("ERROR: Invalid syntax:")


class TestCheckCommand:
    def test_findings_fail(self, npm_project, capsys):
        assert main(["check", "--root", str(npm_project)]) == EXIT_FINDINGS
        report = json.loads(capsys.readouterr().out)
        assert report["totals"]["findings"] == 1

    def test_warn_only_flag(self, npm_project):
        assert main(["check", "--root", str(npm_project), "--warn-only"]) == EXIT_OK

    def test_warn_only_env(self, npm_project, monkeypatch):
        monkeypatch.setenv("NPM_SEMVER_WARN_ONLY", "true")
        assert main(["check", "--root", str(npm_project)]) == EXIT_OK

    def test_markdown(self, npm_project, capsys):
        main(["check", "--root", str(npm_project), "--format", "markdown"])
        assert capsys.readouterr().out.startswith("# npm-semver Summary")

    def test_clean_repository(self, tmp_path, write_json):
        write_json(tmp_path / "package.json", {"dependencies": {"a": "1.x"}})
        write_json(tmp_path / "package-lock.json", {"packages": {"node_modules/a": {"version": "1.4.0"}}})
        assert main(["check", "--root", str(tmp_path)]) == EXIT_OK

    def test_config_error(self, tmp_path, capsys):
        assert main(["check", "--root", str(tmp_path), "--config", str(tmp_path / "nope.json")]) == EXIT_ERROR
        assert "Configuration file not found" in capsys.readouterr().err

    def test_manifest_error(self, tmp_path, capsys):
        (tmp_path / "package.json").write_text("{", encoding="utf-8")
        assert main(["check", "--root", str(tmp_path)]) == EXIT_ERROR
        assert "Invalid JSON" in capsys.readouterr().err
