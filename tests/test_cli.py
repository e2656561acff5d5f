import logging
import shutil
import unittest
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

import commitver.cli as cli
from commitver.config.loader import ConfigError
from commitver.derive import RepoContext
from commitver.semver import Version
from commitver.vcs.git_client import GitError


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self.context = RepoContext(cwd=Path("/repo/sub"), repo_root=Path("/repo"))

    def test_prints_single_version_line(self) -> None:
        runner = CliRunner()
        with patch.object(cli.RepoContext, "discover", return_value=self.context):
            with patch.object(cli, "load_config", return_value={}):
                with patch.object(cli, "derive_version", return_value=Version(1, 2, 3)) as derive:
                    result = runner.invoke(cli.main, [])
        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS)
        self.assertEqual(result.output, "1.2.3\n")
        context, client, config = derive.call_args[0]
        self.assertIs(context, self.context)
        self.assertEqual(client.repo_root, Path("/repo"))

    def test_not_a_repository(self) -> None:
        runner = CliRunner()
        with patch.object(cli.RepoContext, "discover", return_value=None):
            with patch.object(cli, "derive_version") as derive:
                result = runner.invoke(cli.main, [])
        self.assertEqual(result.exit_code, cli.EXIT_NO_REPO)
        self.assertEqual(result.exit_code, 1)
        lines = result.output.splitlines()
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].startswith("Usage: commitver"))
        self.assertIn("not inside a Git repository", lines[1])
        derive.assert_not_called()

    def test_config_error(self) -> None:
        runner = CliRunner()
        with patch.object(cli.RepoContext, "discover", return_value=self.context):
            with patch.object(cli, "load_config", side_effect=ConfigError("bad json")):
                result = runner.invoke(cli.main, [])
        self.assertEqual(result.exit_code, cli.EXIT_CONFIG_ERROR)
        self.assertIn("Configuration error: bad json", result.output)

    def test_git_failure(self) -> None:
        runner = CliRunner()
        with patch.object(cli.RepoContext, "discover", return_value=self.context):
            with patch.object(cli, "load_config", return_value={}):
                with patch.object(cli, "derive_version", side_effect=GitError("fatal: broken")):
                    result = runner.invoke(cli.main, [])
        self.assertEqual(result.exit_code, cli.EXIT_VCS_FAILURE)
        self.assertIn("Git error: fatal: broken", result.output)

    def test_unexpected_error(self) -> None:
        runner = CliRunner()
        with patch.object(cli.RepoContext, "discover", return_value=self.context):
            with patch.object(cli, "load_config", side_effect=RuntimeError("boom")):
                result = runner.invoke(cli.main, [])
        self.assertEqual(result.exit_code, cli.EXIT_GENERIC_ERROR)
        self.assertIn("Unexpected error: boom", result.output)

    def test_version_option(self) -> None:
        result = CliRunner().invoke(cli.main, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("commitver", result.output)


def test_cli_end_to_end_from_subdirectory(git_repo, monkeypatch):
    git_repo.commit("init", {"src/app.py": "print('hi')\n"})
    git_repo.commit("feat [minor]")
    git_repo.commit("fix")
    monkeypatch.chdir(git_repo.root / "src")

    result = CliRunner().invoke(cli.main, [])
    assert result.exit_code == 0
    assert result.output == "0.1.1\n"


def test_cli_empty_repository(git_repo, monkeypatch):
    monkeypatch.chdir(git_repo.root)
    result = CliRunner().invoke(cli.main, [])
    assert result.exit_code == 0
    assert result.output == "0.0.0\n"


def test_cli_verbose_keeps_stdout_clean(git_repo, monkeypatch):
    git_repo.commit("init", {".version-override": "version-at-commit: 1.0.0\n"})
    git_repo.commit("[minor] feature")
    monkeypatch.chdir(git_repo.root)

    result = CliRunner().invoke(cli.main, ["--verbose"])
    assert result.exit_code == 0
    assert result.stdout.splitlines()[-1] == "1.1.0"


@pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")
def test_cli_fails_when_git_rejects_repository(git_env, tmp_path, monkeypatch):
    broken = tmp_path / "broken"
    broken.mkdir()
    (broken / ".git").write_text("gitdir: /nonexistent/elsewhere\n")
    monkeypatch.chdir(broken)

    result = CliRunner().invoke(cli.main, [])
    assert result.exit_code == cli.EXIT_VCS_FAILURE
    assert "0.0.0" not in result.output
    assert "Git error" in result.output


def test_quiet_run_detaches_package_loggers(git_repo, monkeypatch):
    git_repo.commit("init")
    monkeypatch.chdir(git_repo.root)
    package_logger = logging.getLogger("commitver.history.replay")
    runner = CliRunner()

    assert runner.invoke(cli.main, ["--verbose"]).exit_code == 0
    assert package_logger.propagate is True

    result = runner.invoke(cli.main, [])
    assert result.exit_code == 0
    assert package_logger.propagate is False
    assert result.output == "0.0.1\n"


if __name__ == "__main__":
    unittest.main()
