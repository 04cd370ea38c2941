"""
Tests for CLI commands — setup, shell, detect, config check, and global options.
"""

import json
import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from devbox.core.models.system import OSKind, PackageManager, SystemProfile
from devbox.main import cli

BUN_LINE = 'export PATH="$HOME/.bun/bin:$PATH"'


@pytest.fixture
def env_home(home: Path, monkeypatch) -> Path:
    """Point $HOME and $SHELL at a temp home for the CLI."""
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("SHELL", "/bin/bash")
    monkeypatch.delenv("DEVBOX_LOG_LEVEL", raising=False)
    monkeypatch.delenv("DEVBOX_LOG_FILE", raising=False)
    return home


@pytest.fixture
def fake_system(env_home: Path, monkeypatch) -> SystemProfile:
    """Make detect_system return a fixed Ubuntu profile."""
    profile = SystemProfile(
        os=OSKind.LINUX,
        distro="Ubuntu",
        version="24.04",
        package_manager=PackageManager.APT,
        login_shell="/bin/bash",
        home=str(env_home),
    )
    monkeypatch.setattr(
        "devbox.core.services.detection.detect_system",
        lambda **kwargs: profile,
    )
    return profile


@pytest.fixture
def devbox_yml(tmp_path: Path) -> Path:
    """A config with one alias group and nothing that depends on the host."""
    content = textwrap.dedent("""\
        path_entries: []
        aliases:
          - comment: Useful aliases
            lines:
              - alias ll='ls -alF'
              - alias la='ls -A'
        tools: []
    """)
    path = tmp_path / "devbox.yml"
    path.write_text(content)
    return path


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "provision a developer workstation" in result.output
        for command in ("setup", "detect", "verify", "shell", "config"):
            assert command in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestShellAdd:
    """Tests for `devbox shell add`."""

    def test_adds_and_reports(self, env_home: Path):
        (env_home / ".bashrc").write_text("# mine\n")
        runner = CliRunner()

        result = runner.invoke(cli, ["shell", "add", BUN_LINE, "-m", "Bun"])

        assert result.exit_code == 0, result.output
        assert "Added to" in result.output
        assert "Backups:" in result.output
        assert (env_home / ".bashrc").read_text() == f"# mine\n\n# Bun\n{BUN_LINE}\n"

    def test_json_and_idempotent(self, env_home: Path):
        (env_home / ".bashrc").write_text("")
        (env_home / ".zshrc").write_text("")
        runner = CliRunner()

        first = runner.invoke(cli, ["-q", "shell", "add", "alias ll='ls -alF'", "--json"])
        second = runner.invoke(cli, ["-q", "shell", "add", "alias ll='ls -alF'", "--json"])

        assert first.exit_code == 0, first.output
        data = json.loads(first.output)
        assert data["ok"] is True
        assert data["backup_dir"] is not None
        assert [o["status"] for o in data["outcomes"]] == ["added", "added"]

        assert second.exit_code == 0, second.output
        again = json.loads(second.output)
        assert [o["status"] for o in again["outcomes"]] == ["present", "present"]
        assert again["backup_dir"] is None

    def test_fallback_created(self, env_home: Path):
        runner = CliRunner()

        result = runner.invoke(cli, ["-q", "shell", "add", "alias la='ls -A'", "--json"])

        assert result.exit_code == 0, result.output
        outcomes = json.loads(result.output)["outcomes"]
        assert [o["target"] for o in outcomes] == [str(env_home / ".bashrc")]
        assert "alias la='ls -A'" in (env_home / ".bashrc").read_text().splitlines()

    def test_rejects_multiline(self, env_home: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["shell", "add", "a\nb"])
        assert result.exit_code == 1
        assert not (env_home / ".bashrc").exists()


class TestShellTargets:
    """Tests for `devbox shell targets`."""

    def test_preview_does_not_create(self, env_home: Path, monkeypatch):
        monkeypatch.setenv("SHELL", "/usr/bin/zsh")
        runner = CliRunner()

        result = runner.invoke(cli, ["shell", "targets", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [
            {"path": str(env_home / ".zshrc"), "shell": "zsh", "exists": False},
        ]
        assert not (env_home / ".zshrc").exists()

    def test_lists_existing(self, env_home: Path):
        (env_home / ".bashrc").write_text("")
        (env_home / ".config" / "fish").mkdir(parents=True)
        (env_home / ".config" / "fish" / "config.fish").write_text("")
        runner = CliRunner()

        result = runner.invoke(cli, ["shell", "targets"])

        assert result.exit_code == 0, result.output
        assert ".bashrc [bash]" in result.output
        assert "config.fish [fish]" in result.output
        assert "will be created" not in result.output


class TestConfigCheck:
    """Tests for `devbox config check`."""

    def test_valid(self, devbox_yml: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(devbox_yml), "config", "check"])
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output
        assert "Alias groups:  1" in result.output

    def test_valid_json(self, devbox_yml: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["-q", "--config", str(devbox_yml), "config", "check", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["config"]["aliases"][0]["comment"] == "Useful aliases"

    def test_invalid(self, tmp_path: Path):
        bad = tmp_path / "devbox.yml"
        bad.write_text("aliases: 3\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(bad), "config", "check"])
        assert result.exit_code == 1
        assert "Invalid devbox configuration" in result.output

    def test_missing(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(tmp_path / "nope.yml"), "config", "check"])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestDetectCommand:
    """Tests for `devbox detect`."""

    def test_json(self, fake_system: SystemProfile):
        runner = CliRunner()
        result = runner.invoke(cli, ["-q", "detect", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["distro"] == "Ubuntu"
        assert data["package_manager"] == "apt"

    def test_text(self, fake_system: SystemProfile):
        runner = CliRunner()
        result = runner.invoke(cli, ["detect"])
        assert result.exit_code == 0
        assert "Ubuntu 24.04" in result.output
        assert "apt" in result.output


class TestSetupCommand:
    """Tests for `devbox setup`."""

    def _invoke(self, devbox_yml: Path, tmp_path: Path, *extra: str):
        """Run setup; ``-q`` in ``extra`` is passed as a global option."""
        global_opts = ["-q"] if "-q" in extra else []
        setup_opts = [e for e in extra if e != "-q"]
        runner = CliRunner()
        return runner.invoke(cli, [
            *global_opts,
            "--config", str(devbox_yml),
            "setup", "--skip-verify", "--run-log", str(tmp_path / "run.log"),
            *setup_opts,
        ])

    def test_first_run(self, fake_system, devbox_yml: Path, env_home: Path, tmp_path: Path):
        (env_home / ".bashrc").write_text("# mine\n")

        result = self._invoke(devbox_yml, tmp_path)

        assert result.exit_code == 0, result.output
        assert "Result: 2 line(s) added, 0 failed" in result.output
        assert "Backups saved to" in result.output
        assert (env_home / ".tmux.conf").is_file()
        content = (env_home / ".bashrc").read_text()
        assert content == "# mine\n\n# Useful aliases\nalias ll='ls -alF'\n\nalias la='ls -A'\n"
        assert "Added to" in (tmp_path / "run.log").read_text()

    def test_rerun_is_noop(self, fake_system, devbox_yml: Path, env_home: Path, tmp_path: Path):
        (env_home / ".bashrc").write_text("")
        self._invoke(devbox_yml, tmp_path)
        before = (env_home / ".bashrc").read_text()

        result = self._invoke(devbox_yml, tmp_path, "-q", "--json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["provision"]["added"] == 0
        assert data["provision"]["tmux"]["status"] == "kept"
        assert data["verification"] is None
        assert data["run_log"] == str(tmp_path / "run.log")
        assert (env_home / ".bashrc").read_text() == before

    def test_skip_flags(self, fake_system, devbox_yml: Path, env_home: Path, tmp_path: Path):
        result = self._invoke(devbox_yml, tmp_path, "-q", "--json", "--skip-tmux", "--skip-aliases")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["provision"]["tmux"] is None
        assert data["provision"]["outcomes"] == []
        assert not (env_home / ".tmux.conf").exists()

    def test_unsupported_system(self, env_home: Path, devbox_yml: Path, tmp_path: Path, monkeypatch):
        from devbox.core.services.detection import UnsupportedSystemError

        def boom(**kwargs):
            raise UnsupportedSystemError("Unsupported OS: Windows")

        monkeypatch.setattr("devbox.core.services.detection.detect_system", boom)

        result = self._invoke(devbox_yml, tmp_path)

        assert result.exit_code == 1
        assert "Unsupported OS" in result.output


class TestShellAddValidation:
    """Input checks for `devbox shell add`."""

    def test_rejects_multiline_comment(self, env_home: Path):
        (env_home / ".bashrc").write_text("")
        runner = CliRunner()

        result = runner.invoke(cli, ["shell", "add", "alias ll='ls -alF'", "-m", "x\nrm -rf ~"])

        assert result.exit_code == 1
        assert "single-line comment" in result.output
        assert (env_home / ".bashrc").read_text() == ""
