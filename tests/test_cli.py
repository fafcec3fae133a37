import io
import logging

import pytest

import ai_commit.cli as cli_module
from ai_commit import __version__
from ai_commit.exceptions import ConfigError, NoStagedChangesError
from ai_commit.preferences import MemoryPreferenceStore, UserPreferences


def _cli(prefs=None):
    out, err = io.StringIO(), io.StringIO()
    prefs = prefs or UserPreferences(MemoryPreferenceStore())
    return cli_module.CLI(preferences=prefs, stdout=out, stderr=err), prefs, out, err


class _FakeWorkflow:
    instances: list = []
    raises: BaseException = None

    def __init__(self, git_repo, generator, preferences, stdout=None, stderr=None):
        self.git_repo = git_repo
        self.generator = generator
        self.preferences = preferences
        _FakeWorkflow.instances.append(self)

    def generate_and_commit(self):
        if _FakeWorkflow.raises is not None:
            raise _FakeWorkflow.raises


@pytest.fixture
def fake_workflow(monkeypatch):
    _FakeWorkflow.instances = []
    _FakeWorkflow.raises = None
    monkeypatch.setattr(cli_module, "CommitWorkflow", _FakeWorkflow)
    monkeypatch.setattr(cli_module, "select_driver", lambda config: object())
    monkeypatch.setattr(cli_module, "configure_logging", lambda *a, **k: None)
    return _FakeWorkflow


def test_cli_help_returns_zero(capsys):
    cli, _, _, _ = _cli()
    assert cli.run(["--help"]) == 0
    assert "OPENAI_API_KEY" in capsys.readouterr().out


@pytest.mark.parametrize("flag", ["--version", "-v"])
def test_cli_version(flag):
    cli, _, out, _ = _cli()
    assert cli.run([flag]) == 0
    assert out.getvalue().strip() == f"ai-commit version {__version__}"


def test_cli_unknown_argument_is_usage_error():
    cli, _, _, _ = _cli()
    assert cli.run(["--bogus"]) == 2


def test_cli_executes_workflow_success(fake_workflow, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("AI_COMMAND_TIMEOUT", "45")
    cli, prefs, _, _ = _cli()

    assert cli.run([]) == 0
    wf = fake_workflow.instances[0]
    assert wf.git_repo.timeout == 45
    assert wf.preferences is prefs


def test_cli_handles_workflow_failure(fake_workflow):
    fake_workflow.raises = NoStagedChangesError("No staged changes found!")
    cli, _, _, err = _cli()

    assert cli.run([]) == 1
    assert "An error occurred: No staged changes found!" in err.getvalue()


def test_cli_no_provider_configured(monkeypatch):
    def no_provider(config):
        raise ConfigError("No AI provider configured.")

    monkeypatch.setattr(cli_module, "select_driver", no_provider)
    monkeypatch.setattr(cli_module, "configure_logging", lambda *a, **k: None)
    cli, _, _, err = _cli()

    assert cli.run([]) == 1
    assert "No AI provider configured" in err.getvalue()


def test_cli_unexpected_error_exits_one(fake_workflow):
    fake_workflow.raises = RuntimeError("kaboom")
    cli, _, _, err = _cli()
    assert cli.run([]) == 1
    assert "kaboom" in err.getvalue()


def test_cli_interrupt_exits_130(fake_workflow):
    fake_workflow.raises = KeyboardInterrupt()
    cli, _, _, _ = _cli()
    assert cli.run([]) == 130


def test_config_show():
    cli, prefs, out, _ = _cli()
    prefs.set_auto_push(True)
    assert cli.run(["config", "--show"]) == 0
    assert "Auto-commit: disabled" in out.getvalue()
    assert "Auto-push:   enabled" in out.getvalue()


@pytest.mark.parametrize("value, expected", [("on", True), ("TRUE", True), ("off", False), ("nah", False)])
def test_config_auto_commit_values(value, expected):
    cli, prefs, out, _ = _cli()
    assert cli.run(["config", "--auto-commit", value]) == 0
    assert prefs.auto_commit_enabled() is expected
    if expected:
        assert "won't be able to regenerate, edit, or cancel" in out.getvalue()


def test_config_auto_commit_without_value_shows_current():
    cli, prefs, out, _ = _cli()
    prefs.set_auto_commit(True)
    assert cli.run(["config", "--auto-commit"]) == 0
    assert "Current: enabled" in out.getvalue()
    assert "Usage: ai-commit config --auto-commit [on|off]" in out.getvalue()
    assert prefs.auto_commit_enabled() is True


def test_config_auto_push_notes_interactive_prompts():
    cli, prefs, out, _ = _cli()
    assert cli.run(["config", "--auto-push", "on"]) == 0
    assert prefs.auto_push_enabled() is True
    assert "Auto-push enabled" in out.getvalue()
    assert "You'll still see commit prompts" in out.getvalue()


def test_config_auto_push_without_value_shows_current():
    cli, _, out, _ = _cli()
    assert cli.run(["config", "--auto-push"]) == 0
    assert "Current: disabled" in out.getvalue()


def test_config_reset():
    cli, prefs, out, _ = _cli()
    prefs.set_auto_commit(True)
    prefs.set_auto_push(True)
    assert cli.run(["config", "--reset"]) == 0
    assert prefs.auto_commit_enabled() is False
    assert prefs.auto_push_enabled() is False
    assert "reset to the default" in out.getvalue()


def test_config_without_option_prints_usage():
    cli, _, out, _ = _cli()
    assert cli.run(["config"]) == 0
    assert "Usage: ai-commit config" in out.getvalue()


def test_config_persists_to_default_store(tmp_path):
    # conftest points AI_COMMIT_CONFIG_HOME at tmp_path
    out = io.StringIO()
    assert cli_module.CLI(stdout=out).run(["config", "--auto-push", "on"]) == 0
    assert (tmp_path / "ai-commit-config" / "preferences.json").exists()
    assert UserPreferences().auto_push_enabled() is True


def test_configure_logging_reads_env(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
    monkeypatch.setenv("AI_LOG_LEVEL", "debug")
    cli_module.configure_logging()
    assert calls["level"] == logging.DEBUG

    monkeypatch.setenv("AI_LOG_LEVEL", "WARN")
    cli_module.configure_logging()
    assert calls["level"] == logging.WARNING

    monkeypatch.setenv("AI_LOG_LEVEL", "chatty")
    cli_module.configure_logging()
    assert calls["level"] == logging.WARNING
