"""
Tests for the command-line entry points.
"""

import pytest

from kuberly_app import cli
from kuberly_app.config import Settings
from kuberly_app.selftest import CheckResult, SelfTestReport


@pytest.fixture
def cli_settings(monkeypatch):
    settings = Settings(api_host="127.0.0.1", api_port=9001, log_level="WARNING", log_json=True)
    monkeypatch.setattr(cli, "get_settings", lambda: settings)
    return settings


@pytest.fixture
def logging_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: calls.append(kwargs))
    return calls


def test_serve_configures_logging_then_runs_app(cli_settings, logging_calls, monkeypatch):
    runs = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda target, **kwargs: runs.append((target, kwargs)))

    cli.serve(reload=False)

    assert logging_calls == [{"level": "WARNING", "json_logs": True}]
    assert runs == [
        (
            "kuberly_app.api.app:app",
            {"host": "127.0.0.1", "port": 9001, "reload": False, "log_config": None},
        )
    ]


class FakeHarness:
    def __init__(self, passed):
        self.passed = passed
        self.closed = False

    def run(self):
        return SelfTestReport(results=[CheckResult(name="cleanup", passed=self.passed)])

    def close(self):
        self.closed = True


@pytest.mark.parametrize("passed", [True, False])
def test_selftest_reports_and_exits(cli_settings, logging_calls, monkeypatch, passed):
    harness = FakeHarness(passed)
    created = []

    def create(settings, include_app=True):
        created.append(include_app)
        return harness

    monkeypatch.setattr(cli.SelfTest, "create", create)

    if passed:
        cli.selftest(skip_app=True)
    else:
        with pytest.raises(cli.typer.Exit) as excinfo:
            cli.selftest(skip_app=True)
        assert excinfo.value.exit_code == 1

    assert created == [False]
    assert harness.closed
    assert logging_calls == [{"level": "WARNING", "json_logs": True}]
