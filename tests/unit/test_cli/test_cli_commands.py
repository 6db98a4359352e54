"""Tests for the webhook-console CLI commands."""

from __future__ import annotations

import json

from click.testing import CliRunner
import pytest

from tests.utils import USERNAME, FakeUpstream, page
from webhook_console.cli.main import cli
from webhook_console.core.settings import clear_settings_cache

APPS = "/api/v1/app"
MESSAGES = "/api/v1/app/app_1/msg"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_tenants_masks_tokens(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["tenants"], obj={})

    assert result.exit_code == 0
    tenants = json.loads(result.stdout)
    assert tenants == [
        {
            "username": USERNAME,
            "api_url": "https://upstream.test",
            "api_token": "***********3456",
        }
    ]
    assert "tok_test" not in result.output


def test_applications_drains_every_page(runner: CliRunner) -> None:
    upstream = FakeUpstream()
    upstream.add(
        "GET",
        APPS,
        page([{"id": "app_1"}], iterator="c1", done=False),
        page([{"id": "app_2"}]),
    )

    result = runner.invoke(
        cli,
        ["applications", "--tenant", USERNAME],
        obj={"transport": upstream.transport},
    )

    assert result.exit_code == 0
    assert [app["id"] for app in json.loads(result.stdout)] == ["app_1", "app_2"]
    assert "2 application(s) in 2 page(s)" in result.stderr
    assert upstream.requests[0].headers["Authorization"] == "Bearer tok_test_123456"


def test_applications_failure_exits_nonzero(runner: CliRunner) -> None:
    upstream = FakeUpstream()
    upstream.add("GET", APPS, (500, None))

    result = runner.invoke(
        cli,
        ["applications", "--tenant", USERNAME],
        obj={"transport": upstream.transport},
    )

    assert result.exit_code == 1
    assert "Upstream error: 500" in result.stderr
    assert result.stdout == ""


def test_unknown_tenant_exits_nonzero(runner: CliRunner) -> None:
    upstream = FakeUpstream()

    result = runner.invoke(
        cli,
        ["applications", "--tenant", "nobody"],
        obj={"transport": upstream.transport},
    )

    assert result.exit_code == 1
    assert "No tenant configured for username 'nobody'" in result.stderr
    assert upstream.requests == []


class TestMessagesCommand:
    def test_stops_after_requested_pages(self, runner: CliRunner) -> None:
        upstream = FakeUpstream()
        upstream.add(
            "GET",
            MESSAGES,
            page([{"id": "msg_1"}], iterator="c1", done=False),
            page([{"id": "msg_2"}], iterator="c2", done=False),
            page([{"id": "msg_3"}]),
        )

        result = runner.invoke(
            cli,
            ["messages", "--tenant", USERNAME, "--app", "app_1", "--pages", "2", "--limit", "1"],
            obj={"transport": upstream.transport},
        )

        assert result.exit_code == 0
        assert [msg["id"] for msg in json.loads(result.stdout)] == ["msg_1", "msg_2"]
        assert "next iterator: c2" in result.stderr
        assert len(upstream.requests) == 2
        assert upstream.requests[0].url.params["limit"] == "1"
        assert upstream.requests[1].url.params["iterator"] == "c1"

    def test_stops_when_upstream_is_done(self, runner: CliRunner) -> None:
        upstream = FakeUpstream()
        upstream.add("GET", MESSAGES, page([{"id": "msg_1"}]))

        result = runner.invoke(
            cli,
            ["messages", "--tenant", USERNAME, "--app", "app_1", "--pages", "5"],
            obj={"transport": upstream.transport},
        )

        assert result.exit_code == 0
        assert len(upstream.requests) == 1
        assert upstream.requests[0].url.params["limit"] == "50"
        assert "next iterator" not in result.stderr

    def test_failure_exits_nonzero(self, runner: CliRunner) -> None:
        upstream = FakeUpstream()

        result = runner.invoke(
            cli,
            ["messages", "--tenant", USERNAME, "--app", "app_1"],
            obj={"transport": upstream.transport},
        )

        assert result.exit_code == 1
        assert "Failed to list messages: Resource not found" in result.stderr


def test_serve_runs_uvicorn_with_settings(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, dict]] = []
    monkeypatch.setattr(
        "webhook_console.cli.commands.server.uvicorn.run",
        lambda app, **kwargs: calls.append((app, kwargs)),
    )
    monkeypatch.setenv("APP_PORT", "9100")
    clear_settings_cache()

    result = runner.invoke(cli, ["serve", "--host", "127.0.0.1"], obj={})

    assert result.exit_code == 0
    assert calls == [
        (
            "webhook_console.app.main:app",
            {"host": "127.0.0.1", "port": 9100, "reload": False, "log_level": "info"},
        )
    ]
