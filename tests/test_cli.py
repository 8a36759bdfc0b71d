import os
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from rl_session.cli import app
from rl_session.cli.app import SESSION_TITLE
from rl_session.domain.result import Ok

runner = CliRunner()


def flat(output: str) -> str:
    return " ".join(output.split())


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("RL_SESSION__"):
            monkeypatch.delenv(key)


class FakeWebhookPublisher:
    instances: list["FakeWebhookPublisher"] = []

    def __init__(self, url: str, *, username: str, timeout: float) -> None:
        self.url = url
        self.username = username
        self.announced: list[str] = []
        FakeWebhookPublisher.instances.append(self)

    async def __aenter__(self) -> "FakeWebhookPublisher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        pass

    async def announce(self, title: str, description: str) -> Ok[None]:
        self.announced.append(title)
        return Ok(None)


class TestRootCli:
    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Rocket League" in result.output

    def test_run_help(self) -> None:
        result = runner.invoke(app, ["run", "--help"])
        assert result.exit_code == 0
        assert "--no-discord" in result.output


class TestRunCommand:
    def test_requires_webhook_or_no_discord(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["run", "--location", str(tmp_path), "--config", str(tmp_path / "none.yaml")])
        assert result.exit_code == 1
        assert "provide a webhook with --webhook or run with --no-discord" in flat(result.output)

    def test_invalid_location_exits_with_error(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing"
        result = runner.invoke(
            app, ["run", "--no-discord", "--location", str(missing), "--config", str(tmp_path / "none.yaml")]
        )
        assert result.exit_code == 1
        assert "Please supply a path to the replay folder" in flat(result.output)

    def test_no_discord_runs_with_console(self, tmp_path: Path) -> None:
        with patch("rl_session.cli.app.run", new_callable=AsyncMock) as mock_run:
            result = runner.invoke(
                app, ["run", "-n", "--location", str(tmp_path), "--config", str(tmp_path / "none.yaml")]
            )

        assert result.exit_code == 0
        assert "Looking for saves in:" in result.output
        mock_run.assert_awaited_once_with(tmp_path, extension="replay")

    def test_webhook_announces_session_then_runs(self, tmp_path: Path) -> None:
        FakeWebhookPublisher.instances.clear()
        with (
            patch("rl_session.cli.app.run", new_callable=AsyncMock) as mock_run,
            patch("rl_session.cli.app.DiscordWebhookPublisher", FakeWebhookPublisher),
        ):
            result = runner.invoke(
                app,
                [
                    "run",
                    "--webhook",
                    "https://discord.test/api/webhooks/1/token",
                    "--location",
                    str(tmp_path),
                    "--config",
                    str(tmp_path / "none.yaml"),
                ],
            )

        assert result.exit_code == 0
        (publisher,) = FakeWebhookPublisher.instances
        assert publisher.url == "https://discord.test/api/webhooks/1/token"
        assert publisher.announced == [SESSION_TITLE]
        mock_run.assert_awaited_once_with(tmp_path, publisher, extension="replay")

    def test_webhook_from_config_file(self, tmp_path: Path) -> None:
        FakeWebhookPublisher.instances.clear()
        config_file = tmp_path / "rl_session.yaml"
        config_file.write_text(f"watch:\n  location: {tmp_path}\ndiscord:\n  webhook_url: https://yaml.test/hook\n")
        with (
            patch("rl_session.cli.app.run", new_callable=AsyncMock),
            patch("rl_session.cli.app.DiscordWebhookPublisher", FakeWebhookPublisher),
        ):
            result = runner.invoke(app, ["run", "--config", str(config_file)])

        assert result.exit_code == 0
        assert FakeWebhookPublisher.instances[0].url == "https://yaml.test/hook"
