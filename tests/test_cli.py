"""Tests for the CLI module."""

from __future__ import annotations

from unittest.mock import patch

from click.testing import CliRunner

from trophy_card.cli import main
from trophy_card.service import CardResult


@patch("trophy_card.cli.asyncio.run")
def test_main_prints_svg(mock_asyncio_run):
    mock_asyncio_run.return_value = CardResult("<svg>ok</svg>")
    runner = CliRunner()
    result = runner.invoke(main, ["octocat"])
    assert result.exit_code == 0
    assert "<svg>ok</svg>" in result.output
    mock_asyncio_run.assert_called_once()


@patch("trophy_card.cli.asyncio.run")
def test_main_error_card_exit_code(mock_asyncio_run):
    mock_asyncio_run.return_value = CardResult("<svg>Error: Not Found</svg>", is_error=True)
    runner = CliRunner()
    result = runner.invoke(main, ["ghost"])
    assert result.exit_code == 1
    assert "Error: Not Found" in result.output


@patch("trophy_card.cli.asyncio.run")
def test_main_with_output_option(mock_asyncio_run):
    mock_asyncio_run.return_value = CardResult("<svg>file</svg>")
    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(main, ["octocat", "--output", "trophy.svg"])
        assert result.exit_code == 0
        with open("trophy.svg", encoding="utf-8") as f:
            assert f.read() == "<svg>file</svg>"


@patch("trophy_card.cli.asyncio.run")
@patch("trophy_card.cli.TrophyService")
def test_main_passes_options(mock_service_cls, mock_asyncio_run):
    mock_asyncio_run.return_value = CardResult("<svg/>")
    runner = CliRunner(env={"GITHUB_TOKEN": ""})
    result = runner.invoke(main, [
        "octocat",
        "--token", "fake-token",
        "--theme", "classic_gamer",
        "--columns", "2",
    ])
    assert result.exit_code == 0

    settings = mock_service_cls.call_args.args[0]
    assert settings.github_token == "fake-token"
    mock_service_cls.return_value.get_card.assert_called_once_with(
        "octocat", theme="classic_gamer", columns="2"
    )


@patch("trophy_card.cli.asyncio.run")
@patch("trophy_card.cli.TrophyService")
def test_main_token_from_environment(mock_service_cls, mock_asyncio_run):
    mock_asyncio_run.return_value = CardResult("<svg/>")
    runner = CliRunner(env={"GITHUB_TOKEN": "env-token"})
    result = runner.invoke(main, ["octocat"])
    assert result.exit_code == 0
    assert mock_service_cls.call_args.args[0].github_token == "env-token"


def test_main_invalid_setting():
    runner = CliRunner(env={"TROPHY_HTTP_TIMEOUT": "soon"})
    result = runner.invoke(main, ["octocat"])
    assert result.exit_code != 0
    assert "TROPHY_HTTP_TIMEOUT" in result.output


def test_main_missing_username():
    runner = CliRunner()
    result = runner.invoke(main, [])
    assert result.exit_code != 0


def test_main_version():
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output
