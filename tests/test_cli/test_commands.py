# tests/test_cli/test_commands.py
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from librarian.cli.main import cli
from librarian.config import settings
from librarian.models import Book, SearchOutcome


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cli_settings(tmp_path):
    return settings.model_copy(update={"database_url": f"sqlite:///{tmp_path / 'cli.db'}", "sentry_dsn": None})


def invoke(runner, cli_settings, args):
    with patch("librarian.cli.main.settings", cli_settings):
        return runner.invoke(cli, args, obj={})


def test_init_db(runner, cli_settings):
    result = invoke(runner, cli_settings, ["init-db"])
    assert result.exit_code == 0
    assert "Database ready" in result.output


def test_add_and_show(runner, cli_settings):
    invoke(runner, cli_settings, ["init-db"])
    result = invoke(runner, cli_settings, [
        "collection", "add", "T1", "U1", "9780441172719", "--title", "Dune", "--author", "Frank Herbert",
    ])
    assert result.exit_code == 0
    assert "Added Dune" in result.output

    again = invoke(runner, cli_settings, [
        "collection", "add", "T1", "U1", "9780441172719", "--title", "Dune", "--author", "Frank Herbert",
    ])
    assert "already owns" in again.output

    invoke(runner, cli_settings, ["collection", "rate", "T1", "U1", "9780441172719", "4"])
    invoke(runner, cli_settings, ["collection", "lend", "T1", "U1", "9780441172719"])

    shown = invoke(runner, cli_settings, ["collection", "show", "T1", "U1"])
    assert shown.exit_code == 0
    assert "Dune" in shown.output
    assert "⭐⭐⭐⭐" in shown.output
    assert "[lends]" in shown.output


def test_rate_rejects_out_of_range(runner, cli_settings):
    result = invoke(runner, cli_settings, ["collection", "rate", "T1", "U1", "123", "9"])
    assert result.exit_code != 0


def test_search(runner, cli_settings):
    outcome = SearchOutcome(books=[Book(title="Dune", author_name="Frank Herbert", isbn="9780441172719")])
    with patch("librarian.cli.commands.catalog.OpenLibraryClient.search", return_value=outcome):
        result = invoke(runner, cli_settings, ["search", "dune"])
    assert result.exit_code == 0
    assert "Dune" in result.output
    assert "9780441172719" in result.output


def test_search_unavailable(runner, cli_settings):
    with patch("librarian.cli.commands.catalog.OpenLibraryClient.search",
               return_value=SearchOutcome(unavailable=True)):
        result = invoke(runner, cli_settings, ["search", "dune"])
    assert result.exit_code == 1
    assert "unavailable" in result.output


def test_run_reports_unreachable_database(runner, cli_settings, tmp_path):
    broken = cli_settings.model_copy(update={
        "database_url": f"sqlite:///{tmp_path / 'missing' / 'bot.db'}",
        "slack_bot_token": "xoxb-test",
        "slack_signing_secret": "secret",
        "slack_app_token": "xapp-test",
    })
    with patch("librarian.cli.commands.bot.run_socket_mode") as run_socket_mode:
        result = invoke(runner, broken, ["run"])
    assert result.exit_code == 1
    assert "Could not initialize database" in result.output
    run_socket_mode.assert_not_called()


def test_run_requires_slack_credentials(runner, cli_settings):
    missing = cli_settings.model_copy(update={"slack_bot_token": None})
    result = invoke(runner, missing, ["run"])
    assert result.exit_code == 1
    assert "SLACK_BOT_TOKEN" in result.output
