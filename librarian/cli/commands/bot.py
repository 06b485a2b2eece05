# librarian/cli/commands/bot.py
import click

from librarian.bot.app import run_socket_mode
from librarian.exceptions import PersistenceUnavailableError
from librarian.utils.tracing import init_sentry
from ..utils import build_service


@click.command()
@click.pass_context
def run(ctx):
    """Start the Slack bot in Socket Mode"""
    settings = ctx.obj['settings']
    try:
        settings.require_slack_credentials()
    except ValueError as e:
        raise click.ClickException(str(e))

    init_sentry(settings.sentry_dsn, settings.sentry_traces_sample_rate)
    service = build_service(settings)
    try:
        service.database.init_db()
    except PersistenceUnavailableError as e:
        raise click.ClickException(f"Could not initialize database: {e}")
    run_socket_mode(settings, service)


@click.command('init-db')
@click.pass_context
def init_db(ctx):
    """Create the collection table if it does not exist"""
    service = build_service(ctx.obj['settings'])
    try:
        service.database.init_db()
    except PersistenceUnavailableError as e:
        raise click.ClickException(f"Could not initialize database: {e}")
    click.echo(click.style("Database ready", fg='green'))
