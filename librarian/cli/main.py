# librarian/cli/main.py
import click

from librarian.config import settings
from librarian.utils.logging import setup_logging
from .commands.bot import run, init_db
from .commands.catalog import search
from .commands.collection import collection


@click.group()
@click.option('--verbose', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, verbose: bool):
    """Floating Librarian CLI"""
    setup_logging("DEBUG" if verbose else settings.log_level)
    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings


cli.add_command(run)
cli.add_command(init_db)
cli.add_command(search)
cli.add_command(collection)


def main():
    """Entry point for the CLI"""
    cli(obj={})


if __name__ == '__main__':
    main()
