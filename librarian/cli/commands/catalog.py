# librarian/cli/commands/catalog.py
import click

from librarian.catalog import OpenLibraryClient


@click.command()
@click.argument('query')
@click.pass_context
def search(ctx, query: str):
    """Search the OpenLibrary catalog

    Example:
        floating-librarian search "project hail mary"
    """
    settings = ctx.obj['settings']
    client = OpenLibraryClient(base_url=settings.openlibrary_url, timeout=settings.openlibrary_timeout)
    outcome = client.search(query)

    if outcome.unavailable:
        raise click.ClickException("OpenLibrary search is unavailable")
    if not outcome.books:
        click.echo(f"No books found for: {query}")
        return

    for book in outcome.books:
        click.echo(click.style(book.title, fg='green', bold=True))
        click.echo(f"  Author: {book.author_name}")
        click.echo(f"  ISBN: {book.isbn}")
        if book.cover_id:
            click.echo(f"  Cover: {book.cover_id}")
