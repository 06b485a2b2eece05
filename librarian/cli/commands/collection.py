# librarian/cli/commands/collection.py
import click

from librarian.blocks.builders import stars
from librarian.exceptions import CollectionFullError, PersistenceUnavailableError
from librarian.models import Book
from ..utils import build_service, format_stats


@click.group()
def collection():
    """Inspect and fix members' collections"""
    pass


@collection.command('show')
@click.argument('team_id')
@click.argument('member_id')
@click.pass_context
def show(ctx, team_id: str, member_id: str):
    """Show a member's collection with team statistics"""
    service = build_service(ctx.obj['settings'])
    try:
        home = service.home_collection(team_id, member_id)
    except PersistenceUnavailableError as e:
        raise click.ClickException(str(e))

    if not home.entries:
        click.echo(f"{member_id} has no books in team {team_id}")
        return

    click.echo(click.style(f"\n{home.total_count} books", fg='blue'))
    for entry in home.entries:
        lending = click.style(" [lends]", fg='green') if entry.lend_out else ""
        click.echo(f"\n{click.style(entry.title, bold=True)} by {entry.author_name} ({entry.isbn}){lending}")
        click.echo(f"  Rating: {stars(entry.rating)}")
        click.echo(f"  Team: {format_stats(entry.info)}")


@collection.command()
@click.argument('team_id')
@click.argument('member_id')
@click.argument('isbn')
@click.option('--title', required=True, help='Title of the book')
@click.option('--author', 'author_name', required=True, help='Name of the author')
@click.option('--cover-id', default=None, help='OpenLibrary cover id')
@click.pass_context
def add(ctx, team_id: str, member_id: str, isbn: str, title: str, author_name: str, cover_id):
    """Add a book to a member's collection"""
    service = build_service(ctx.obj['settings'])
    book = Book(title=title, author_name=author_name, isbn=isbn, cover_id=cover_id)
    try:
        added = service.add_book(team_id, member_id, book)
    except (CollectionFullError, PersistenceUnavailableError) as e:
        raise click.ClickException(str(e))
    if added:
        click.echo(click.style(f"Added {title}", fg='green'))
    else:
        click.echo(click.style(f"{member_id} already owns {isbn}", fg='yellow'))


@collection.command()
@click.argument('team_id')
@click.argument('member_id')
@click.argument('isbn')
@click.pass_context
def remove(ctx, team_id: str, member_id: str, isbn: str):
    """Remove a book from a member's collection"""
    service = build_service(ctx.obj['settings'])
    try:
        removed = service.remove_book(team_id, member_id, isbn)
    except PersistenceUnavailableError as e:
        raise click.ClickException(str(e))
    click.echo(f"Removed {removed} entries")


@collection.command()
@click.argument('team_id')
@click.argument('member_id')
@click.argument('isbn')
@click.argument('rating', type=click.IntRange(0, 5))
@click.pass_context
def rate(ctx, team_id: str, member_id: str, isbn: str, rating: int):
    """Rate a book, 0 clears the rating"""
    service = build_service(ctx.obj['settings'])
    try:
        service.rate_book(team_id, member_id, isbn, rating)
    except PersistenceUnavailableError as e:
        raise click.ClickException(str(e))
    click.echo(f"Rated {isbn}: {stars(rating)}")


@collection.command()
@click.argument('team_id')
@click.argument('member_id')
@click.argument('isbn')
@click.option('--yes/--no', 'lend_out', default=True, help='Open to lend out or not')
@click.pass_context
def lend(ctx, team_id: str, member_id: str, isbn: str, lend_out: bool):
    """Set whether a member would lend out a book"""
    service = build_service(ctx.obj['settings'])
    try:
        service.set_lend_out(team_id, member_id, isbn, lend_out)
    except PersistenceUnavailableError as e:
        raise click.ClickException(str(e))
    click.echo(f"{isbn}: {'open to lend out' if lend_out else 'no lending out'}")
