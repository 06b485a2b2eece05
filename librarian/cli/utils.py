# librarian/cli/utils.py
import click

from librarian.catalog import OpenLibraryClient
from librarian.config import Settings
from librarian.models import CollectionInfo
from librarian.sa.database import Database
from librarian.services import CollectionService


def build_service(settings: Settings) -> CollectionService:
    """Wire the store and the catalog client from settings"""
    engine_kwargs = {}
    if not settings.database_url.startswith("sqlite"):
        engine_kwargs = {
            "pool_size": settings.database_pool_size,
            "max_overflow": settings.database_max_overflow,
        }
    database = Database(settings.database_url, **engine_kwargs)
    catalog = OpenLibraryClient(base_url=settings.openlibrary_url, timeout=settings.openlibrary_timeout)
    return CollectionService(database, catalog)


def format_stats(info: CollectionInfo) -> str:
    """Team statistics as a single colored line"""
    parts = [
        click.style("owners: ", fg='blue') + click.style(str(info.owner_count), fg='cyan'),
        click.style("lenders: ", fg='blue') + click.style(str(info.lender_count), fg='cyan'),
    ]
    if info.avg_rating:
        parts.append(click.style("avg rating: ", fg='blue') + click.style(f"{info.avg_rating:.1f}", fg='yellow'))
    return ", ".join(parts)
