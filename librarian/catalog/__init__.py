# librarian/catalog/__init__.py
from .openlibrary import OpenLibraryClient, build_book_list, cover_url

__all__ = ['OpenLibraryClient', 'build_book_list', 'cover_url']
