# librarian/sa/repositories/__init__.py
from .collection import CollectionRepository

__all__ = ['CollectionRepository']
