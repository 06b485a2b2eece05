# librarian/sa/__init__.py
from .database import Database
from .models import Base, CollectionItem

__all__ = [
    'Database',
    'Base',
    'CollectionItem',
]
