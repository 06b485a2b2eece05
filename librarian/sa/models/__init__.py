# librarian/sa/models/__init__.py
from .base import Base
from .collection import CollectionItem

__all__ = [
    'Base',
    'CollectionItem',
]
