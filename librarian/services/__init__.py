# librarian/services/__init__.py
from .collection_service import CollectionService, COLLECTION_LIMIT, is_collection_full, merge_search_results

__all__ = ['CollectionService', 'COLLECTION_LIMIT', 'is_collection_full', 'merge_search_results']
