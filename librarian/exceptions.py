# librarian/exceptions.py


class LibrarianError(Exception):
    """Base class for errors raised while handling an interaction."""


class PersistenceUnavailableError(LibrarianError):
    """The collection store could not be reached or a query failed."""


class PayloadDecodeError(LibrarianError):
    """An action payload did not match the layout expected for its action."""

    def __init__(self, action_id: str, raw: str, reason: str):
        self.action_id = action_id
        self.raw = raw
        self.reason = reason
        super().__init__(f"Cannot decode payload for {action_id!r}: {reason}")


class CollectionFullError(LibrarianError):
    """A member tried to add a book past the collection size limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Collection has reached the limit of {limit} books")
