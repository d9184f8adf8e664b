"""Exceptions raised by crawlgraph."""


class CrawlGraphError(Exception):
    """Base exception for recoverable crawlgraph errors."""
    pass


class InvalidURLError(CrawlGraphError, ValueError):
    """Exception raised when an entity URL has no scheme or host."""
    pass


class DuplicateURLError(CrawlGraphError):
    """Exception raised when ``add`` is called for a URL already in the collection."""

    def __init__(self, url: str, existing_id):
        super().__init__(f"URL already stored as node {int(existing_id)}: {url}")
        self.url = url
        self.existing_id = existing_id


class CollectionInvariantError(AssertionError):
    """
    A collection invariant was broken.

    Signals a bug in the caller or the store itself (for example an Id taken
    from a different collection). Not meant to be caught and recovered from.
    """
    pass


class InvalidIdError(CollectionInvariantError):
    """Exception raised when an Id does not address a node of the collection."""
    pass
