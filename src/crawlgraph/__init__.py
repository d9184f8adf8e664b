"""
crawlgraph: deduplicated link graph built from repeated crawl observations.
"""

from .collection import Collection, SharedCollection
from .config import Settings, setup_logging
from .errors import (
    CollectionInvariantError,
    CrawlGraphError,
    DuplicateURLError,
    InvalidIdError,
    InvalidURLError,
)
from .types import Entity, Id, Label, Name, normalize_url

__all__ = [
    "Collection",
    "SharedCollection",
    "Settings",
    "setup_logging",
    "Entity",
    "Id",
    "Name",
    "Label",
    "normalize_url",
    "CrawlGraphError",
    "InvalidURLError",
    "DuplicateURLError",
    "CollectionInvariantError",
    "InvalidIdError",
]
