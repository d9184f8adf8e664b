"""
Lock-guarded access to a Collection for several producer threads.

Every call holds one re-entrant lock for its whole duration, so the
lookup-then-mutate sequence of ``merge`` cannot interleave with another
writer.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from ..config import Settings
from ..types.entity import Entity
from ..types.values import Id
from .store import Collection

logger = logging.getLogger(__name__)


class SharedCollection:
    """
    Thread-safe facade over a Collection.

    Usage:
        shared = SharedCollection()
        with ThreadPoolExecutor() as pool:
            pool.map(lambda obs: shared.ingest(*obs), observations)
    """

    def __init__(self, collection: Optional[Collection] = None, settings: Optional[Settings] = None):
        self._collection = collection if collection is not None else Collection(settings)
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator[Collection]:
        """Hold the lock across several calls on the underlying collection."""
        with self._lock:
            yield self._collection

    def __len__(self) -> int:
        with self._lock:
            return len(self._collection)

    def is_empty(self) -> bool:
        with self._lock:
            return self._collection.is_empty()

    def contains(self, url: str) -> bool:
        with self._lock:
            return self._collection.contains(url)

    def __contains__(self, url) -> bool:
        return self.contains(url)

    def id(self, url: str) -> Optional[Id]:
        with self._lock:
            return self._collection.id(url)

    def add(self, entity: Entity) -> Id:
        with self._lock:
            return self._collection.add(entity)

    def merge(self, entity: Entity) -> Id:
        with self._lock:
            return self._collection.merge(entity)

    def add_edge(self, from_id: Id, to_id: Id) -> None:
        with self._lock:
            self._collection.add_edge(from_id, to_id)

    def ingest(self, entity: Entity, links: Iterable[Entity] = ()) -> Id:
        links = list(links)
        with self._lock:
            return self._collection.ingest(entity, links)

    def entity(self, node_id: Id) -> Dict[str, Any]:
        """Snapshot of the stored entity. Use ``locked()`` to modify it in place."""
        with self._lock:
            return self._collection.entity(node_id).to_dict()

    def edges(self, node_id: Id) -> Tuple[Id, ...]:
        with self._lock:
            return self._collection.edges(node_id)

    def ids(self) -> List[Id]:
        with self._lock:
            return self._collection.ids()

    def __iter__(self) -> Iterator[Tuple[Id, Dict[str, Any]]]:
        """Iterate over a snapshot of ``(Id, entity dict)`` pairs taken under the lock."""
        with self._lock:
            snapshot = [(node_id, entity.to_dict()) for node_id, entity in self._collection]
        return iter(snapshot)

    def edge_count(self) -> int:
        with self._lock:
            return self._collection.edge_count()

    def get_stats(self) -> dict:
        with self._lock:
            return self._collection.get_stats()
