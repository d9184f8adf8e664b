"""
Append-only link graph of crawled pages.

Nodes live in a dense list addressed by ``Id``; outgoing links live in a
parallel list of adjacency lists; a URL index resolves a page URL to its Id
so repeated observations of one page fold into a single node.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..config import Settings
from ..errors import CollectionInvariantError, DuplicateURLError, InvalidIdError, InvalidURLError
from ..types.entity import Entity, normalize_url
from ..types.values import Id, _allocate

logger = logging.getLogger(__name__)

Edges = List[Id]


class Collection:
    """
    A collection of entities.

    A graph whose nodes are kept in a list of entities and whose edges are
    kept as an adjacency list per node. Single writer: callers sharing one
    collection between threads must serialize access (see SharedCollection).

    Usage:
        collection = Collection()
        page = collection.merge(Entity.new("https://example.com", date.today()))
        link = collection.merge(Entity.new("https://example.com/about", date.today()))
        collection.add_edge(page, link)
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._nodes: List[Entity] = []
        self._edges: List[Edges] = []
        self._urls: Dict[str, Id] = {}
        self._merges = 0
        self._duplicates = 0
        logger.info(f"Collection initialized (strict_add={self.settings.strict_add})")

    # ------------------------------------------------------------------
    # Size and lookup
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        size = len(self._nodes)
        if size != len(self._edges):
            logger.error(f"Collection corrupted: {size} nodes but {len(self._edges)} adjacency lists")
            raise CollectionInvariantError(
                f"{size} nodes but {len(self._edges)} adjacency lists"
            )
        return size

    def is_empty(self) -> bool:
        return len(self) == 0

    def contains(self, url: str) -> bool:
        """True if some node has this URL. Malformed URLs are never contained."""
        return self.id(url) is not None

    def __contains__(self, url) -> bool:
        return self.contains(url)

    def id(self, url: str) -> Optional[Id]:
        """Id of the node stored under ``url``, or None."""
        try:
            key = normalize_url(url)
        except InvalidURLError:
            return None
        return self._urls.get(key)

    def entity(self, node_id: Id) -> Entity:
        """
        The stored entity for ``node_id``.

        The live record is returned: ``update`` and ``merge`` calls on it
        change the collection. Its fields are read-only.
        """
        return self._nodes[self._index(node_id)]

    def __getitem__(self, node_id: Id) -> Entity:
        return self.entity(node_id)

    def edges(self, node_id: Id) -> Tuple[Id, ...]:
        """Outgoing links of ``node_id`` in insertion order."""
        return tuple(self._edges[self._index(node_id)])

    def ids(self) -> List[Id]:
        return [_allocate(i) for i in range(len(self))]

    def __iter__(self) -> Iterator[Tuple[Id, Entity]]:
        for i, entity in enumerate(self._nodes):
            yield _allocate(i), entity

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._edges)

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def add(self, entity: Entity) -> Id:
        """
        Store a copy of ``entity`` as a new node and return its Id.

        No identity check is made beyond a warning: adding a URL that is
        already stored creates a second node and points the URL index at it.
        With ``Settings.strict_add`` this raises DuplicateURLError instead.
        Use ``merge`` to ingest observations.

        Raises:
            DuplicateURLError: If strict_add is set and the URL is known
        """
        existing = self._urls.get(entity.url)
        if existing is not None:
            if self.settings.strict_add:
                raise DuplicateURLError(entity.url, existing)
            self._duplicates += 1
            logger.warning(f"Adding duplicate node for {entity.url} (already node {int(existing)})")

        node_id = _allocate(len(self))
        self._nodes.append(entity.copy())
        self._edges.append([])
        self._urls[entity.url] = node_id
        logger.debug(f"Added node {int(node_id)} for {entity.url}")
        return node_id

    def merge(self, entity: Entity) -> Id:
        """
        Ingest one observation: fold it into the node for its URL, or add
        a node if the URL is new. Returns the node's Id.
        """
        node_id = self._urls.get(entity.url)
        if node_id is None:
            return self.add(entity)

        self._nodes[int(node_id)].merge(entity)
        self._merges += 1
        logger.debug(f"Merged observation of {entity.url} into node {int(node_id)}")
        return node_id

    def add_edge(self, from_id: Id, to_id: Id) -> None:
        """Record a directed link. Recording the same link again does nothing."""
        targets = self._edges[self._index(from_id)]
        self._index(to_id)
        if to_id in targets:
            return
        targets.append(to_id)
        logger.debug(f"Recorded edge {int(from_id)} -> {int(to_id)}")

    def ingest(self, entity: Entity, links: Iterable[Entity] = ()) -> Id:
        """
        Merge a crawled page and the pages it links to, and record the links.

        Returns the Id of the crawled page.
        """
        page_id = self.merge(entity)
        for link in links:
            self.add_edge(page_id, self.merge(link))
        return page_id

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_stats(self) -> dict:
        """
        Get collection statistics.

        Returns:
            Dictionary with node, edge and URL counts, merges folded into
            existing nodes and duplicate nodes created by ``add``
        """
        return {
            "nodes": len(self),
            "edges": self.edge_count(),
            "urls": len(self._urls),
            "merges": self._merges,
            "duplicates": self._duplicates,
        }

    def _index(self, node_id: Id) -> int:
        if not isinstance(node_id, Id):
            raise TypeError(f"expected Id, got {type(node_id).__name__}")
        index = int(node_id)
        if index >= len(self._nodes):
            logger.error(f"Invalid node id {index} for collection of {len(self._nodes)} nodes")
            raise InvalidIdError(f"node {index} does not exist (collection has {len(self._nodes)} nodes)")
        return index

    def __repr__(self) -> str:
        return f"Collection(nodes={len(self._nodes)}, edges={self.edge_count()})"
