"""
Entity record for a crawled page.

An entity is identified by its URL and accumulates every observation made of
that URL: the earliest observation date, the other observation dates, and
the union of all names and labels seen.
"""

from datetime import date
from typing import Any, Dict, FrozenSet, Iterable, Optional, Set, Union
from urllib.parse import urlsplit, urlunsplit

from ..errors import InvalidURLError
from .values import Label, Name

NameLike = Union[Name, str]
LabelLike = Union[Label, str]


def normalize_url(url: str) -> str:
    """
    Canonical form of an absolute URL used as the entity identity.

    Scheme and host are lower-cased and an empty path becomes ``/``.
    User info, port, query and fragment are kept as given.

    Raises:
        InvalidURLError: If the URL has no scheme or no host
    """
    if not isinstance(url, str):
        raise InvalidURLError(f"URL must be a string, got {type(url).__name__}")
    try:
        parts = urlsplit(url.strip())
    except ValueError as e:
        raise InvalidURLError(f"Unparseable URL {url!r}: {e}") from e
    userinfo, at, hostport = parts.netloc.rpartition("@")
    if not parts.scheme or not hostport:
        raise InvalidURLError(f"URL needs a scheme and a host: {url!r}")
    return urlunsplit((
        parts.scheme.lower(),
        f"{userinfo}{at}{hostport.lower()}",
        parts.path or "/",
        parts.query,
        parts.fragment,
    ))


def _as_names(values: Optional[Iterable[NameLike]]) -> Set[Name]:
    if not values:
        return set()
    if isinstance(values, (str, Name)):
        values = [values]
    return {v if isinstance(v, Name) else Name(v) for v in values}


def _as_labels(values: Optional[Iterable[LabelLike]]) -> Set[Label]:
    if not values:
        return set()
    if isinstance(values, (str, Label)):
        values = [values]
    return {v if isinstance(v, Label) else Label(v) for v in values}


class Entity:
    """
    A page in the collection.

    Fields are read-only; ``update`` and ``merge`` are the only way to
    change a record.

    Attributes:
        url: Normalized page URL, the identity of the entity
        created_at: Earliest date this page was observed
        updated_at: Every other date the page was observed
        names: Names the page was seen under
        labels: Labels attached to the page
    """

    __slots__ = ("_url", "_created_at", "_updated_at", "_names", "_labels")
    __hash__ = None

    def __init__(
        self,
        url: str,
        created_at: date,
        updated_at: Iterable[date] = (),
        names: Iterable[NameLike] = (),
        labels: Iterable[LabelLike] = (),
    ):
        self._url = normalize_url(url)
        self._created_at = created_at
        self._updated_at = set(updated_at)
        self._updated_at.discard(created_at)
        self._names = _as_names(names)
        self._labels = _as_labels(labels)

    @classmethod
    def new(
        cls,
        url: str,
        created_at: date,
        name: Optional[NameLike] = None,
        labels: Optional[Iterable[LabelLike]] = None,
    ) -> "Entity":
        """Build a fresh observation: one date, at most one name."""
        names = [name] if name is not None else []
        return cls(url, created_at, names=names, labels=labels or [])

    @property
    def url(self) -> str:
        return self._url

    @property
    def created_at(self) -> date:
        return self._created_at

    @property
    def updated_at(self) -> FrozenSet[date]:
        return frozenset(self._updated_at)

    @property
    def names(self) -> FrozenSet[Name]:
        return frozenset(self._names)

    @property
    def labels(self) -> FrozenSet[Label]:
        return frozenset(self._labels)

    def update(
        self,
        updated_at: date,
        names: Iterable[NameLike] = (),
        labels: Iterable[LabelLike] = (),
    ) -> "Entity":
        """
        Record one more observation of this page.

        An observation older than ``created_at`` becomes the new
        ``created_at`` and the previous one moves to ``updated_at``.
        """
        if updated_at < self._created_at:
            self._updated_at.add(self._created_at)
            self._created_at = updated_at
        elif updated_at != self._created_at:
            self._updated_at.add(updated_at)
        self._names.update(_as_names(names))
        self._labels.update(_as_labels(labels))
        return self

    def merge(self, other: "Entity") -> "Entity":
        """Fold ``other`` into this entity. Only ``other.created_at`` is kept of its dates."""
        return self.update(other._created_at, other._names, other._labels)

    def copy(self) -> "Entity":
        """Independent copy; later updates to either record do not reach the other."""
        return Entity(self._url, self._created_at, self._updated_at, self._names, self._labels)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "url": self._url,
            "created_at": self._created_at.isoformat(),
            "updated_at": sorted(d.isoformat() for d in self._updated_at),
            "names": sorted(n.as_str() for n in self._names),
            "labels": sorted(l.as_str() for l in self._labels),
        }

    def __eq__(self, other):
        if not isinstance(other, Entity):
            return NotImplemented
        return (
            self._url == other._url
            and self._created_at == other._created_at
            and self._updated_at == other._updated_at
            and self._names == other._names
            and self._labels == other._labels
        )

    def __repr__(self) -> str:
        return (
            f"Entity(url={self._url!r}, created_at={self._created_at!r}, "
            f"updated_at={self._updated_at!r}, names={self._names!r}, labels={self._labels!r})"
        )
