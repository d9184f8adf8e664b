from .store import Collection, Edges
from .shared import SharedCollection

__all__ = ["Collection", "Edges", "SharedCollection"]
