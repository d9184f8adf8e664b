from .values import Id, Name, Label
from .entity import Entity, normalize_url

__all__ = [
        "Id",
        "Name",
        "Label",
        "Entity",
        "normalize_url",
        ]
