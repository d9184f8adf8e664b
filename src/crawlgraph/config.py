import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _as_bool(val: Optional[str], default: bool = False) -> bool:
    if val is None:
        return default
    return str(val).lower() in {"1", "true", "yes", "y", "on"}


@dataclass
class Settings:
    # Reject ``add`` for a URL that already has a node instead of creating a duplicate
    strict_add: bool = False
    log_level: str = "INFO"
    debug: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            strict_add=_as_bool(os.environ.get("CRAWLGRAPH_STRICT_ADD"), False),
            log_level=os.environ.get("CRAWLGRAPH_LOG_LEVEL", "INFO").upper(),
            debug=_as_bool(os.environ.get("CRAWLGRAPH_DEBUG"), False),
        )


def setup_logging(verbose: bool = False, settings: Optional[Settings] = None) -> logging.Logger:
    """Setup logging configuration."""
    if verbose or (settings and settings.debug):
        level = logging.DEBUG
    elif settings:
        level = getattr(logging, settings.log_level, logging.INFO)
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("crawlgraph")
