from abc import ABC, abstractmethod
from typing import Any

from jobagent.models import Job


def listing_hits(payload: Any, key: str) -> list[dict]:
    """Return the dict entries under *key*; any other payload shape yields ``[]``."""
    if not isinstance(payload, dict):
        return []
    hits = payload.get(key)
    if not isinstance(hits, list):
        return []
    return [h for h in hits if isinstance(h, dict)]


class JobSource(ABC):
    name: str = "unknown"

    @abstractmethod
    def fetch(self, query: str = "", category: str = "") -> list[Job]:
        pass
