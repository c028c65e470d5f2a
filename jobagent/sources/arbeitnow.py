"""Arbeitnow job board API — global listings, no API key required.

The endpoint ignores search parameters, so the query is applied client-side.
"""
from __future__ import annotations

import requests

from jobagent.log import get_logger
from jobagent.models import Job
from jobagent.normalize import normalize
from jobagent.sources.base import JobSource, listing_hits

log = get_logger(__name__)

API_URL = "https://www.arbeitnow.com/api/job-board-api"
PAGE_LIMIT = 50


def _matches_query(hit: dict, query: str) -> bool:
    q = query.lower()
    return any(
        q in str(hit.get(key) or "").lower()
        for key in ("title", "company_name", "description")
    )


class ArbeitnowSource(JobSource):
    name = "arbeitnow"

    def __init__(self, timeout: float = 15.0) -> None:
        self.timeout = timeout

    def fetch(self, query: str = "", category: str = "") -> list[Job]:
        r = requests.get(API_URL, timeout=self.timeout)
        r.raise_for_status()
        hits = listing_hits(r.json(), "data")
        if query:
            hits = [h for h in hits if _matches_query(h, query)]
        jobs = [normalize(hit, self.name) for hit in hits[:PAGE_LIMIT]]
        log.debug("Arbeitnow query=%r returned %d jobs", query, len(jobs))
        return jobs
