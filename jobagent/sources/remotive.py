"""Remotive — free API for remote tech jobs (no API key required).

Docs: https://remotive.com/api/remote-jobs
"""
from __future__ import annotations

import requests

from jobagent.log import get_logger
from jobagent.models import Job
from jobagent.normalize import normalize
from jobagent.sources.base import JobSource, listing_hits

log = get_logger(__name__)

API_URL = "https://remotive.com/api/remote-jobs"
PAGE_LIMIT = 50

# UI category value -> Remotive category slug ("" means no filter).
REMOTIVE_CATEGORIES: dict[str, str] = {
    "software-dev": "software-dev",
    "data": "data",
    "devops": "devops-sysadmin",
    "design": "design",
    "marketing": "marketing",
    "product": "product",
    "customer-support": "customer-support",
    "finance": "finance-legal",
    "hr": "hr",
    "qa": "qa",
    "writing": "writing",
    "all": "",
}


class RemotiveSource(JobSource):
    name = "remotive"

    def __init__(self, timeout: float = 15.0) -> None:
        self.timeout = timeout

    def build_params(self, query: str, category: str) -> dict:
        params: dict = {}
        if query:
            params["search"] = query
        if category and category != "all":
            slug = REMOTIVE_CATEGORIES.get(category, category)
            if slug:
                params["category"] = slug
        params["limit"] = PAGE_LIMIT
        return params

    def fetch(self, query: str = "", category: str = "") -> list[Job]:
        r = requests.get(API_URL, params=self.build_params(query, category), timeout=self.timeout)
        r.raise_for_status()
        jobs = [normalize(hit, self.name) for hit in listing_hits(r.json(), "jobs")]
        log.debug("Remotive search=%r category=%r returned %d jobs", query, category, len(jobs))
        return jobs
