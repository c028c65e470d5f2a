"""Multi-source job search with filtering and title/company dedup."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from jobagent.log import get_logger
from jobagent.models import Job, SearchCriteria
from jobagent.sources import JobSource, get_sources

log = get_logger(__name__)


def filter_jobs(jobs: list[Job], criteria: SearchCriteria) -> list[Job]:
    filtered = list(jobs)

    if criteria.query:
        q = criteria.query.lower()
        filtered = [
            j for j in filtered
            if q in j.title.lower()
            or q in j.company.lower()
            or q in j.description.lower()
            or any(q in s.lower() for s in j.skills)
        ]

    if criteria.location:
        loc = criteria.location.lower()
        filtered = [j for j in filtered if loc in j.location.lower()]

    if criteria.remote_only:
        filtered = [j for j in filtered if j.is_remote]

    if criteria.employment_type:
        wanted = criteria.employment_type.upper()
        filtered = [j for j in filtered if wanted in j.employment_type.upper()]

    return filtered


def dedupe_key(job: Job) -> str:
    return f"{job.title.lower()}|{job.company.lower()}"


def dedupe_jobs(jobs: list[Job]) -> list[Job]:
    """Keep the first job seen for each title/company pair."""
    seen: set[str] = set()
    out: list[Job] = []
    for job in jobs:
        key = dedupe_key(job)
        if key in seen:
            continue
        seen.add(key)
        out.append(job)
    return out


def _fetch_source(source: JobSource, criteria: SearchCriteria) -> list[Job]:
    try:
        jobs = source.fetch(criteria.query, criteria.category)
        log.info("[%s] returned %d jobs", source.name, len(jobs))
        return jobs
    except Exception as exc:
        log.error("[%s] fetch failed: %s", source.name, exc)
        return []


def search_jobs(
    criteria: SearchCriteria | None = None,
    sources: list[JobSource] | None = None,
) -> list[Job]:
    """Fetch all sources in parallel, then filter and dedupe.

    Results are concatenated in source order, not completion order.
    """
    criteria = criteria or SearchCriteria()
    sources = get_sources() if sources is None else sources
    if not sources:
        return []

    log.info("Searching %d source(s) in parallel...", len(sources))
    with ThreadPoolExecutor(max_workers=len(sources)) as pool:
        batches = list(pool.map(lambda s: _fetch_source(s, criteria), sources))

    results = [job for batch in batches for job in batch]
    jobs = dedupe_jobs(filter_jobs(results, criteria))
    log.info("Search complete — %d fetched, %d after filter/dedup", len(results), len(jobs))
    return jobs
