"""
Background job agent.

Runs: load profile → search sources → skip tracked jobs → rank → digest → email.
"""
from __future__ import annotations

import dataclasses
from typing import Any

from jobagent import config
from jobagent.email_report import send_digest_email
from jobagent.log import get_logger
from jobagent.matcher import rank_jobs
from jobagent.models import Profile, SearchCriteria
from jobagent.report import build_digest, write_digest
from jobagent.search import search_jobs
from jobagent.sources import JobSource
from jobagent.tracker import get_tracked_job_ids

log = get_logger(__name__)


def default_criteria(profile: Profile) -> SearchCriteria:
    """Search on the first detected skill, falling back to a generic title."""
    query = profile.skills[0] if profile.skills else "Software Engineer"
    return SearchCriteria(query=query)


def _apply_settings(profile: Profile, settings: dict[str, Any]) -> Profile:
    if not profile.preferred_locations and settings.get("preferred_locations"):
        profile.preferred_locations = list(settings["preferred_locations"])
    return profile


def run(
    *,
    criteria: SearchCriteria | None = None,
    min_score: int = 40,
    max_jobs: int = 50,
    send_email: bool = True,
    sources: list[JobSource] | None = None,
) -> dict[str, Any]:
    config.ensure_dirs()
    profile = config.load_profile()
    if profile is None:
        log.error("No profile found — parse a resume first")
        return {"jobs_found": 0, "matched": 0, "report_path": None, "email": "skipped"}

    settings = config.load_settings()
    profile = _apply_settings(profile, settings)
    criteria = criteria or default_criteria(profile)
    if settings.get("remote_preference") == "remote":
        criteria = dataclasses.replace(criteria, remote_only=True)

    jobs = search_jobs(criteria, sources=sources)[:max_jobs]
    tracked = get_tracked_job_ids()
    new_jobs = [j for j in jobs if j.id not in tracked]
    ranked = [j for j in rank_jobs(new_jobs, profile) if j.match_result.total >= min_score]

    digest = build_digest(ranked, profile, min_score=min_score)
    report_path = write_digest(digest)

    email_status = "skipped"
    if send_email and ranked:
        ok, msg = send_digest_email(digest, subject=f"{len(ranked)} New Job Matches", to_email=profile.email or None)
        email_status = "sent" if ok else msg
        log.info("Email: %s", msg)

    log.info("Run complete — found=%d, new=%d, matched=%d", len(jobs), len(new_jobs), len(ranked))
    return {
        "jobs_found": len(jobs),
        "matched": len(ranked),
        "report_path": str(report_path),
        "email": email_status,
    }
