"""Score and rank jobs against a profile with a weighted five-factor model.

Each factor returns an integer 0-100.  Missing profile data degrades a
factor to a neutral default instead of penalizing the job.
"""
from __future__ import annotations

import dataclasses
import math
import re

from jobagent.log import get_logger
from jobagent.models import FactorScore, Job, MatchResult, Profile, Seniority

log = get_logger(__name__)

# key, label, weight (percent)
FACTORS: list[tuple[str, str, int]] = [
    ("skills", "Skill Match", 40),
    ("experience", "Experience", 20),
    ("role", "Role Alignment", 20),
    ("location", "Location Fit", 10),
    ("company", "Company Pref", 10),
]

_JUNIOR_KEYWORDS = ["junior", "jr", "associate", "entry", "intern"]

SENIORITY_TITLE_KEYWORDS: dict[str, list[str]] = {
    "Executive": ["director", "vp", "chief", "head"],
    "Staff / Principal": ["staff", "principal", "distinguished"],
    Seniority.SENIOR: ["senior", "sr", "lead"],
    Seniority.MID: ["mid", "intermediate"],
    "Junior / Entry-Level": _JUNIOR_KEYWORDS,
    Seniority.JUNIOR: _JUNIOR_KEYWORDS,
}

_REQUIRED_YEARS_RE = re.compile(r"(\d{1,2})\+?\s*(?:years?|yrs?)")
_LEVELLED_TITLE_RE = re.compile(r"senior|junior|lead|intern|staff", re.IGNORECASE)


def _round(value: float) -> int:
    """Round half up (2.5 -> 3), unlike Python's banker's rounding."""
    return int(math.floor(value + 0.5))


def skill_match(job: Job, profile: Profile) -> int:
    if not profile.skills:
        return 50
    job_skills = [s.lower() for s in job.skills or []]
    desc = (job.description or "").lower()
    user_skills = [s.lower() for s in profile.skills]

    matched = 0
    for skill in user_skills:
        if any(js in skill or skill in js for js in job_skills) or skill in desc:
            matched += 1
    return _round(matched / len(user_skills) * 100)


def experience_match(job: Job, profile: Profile) -> int:
    if not profile.years_of_experience:
        return 60
    m = _REQUIRED_YEARS_RE.search((job.description or "").lower())
    if not m:
        return 70
    diff = profile.years_of_experience - int(m.group(1))
    if 0 <= diff <= 3:
        return 100
    if diff > 3:
        return 80
    if diff >= -1:
        return 70
    if diff >= -3:
        return 40
    return 20


def role_alignment(job: Job, profile: Profile) -> int:
    title = (job.title or "").lower()
    desc = (job.description or "").lower()
    score = 50

    expected = SENIORITY_TITLE_KEYWORDS.get(profile.seniority, [])
    if any(k in title for k in expected):
        score += 30
    elif profile.seniority == Seniority.MID and not _LEVELLED_TITLE_RE.search(title):
        score += 25

    for domain in (d.lower() for d in profile.domains or []):
        if domain in title or domain in desc:
            score += 20
            break
    return min(100, score)


def location_fit(job: Job, profile: Profile) -> int:
    if job.is_remote:
        return 90
    if not profile.preferred_locations:
        return 70
    loc = (job.location or "").lower()
    if any(pl.lower() in loc for pl in profile.preferred_locations):
        return 100
    return 30


def company_preference(job: Job, profile: Profile) -> int:
    if not profile.company_preferences:
        return 70
    company = (job.company or "").lower()
    if any(pref.lower() in company for pref in profile.company_preferences):
        return 100
    return 50


_FACTOR_FUNCS = {
    "skills": skill_match,
    "experience": experience_match,
    "role": role_alignment,
    "location": location_fit,
    "company": company_preference,
}


def combine(scores: dict[str, int]) -> int:
    """Weighted total of the factor scores, clamped to 0..100."""
    total = _round(sum(scores[key] * weight for key, _, weight in FACTORS) / 100)
    return min(100, max(0, total))


def build_explanation(skill: int, experience: int, role: int) -> str:
    parts: list[str] = []
    if skill >= 70:
        parts.append("Strong skill overlap with your profile.")
    elif skill >= 40:
        parts.append("Some matching skills found.")
    else:
        parts.append("Limited skill overlap, consider upskilling.")

    if experience >= 80:
        parts.append("Your experience level is a great fit.")
    elif experience < 50:
        parts.append("Experience requirements may be challenging.")

    if role >= 70:
        parts.append("Role aligns well with your career trajectory.")
    return " ".join(parts)


def score_job(job: Job | None, profile: Profile | None) -> MatchResult:
    if job is None or profile is None:
        return MatchResult(total=0, factors={})

    scores = {key: _FACTOR_FUNCS[key](job, profile) for key, _, _ in FACTORS}
    return MatchResult(
        total=combine(scores),
        factors={
            key: FactorScore(score=scores[key], weight=weight, label=label)
            for key, label, weight in FACTORS
        },
        explanation=build_explanation(scores["skills"], scores["experience"], scores["role"]),
    )


def rank_jobs(jobs: list[Job], profile: Profile | None) -> list[Job]:
    """Return scored copies of *jobs*, best first.

    Equal totals keep their input order (``sorted`` is stable).
    """
    annotated = [
        dataclasses.replace(job, skills=list(job.skills), match_result=score_job(job, profile))
        for job in jobs
    ]
    ranked = sorted(annotated, key=lambda j: -j.match_result.total)
    log.info("Ranked %d jobs", len(ranked))
    return ranked
