"""Normalize raw postings from each listing source into one ``Job`` shape.

Upstream payloads are untrusted: missing fields are defaulted, never
rejected.  Ids are prefixed with the source tag so postings from different
sources never collide.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Callable

from jobagent.models import Job

MAX_JOB_SKILLS = 8

# (lower-case substring, label) pairs scanned in description + tags.
JOB_SKILL_KEYWORDS: list[tuple[str, str]] = [
    ("python", "Python"), ("javascript", "JavaScript"), ("typescript", "TypeScript"),
    ("react", "React"), ("node.js", "Node.js"), ("aws", "AWS"), ("docker", "Docker"),
    ("kubernetes", "Kubernetes"), ("sql", "SQL"), ("java ", "Java"), ("golang", "Go"),
    ("rust", "Rust"), ("c++", "C++"), ("angular", "Angular"), ("vue", "Vue.js"),
    ("postgresql", "PostgreSQL"), ("mongodb", "MongoDB"), ("redis", "Redis"),
    ("tensorflow", "TensorFlow"), ("pytorch", "PyTorch"), ("kafka", "Kafka"),
    ("terraform", "Terraform"), ("linux", "Linux"), ("azure", "Azure"), ("gcp", "GCP"),
    ("graphql", "GraphQL"), ("rest api", "REST API"), ("ci/cd", "CI/CD"),
    ("machine learning", "ML"), ("data engineer", "Data Eng"),
    ("agile", "Agile"), ("scrum", "Scrum"), ("next.js", "Next.js"),
    ("django", "Django"), ("flask", "Flask"), ("spring", "Spring"),
]

_BREAK_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_BLOCK_RE = re.compile(r"</?(?:p|div|li|h[1-6])(?:\s[^>]*)?>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_NUMERIC_ENTITY_RE = re.compile(r"&#\d+;")
_BLANK_LINES_RE = re.compile(r"\n{3,}")
_WHITESPACE_RE = re.compile(r"\s+")

# &amp; goes last so "&amp;lt;" decodes to "&lt;", not "<".
_ENTITIES: list[tuple[str, str]] = [
    ("&lt;", "<"), ("&gt;", ">"), ("&quot;", '"'), ("&#39;", "'"),
    ("&nbsp;", " "), ("&amp;", "&"),
]


class UnknownSourceError(KeyError):
    """No normalizer is registered for the given source tag."""


def strip_html(html: str) -> str:
    text = _BREAK_RE.sub("\n", html or "")
    text = _BLOCK_RE.sub("\n", text)
    text = _TAG_RE.sub("", text)
    for entity, char in _ENTITIES[:-1]:
        text = text.replace(entity, char)
    text = _NUMERIC_ENTITY_RE.sub("", text)
    text = text.replace(*_ENTITIES[-1])
    text = _BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()


def extract_job_skills(description: str, tags: list[str] | None) -> list[str]:
    tags = [str(t) for t in (tags or []) if t]
    skills: dict[str, None] = dict.fromkeys(t.strip() for t in tags if t.strip())
    haystack = f"{description} {' '.join(tags)}".lower()
    for keyword, label in JOB_SKILL_KEYWORDS:
        if keyword in haystack:
            skills.setdefault(label)
    return list(skills)[:MAX_JOB_SKILLS]


def _str(value: Any, default: str = "") -> str:
    return str(value) if value not in (None, "") else default


def normalize_remotive(raw: dict[str, Any]) -> Job:
    description = _str(raw.get("description"))
    return Job(
        id=f"remotive-{_str(raw.get('id'))}",
        title=_str(raw.get("title"), "Untitled"),
        company=_str(raw.get("company_name"), "Unknown"),
        company_logo=raw.get("company_logo") or None,
        location=_str(raw.get("candidate_required_location"), "Worldwide"),
        is_remote=True,
        employment_type=_str(raw.get("job_type"), "full_time").replace("_", " ", 1),
        description=strip_html(description),
        salary=raw.get("salary") or None,
        apply_link=_str(raw.get("url")),
        posted_at=_str(raw.get("publication_date")),
        skills=extract_job_skills(description, raw.get("tags")),
        source="Remotive",
        category=_str(raw.get("category")),
    )


def _epoch_to_iso(value: Any) -> str:
    if not value:
        return ""
    try:
        dt = datetime.fromtimestamp(float(value), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return ""
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_arbeitnow(raw: dict[str, Any]) -> Job:
    description = _str(raw.get("description"))
    slug = _str(raw.get("slug")) or _WHITESPACE_RE.sub("-", _str(raw.get("title")))
    return Job(
        id=f"arbeitnow-{slug}",
        title=_str(raw.get("title"), "Untitled"),
        company=_str(raw.get("company_name"), "Unknown"),
        company_logo=None,
        location=_str(raw.get("location"), "Not specified"),
        is_remote=bool(raw.get("remote")),
        employment_type="Full-time",
        description=strip_html(description),
        salary=None,
        apply_link=_str(raw.get("url")),
        posted_at=_epoch_to_iso(raw.get("created_at")),
        skills=extract_job_skills(description, raw.get("tags")),
        source="Arbeitnow",
        category="",
    )


NORMALIZERS: dict[str, Callable[[dict[str, Any]], Job]] = {
    "remotive": normalize_remotive,
    "arbeitnow": normalize_arbeitnow,
}


def normalize(raw: dict[str, Any], source_tag: str) -> Job:
    try:
        normalizer = NORMALIZERS[source_tag.lower()]
    except KeyError:
        raise UnknownSourceError(source_tag) from None
    return normalizer(raw or {})
