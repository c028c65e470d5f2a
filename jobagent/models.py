"""Data models for profiles, jobs, match results and applications."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Seniority:
    JUNIOR = "Junior"
    MID = "Mid-Level"
    SENIOR = "Senior"


# Discrete columns stored next to the embedded parsed blob; they win on load.
PROFILE_COLUMNS: tuple[str, ...] = (
    "name", "email", "phone", "country", "city",
    "current_role", "current_ctc",
    "linkedin_url", "github_url", "portfolio_url",
)

# Python attribute -> stored key, where the stored key differs.
_PROFILE_KEYS: dict[str, str] = {
    "years_of_experience": "yearsOfExperience",
    "preferred_locations": "preferredLocations",
    "company_preferences": "companyPreferences",
}


@dataclass
class Profile:
    name: str = ""
    email: str = ""
    phone: str = ""
    city: str = ""
    country: str = ""
    linkedin_url: str = ""
    github_url: str = ""
    portfolio_url: str = ""
    current_role: str = ""
    current_ctc: str = ""
    skills: list[str] = field(default_factory=list)
    years_of_experience: int = 0
    seniority: str = Seniority.JUNIOR
    domains: list[str] = field(default_factory=list)
    achievements: list[str] = field(default_factory=list)
    summary: str = ""
    preferred_locations: list[str] = field(default_factory=list)
    company_preferences: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {_PROFILE_KEYS.get(k, k): v for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Profile:
        data = data or {}
        kwargs: dict[str, Any] = {}
        for attr in cls.__dataclass_fields__:
            key = _PROFILE_KEYS.get(attr, attr)
            if key in data:
                kwargs[attr] = data[key]
            elif attr in data:
                kwargs[attr] = data[attr]
        profile = cls(**kwargs)
        for attr in ("skills", "domains", "achievements", "preferred_locations", "company_preferences"):
            value = getattr(profile, attr) or []
            setattr(profile, attr, [value] if isinstance(value, str) else list(value))
        try:
            profile.years_of_experience = max(0, int(profile.years_of_experience or 0))
        except (TypeError, ValueError):
            profile.years_of_experience = 0
        return profile

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Profile:
        """Build a profile from a stored record.

        The embedded ``parsed_profile`` blob is the base; every named column
        present in the record overrides the blob's value.
        """
        merged = dict(record.get("parsed_profile") or {})
        for col in PROFILE_COLUMNS:
            if col in record and record[col] is not None:
                merged[col] = record[col]
        return cls.from_dict(merged)

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {col: getattr(self, col) or "" for col in PROFILE_COLUMNS}
        record["parsed_profile"] = self.to_dict()
        return record


@dataclass
class FactorScore:
    score: int
    weight: int
    label: str


@dataclass
class MatchResult:
    total: int = 0
    factors: dict[str, FactorScore] = field(default_factory=dict)
    explanation: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "factors": {k: asdict(f) for k, f in self.factors.items()},
            "explanation": self.explanation,
        }


@dataclass
class Job:
    id: str
    title: str
    company: str
    location: str
    description: str = ""
    apply_link: str = ""
    is_remote: bool = False
    employment_type: str = "Full-time"
    company_logo: str | None = None
    salary: str | None = None
    posted_at: str = ""
    skills: list[str] = field(default_factory=list)
    source: str = ""
    category: str = ""
    match_result: MatchResult | None = None

    def to_dict(self) -> dict[str, Any]:
        out = {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "companyLogo": self.company_logo,
            "location": self.location,
            "isRemote": self.is_remote,
            "employmentType": self.employment_type,
            "description": self.description,
            "salary": self.salary,
            "applyLink": self.apply_link,
            "postedAt": self.posted_at,
            "skills": list(self.skills),
            "source": self.source,
            "category": self.category,
        }
        if self.match_result is not None:
            out["matchResult"] = self.match_result.to_dict()
        return out


class ApplicationStatus(str, Enum):
    SAVED = "saved"
    APPLIED = "applied"
    INTERVIEW = "interview"
    OFFER = "offer"
    REJECTED = "rejected"


@dataclass
class Application:
    id: str
    title: str
    company: str
    location: str = ""
    salary: str | None = None
    apply_link: str = ""
    status: ApplicationStatus = ApplicationStatus.SAVED
    match_score: int = 0
    saved_at: str = ""
    notes: str = ""

    @classmethod
    def from_job(cls, job: Job, notes: str = "") -> Application:
        """Snapshot a job; the match score is frozen at this moment."""
        return cls(
            id=job.id,
            title=job.title,
            company=job.company,
            location=job.location,
            salary=job.salary,
            apply_link=job.apply_link,
            status=ApplicationStatus.SAVED,
            match_score=job.match_result.total if job.match_result else 0,
            saved_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
            notes=notes,
        )


@dataclass
class SearchCriteria:
    query: str = ""
    location: str = ""
    employment_type: str = ""
    remote_only: bool = False
    category: str = ""
