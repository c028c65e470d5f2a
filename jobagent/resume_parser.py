"""Extract a structured profile from resume text.

Every field comes from its own regex/keyword heuristic.  A heuristic that
finds nothing yields an empty or default value; only missing or too-short
input is an error.  PDF, DOCX and TXT files are read by ``extract_text``.
"""
from __future__ import annotations

import re
import shutil
import subprocess
import zipfile
from pathlib import Path
from xml.etree import ElementTree

from jobagent.log import get_logger
from jobagent.models import Profile, Seniority

log = get_logger(__name__)

MIN_RESUME_LENGTH = 50
SUMMARY_LENGTH = 300
MAX_ACHIEVEMENTS = 3


class InvalidInputError(ValueError):
    """Resume text is missing or too short to analyze."""


# ── Text extraction ──────────────────────────────────────────────────────


def extract_text(path: Path) -> str:
    """Return plain text from a PDF, DOCX, or TXT file."""
    suffix = path.suffix.lower()
    if suffix == ".txt":
        return path.read_text(encoding="utf-8", errors="ignore")
    if suffix == ".docx":
        return _extract_docx(path)
    if suffix == ".pdf":
        return _extract_pdf(path)
    raise ValueError(f"Unsupported resume format: {suffix}")


def fix_spacing(text: str) -> str:
    """Re-insert spaces when PDF extraction merges words together.

    Only applied when the space-to-character ratio is abnormally low.
    """
    if not text or len(text) < MIN_RESUME_LENGTH:
        return text
    space_ratio = text.count(" ") / len(text)
    if space_ratio > 0.08:
        return text

    log.debug("Low space ratio (%.2f%%) — applying spacing fix", space_ratio * 100)
    fixed = re.sub(r"([a-z])([A-Z])", r"\1 \2", text)
    fixed = re.sub(r"([a-zA-Z])(\d)", r"\1 \2", fixed)
    fixed = re.sub(r"(\d)([a-zA-Z])", r"\1 \2", fixed)
    fixed = re.sub(r"([.!?,;:])([A-Za-z])", r"\1 \2", fixed)
    return fixed


def _extract_pdf(path: Path) -> str:
    # pdftotext keeps layout spacing better than pypdf
    if shutil.which("pdftotext"):
        result = subprocess.run(
            ["pdftotext", "-layout", str(path), "-"],
            capture_output=True,
            text=True,
            timeout=30,
        )
        if result.returncode == 0 and result.stdout.strip():
            return result.stdout

    from pypdf import PdfReader

    reader = PdfReader(str(path))
    return "\n".join(fix_spacing(page.extract_text() or "") for page in reader.pages)


def _extract_docx(path: Path) -> str:
    ns = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"
    texts: list[str] = []
    with zipfile.ZipFile(path) as zf:
        with zf.open("word/document.xml") as f:
            tree = ElementTree.parse(f)
            for para in tree.iter(f"{ns}p"):
                parts = [node.text for node in para.iter(f"{ns}t") if node.text]
                if parts:
                    texts.append("".join(parts))
    return "\n".join(texts)


# ── Keyword tables ───────────────────────────────────────────────────────

SKILL_KEYWORDS: list[str] = [
    "JavaScript", "TypeScript", "React", "Vue", "Angular", "Node.js", "Python",
    "Java", "C++", "Go", "Rust", "AWS", "Azure", "GCP", "Docker", "Kubernetes",
    "SQL", "NoSQL", "MongoDB", "PostgreSQL", "Redis", "GraphQL", "REST", "CI/CD",
    "Git", "Agile", "Scrum", "TDD", "Machine Learning", "AI", "Data Science",
    "Big Data", "UI/UX", "Figma", "System Design", "Microservices",
]

DOMAIN_KEYWORDS: dict[str, list[str]] = {
    "Frontend": ["React", "Vue", "Angular", "CSS", "HTML", "Frontend", "UI"],
    "Backend": ["Node.js", "Python", "Java", "Go", "Backend", "API", "Database"],
    "Full Stack": ["Full Stack", "MERN", "MEAN"],
    "DevOps": ["Docker", "Kubernetes", "AWS", "CI/CD", "DevOps", "Terraform"],
    "Data": ["Data Science", "Machine Learning", "Big Data", "SQL", "Python", "Analytics"],
    "Mobile": ["React Native", "Flutter", "iOS", "Android", "Swift", "Kotlin"],
}

_SENIOR_RE = re.compile(r"senior|lead|principal|architect|manager", re.IGNORECASE)
_NOT_A_NAME_RE = re.compile(r"resume|cv|curriculum", re.IGNORECASE)
_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_PHONE_RE = re.compile(r"(?:\+\d{1,3}[-. ]?)?\(?\d{3}\)?[-. ]?\d{3}[-. ]?\d{4}")
_LOCATION_RE = re.compile(r"([A-Z][a-zA-Z ]+),[ \t]*([A-Z][a-zA-Z ]+)")
_LINKEDIN_RE = re.compile(r"(?:https?://)?(?:www\.)?linkedin\.com/in/[a-zA-Z0-9_-]+", re.IGNORECASE)
_GITHUB_RE = re.compile(r"(?:https?://)?(?:www\.)?github\.com/[a-zA-Z0-9_-]+", re.IGNORECASE)
_URL_RE = re.compile(
    r"(?<![@\w./-])(?:https?://)?(?:www\.)?(?:[a-zA-Z0-9-]+\.)+[a-zA-Z]{2,}(?:/[a-zA-Z0-9_-]+)*/?"
)
_PORTFOLIO_EXCLUDE = ("linkedin", "github", "google", "facebook")
_SECTION_RE = re.compile(
    r"(?:experience|employment|work history)(.*?)(?:education|skills|projects|$)",
    re.IGNORECASE | re.DOTALL,
)
_YEARS_RE = re.compile(r"(\d+)\s+years?", re.IGNORECASE)
_ROLE_LABEL_RE = re.compile(r"(?:current role|position|title):[ \t]*([a-zA-Z ]+)", re.IGNORECASE)
_ROLE_LINE_RE = re.compile(r"^[ \t]*([a-zA-Z][a-zA-Z ]*?)[ \t]+(?:at|[-–])[ \t]+", re.MULTILINE)
_CTC_RE = re.compile(
    r"(?:ctc|salary|package):[ \t]*([$€£]?\d+(?:,\d{3})*(?:\.\d+)?[ \t]*(?:LPA|[kKLM])?)",
    re.IGNORECASE,
)
_ACHIEVEMENT_RE = re.compile(r"improved|increased|reduced|led|built|launched|managed", re.IGNORECASE)
_BULLET_RE = re.compile(r"^[•\-*]\s*")

_keyword_cache: dict[str, re.Pattern[str]] = {}


def _keyword_re(keyword: str) -> re.Pattern[str]:
    """Whole-token, case-insensitive pattern; works for C++, CI/CD, Node.js."""
    pattern = _keyword_cache.get(keyword)
    if pattern is None:
        pattern = re.compile(rf"(?<!\w){re.escape(keyword)}(?!\w)", re.IGNORECASE)
        _keyword_cache[keyword] = pattern
    return pattern


def _with_scheme(url: str) -> str:
    return url if url.lower().startswith("http") else f"https://{url}"


# ── Field heuristics ─────────────────────────────────────────────────────


def extract_name(lines: list[str]) -> str:
    for line in lines:
        if 2 < len(line) < 50 and "@" not in line and not _NOT_A_NAME_RE.search(line):
            name = line
            break
    else:
        name = "Unknown"
    return re.sub(r"[^a-zA-Z\s]", "", name).strip()


def extract_email(text: str) -> str:
    m = _EMAIL_RE.search(text)
    return m.group(0) if m else ""


def extract_phone(text: str) -> str:
    m = _PHONE_RE.search(text)
    return m.group(0) if m else ""


def extract_location(text: str) -> tuple[str, str]:
    """Return ``(city, country)`` from the first "City, Country" pair."""
    m = _LOCATION_RE.search(text)
    if not m:
        return "", ""
    return m.group(1).strip(), m.group(2).strip()


def extract_links(text: str) -> dict[str, str]:
    linkedin = _LINKEDIN_RE.search(text)
    github = _GITHUB_RE.search(text)
    portfolio = ""
    for m in _URL_RE.finditer(text):
        url = m.group(0)
        low = url.lower()
        if any(x in low for x in _PORTFOLIO_EXCLUDE):
            continue
        # A bare "name.tld" is indistinguishable from "Node.js"
        if low.startswith(("http", "www.")) or "/" in low:
            portfolio = _with_scheme(url)
            break
    return {
        "linkedin_url": _with_scheme(linkedin.group(0)) if linkedin else "",
        "github_url": _with_scheme(github.group(0)) if github else "",
        "portfolio_url": portfolio,
    }


def extract_experience_section(text: str) -> str:
    m = _SECTION_RE.search(text)
    return m.group(1) if m else ""


def extract_years(section: str) -> int:
    m = _YEARS_RE.search(section)
    return int(m.group(1)) if m else 0


def extract_skills(text: str) -> list[str]:
    found = [kw for kw in SKILL_KEYWORDS if _keyword_re(kw).search(text)]
    return list(dict.fromkeys(found))


def extract_domains(text: str) -> list[str]:
    found = [
        domain
        for domain, keywords in DOMAIN_KEYWORDS.items()
        if any(_keyword_re(k).search(text) for k in keywords)
    ]
    return list(dict.fromkeys(found))


def infer_seniority(years: int, text: str) -> str:
    if years > 5 or _SENIOR_RE.search(text):
        return Seniority.SENIOR
    if years > 2:
        return Seniority.MID
    return Seniority.JUNIOR


def extract_current_role(text: str, section: str) -> str:
    m = _ROLE_LABEL_RE.search(text) or _ROLE_LINE_RE.search(section)
    return m.group(1).strip() if m else ""


def extract_ctc(text: str) -> str:
    m = _CTC_RE.search(text)
    return m.group(1).strip() if m else ""


def extract_achievements(section: str) -> list[str]:
    achievements: list[str] = []
    for line in section.split("\n"):
        if not _ACHIEVEMENT_RE.search(line):
            continue
        achievements.append(_BULLET_RE.sub("", line.strip()).strip())
        if len(achievements) == MAX_ACHIEVEMENTS:
            break
    return achievements


def build_summary(text: str) -> str:
    return text[:SUMMARY_LENGTH].replace("\n", " ") + "..."


# ── Public API ───────────────────────────────────────────────────────────


def parse_resume(text: str | None) -> Profile:
    """Parse raw resume text into a :class:`Profile`.

    Raises :class:`InvalidInputError` when *text* is empty or shorter than
    ``MIN_RESUME_LENGTH`` characters.
    """
    if not text:
        raise InvalidInputError("No text provided")
    if len(text) < MIN_RESUME_LENGTH:
        raise InvalidInputError("Text too short to analyze")

    lines = [line.strip() for line in text.split("\n") if line.strip()]
    section = extract_experience_section(text)
    years = extract_years(section)
    city, country = extract_location(text)

    profile = Profile(
        name=extract_name(lines),
        email=extract_email(text),
        phone=extract_phone(text),
        city=city,
        country=country,
        current_role=extract_current_role(text, section),
        current_ctc=extract_ctc(text),
        skills=extract_skills(text),
        years_of_experience=years,
        seniority=infer_seniority(years, text),
        domains=extract_domains(text),
        achievements=extract_achievements(section),
        summary=build_summary(text),
        **extract_links(text),
    )
    log.info(
        "Parsed resume — name=%s, skills=%d, seniority=%s",
        profile.name, len(profile.skills), profile.seniority,
    )
    return profile


def parse_resume_file(path: Path) -> Profile:
    """Extract text from a resume file and parse it."""
    log.info("Extracting text from %s", path.name)
    text = extract_text(path)
    if not text.strip():
        raise InvalidInputError(f"Could not extract any text from {path.name}")
    return parse_resume(text)
