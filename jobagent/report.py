"""Build the markdown digest of ranked job matches."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from urllib.parse import urlparse

from jobagent import config
from jobagent.log import get_logger
from jobagent.models import Job, Profile

log = get_logger(__name__)

MAX_DIGEST_JOBS = 15


def _short_url_label(url: str) -> str:
    host = (urlparse(url).hostname or "").replace("www.", "")
    parts = host.split(".")
    return parts[0].capitalize() if parts and parts[0] else "Link"


def _truncate(text: str, width: int) -> str:
    return text[:width] + ("…" if len(text) > width else "")


def build_digest(jobs: list[Job], profile: Profile, min_score: int = 0) -> str:
    """Render ranked *jobs* (with ``match_result`` set) as markdown."""
    date = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    greeting = profile.name or "there"
    top = jobs[:MAX_DIGEST_JOBS]

    lines: list[str] = [f"# Job Matches — {date}", ""]
    lines.append(f"Hi {greeting}, **{len(jobs)}** jobs scored {min_score}% or higher.")
    lines.append("")

    if not top:
        lines.append("_No new matches today._")
        log.info("Built digest: no matches")
        return "\n".join(lines)

    lines.append("## Top Matches")
    lines.append("")
    for job in top:
        result = job.match_result
        total = result.total if result else 0
        lines.append(f"### {job.title} @ {job.company}")
        lines.append(f"- **Score:** {total}%")
        remote = " (remote)" if job.is_remote else ""
        lines.append(f"- **Location:** {job.location}{remote}")
        if result and result.explanation:
            lines.append(f"- **Why:** {result.explanation}")
        if result and result.factors:
            breakdown = ", ".join(f"{f.label} {f.score}" for f in result.factors.values())
            lines.append(f"- **Breakdown:** {breakdown}")
        if job.skills:
            lines.append(f"- **Skills:** {', '.join(job.skills)}")
        if job.apply_link:
            lines.append(f"- **Apply:** [{_short_url_label(job.apply_link)}]({job.apply_link})")
        lines.append("")

    lines.append("---")
    lines.append("")
    lines.append("## Quick Reference")
    lines.append("")
    lines.append("| # | Role | Company | Location | Score | Source |")
    lines.append("|--:|------|---------|----------|------:|--------|")
    for i, job in enumerate(top, 1):
        total = job.match_result.total if job.match_result else 0
        loc = job.location.split(",")[0][:18]
        lines.append(
            f"| {i} | {_truncate(job.title, 40)} | {_truncate(job.company, 22)} "
            f"| {loc} | {total}% | {job.source} |"
        )
    lines.append("")

    log.info("Built digest: %d jobs (%d shown)", len(jobs), len(top))
    return "\n".join(lines)


def write_digest(content: str) -> Path:
    config.REPORTS_DIR.mkdir(parents=True, exist_ok=True)
    date = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    path = config.REPORTS_DIR / f"digest_{date}.md"
    path.write_text(content, encoding="utf-8")
    log.info("Digest written → %s", path)
    return path
