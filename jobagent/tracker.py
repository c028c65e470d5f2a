"""Track saved applications in a CSV table with file locking."""
from __future__ import annotations

import csv
import fcntl
from dataclasses import asdict
from pathlib import Path

from jobagent import config
from jobagent.log import get_logger
from jobagent.models import Application, ApplicationStatus, Job

log = get_logger(__name__)

HEADERS: list[str] = [
    "id", "title", "company", "location", "salary", "apply_link",
    "status", "match_score", "saved_at", "notes",
]


def _csv_path() -> Path:
    return config.DATA_DIR / "applications.csv"


def _lock(f, exclusive: bool = True) -> None:
    """Advisory file lock (Unix fcntl)."""
    try:
        op = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
        fcntl.flock(f.fileno(), op)
    except (OSError, AttributeError):
        pass


def _unlock(f) -> None:
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except (OSError, AttributeError):
        pass


def _to_row(app: Application) -> dict[str, str]:
    row = asdict(app)
    row["status"] = app.status.value
    row["salary"] = app.salary or ""
    row["match_score"] = str(app.match_score)
    return row


def _from_row(row: dict[str, str]) -> Application:
    try:
        score = int(row.get("match_score") or 0)
    except ValueError:
        score = 0
    return Application(
        id=row.get("id", ""),
        title=row.get("title", ""),
        company=row.get("company", ""),
        location=row.get("location", ""),
        salary=row.get("salary") or None,
        apply_link=row.get("apply_link", ""),
        status=ApplicationStatus(row.get("status") or ApplicationStatus.SAVED.value),
        match_score=score,
        saved_at=row.get("saved_at", ""),
        notes=row.get("notes", ""),
    )


def ensure_tracker() -> None:
    path = _csv_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        with open(path, "w", newline="", encoding="utf-8") as f:
            _lock(f)
            csv.writer(f).writerow(HEADERS)
            _unlock(f)
        log.info("Created application tracker → %s", path.name)


def _read_rows() -> list[dict[str, str]]:
    ensure_tracker()
    with open(_csv_path(), "r", newline="", encoding="utf-8") as f:
        _lock(f, exclusive=False)
        rows = list(csv.DictReader(f))
        _unlock(f)
    return rows


def _write_rows(rows: list[dict[str, str]]) -> None:
    with open(_csv_path(), "w", newline="", encoding="utf-8") as f:
        _lock(f)
        w = csv.DictWriter(f, fieldnames=HEADERS)
        w.writeheader()
        w.writerows(rows)
        _unlock(f)


def get_applications() -> list[Application]:
    """All tracked applications, most recently saved first."""
    apps = [_from_row(r) for r in _read_rows()]
    return sorted(apps, key=lambda a: a.saved_at, reverse=True)


def get_tracked_job_ids() -> set[str]:
    return {r["id"] for r in _read_rows()}


def save_application(job: Job, notes: str = "") -> list[Application]:
    """Track *job* with its current match score frozen into the record."""
    if job.id in get_tracked_job_ids():
        log.debug("Already tracked: %s", job.id)
        return get_applications()
    app = Application.from_job(job, notes=notes)
    with open(_csv_path(), "a", newline="", encoding="utf-8") as f:
        _lock(f)
        csv.DictWriter(f, fieldnames=HEADERS).writerow(_to_row(app))
        _unlock(f)
    log.info("Saved application: %s @ %s [score=%d]", app.title, app.company, app.match_score)
    return get_applications()


def update_application(
    job_id: str,
    status: ApplicationStatus | str | None = None,
    notes: str | None = None,
) -> bool:
    """Update status and/or notes; the match score is never touched."""
    new_status = ApplicationStatus(status) if status is not None else None
    rows = _read_rows()
    for r in rows:
        if r.get("id") == job_id:
            if new_status is not None:
                r["status"] = new_status.value
            if notes is not None:
                r["notes"] = notes
            break
    else:
        return False
    _write_rows(rows)
    log.debug("Updated %s (status=%s)", job_id, new_status.value if new_status else "-")
    return True


def remove_application(job_id: str) -> bool:
    rows = _read_rows()
    kept = [r for r in rows if r.get("id") != job_id]
    if len(kept) == len(rows):
        return False
    _write_rows(kept)
    log.info("Removed application %s", job_id)
    return True
