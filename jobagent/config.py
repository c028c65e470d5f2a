"""Load env configuration and persist the profile and settings as YAML."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobagent.log import get_logger
from jobagent.models import Profile

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(os.environ.get("JOBAGENT_HOME", Path(__file__).resolve().parent.parent))
CONFIG_DIR: Path = ROOT_DIR / "config"
DATA_DIR: Path = ROOT_DIR / "data"
REPORTS_DIR: Path = ROOT_DIR / "reports"
PROFILE_PATH: Path = CONFIG_DIR / "profile.yaml"
SETTINGS_PATH: Path = CONFIG_DIR / "settings.yaml"
RESUME_TEXT_PATH: Path = DATA_DIR / "resume.txt"

DEFAULT_SETTINGS: dict[str, Any] = {
    "remote_preference": "any",
    "salary_min": 0,
    "preferred_locations": [],
}


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def ensure_dirs() -> None:
    for d in (CONFIG_DIR, DATA_DIR, REPORTS_DIR):
        d.mkdir(parents=True, exist_ok=True)


def load_profile(path: Path | None = None) -> Profile | None:
    """Load the stored profile record; ``None`` when nothing was saved yet."""
    path = path or PROFILE_PATH
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8") as f:
        record = yaml.safe_load(f)
    if not isinstance(record, dict):
        log.warning("Profile file %s is empty or malformed", path.name)
        return None
    return Profile.from_record(record)


def save_profile(profile: Profile, path: Path | None = None) -> Path:
    """Replace the stored profile with *profile* (no deep merge)."""
    path = path or PROFILE_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(profile.to_record(), f, sort_keys=False, allow_unicode=True)
    log.info("Saved profile → %s", path.name)
    return path


def load_resume_text(path: Path | None = None) -> str:
    path = path or RESUME_TEXT_PATH
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")


def save_resume_text(text: str, path: Path | None = None) -> None:
    path = path or RESUME_TEXT_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def load_settings(path: Path | None = None) -> dict[str, Any]:
    path = path or SETTINGS_PATH
    settings = dict(DEFAULT_SETTINGS)
    if not path.exists():
        return settings
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        log.warning("Ignoring unreadable settings file %s: %s", path.name, exc)
        return settings
    if isinstance(data, dict):
        settings.update(data)
    return settings


def save_settings(settings: dict[str, Any], path: Path | None = None) -> None:
    path = path or SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(settings, f, sort_keys=False)
