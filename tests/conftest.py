import os

os.environ.setdefault("JOBAGENT_NO_LOG_FILE", "1")

import pytest

from jobagent import config
from jobagent.models import Job, Profile, Seniority


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Point every config path at a temporary directory."""
    monkeypatch.setattr(config, "CONFIG_DIR", tmp_path / "config")
    monkeypatch.setattr(config, "DATA_DIR", tmp_path / "data")
    monkeypatch.setattr(config, "REPORTS_DIR", tmp_path / "reports")
    monkeypatch.setattr(config, "PROFILE_PATH", tmp_path / "config" / "profile.yaml")
    monkeypatch.setattr(config, "SETTINGS_PATH", tmp_path / "config" / "settings.yaml")
    monkeypatch.setattr(config, "RESUME_TEXT_PATH", tmp_path / "data" / "resume.txt")
    return tmp_path


@pytest.fixture
def make_job():
    def _make(**overrides):
        fields = {
            "id": "remotive-1",
            "title": "Backend Engineer",
            "company": "Acme",
            "location": "Berlin, Germany",
            "description": "",
            "source": "Remotive",
        }
        fields.update(overrides)
        return Job(**fields)

    return _make


@pytest.fixture
def senior_profile():
    return Profile(
        name="Jane Doe",
        email="jane@example.com",
        skills=["Python", "AWS"],
        years_of_experience=5,
        seniority=Seniority.SENIOR,
        domains=["Backend"],
    )
