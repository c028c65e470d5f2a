import yaml

from jobagent import config
from jobagent.models import Profile


def test_load_profile_missing(workspace):
    assert config.load_profile() is None


def test_profile_round_trip(workspace):
    profile = Profile(name="Jane", skills=["Python"], years_of_experience=6, seniority="Senior")
    path = config.save_profile(profile)
    assert path == config.PROFILE_PATH
    assert config.load_profile() == profile


def test_save_replaces_previous_profile(workspace):
    config.save_profile(Profile(name="Old", skills=["Java"], achievements=["Built X"]))
    config.save_profile(Profile(name="New", skills=["Go"]))
    loaded = config.load_profile()
    assert loaded.skills == ["Go"]
    assert loaded.achievements == []


def test_hand_edited_column_wins(workspace):
    config.save_profile(Profile(name="Jane", city="Paris"))
    record = yaml.safe_load(config.PROFILE_PATH.read_text(encoding="utf-8"))
    record["city"] = "Lyon"
    config.PROFILE_PATH.write_text(yaml.safe_dump(record), encoding="utf-8")
    assert config.load_profile().city == "Lyon"


def test_malformed_profile(workspace):
    config.PROFILE_PATH.parent.mkdir(parents=True)
    config.PROFILE_PATH.write_text("", encoding="utf-8")
    assert config.load_profile() is None


def test_settings_defaults_and_round_trip(workspace):
    assert config.load_settings() == config.DEFAULT_SETTINGS
    config.save_settings({"remote_preference": "remote", "preferred_locations": ["Berlin"]})
    settings = config.load_settings()
    assert settings["remote_preference"] == "remote"
    assert settings["preferred_locations"] == ["Berlin"]
    assert settings["salary_min"] == 0


def test_corrupt_settings_fall_back(workspace):
    config.SETTINGS_PATH.parent.mkdir(parents=True)
    config.SETTINGS_PATH.write_text("a: [1, 2", encoding="utf-8")
    assert config.load_settings() == config.DEFAULT_SETTINGS


def test_resume_text(workspace):
    assert config.load_resume_text() == ""
    config.save_resume_text("raw resume")
    assert config.load_resume_text() == "raw resume"


def test_get_env_strips(monkeypatch):
    monkeypatch.setenv("JOBAGENT_TEST_KEY", "  value ")
    assert config.get_env("JOBAGENT_TEST_KEY") == "value"
    assert config.get_env("JOBAGENT_MISSING_KEY", "dflt") == "dflt"
