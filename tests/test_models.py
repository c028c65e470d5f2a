from jobagent.models import Application, ApplicationStatus, MatchResult, Profile, Seniority


def test_named_columns_override_blob():
    record = {
        "name": "Jane Q. Doe",
        "city": "",
        "phone": None,
        "parsed_profile": {
            "name": "Jane Doe",
            "city": "Paris",
            "phone": "555-0100",
            "skills": ["Python"],
            "yearsOfExperience": 4,
            "seniority": Seniority.MID,
        },
    }
    p = Profile.from_record(record)
    assert p.name == "Jane Q. Doe"
    assert p.city == ""
    assert p.phone == "555-0100"
    assert p.skills == ["Python"]
    assert p.years_of_experience == 4
    assert p.seniority == Seniority.MID


def test_record_round_trip():
    p = Profile(name="Jane", skills=["Go"], domains=["Backend"], preferred_locations=["Berlin"])
    assert Profile.from_record(p.to_record()) == p


def test_to_dict_uses_stored_keys():
    d = Profile(years_of_experience=3, company_preferences=["Acme"]).to_dict()
    assert d["yearsOfExperience"] == 3
    assert d["companyPreferences"] == ["Acme"]
    assert "years_of_experience" not in d


def test_from_dict_sanitizes_years():
    assert Profile.from_dict({"yearsOfExperience": "7"}).years_of_experience == 7
    assert Profile.from_dict({"yearsOfExperience": "lots"}).years_of_experience == 0
    assert Profile.from_dict({"yearsOfExperience": -2}).years_of_experience == 0
    assert Profile.from_dict(None) == Profile()


def test_from_dict_wraps_bare_string_lists():
    profile = Profile.from_dict({"skills": "Python", "preferredLocations": "Berlin"})
    assert profile.skills == ["Python"]
    assert profile.preferred_locations == ["Berlin"]


def test_job_to_dict_wire_shape(make_job):
    job = make_job(is_remote=True, match_result=MatchResult(total=55))
    d = job.to_dict()
    assert d["isRemote"] is True
    assert d["applyLink"] == ""
    assert d["matchResult"]["total"] == 55
    assert "matchResult" not in make_job().to_dict()


def test_application_snapshots_score(make_job):
    app = Application.from_job(make_job(match_result=MatchResult(total=81)), notes="referral")
    assert app.match_score == 81
    assert app.status is ApplicationStatus.SAVED
    assert app.notes == "referral"
    assert app.saved_at
    assert Application.from_job(make_job()).match_score == 0
