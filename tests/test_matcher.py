import pytest

from jobagent import matcher
from jobagent.matcher import (
    build_explanation,
    combine,
    company_preference,
    experience_match,
    location_fit,
    rank_jobs,
    role_alignment,
    score_job,
    skill_match,
)
from jobagent.models import MatchResult, Profile, Seniority


def test_missing_job_or_profile(make_job, senior_profile):
    for result in (score_job(make_job(), None), score_job(None, senior_profile)):
        assert result.total == 0
        assert result.factors == {}


def test_full_score(make_job, senior_profile):
    job = make_job(
        title="Senior Backend Engineer",
        description="Python and Docker. 3+ years required",
        skills=["Python"],
        is_remote=True,
    )
    result = score_job(job, senior_profile)
    assert result.to_dict() == {
        "total": 76,
        "factors": {
            "skills": {"score": 50, "weight": 40, "label": "Skill Match"},
            "experience": {"score": 100, "weight": 20, "label": "Experience"},
            "role": {"score": 100, "weight": 20, "label": "Role Alignment"},
            "location": {"score": 90, "weight": 10, "label": "Location Fit"},
            "company": {"score": 70, "weight": 10, "label": "Company Pref"},
        },
        "explanation": (
            "Some matching skills found. Your experience level is a great fit. "
            "Role aligns well with your career trajectory."
        ),
    }


def test_score_is_deterministic(make_job, senior_profile):
    job = make_job(description="python, 2 yrs")
    assert score_job(job, senior_profile) == score_job(job, senior_profile)


def test_skill_match_neutral_without_skills(make_job):
    assert skill_match(make_job(description="python java go"), Profile()) == 50
    assert skill_match(make_job(), Profile()) == 50


def test_skill_match_substring_both_ways(make_job):
    profile = Profile(skills=["Node.js", "Go", "Terraform"])
    job = make_job(skills=["node"], description="we use golang")
    # node <- node.js, go <- golang, terraform missing
    assert skill_match(job, profile) == 67


def test_experience_defaults(make_job):
    assert experience_match(make_job(description="5 years"), Profile()) == 60
    assert experience_match(make_job(description="no requirement"), Profile(years_of_experience=3)) == 70


@pytest.mark.parametrize(
    "years, description, expected",
    [
        (5, "3+ years required", 100),
        (1, "5+ years required", 20),
        (8, "5 years", 100),
        (9, "5 years", 80),
        (4, "5 years", 70),
        (3, "5 yrs", 40),
        (2, "5 years", 40),
        (1, "5 years", 20),
    ],
)
def test_experience_boundaries(make_job, years, description, expected):
    assert experience_match(make_job(description=description), Profile(years_of_experience=years)) == expected


def test_role_alignment(make_job):
    senior = Profile(seniority=Seniority.SENIOR, domains=["Backend"])
    assert role_alignment(make_job(title="Senior Backend Engineer"), senior) == 100
    assert role_alignment(make_job(title="Engineer", description="backend apis"), senior) == 70

    mid = Profile(seniority=Seniority.MID)
    assert role_alignment(make_job(title="Software Engineer"), mid) == 75
    assert role_alignment(make_job(title="Senior Engineer"), mid) == 50
    assert role_alignment(make_job(title="Mid-level Engineer"), mid) == 80

    junior = Profile(seniority=Seniority.JUNIOR)
    assert role_alignment(make_job(title="Junior Developer"), junior) == 80
    assert role_alignment(make_job(title="Staff Engineer"), Profile(seniority="Staff / Principal")) == 80
    assert role_alignment(make_job(title="Engineer"), Profile(seniority="Unknown tier")) == 50


def test_location_fit(make_job):
    prefs = Profile(preferred_locations=["berlin"])
    assert location_fit(make_job(is_remote=True), prefs) == 90
    assert location_fit(make_job(), Profile()) == 70
    assert location_fit(make_job(location="Berlin, Germany"), prefs) == 100
    assert location_fit(make_job(location="Paris"), prefs) == 30


def test_company_preference(make_job):
    prefs = Profile(company_preferences=["acme"])
    assert company_preference(make_job(), Profile()) == 70
    assert company_preference(make_job(company="ACME Corp"), prefs) == 100
    assert company_preference(make_job(company="Beta"), prefs) == 50


@pytest.mark.parametrize(
    "scores, expected",
    [
        ({"skills": 100, "experience": 100, "role": 100, "location": 100, "company": 100}, 100),
        ({"skills": 0, "experience": 0, "role": 0, "location": 0, "company": 0}, 0),
        ({"skills": 100, "experience": 0, "role": 0, "location": 0, "company": 0}, 40),
        ({"skills": 0, "experience": 0, "role": 0, "location": 5, "company": 0}, 1),
        ({"skills": 33, "experience": 60, "role": 50, "location": 70, "company": 70}, 49),
    ],
)
def test_combine(scores, expected):
    total = combine(scores)
    assert total == expected
    assert isinstance(total, int)


def test_explanation_tiers():
    assert build_explanation(70, 80, 70) == (
        "Strong skill overlap with your profile. Your experience level is a great fit. "
        "Role aligns well with your career trajectory."
    )
    assert build_explanation(40, 60, 50) == "Some matching skills found."
    assert build_explanation(10, 40, 0) == (
        "Limited skill overlap, consider upskilling. Experience requirements may be challenging."
    )


def test_rank_orders_by_total(monkeypatch, make_job, senior_profile):
    totals = {"a": 30, "b": 90, "c": 60}
    monkeypatch.setattr(matcher, "score_job", lambda job, profile: MatchResult(total=totals[job.id]))
    ranked = rank_jobs([make_job(id="a"), make_job(id="b"), make_job(id="c")], senior_profile)
    assert [j.id for j in ranked] == ["b", "c", "a"]
    assert [j.match_result.total for j in ranked] == [90, 60, 30]


def test_rank_is_stable_and_pure(make_job, senior_profile):
    jobs = [make_job(id="x"), make_job(id="y"), make_job(id="z", title="Senior Backend Engineer")]
    ranked = rank_jobs(jobs, senior_profile)
    assert [j.id for j in ranked] == ["z", "x", "y"]
    assert all(j.match_result is None for j in jobs)
    assert ranked[1] is not jobs[0]
