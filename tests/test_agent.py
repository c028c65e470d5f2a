from jobagent import agent, config, tracker
from jobagent.models import Profile, SearchCriteria
from jobagent.sources import JobSource


class StaticSource(JobSource):
    name = "static"

    def __init__(self, jobs):
        self.jobs = jobs
        self.calls = []

    def fetch(self, query="", category=""):
        self.calls.append(query)
        return list(self.jobs)


def test_run_without_profile(workspace):
    result = agent.run(send_email=False, sources=[])
    assert result["report_path"] is None
    assert result["matched"] == 0


def test_run_writes_digest(workspace, make_job, senior_profile):
    config.save_profile(senior_profile)
    jobs = [
        make_job(id="s-1", title="Senior Backend Engineer", description="Python on AWS", is_remote=True),
        make_job(id="s-2", title="Python Intern", company="Beta", description="python"),
        make_job(id="s-3", title="Python Developer", company="Gamma", description="python"),
    ]
    tracker.save_application(jobs[2])
    source = StaticSource(jobs)

    result = agent.run(min_score=60, send_email=False, sources=[source])

    assert source.calls == ["Python"]
    assert result["jobs_found"] == 3
    assert result["matched"] == 1
    assert result["email"] == "skipped"
    digest = (workspace / "reports").glob("digest_*.md")
    content = next(digest).read_text(encoding="utf-8")
    assert "Senior Backend Engineer" in content
    assert "Python Developer" not in content


def test_settings_feed_profile_and_criteria(workspace, make_job):
    config.save_profile(Profile(name="Kim", skills=["Go"]))
    config.save_settings({"remote_preference": "remote", "preferred_locations": ["Berlin"]})
    onsite = make_job(id="s-1", title="Go Engineer", location="Berlin")
    remote = make_job(id="s-2", title="Go Engineer II", is_remote=True)

    result = agent.run(min_score=0, send_email=False, sources=[StaticSource([onsite, remote])])

    assert result["jobs_found"] == 1
    assert result["matched"] == 1


def test_default_criteria():
    assert agent.default_criteria(Profile(skills=["Go"])) == SearchCriteria(query="Go")
    assert agent.default_criteria(Profile()).query == "Software Engineer"
