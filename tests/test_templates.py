from jobagent.models import Profile
from jobagent.templates import generate_cover_letter, generate_email_draft, generate_recruiter_message


def test_cover_letter(make_job, senior_profile):
    senior_profile.achievements = ["Led migration to Kubernetes", "Cut costs by 20%", "Third"]
    job = make_job(title="Platform Engineer", skills=["Go", "Kubernetes"])
    letter = generate_cover_letter(job, senior_profile)
    assert "Platform Engineer position at Acme" in letter
    assert "With 5 years of experience and expertise in Python, AWS" in letter
    assert "proficiency in Go, Kubernetes" in letter
    assert "• Led migration to Kubernetes\n• Cut costs by 20%\n" in letter
    assert "Third" not in letter
    assert "in the Backend domain" in letter
    assert letter.endswith("Best regards,\nJane Doe")


def test_cover_letter_defaults(make_job):
    letter = generate_cover_letter(make_job(), Profile())
    assert "With several years of experience" in letter
    assert "proficiency in" not in letter
    assert "In my career" not in letter
    assert letter.endswith("Applicant")


def test_email_draft_signature(make_job, senior_profile):
    draft = generate_email_draft(make_job(), senior_profile)
    assert draft.startswith("Subject: Application for Backend Engineer Position – Jane Doe")
    assert draft.endswith("Best regards,\nJane Doe\njane@example.com")


def test_recruiter_message(make_job):
    msg = generate_recruiter_message(make_job(), Profile(skills=["Go", "Rust", "C++", "SQL"]))
    assert "experience with Go, Rust, C++ and" in msg
    assert msg.endswith("Thanks,\nthere")
