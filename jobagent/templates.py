"""Template cover letters, email drafts and recruiter messages."""
from __future__ import annotations

from jobagent.models import Job, Profile


def _years(profile: Profile) -> str:
    return str(profile.years_of_experience) if profile.years_of_experience else "several"


def generate_cover_letter(job: Job, profile: Profile) -> str:
    name = profile.name or "Applicant"
    skills = ", ".join(profile.skills[:6])
    job_skills = ", ".join(job.skills[:4])
    achievements = profile.achievements[:2]

    letter = (
        "Dear Hiring Manager,\n\n"
        f"I am writing to express my strong interest in the {job.title} position at "
        f"{job.company}. With {_years(profile)} years of experience and expertise in "
        f"{skills}, I am confident in my ability to make a meaningful contribution "
        "to your team.\n\n"
    )
    if job_skills:
        letter += (
            f"Your requirement for proficiency in {job_skills} aligns directly with "
            "my professional background. "
        )
    if achievements:
        letter += "In my career, I have:\n"
        letter += "".join(f"• {a}\n" for a in achievements)
        letter += "\n"
    if profile.domains:
        letter += (
            f"My experience in the {profile.domains[0]} domain has given me deep "
            "understanding of the unique challenges and opportunities in this space. "
        )
    letter += (
        f"\nI am particularly drawn to {job.company} because of the opportunity to work "
        "on impactful challenges. I would welcome the chance to discuss how my skills "
        "and experience can contribute to your team's success.\n\n"
        "Thank you for considering my application. I look forward to hearing from you.\n\n"
        f"Best regards,\n{name}"
    )
    return letter


def generate_email_draft(job: Job, profile: Profile) -> str:
    name = profile.name or "Applicant"
    skills = ", ".join(profile.skills[:4])
    signature = "\n".join(x for x in (name, profile.email, profile.phone) if x)
    return f"""Subject: Application for {job.title} Position – {name}

Dear Hiring Team,

I am reaching out regarding the {job.title} position at {job.company}. With {_years(profile)} years of professional experience and strong skills in {skills}, I believe I would be a great fit for this role.

I have attached my resume for your review. I would be happy to discuss my qualifications in more detail at your convenience.

Thank you for your time and consideration.

Best regards,
{signature}"""


def generate_recruiter_message(job: Job, profile: Profile) -> str:
    name = profile.name or "there"
    skills = ", ".join(profile.skills[:3])
    return f"""Hi,

I came across the {job.title} role at {job.company} and I'm very interested. I have experience with {skills} and I believe my background aligns well with what you're looking for.

Would you be open to a brief conversation to discuss this opportunity?

Thanks,
{name}"""
