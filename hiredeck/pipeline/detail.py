"""Detail-panel previews: what a listing reveals before and after unlock."""

from typing import Any

from hiredeck.core.formatters import format_candidate_title
from hiredeck.core.schemas import Candidate, Job

LOCKED = "Unlock to reveal"


def job_preview(job: Job, unlocked: bool) -> dict[str, Any]:
    """Fields shown for a job. Anonymous employers stay hidden until unlocked."""
    hidden = job.is_anonymous and not unlocked
    company = f"[{job.company_industry or 'Local'} Business]" if hidden else job.company_name
    preview: dict[str, Any] = {
        "id": job.id,
        "title": job.title,
        "company": company,
        "industry": job.company_industry,
        "location": job.location,
        "pay_range": job.pay_range,
        "job_type": job.job_type,
        "description": job.description,
        "requirements": list(job.requirements or []),
        "responsibilities": list(job.responsibilities or []),
        "benefits": list(job.benefits or []),
        "unlocked": unlocked,
    }
    if unlocked:
        preview["contact_email"] = job.contact_email
        preview["contact_phone"] = job.contact_phone
    else:
        preview["contact_email"] = LOCKED
        preview["contact_phone"] = LOCKED
    return preview


def candidate_preview(candidate: Candidate, unlocked: bool) -> dict[str, Any]:
    """Fields shown for a candidate. Identity and contact need an unlock."""
    preview: dict[str, Any] = {
        "id": candidate.id,
        "title": format_candidate_title(candidate),
        "location": candidate.location,
        "skills": list(candidate.skills or []),
        "years_experience": candidate.years_experience,
        "education": candidate.education,
        "availability": candidate.availability,
        "pay": candidate.preferred_pay_range or candidate.target_pay,
        "video_thumbnail_url": candidate.video_thumbnail_url,
        "unlocked": unlocked,
    }
    if unlocked:
        preview.update(
            name=candidate.name,
            email=candidate.email,
            phone=candidate.phone,
            video_url=candidate.video_url,
            bio=candidate.bio,
        )
    else:
        preview.update(name=LOCKED, email=LOCKED, phone=LOCKED, video_url=None, bio=None)
    return preview


def preview(listing: Job | Candidate, unlocked: bool) -> dict[str, Any]:
    if isinstance(listing, Job):
        return job_preview(listing, unlocked)
    return candidate_preview(listing, unlocked)
