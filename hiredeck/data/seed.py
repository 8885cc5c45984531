"""Deterministic seed listings for an empty store."""

from typing import Any

from hiredeck.core.categories import (
    EDUCATION_LEVELS,
    INDUSTRIES,
    JOB_PAY_RANGES,
    LOCATIONS,
    SKILLS,
    TARGET_PAY_RANGES,
)

_COMPANIES = ("Island Tech", "Mauka Logistics", "Hana Services", "Aloha Retail", "Pacific Hospitality")
_FIRST_NAMES = ("Keoni", "Leilani", "Maliko", "Nani", "Pua", "Kai", "Aulii", "Kanoa", "Nohea", "Ikaika")
_LAST_NAMES = ("Kahale", "Akana", "Mahi", "Lopes", "Wong", "Nakamura")
_THUMBNAILS = (
    "https://images.unsplash.com/photo-1573496359142-b8d87734a5a2",
    "https://images.unsplash.com/photo-1560250097-0b93528c311a",
    "https://images.unsplash.com/photo-1519085360753-af0119f7cbe7",
    "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d",
    "https://images.unsplash.com/photo-1580489944761-15a19d654956",
    "https://images.unsplash.com/photo-1500648767791-00dcc994a43e",
)


def generate_jobs(count: int = 50) -> list[dict[str, Any]]:
    """Build ``count`` job rows with ids ``job_1`` .. ``job_<count>``."""
    jobs: list[dict[str, Any]] = []
    for i in range(1, count + 1):
        industry = INDUSTRIES[i % len(INDUSTRIES)]
        company = _COMPANIES[i % len(_COMPANIES)]
        jobs.append({
            "id": f"job_{i}",
            "title": f"{industry} Professional",
            "company_name": company,
            "company_industry": industry,
            "location": LOCATIONS[i % len(LOCATIONS)],
            "pay_range": JOB_PAY_RANGES[i % len(JOB_PAY_RANGES)],
            "job_type": ("Full-time", "Contract", "Part-time")[i % 3],
            "description": (
                f"Seeking a skilled {industry.lower()} expert to handle high-volume "
                f"operations at {company}. Great growth potential in the Hawaii market."
            ),
            "requirements": ["Local resident", "3+ years experience", "Strong communication skills"],
            "responsibilities": [
                "Oversee daily operations",
                "Coordinate with local teams",
                "Maintain service quality",
            ],
            "benefits": ["Health insurance", "Paid time off", "Flexible scheduling"],
            "company_size": ("Small", "Medium", "Large")[i % 3],
            "company_description": f"{company} is an established firm in Hawaii dedicated to local excellence.",
            "contact_email": f"hiring@{company.lower().replace(' ', '')}.com",
            "contact_phone": f"(808) 555-{2000 + i}",
            "status": "active",
            "applicant_count": (i * 7) % 25,
            "is_anonymous": i % 3 == 0,
        })
    return jobs


def generate_candidates(count: int = 50) -> list[dict[str, Any]]:
    """Build ``count`` candidate rows with ids ``cand_1`` .. ``cand_<count>``.

    Every fourth candidate reports experience as text ("7 years") the way
    profiles entered by hand often do.
    """
    candidates: list[dict[str, Any]] = []
    for i in range(1, count + 1):
        first = _FIRST_NAMES[i % len(_FIRST_NAMES)]
        last = _LAST_NAMES[i % len(_LAST_NAMES)]
        primary = SKILLS[i % len(SKILLS)]
        secondary = SKILLS[(i + 5) % len(SKILLS)]
        years = 3 + (i % 12)
        candidates.append({
            "id": f"cand_{i}",
            "name": f"{first} {last}",
            "email": f"{first.lower()}.{last.lower()}{i}@hawaiimail.com",
            "phone": f"(808) 555-{1000 + i}",
            "location": LOCATIONS[i % len(LOCATIONS)],
            "bio": (
                f"Professional with a strong background in {primary.lower()} "
                f"and over {years} years of local experience."
            ),
            "skills": [primary, secondary, "Management", "Communication"],
            "years_experience": f"{years} years" if i % 4 == 0 else years,
            "availability": ("Immediate", "2 Weeks")[i % 2],
            "work_style": ("On-site", "Hybrid", "Remote")[i % 3],
            "job_types_seeking": ["Full-time", "Contract"],
            "industries_interested": [INDUSTRIES[i % len(INDUSTRIES)]],
            "video_url": "https://example.com/video.mp4",
            "video_thumbnail_url": _THUMBNAILS[i % len(_THUMBNAILS)],
            "preferred_pay_range": TARGET_PAY_RANGES[i % len(TARGET_PAY_RANGES)],
            "education": EDUCATION_LEVELS[i % len(EDUCATION_LEVELS)],
            "current_employment_status": ("Actively Seeking", "Open to Offers")[i % 2],
            "display_title": f"{primary} Expert",
            "title_descriptor": "Experienced",
            "title_primary_skill": primary,
            "title_secondary_skill": secondary,
        })
    return candidates
