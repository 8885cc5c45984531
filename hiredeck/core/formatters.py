"""Display helpers for listings."""

import re

from hiredeck.core.schemas import Candidate

_FIRST_INT = re.compile(r"\d+")


def format_candidate_title(candidate: Candidate | None) -> str:
    """Build the headline shown on a candidate card.

    Preference order: explicit ``display_title``, then the title parts
    (descriptor, primary skill, secondary skill), then a fallback derived
    from years of experience and the first listed skill.
    """
    if candidate is None:
        return "Verified Talent"

    if candidate.display_title:
        return candidate.display_title

    descriptor = candidate.title_descriptor or ""
    primary = candidate.title_primary_skill or candidate.profession or ""
    secondary = candidate.title_secondary_skill or ""

    if descriptor or primary or secondary:
        main_title = " ".join(part for part in (descriptor, primary) if part)
        if secondary:
            return f"{main_title} & {secondary}" if main_title else secondary
        return main_title or "Professional Talent"

    years = _years_as_int(candidate.years_experience)
    if years >= 5:
        level = "Experienced"
    elif years >= 2:
        level = "Intermediate"
    elif years > 0:
        level = "Entry-Level"
    else:
        level = "Professional"

    skills = candidate.skills or []
    return f"{level} {skills[0] if skills else 'Specialist'}"


def format_fee(amount: float) -> str:
    return f"${amount:.2f}"


def _years_as_int(years: int | float | str | None) -> int:
    if isinstance(years, (int, float)):
        return int(years)
    if isinstance(years, str):
        match = _FIRST_INT.match(years.strip())
        return int(match.group(0)) if match else 0
    return 0
