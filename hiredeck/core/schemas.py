"""Core data models for the marketplace.

Listings come from the store as loosely-typed rows. Malformed optional
attributes are coerced to ``None`` (absent) instead of rejecting the whole
record; only a missing ``id`` is fatal.
"""

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Role = Literal["seeker", "employer"]

FILTER_CATEGORIES: tuple[str, ...] = (
    "industries",
    "locations",
    "pay_ranges",
    "experience_levels",
    "education_levels",
    "skills",
)


def _text_or_none(v: Any) -> str | None:
    return v if isinstance(v, str) else None


def _str_list_or_none(v: Any) -> list[str] | None:
    if not isinstance(v, (list, tuple)):
        return None
    return [item for item in v if isinstance(item, str)]


class _Listing(BaseModel):
    """Fields and coercion shared by jobs and candidates."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    location: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class Job(_Listing):
    """A job posting browsed by seekers."""

    title: str | None = None
    company_name: str | None = None
    company_industry: str | None = None
    pay_range: str | None = None
    job_type: str | None = None
    description: str | None = None
    requirements: list[str] | None = None
    responsibilities: list[str] | None = None
    benefits: list[str] | None = None
    company_size: str | None = None
    company_description: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    status: str | None = None
    applicant_count: int = 0
    is_anonymous: bool = False

    @field_validator(
        "location", "title", "company_name", "company_industry", "pay_range", "job_type",
        "description", "company_size", "company_description", "contact_email",
        "contact_phone", "status",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _text_or_none(v)

    @field_validator("requirements", "responsibilities", "benefits", mode="before")
    @classmethod
    def coerce_lists(cls, v: Any) -> list[str] | None:
        return _str_list_or_none(v)

    @field_validator("applicant_count", mode="before")
    @classmethod
    def coerce_count(cls, v: Any) -> int:
        if isinstance(v, bool) or not isinstance(v, int):
            return 0
        return v

    @field_validator("is_anonymous", mode="before")
    @classmethod
    def coerce_flag(cls, v: Any) -> bool:
        return v is True


class Candidate(_Listing):
    """A job seeker profile browsed by employers."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    bio: str | None = None
    skills: list[str] | None = None
    years_experience: int | float | str | None = None
    availability: str | None = None
    work_style: str | None = None
    job_types_seeking: list[str] | None = None
    industries_interested: list[str] | None = None
    preferred_pay_range: str | None = None
    target_pay: str | None = None
    education: str | None = None
    video_url: str | None = None
    video_thumbnail_url: str | None = None
    current_employment_status: str | None = None
    display_title: str | None = None
    title_descriptor: str | None = None
    title_primary_skill: str | None = None
    title_secondary_skill: str | None = None
    profession: str | None = None

    @field_validator(
        "location", "name", "email", "phone", "bio", "availability", "work_style",
        "preferred_pay_range", "target_pay", "education", "video_url",
        "video_thumbnail_url", "current_employment_status", "display_title",
        "title_descriptor", "title_primary_skill", "title_secondary_skill", "profession",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _text_or_none(v)

    @field_validator("skills", "job_types_seeking", "industries_interested", mode="before")
    @classmethod
    def coerce_lists(cls, v: Any) -> list[str] | None:
        return _str_list_or_none(v)

    @field_validator("years_experience", mode="before")
    @classmethod
    def coerce_years(cls, v: Any) -> int | float | str | None:
        if isinstance(v, bool) or not isinstance(v, (int, float, str)):
            return None
        if isinstance(v, float) and not math.isfinite(v):
            return None
        return v


Listing = Job | Candidate


class FilterSelection(BaseModel):
    """Active filter chips, one set per category.

    An empty set means the category is unconstrained.
    """

    industries: set[str] = Field(default_factory=set)
    locations: set[str] = Field(default_factory=set)
    pay_ranges: set[str] = Field(default_factory=set)
    experience_levels: set[str] = Field(default_factory=set)
    education_levels: set[str] = Field(default_factory=set)
    skills: set[str] = Field(default_factory=set)

    def toggle(self, category: str, value: str) -> bool:
        """Flip ``value`` in ``category``. Returns True if it is now selected."""
        selected = self._category(category)
        if value in selected:
            selected.discard(value)
            return False
        selected.add(value)
        return True

    def clear(self) -> None:
        for category in FILTER_CATEGORIES:
            self._category(category).clear()

    def is_empty(self) -> bool:
        return not any(self._category(c) for c in FILTER_CATEGORIES)

    def _category(self, category: str) -> set[str]:
        if category not in FILTER_CATEGORIES:
            msg = f"Unknown filter category '{category}'. Available: {', '.join(FILTER_CATEGORIES)}"
            raise ValueError(msg)
        selected: set[str] = getattr(self, category)
        return selected


class UnlockRequest(BaseModel):
    """Saved listings handed to checkout: one flat fee per item."""

    model_config = ConfigDict(frozen=True)

    role: Role
    items: list[Job | Candidate]

    @property
    def count(self) -> int:
        return len(self.items)

    def total(self, fee: float) -> float:
        return round(self.count * fee, 2)


class UnlockReceipt(BaseModel):
    """Outcome of a processed unlock."""

    model_config = ConfigDict(frozen=True)

    role: Role
    unlocked_ids: list[str]
    already_unlocked_ids: list[str] = Field(default_factory=list)
    total: float = Field(default=0.0, ge=0.0)
