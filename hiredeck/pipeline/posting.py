"""Employer job posting: validate a submitted form and publish it to the store.

Data flow:
  1. Load or build a JobPosting (required fields checked, blank list entries dropped)
  2. post_job assigns an id, marks the listing active and anonymous, and upserts it
  3. prepend_listing puts the new job at the front of the in-memory collection;
     the store returns newest listings first on the next load
"""

import logging
import sqlite3
import uuid
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from hiredeck.core.db import fetch_jobs, upsert_jobs
from hiredeck.core.schemas import Job

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 20

_REQUIRED_MESSAGES = {
    "title": "Job title is required",
    "company_industry": "Industry is required",
    "location": "Location is required",
    "company_name": "Legal company name is required (private)",
    "contact_email": "Contact email is required",
    "contact_phone": "Hiring phone is required",
}


def format_pay_range(pay_min: int, pay_max: int, pay_type: Literal["Hourly", "Salary"] = "Hourly") -> str:
    """Render a pay band the way listings display it, e.g. ``$20-25/hr``."""
    if pay_min < 0 or pay_max < pay_min:
        msg = f"Invalid pay band: {pay_min}-{pay_max}"
        raise ValueError(msg)
    suffix = "/hr" if pay_type == "Hourly" else "/yr"
    return f"${pay_min}-{pay_max}{suffix}"


class JobPosting(BaseModel):
    """Fields an employer submits for a new job listing."""

    model_config = ConfigDict(validate_default=True)

    title: str = ""
    company_name: str = ""
    company_industry: str = ""
    location: str = ""
    description: str = ""
    contact_email: str = ""
    contact_phone: str = ""
    pay_range: str | None = None
    job_type: str | None = None
    requirements: list[str] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    company_size: str | None = None
    company_description: str | None = None
    is_anonymous: bool = True

    @field_validator(*_REQUIRED_MESSAGES)
    @classmethod
    def required_text(cls, v: str, info: ValidationInfo) -> str:
        v = v.strip()
        if not v:
            raise ValueError(_REQUIRED_MESSAGES[info.field_name])
        return v

    @field_validator("description")
    @classmethod
    def description_long_enough(cls, v: str) -> str:
        v = v.strip()
        if len(v) < MIN_DESCRIPTION_LENGTH:
            msg = "Description is too short"
            raise ValueError(msg)
        return v

    @field_validator("requirements", "responsibilities", "benefits")
    @classmethod
    def drop_blank_entries(cls, v: list[str]) -> list[str]:
        return [item.strip() for item in v if item.strip()]

    @classmethod
    def from_yaml(cls, path: str | Path) -> "JobPosting":
        """Load a posting from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Posting file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)


def post_job(conn: sqlite3.Connection, posting: JobPosting, listing_id: str | None = None) -> Job:
    """Publish a validated posting as an active job listing.

    Raises:
        ValueError: If ``listing_id`` is already taken by a stored job.
    """
    if listing_id is None:
        listing_id = f"job_{uuid.uuid4().hex[:12]}"
    elif any(job.id == listing_id for job in fetch_jobs(conn)):
        msg = f"Job id already exists: {listing_id}"
        raise ValueError(msg)

    job = Job.model_validate({
        **posting.model_dump(),
        "id": listing_id,
        "status": "active",
        "applicant_count": 0,
    })
    upsert_jobs(conn, [job])
    logger.info("Posted job %s: %s (%s)", job.id, job.title, job.location)
    return job


def prepend_listing(jobs: Sequence[Job], job: Job) -> list[Job]:
    """Return the collection with ``job`` first and no other copy of its id."""
    return [job, *(j for j in jobs if j.id != job.id)]
