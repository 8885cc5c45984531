"""Configuration models and YAML loader for the marketplace."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from hiredeck.core.categories import (
    EDUCATION_LEVELS,
    EXPERIENCE_LEVELS,
    INDUSTRIES,
    JOB_PAY_RANGES,
    LOCATIONS,
    SKILLS,
    TARGET_PAY_RANGES,
)


class DatabaseConfig(BaseModel):
    """Listing store configuration."""

    path: str = "data/marketplace.db"


class MarketplaceConfig(BaseModel):
    """Pricing and gesture constants for the browse screens."""

    interaction_fee: float = Field(default=2.00, gt=0.0)
    swipe_threshold_px: int = Field(default=110, ge=1)


class SeedConfig(BaseModel):
    """Seeding of an empty listing store at startup."""

    enabled: bool = True
    job_count: int = Field(default=50, ge=1, le=1000)
    candidate_count: int = Field(default=50, ge=1, le=1000)


class CategoriesConfig(BaseModel):
    """Filter vocabulary offered to users."""

    industries: list[str] = Field(default_factory=lambda: list(INDUSTRIES))
    locations: list[str] = Field(default_factory=lambda: list(LOCATIONS))
    pay_ranges: list[str] = Field(default_factory=lambda: list(JOB_PAY_RANGES))
    target_pay_ranges: list[str] = Field(default_factory=lambda: list(TARGET_PAY_RANGES))
    skills: list[str] = Field(default_factory=lambda: list(SKILLS))
    experience_levels: list[str] = Field(default_factory=lambda: list(EXPERIENCE_LEVELS))
    education_levels: list[str] = Field(default_factory=lambda: list(EDUCATION_LEVELS))

    @field_validator("experience_levels")
    @classmethod
    def experience_levels_known(cls, v: list[str]) -> list[str]:
        unknown = [level for level in v if level not in EXPERIENCE_LEVELS]
        if unknown:
            msg = f"experience_levels must be drawn from {list(EXPERIENCE_LEVELS)}, got {unknown}"
            raise ValueError(msg)
        return v

    @field_validator("education_levels")
    @classmethod
    def education_levels_known(cls, v: list[str]) -> list[str]:
        unknown = [level for level in v if level not in EDUCATION_LEVELS]
        if unknown:
            msg = f"education_levels must be drawn from {list(EDUCATION_LEVELS)}, got {unknown}"
            raise ValueError(msg)
        return v


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    marketplace: MarketplaceConfig = Field(default_factory=MarketplaceConfig)
    seed: SeedConfig = Field(default_factory=SeedConfig)
    categories: CategoriesConfig = Field(default_factory=CategoriesConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
