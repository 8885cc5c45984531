"""Filter chain for browse-screen listings.

Every category filter is a no-op when its selection is empty. Within a
category the selected values are OR'ed; the chain ANDs the categories.

Job chain:
  1. industry   - company_industry in selection
  2. location   - location in selection
  3. pay range  - pay_range in selection
  4. text query - title OR location contains the query

Candidate chain:
  1. location, 2. pay (preferred_pay_range OR target_pay), 3. skills overlap,
  4. industries_interested overlap, 5. experience bucket, 6. education floor,
  7. text query - location OR any skill contains the query

Malformed or absent attributes never raise; they just fail that predicate.
"""

import logging
import math
import re
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from hiredeck.core.categories import EDUCATION_LEVELS
from hiredeck.core.schemas import Candidate, FilterSelection, Job

logger = logging.getLogger(__name__)

T = TypeVar("T", Job, Candidate)

# A filter is a callable that takes listings and returns a subset.
Filter = Callable[[list[Any]], list[Any]]
Getter = Callable[[Any], Any]

# Inclusive upper bound of each bucket; the lower bound is exclusive and
# equal to the previous bucket's upper bound.
_EXPERIENCE_BUCKETS: dict[str, tuple[float | None, float | None]] = {
    "0-2 years": (None, 2),
    "2-5 years": (2, 5),
    "5-10 years": (5, 10),
    "10+ years": (10, None),
}

# Keyword recognised inside an education string -> rank (index in EDUCATION_LEVELS).
# Checked highest first so "Master's Degree" never matches a lower keyword.
_EDUCATION_KEYWORDS: list[tuple[str, int]] = [
    ("Doctorate", EDUCATION_LEVELS.index("Doctorate")),
    ("Master", EDUCATION_LEVELS.index("Master's Degree")),
    ("Bachelor", EDUCATION_LEVELS.index("Bachelor's Degree")),
    ("Associate", EDUCATION_LEVELS.index("Associate Degree")),
    ("Vocational", EDUCATION_LEVELS.index("Vocational Training")),
    ("High School", EDUCATION_LEVELS.index("High School")),
]

_FIRST_DIGITS = re.compile(r"\d+")


def education_rank(education: str | None) -> int | None:
    """Return the rank of an education string, or None if unrecognised."""
    if not isinstance(education, str) or not education:
        return None
    for keyword, rank in _EDUCATION_KEYWORDS:
        if keyword in education:
            return rank
    return None


def parse_years(years: Any) -> float | None:
    """Normalise years of experience to a number.

    Finite numbers pass through; strings yield their first run of digits,
    or 0 when they contain none. Anything else (NaN and infinities included)
    is absent (None).
    """
    if isinstance(years, bool):
        return None
    if isinstance(years, (int, float)):
        return float(years) if math.isfinite(years) else None
    if isinstance(years, str):
        match = _FIRST_DIGITS.search(years)
        return float(match.group(0)) if match else 0.0
    return None


def in_experience_bucket(years: float, level: str) -> bool:
    bounds = _EXPERIENCE_BUCKETS.get(level)
    if bounds is None:
        return False
    lower, upper = bounds
    if lower is not None and years <= lower:
        return False
    if upper is not None and years > upper:
        return False
    return True


def matches_experience(years: Any, levels: Iterable[str]) -> bool:
    levels = list(levels)
    if not levels:
        return True
    y = parse_years(years)
    if y is None:
        return False
    return any(in_experience_bucket(y, level) for level in levels)


def matches_education(education: str | None, levels: Iterable[str]) -> bool:
    """True if the candidate's rank reaches the floor of any selected level."""
    levels = list(levels)
    if not levels:
        return True
    candidate_rank = education_rank(education)
    if candidate_rank is None:
        return False
    floors = [rank for rank in (education_rank(level) for level in levels) if rank is not None]
    return any(candidate_rank >= floor for floor in floors)


class _SelectionFilter:
    """Base for filters that pass everything when nothing is selected."""

    name = "filter"

    def __init__(self, selected: Iterable[str]) -> None:
        self._selected = frozenset(selected)

    def __call__(self, listings: list[T]) -> list[T]:
        if not self._selected:
            return listings
        result = [item for item in listings if self._matches(item)]
        removed = len(listings) - len(result)
        if removed:
            logger.debug("%s: removed %d listings", self.name, removed)
        return result

    def _matches(self, item: Any) -> bool:
        raise NotImplementedError


class ValueInFilter(_SelectionFilter):
    """Keep listings where any of the scalar attributes is a selected value."""

    def __init__(self, selected: Iterable[str], *getters: Getter, name: str = "ValueInFilter") -> None:
        super().__init__(selected)
        self._getters = getters
        self.name = name

    def _matches(self, item: Any) -> bool:
        return any(getter(item) in self._selected for getter in self._getters)


class OverlapFilter(_SelectionFilter):
    """Keep listings whose multi-valued attribute shares a value with the selection."""

    def __init__(self, selected: Iterable[str], getter: Getter, name: str = "OverlapFilter") -> None:
        super().__init__(selected)
        self._getter = getter
        self.name = name

    def _matches(self, item: Any) -> bool:
        values = self._getter(item) or ()
        return any(v in self._selected for v in values)


class ExperienceFilter(_SelectionFilter):
    """Keep candidates whose years of experience fall in a selected bucket."""

    name = "ExperienceFilter"

    def _matches(self, item: Any) -> bool:
        return matches_experience(item.years_experience, self._selected)


class EducationFilter(_SelectionFilter):
    """Keep candidates at or above any selected education level."""

    name = "EducationFilter"

    def _matches(self, item: Any) -> bool:
        return matches_education(item.education, self._selected)


class TextQueryFilter:
    """Keep listings where any searchable field contains the query (case-insensitive).

    Getters may return a string or a list of strings. An empty query is a no-op.
    """

    def __init__(self, query: str, *getters: Getter) -> None:
        self._query = (query or "").strip().lower()
        self._getters = getters

    def __call__(self, listings: list[T]) -> list[T]:
        if not self._query:
            return listings
        result = [item for item in listings if self._matches(item)]
        removed = len(listings) - len(result)
        if removed:
            logger.debug("TextQueryFilter: removed %d listings for %r", removed, self._query)
        return result

    def _matches(self, item: Any) -> bool:
        for getter in self._getters:
            value = getter(item)
            texts = value if isinstance(value, list) else [value]
            if any(isinstance(t, str) and self._query in t.lower() for t in texts):
                return True
        return False


def job_filters(selection: FilterSelection, query: str = "") -> list[Filter]:
    """Build the job filter chain for a selection and search query."""
    return [
        ValueInFilter(selection.industries, lambda j: j.company_industry, name="IndustryFilter"),
        ValueInFilter(selection.locations, lambda j: j.location, name="LocationFilter"),
        ValueInFilter(selection.pay_ranges, lambda j: j.pay_range, name="PayRangeFilter"),
        TextQueryFilter(query, lambda j: j.title, lambda j: j.location),
    ]


def candidate_filters(selection: FilterSelection, query: str = "") -> list[Filter]:
    """Build the candidate filter chain for a selection and search query."""
    return [
        ValueInFilter(selection.locations, lambda c: c.location, name="LocationFilter"),
        ValueInFilter(
            selection.pay_ranges,
            lambda c: c.preferred_pay_range,
            lambda c: c.target_pay,
            name="PayRangeFilter",
        ),
        OverlapFilter(selection.skills, lambda c: c.skills, name="SkillsFilter"),
        OverlapFilter(selection.industries, lambda c: c.industries_interested, name="IndustryFilter"),
        ExperienceFilter(selection.experience_levels),
        EducationFilter(selection.education_levels),
        TextQueryFilter(query, lambda c: c.location, lambda c: c.skills),
    ]


def run_filter_chain(listings: Sequence[T], filters: list[Filter]) -> list[T]:
    """Apply filters in order, returning the surviving listings.

    The input sequence is never mutated; a new list is always returned.
    """
    result = list(listings)
    for f in filters:
        result = f(result)
    return result


def filter_jobs(jobs: Sequence[Job], selection: FilterSelection, query: str = "") -> list[Job]:
    return run_filter_chain(jobs, job_filters(selection, query))


def filter_candidates(
    candidates: Sequence[Candidate],
    selection: FilterSelection,
    query: str = "",
) -> list[Candidate]:
    return run_filter_chain(candidates, candidate_filters(selection, query))
