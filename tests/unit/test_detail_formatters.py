"""Tests for candidate title formatting and detail previews."""

import pytest

from hiredeck.core.formatters import format_candidate_title, format_fee
from hiredeck.core.schemas import Candidate, Job
from hiredeck.pipeline.detail import LOCKED, candidate_preview, job_preview, preview


class TestFormatCandidateTitle:
    def test_none(self) -> None:
        assert format_candidate_title(None) == "Verified Talent"

    def test_display_title_wins(self) -> None:
        c = Candidate(id="c1", display_title="Sous Chef", title_descriptor="Experienced")
        assert format_candidate_title(c) == "Sous Chef"

    def test_title_parts(self) -> None:
        c = Candidate(
            id="c1",
            title_descriptor="Experienced",
            title_primary_skill="Cooking",
            title_secondary_skill="Bartending",
        )
        assert format_candidate_title(c) == "Experienced Cooking & Bartending"

    def test_profession_as_primary(self) -> None:
        c = Candidate(id="c1", profession="Electrician")
        assert format_candidate_title(c) == "Electrician"

    def test_secondary_only(self) -> None:
        c = Candidate(id="c1", title_secondary_skill="Sales")
        assert format_candidate_title(c) == "Sales"

    @pytest.mark.parametrize(
        ("years", "expected"),
        [
            (0, "Professional Welding"),
            (1, "Entry-Level Welding"),
            (2, "Intermediate Welding"),
            ("6 years", "Experienced Welding"),
            ("lots", "Professional Welding"),
        ],
    )
    def test_experience_fallback(self, years: object, expected: str) -> None:
        c = Candidate.model_validate({"id": "c1", "years_experience": years, "skills": ["Welding"]})
        assert format_candidate_title(c) == expected

    def test_no_skills_fallback(self) -> None:
        assert format_candidate_title(Candidate(id="c1", years_experience=3)) == "Intermediate Specialist"


class TestFormatFee:
    def test_two_decimals(self) -> None:
        assert format_fee(2) == "$2.00"
        assert format_fee(4.5) == "$4.50"


def _job(**overrides: object) -> Job:
    defaults: dict[str, object] = {
        "id": "job_3",
        "title": "Tourism Professional",
        "company_name": "Hana Services",
        "company_industry": "Tourism",
        "contact_email": "hiring@hanaservices.com",
        "contact_phone": "(808) 555-2003",
        "is_anonymous": True,
    }
    defaults.update(overrides)
    return Job.model_validate(defaults)


class TestJobPreview:
    def test_anonymous_locked_hides_company(self) -> None:
        p = job_preview(_job(), unlocked=False)
        assert p["company"] == "[Tourism Business]"
        assert p["contact_email"] == LOCKED
        assert p["contact_phone"] == LOCKED

    def test_anonymous_unlocked_reveals(self) -> None:
        p = job_preview(_job(), unlocked=True)
        assert p["company"] == "Hana Services"
        assert p["contact_email"] == "hiring@hanaservices.com"

    def test_public_company_shown_but_contact_locked(self) -> None:
        p = job_preview(_job(is_anonymous=False), unlocked=False)
        assert p["company"] == "Hana Services"
        assert p["contact_phone"] == LOCKED


class TestCandidatePreview:
    def _candidate(self) -> Candidate:
        return Candidate(
            id="cand_1",
            name="Leilani Akana",
            email="leilani@hawaiimail.com",
            phone="(808) 555-1001",
            skills=["Sales"],
            display_title="Sales Expert",
            video_url="https://example.com/video.mp4",
        )

    def test_locked_hides_identity(self) -> None:
        p = candidate_preview(self._candidate(), unlocked=False)
        assert p["title"] == "Sales Expert"
        assert p["name"] == LOCKED
        assert p["email"] == LOCKED
        assert p["video_url"] is None

    def test_unlocked_reveals_identity(self) -> None:
        p = candidate_preview(self._candidate(), unlocked=True)
        assert p["name"] == "Leilani Akana"
        assert p["phone"] == "(808) 555-1001"
        assert p["video_url"] == "https://example.com/video.mp4"

    def test_dispatch(self) -> None:
        assert preview(self._candidate(), False)["name"] == LOCKED
        assert preview(_job(), False)["company"] == "[Tourism Business]"
