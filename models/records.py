"""Records consumed by the matching engine.

These are read-only snapshots owned by other services (job search,
profile management, role catalog). The engine never mutates them.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobPosting(BaseModel):
    """A fetched job posting. `url` is the natural key used for dedup."""
    title: str
    company: str
    location: str = ""
    description: str = ""
    requirements: list[str] = []
    salary: str | None = None
    remote: bool = False
    employment_type: str | None = None
    source: str = "external"
    url: str
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    model_config = {"frozen": True}

    def touched(self) -> "JobPosting":
        """Return a copy with a refreshed `updated_at` (the only mutable field)."""
        return self.model_copy(update={"updated_at": _utcnow()})


class Skill(BaseModel):
    name: str
    level: str | None = None  # e.g. Beginner, Intermediate, Advanced, Expert
    years: float | None = Field(default=None, ge=0)


class Location(BaseModel):
    city: str | None = None
    state: str | None = None
    country: str | None = None


class CandidatePreferences(BaseModel):
    remote_work: bool = False
    employment_types: list[str] = []
    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)


class CandidateProfile(BaseModel):
    skills: list[Skill] = []
    desired_titles: list[str] = []
    location: Location | None = None
    preferred_locations: list[str] = []
    preferences: CandidatePreferences = CandidatePreferences()

    def skill_names(self) -> list[str]:
        """Lower-cased skill names, in the order the candidate listed them."""
        return [s.name.lower() for s in self.skills]


class RoleDefinition(BaseModel):
    title: str
    description: str = ""
    required_skills: list[str] = []
    related_skills: list[str] = []
    average_salary: str | None = None
    growth_rate: str | None = None
    industry: str | None = None
    education_requirements: list[str] = []
    experience_level: str | None = None


class RoleRelevance(BaseModel):
    title: str
    relevance_score: float = Field(..., ge=0, le=100)


class SkillRoleMapping(BaseModel):
    """Affinity between one skill and the roles it is relevant to."""
    skill: str
    roles: list[RoleRelevance] = []

    @field_validator("skill")
    @classmethod
    def _lower_skill(cls, value: str) -> str:
        return value.strip().lower()
