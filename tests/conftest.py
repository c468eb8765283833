"""Shared test configuration, fixtures and pytest markers."""

import pytest

from config import DEFAULT_CATALOG_PATH
from models.records import (
    CandidatePreferences,
    CandidateProfile,
    JobPosting,
    Location,
    RoleDefinition,
    RoleRelevance,
    Skill,
    SkillRoleMapping,
)
from services.store import InMemoryCatalogStore


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "concurrency: runs scorers from several threads at once"
    )


def make_mapping(skill: str, *roles: tuple[str, float]) -> SkillRoleMapping:
    return SkillRoleMapping(
        skill=skill,
        roles=[RoleRelevance(title=t, relevance_score=s) for t, s in roles],
    )


@pytest.fixture
def mapping_factory():
    return make_mapping


@pytest.fixture
def seed_store() -> InMemoryCatalogStore:
    return InMemoryCatalogStore.from_json(DEFAULT_CATALOG_PATH)


@pytest.fixture
def web_store() -> InMemoryCatalogStore:
    """Catalog where several skills point at overlapping web roles."""
    roles = [
        RoleDefinition(
            title="Frontend Developer",
            required_skills=["JavaScript", "HTML", "CSS", "React"],
            related_skills=["TypeScript"],
        ),
        RoleDefinition(
            title="Full Stack Developer",
            required_skills=["JavaScript", "HTML", "SQL", "Node.js"],
            related_skills=["Docker"],
        ),
        RoleDefinition(
            title="Web Developer",
            required_skills=["JavaScript", "HTML", "CSS"],
            related_skills=["PHP"],
            average_salary="$70,000 - $95,000",
        ),
        RoleDefinition(
            title="Database Administrator",
            required_skills=["SQL", "Backup and Recovery"],
        ),
        RoleDefinition(
            title="Technical Writer",
            required_skills=["Writing", "Markdown"],
        ),
    ]
    mappings = [
        make_mapping("javascript", ("Frontend Developer", 100), ("Full Stack Developer", 90), ("Web Developer", 95)),
        make_mapping("css", ("Frontend Developer", 95), ("Web Developer", 90)),
        make_mapping("sql", ("Database Administrator", 70), ("Full Stack Developer", 60)),
        make_mapping("markdown", ("Technical Writer", 50)),
    ]
    return InMemoryCatalogStore(roles, mappings)


@pytest.fixture
def backend_job() -> JobPosting:
    return JobPosting(
        title="Backend Engineer",
        company="Acme",
        location="Berlin, Germany",
        description="Python Django APIs",
        requirements=["Python", "SQL"],
        remote=True,
        employment_type="Full-time",
        url="https://jobs.example.com/backend-engineer",
    )


@pytest.fixture
def backend_profile() -> CandidateProfile:
    return CandidateProfile(
        skills=[Skill(name="Python")],
        desired_titles=["Backend Engineer"],
        location=Location(city="Berlin", country="Germany"),
        preferences=CandidatePreferences(remote_work=True),
    )
