"""Store collaborators for roles, skill mappings and jobs.

The engine only depends on the abstract interfaces. The in-memory
implementations back the HTTP service and the tests; results are always
returned in insertion order so that downstream ranking is reproducible.
"""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from models.records import JobPosting, RoleDefinition, SkillRoleMapping
from services.errors import InvalidInput

logger = logging.getLogger(__name__)


class CatalogStore(ABC):
    """Role definitions and skill-to-role relevance mappings."""

    @abstractmethod
    async def find_role(self, title: str) -> RoleDefinition | None:
        """Exact-title lookup."""

    @abstractmethod
    async def find_roles(self, titles: Iterable[str]) -> list[RoleDefinition]:
        """All roles whose title is in `titles`. Unknown titles are ignored."""

    @abstractmethod
    async def find_mappings(self, skills: Iterable[str]) -> list[SkillRoleMapping]:
        """Mappings for the given (lower-cased) skill names."""

    @abstractmethod
    async def list_roles(self, industry: str | None = None) -> list[RoleDefinition]:
        """All roles, optionally restricted to one industry."""


class JobStore(ABC):
    @abstractmethod
    async def get_by_url(self, url: str) -> JobPosting | None:
        ...

    @abstractmethod
    async def save_if_absent(self, job: JobPosting) -> JobPosting:
        """Store `job` unless its URL is known; return the stored record."""

    @abstractmethod
    async def trending(
        self,
        industry: str | None = None,
        location: str | None = None,
        limit: int = 10,
    ) -> list[JobPosting]:
        """Most recently created jobs first."""


class InMemoryCatalogStore(CatalogStore):
    def __init__(
        self,
        roles: Iterable[RoleDefinition] = (),
        mappings: Iterable[SkillRoleMapping] = (),
    ) -> None:
        self._roles: dict[str, RoleDefinition] = {}
        self._mappings: dict[str, SkillRoleMapping] = {}
        for role in roles:
            if role.title in self._roles:
                raise InvalidInput(f"Duplicate role title: {role.title}")
            self._roles[role.title] = role
        for mapping in mappings:
            if mapping.skill in self._mappings:
                raise InvalidInput(f"Duplicate skill mapping: {mapping.skill}")
            self._mappings[mapping.skill] = mapping

    @classmethod
    def from_json(cls, path: str | Path) -> "InMemoryCatalogStore":
        """Load a catalog file with top-level `roles` and `skill_mappings` lists."""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        store = cls(
            roles=[RoleDefinition(**r) for r in data.get("roles", [])],
            mappings=[SkillRoleMapping(**m) for m in data.get("skill_mappings", [])],
        )
        logger.info(
            "Loaded catalog from %s: %d roles, %d skill mappings",
            path, len(store._roles), len(store._mappings),
        )
        return store

    async def find_role(self, title: str) -> RoleDefinition | None:
        return self._roles.get(title)

    async def find_roles(self, titles: Iterable[str]) -> list[RoleDefinition]:
        wanted = set(titles)
        return [r for t, r in self._roles.items() if t in wanted]

    async def find_mappings(self, skills: Iterable[str]) -> list[SkillRoleMapping]:
        wanted = set(skills)
        return [m for s, m in self._mappings.items() if s in wanted]

    async def list_roles(self, industry: str | None = None) -> list[RoleDefinition]:
        if industry is None:
            return list(self._roles.values())
        return [r for r in self._roles.values() if r.industry == industry]


class InMemoryJobStore(JobStore):
    def __init__(self) -> None:
        self._jobs: dict[str, JobPosting] = {}

    async def get_by_url(self, url: str) -> JobPosting | None:
        return self._jobs.get(url)

    async def save_if_absent(self, job: JobPosting) -> JobPosting:
        existing = self._jobs.get(job.url)
        if existing is not None:
            return existing
        self._jobs[job.url] = job
        return job

    async def trending(
        self,
        industry: str | None = None,
        location: str | None = None,
        limit: int = 10,
    ) -> list[JobPosting]:
        jobs = list(self._jobs.values())
        if industry:
            jobs = [j for j in jobs if industry.lower() in j.description.lower()]
        if location:
            jobs = [j for j in jobs if location.lower() in j.location.lower()]
        jobs.sort(key=lambda j: j.created_at, reverse=True)
        return jobs[:limit]
