"""Skill cluster analysis.

Pipeline:
1. Aggregate (hit count, relevance sum) per role over the candidate's
   skill-to-role mappings.
2. Rank roles by count, then by average relevance.
3. Primary cluster: roles within the relative thresholds of the top role.
4. Secondary cluster: same rule over the roles left after step 3.
5. Unique skills: highest average relevance spread over the fewest roles.
6. Missing core skills of the primary cluster.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from config import Settings, settings as default_settings
from models.records import SkillRoleMapping
from models.responses import SkillClusterResult
from services.core_skills import missing_core_skills
from services.store import CatalogStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleRank:
    title: str
    count: int
    average_relevance: float


def rank_roles(mappings: Iterable[SkillRoleMapping]) -> list[RoleRank]:
    counts: dict[str, int] = {}
    relevance: dict[str, float] = {}
    for mapping in mappings:
        for role in mapping.roles:
            counts[role.title] = counts.get(role.title, 0) + 1
            relevance[role.title] = relevance.get(role.title, 0.0) + role.relevance_score

    ranked = [RoleRank(t, c, relevance[t] / c) for t, c in counts.items()]
    ranked.sort(key=lambda r: (-r.count, -r.average_relevance))
    return ranked


def select_cluster(
    ranked: list[RoleRank],
    count_ratio: float = 0.7,
    relevance_ratio: float = 0.8,
) -> list[str]:
    """Titles close enough to the top role on count OR on average relevance."""
    if not ranked:
        return []
    top = ranked[0]
    return [
        r.title
        for r in ranked
        if r.count >= top.count * count_ratio
        or r.average_relevance >= top.average_relevance * relevance_ratio
    ]


def split_clusters(
    ranked: list[RoleRank],
    count_ratio: float = 0.7,
    relevance_ratio: float = 0.8,
) -> tuple[list[str], list[str]]:
    primary = select_cluster(ranked, count_ratio, relevance_ratio)
    taken = set(primary)
    remaining = [r for r in ranked if r.title not in taken]
    secondary = select_cluster(remaining, count_ratio, relevance_ratio)
    return primary, secondary


def rank_unique_skills(mappings: Iterable[SkillRoleMapping], limit: int = 5) -> list[str]:
    """Skills ordered by average relevance / (role count * 0.5), top `limit`.

    Mappings without roles have no defined uniqueness and are skipped.
    """
    scores: dict[str, float] = {}
    for mapping in mappings:
        role_count = len(mapping.roles)
        if not role_count:
            continue
        avg = sum(r.relevance_score for r in mapping.roles) / role_count
        scores[mapping.skill] = avg / (role_count * 0.5)

    ordered = sorted(scores, key=lambda s: -scores[s])
    return ordered[:limit]


class SkillClusterAnalyzer:
    def __init__(self, store: CatalogStore, cfg: Settings | None = None) -> None:
        self.store = store
        self.cfg = cfg or default_settings

    async def analyze(self, skill_names: Iterable[str]) -> SkillClusterResult:
        names = list(dict.fromkeys(s.strip().lower() for s in skill_names if s and s.strip()))
        if not names:
            return SkillClusterResult()

        mappings = await self.store.find_mappings(names)
        ranked = rank_roles(mappings)
        primary, secondary = split_clusters(
            ranked,
            self.cfg.cluster_count_ratio,
            self.cfg.cluster_relevance_ratio,
        )
        unique = rank_unique_skills(mappings, self.cfg.unique_skill_limit)
        missing = await missing_core_skills(
            self.store, primary, names, self.cfg.core_skill_ratio,
        )

        logger.info(
            "Skill analysis: %d skills, %d mapped -> primary=%d secondary=%d unique=%d",
            len(names), len(mappings), len(primary), len(secondary), len(unique),
        )
        return SkillClusterResult(
            primary_cluster=primary,
            secondary_cluster=secondary,
            unique_skills=unique,
            missing_core_skills=missing,
        )
