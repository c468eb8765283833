"""Role recommendations for a candidate profile.

Flow:
    profile.skills
      ├─ SkillClusterAnalyzer.analyze()      → primary / secondary / unique
      ├─ roles for primary + secondary       (concurrent lookups)
      ├─ roles reachable from unique skills  (relevance >= 80)
      ├─ rank_recommendations()              → dedupe, order by type weight
      └─ enrich_safely() per role            → market demand, salary range
"""

import asyncio
import logging
from collections.abc import Awaitable, Iterable
from typing import TypeVar

from config import Settings, settings as default_settings
from models.records import CandidateProfile, RoleDefinition
from models.responses import (
    RecommendationType,
    RoleRecommendation,
    SkillClusterResult,
    SkillGapAnalysis,
)
from services.errors import MatchingError, UpstreamUnavailable
from services.gap_analysis import gap_analysis
from services.market_data import MarketDataProvider, StaticMarketData, enrich_safely
from services.skill_clusters import SkillClusterAnalyzer
from services.store import CatalogStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

TYPE_WEIGHTS: dict[str, int] = {
    "primary": 3,
    "unique": 2,
    "secondary": 1,
}


def rank_recommendations(
    tagged: Iterable[tuple[RoleDefinition, RecommendationType]],
) -> list[tuple[RoleDefinition, RecommendationType]]:
    """Drop repeated titles (first occurrence wins), then order by type weight.

    The sort is stable, so roles of the same type keep their lookup order.
    """
    seen: set[str] = set()
    unique: list[tuple[RoleDefinition, RecommendationType]] = []
    for role, rec_type in tagged:
        if role.title in seen:
            continue
        seen.add(role.title)
        unique.append((role, rec_type))

    unique.sort(key=lambda item: -TYPE_WEIGHTS[item[1]])
    return unique


class RoleRecommender:
    def __init__(
        self,
        store: CatalogStore,
        market_data: MarketDataProvider | None = None,
        cfg: Settings | None = None,
    ) -> None:
        self.store = store
        self.cfg = cfg or default_settings
        self.market_data = market_data or StaticMarketData(self.cfg)
        self.analyzer = SkillClusterAnalyzer(store, self.cfg)

    async def _roles_for_unique_skills(self, unique_skills: list[str]) -> list[RoleDefinition]:
        if not unique_skills:
            return []
        mappings = await self.store.find_mappings(unique_skills)
        titles = dict.fromkeys(
            r.title
            for m in mappings
            for r in m.roles
            if r.relevance_score >= self.cfg.unique_role_min_relevance
        )
        if not titles:
            return []
        return await self.store.find_roles(titles)

    async def _find_cluster_roles(self, titles: list[str]) -> list[RoleDefinition]:
        if not titles:
            return []
        return await self.store.find_roles(titles)

    async def _lookup_clusters(
        self,
        primary_titles: list[str],
        secondary_titles: list[str],
    ) -> tuple[list[RoleDefinition], list[RoleDefinition]]:
        """Fetch both clusters concurrently; a failure in one cancels the other."""
        tasks = [
            asyncio.ensure_future(self._find_cluster_roles(primary_titles)),
            asyncio.ensure_future(self._find_cluster_roles(secondary_titles)),
        ]
        try:
            primary, secondary = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return primary, secondary

    async def _recommend(self, profile: CandidateProfile) -> list[RoleRecommendation]:
        analysis = await self.analyzer.analyze(profile.skill_names())

        primary, secondary = await self._lookup_clusters(
            analysis.primary_cluster,
            analysis.secondary_cluster,
        )
        unique = await self._roles_for_unique_skills(analysis.unique_skills)

        ranked = rank_recommendations(
            [(r, "primary") for r in primary]
            + [(r, "secondary") for r in secondary]
            + [(r, "unique") for r in unique]
        )

        recommendations: list[RoleRecommendation] = []
        for role, rec_type in ranked:
            market = await enrich_safely(self.market_data, role, self.cfg)
            recommendations.append(RoleRecommendation(
                **role.model_dump(exclude={"average_salary"}),
                type=rec_type,
                market_demand=market.market_demand,
                average_salary=market.average_salary,
            ))
        return recommendations

    async def _guard(self, action: str, coro: Awaitable[T]) -> T:
        """Await `coro`, surfacing unexpected collaborator failures as UpstreamUnavailable."""
        try:
            return await coro
        except MatchingError:
            raise
        except Exception as e:
            logger.error("%s failed: %s", action, e)
            raise UpstreamUnavailable(f"{action} failed: {e}") from e

    async def analyze_skills(self, skill_names: Iterable[str]) -> SkillClusterResult:
        return await self._guard("Skill analysis", self.analyzer.analyze(skill_names))

    async def recommend(self, profile: CandidateProfile) -> list[RoleRecommendation]:
        """Ranked, de-duplicated role recommendations for `profile`.

        Either the whole list is returned or the call fails.
        """
        recommendations = await self._guard("Role recommendation", self._recommend(profile))
        logger.info("Generated %d role recommendations", len(recommendations))
        return recommendations

    async def gap_analysis(
        self,
        role_title: str,
        candidate_skill_names: Iterable[str],
    ) -> SkillGapAnalysis:
        return await self._guard(
            "Gap analysis",
            gap_analysis(self.store, role_title, candidate_skill_names),
        )
