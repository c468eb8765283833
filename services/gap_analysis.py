"""Skill gap between a candidate and one named role."""

import logging
import math
from collections.abc import Iterable

from models.records import RoleDefinition
from models.responses import SkillGapAnalysis
from services.errors import NotFound
from services.store import CatalogStore

logger = logging.getLogger(__name__)


def compute_gap(role: RoleDefinition, candidate_skill_names: Iterable[str]) -> SkillGapAnalysis:
    have = {s.lower() for s in candidate_skill_names}
    missing_required = [s for s in role.required_skills if s.lower() not in have]
    missing_related = [s for s in role.related_skills if s.lower() not in have]

    if role.required_skills:
        pct = math.floor((1 - len(missing_required) / len(role.required_skills)) * 100 + 0.5)
    else:
        pct = 100  # nothing required, nothing missing

    return SkillGapAnalysis(
        role=role,
        missing_required_skills=missing_required,
        missing_related_skills=missing_related,
        match_percentage=min(100, max(0, pct)),
    )


async def gap_analysis(
    store: CatalogStore,
    role_title: str,
    candidate_skill_names: Iterable[str],
) -> SkillGapAnalysis:
    role = await store.find_role(role_title)
    if role is None:
        raise NotFound(f"Role not found: {role_title}")

    result = compute_gap(role, candidate_skill_names)
    logger.info("Gap analysis for %s: %d%% match", role_title, result.match_percentage)
    return result
