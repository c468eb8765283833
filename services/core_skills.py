"""Core skills of a role cluster and the ones a candidate lacks."""

import logging
from collections import Counter
from collections.abc import Iterable

from models.records import RoleDefinition
from services.store import CatalogStore

logger = logging.getLogger(__name__)


def core_skills(roles: list[RoleDefinition], ratio: float = 0.7) -> list[str]:
    """Required skills listed by at least `ratio` of `roles`, first-seen order."""
    tally: Counter[str] = Counter()
    for role in roles:
        tally.update(role.required_skills)
    threshold = len(roles) * ratio
    return [skill for skill, count in tally.items() if count >= threshold]


async def missing_core_skills(
    store: CatalogStore,
    cluster_roles: list[str],
    candidate_skill_names: Iterable[str],
    ratio: float = 0.7,
) -> list[str]:
    if not cluster_roles:
        return []

    roles = await store.find_roles(cluster_roles)
    have = {s.lower() for s in candidate_skill_names}
    missing = [s for s in core_skills(roles, ratio) if s.lower() not in have]
    logger.debug(
        "Cluster of %d roles (%d found): %d missing core skills",
        len(cluster_roles), len(roles), len(missing),
    )
    return missing
