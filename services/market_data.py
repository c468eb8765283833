"""Market-context enrichment for role recommendations.

Providers sit behind a narrow async interface. A failing provider never
fails a recommendation: `enrich_safely` falls back to static defaults.
"""

import logging
from abc import ABC, abstractmethod

from pydantic import BaseModel

from config import Settings, settings as default_settings
from models.records import RoleDefinition

logger = logging.getLogger(__name__)


class MarketFields(BaseModel):
    market_demand: str
    average_salary: str


class MarketDataProvider(ABC):
    @abstractmethod
    async def enrich(self, role: RoleDefinition) -> MarketFields:
        """Market demand and salary range for `role`."""


class StaticMarketData(MarketDataProvider):
    """Placeholder provider used until a live market-data source is wired in."""

    def __init__(self, cfg: Settings | None = None) -> None:
        self.cfg = cfg or default_settings

    async def enrich(self, role: RoleDefinition) -> MarketFields:
        return default_fields(role, self.cfg)


def default_fields(role: RoleDefinition, cfg: Settings | None = None) -> MarketFields:
    cfg = cfg or default_settings
    return MarketFields(
        market_demand=cfg.default_market_demand,
        average_salary=role.average_salary or cfg.default_salary_range,
    )


async def enrich_safely(
    provider: MarketDataProvider,
    role: RoleDefinition,
    cfg: Settings | None = None,
) -> MarketFields:
    try:
        return await provider.enrich(role)
    except Exception as e:
        logger.warning("Market data unavailable for %s, using defaults: %s", role.title, e)
        return default_fields(role, cfg)
