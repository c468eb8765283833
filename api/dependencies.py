"""Shared dependencies for API routes."""

from functools import lru_cache

from config import settings
from services.recommender import RoleRecommender
from services.store import CatalogStore, InMemoryCatalogStore, InMemoryJobStore, JobStore


@lru_cache(maxsize=1)
def get_catalog_store() -> CatalogStore:
    return InMemoryCatalogStore.from_json(settings.catalog_path)


@lru_cache(maxsize=1)
def get_job_store() -> JobStore:
    return InMemoryJobStore()


def get_recommender() -> RoleRecommender:
    return RoleRecommender(get_catalog_store())
