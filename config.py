import os
from pathlib import Path

from pydantic_settings import BaseSettings

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "catalog.json"


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    debug: bool = False
    log_level: str = "INFO"
    rate_limit: str = "60/minute"
    rate_limit_enabled: bool = True

    # Seed data for the in-memory role / skill-mapping catalog
    catalog_path: str = str(DEFAULT_CATALOG_PATH)

    # Match score
    min_term_length: int = 2  # profile terms must be longer than this
    remote_bonus: int = 10
    location_bonus: int = 10
    employment_type_bonus: int = 10

    # Skill clustering
    cluster_count_ratio: float = 0.7
    cluster_relevance_ratio: float = 0.8
    unique_skill_limit: int = 5
    core_skill_ratio: float = 0.7
    unique_role_min_relevance: int = 80

    # Market enrichment fallbacks
    default_market_demand: str = "High"
    default_salary_range: str = "$80,000 - $120,000"

    trending_limit: int = 10

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
