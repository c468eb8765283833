from typing import Literal

from pydantic import BaseModel

from models.records import JobPosting, RoleDefinition

RecommendationType = Literal["primary", "secondary", "unique"]


class ScoredJob(BaseModel):
    job: JobPosting
    match_score: int | None = None  # 0-100, None when no profile was given


class JobSearchResponse(BaseModel):
    jobs: list[ScoredJob] = []
    total: int = 0


class SkillClusterResult(BaseModel):
    """Role clusters and distinctive skills derived from a skill set."""
    primary_cluster: list[str] = []
    secondary_cluster: list[str] = []
    unique_skills: list[str] = []  # top 5, most distinctive first
    missing_core_skills: list[str] = []


class RoleRecommendation(RoleDefinition):
    type: RecommendationType
    market_demand: str = ""


class RecommendationsResponse(BaseModel):
    recommendations: list[RoleRecommendation] = []
    total: int = 0


class SkillGapAnalysis(BaseModel):
    role: RoleDefinition
    missing_required_skills: list[str] = []
    missing_related_skills: list[str] = []
    match_percentage: int = 0  # 0-100
