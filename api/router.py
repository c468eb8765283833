from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_catalog_store, get_job_store, get_recommender
from config import settings
from models.records import CandidateProfile, JobPosting, RoleDefinition
from models.requests import AnalyzeSkillsRequest, JobMatchRequest, JobSearchRequest, ProfileRequest
from models.responses import (
    JobSearchResponse,
    RecommendationsResponse,
    ScoredJob,
    SkillClusterResult,
    SkillGapAnalysis,
)
from services.errors import InvalidInput, NotFound
from services.match_score import match_score, rank_jobs
from services.recommender import RoleRecommender
from services.store import CatalogStore, JobStore

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def _require_skills(profile: CandidateProfile) -> None:
    if not profile.skills:
        raise InvalidInput("User profile with skills is required")


@router.get("/health")
async def health():
    return {"status": "ok", "service": "matching-engine"}


@router.post("/jobs/search", response_model=JobSearchResponse)
@limiter.limit(settings.rate_limit)
async def search_jobs(
    request: Request,
    body: JobSearchRequest,
    jobs: JobStore = Depends(get_job_store),
):
    saved = [await jobs.save_if_absent(job) for job in body.jobs]

    if body.profile is None:
        scored = [ScoredJob(job=job) for job in saved]
    else:
        scored = rank_jobs(saved, body.profile)
    return JobSearchResponse(jobs=scored, total=len(scored))


@router.post("/jobs/match", response_model=ScoredJob)
@limiter.limit(settings.rate_limit)
async def match_job(
    request: Request,
    body: JobMatchRequest,
    jobs: JobStore = Depends(get_job_store),
):
    job = await jobs.get_by_url(body.job_url)
    if job is None:
        raise NotFound("Job not found")
    return ScoredJob(job=job, match_score=match_score(job, body.profile))


@router.get("/jobs/trending", response_model=list[JobPosting])
async def trending_jobs(
    industry: str | None = None,
    location: str | None = None,
    jobs: JobStore = Depends(get_job_store),
):
    return await jobs.trending(industry, location, limit=settings.trending_limit)


@router.post("/skills/analyze", response_model=SkillClusterResult)
@limiter.limit(settings.rate_limit)
async def analyze_skills(
    request: Request,
    body: AnalyzeSkillsRequest,
    recommender: RoleRecommender = Depends(get_recommender),
):
    return await recommender.analyze_skills(body.skills)


@router.post("/roles/suggest", response_model=RecommendationsResponse)
@limiter.limit(settings.rate_limit)
async def suggest_roles(
    request: Request,
    body: ProfileRequest,
    recommender: RoleRecommender = Depends(get_recommender),
):
    _require_skills(body.profile)
    recommendations = await recommender.recommend(body.profile)
    return RecommendationsResponse(recommendations=recommendations, total=len(recommendations))


@router.get("/roles/trending", response_model=list[RoleDefinition])
async def trending_roles(
    industry: str | None = None,
    catalog: CatalogStore = Depends(get_catalog_store),
):
    return await catalog.list_roles(industry)


@router.get("/roles/{title}", response_model=RoleDefinition)
async def get_role(title: str, catalog: CatalogStore = Depends(get_catalog_store)):
    role = await catalog.find_role(title)
    if role is None:
        raise NotFound("Role not found")
    return role


@router.post("/roles/{title}/gap-analysis", response_model=SkillGapAnalysis)
@limiter.limit(settings.rate_limit)
async def role_gap_analysis(
    request: Request,
    title: str,
    body: ProfileRequest,
    recommender: RoleRecommender = Depends(get_recommender),
):
    _require_skills(body.profile)
    return await recommender.gap_analysis(title, body.profile.skill_names())
