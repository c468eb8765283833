"""Job-to-profile match score (0-100).

Lexical tf-idf overlap between the job text and the candidate's titles and
skills, plus flat bonuses for remote/location and employment type fit.
"""

import logging
import math

from config import Settings, settings as default_settings
from models.records import CandidateProfile, JobPosting
from models.responses import ScoredJob
from services.relevance import score, tokenize

logger = logging.getLogger(__name__)


def build_job_document(job: JobPosting) -> str:
    return " ".join([job.title, job.company, job.description, *job.requirements])


def build_profile_document(profile: CandidateProfile) -> str:
    return " ".join([*profile.desired_titles, *(s.name for s in profile.skills)])


def _base_score(job_doc: str, profile_doc: str, min_term_length: int) -> int:
    """Average job-weight x profile-weight over profile terms found in the job."""
    weights = score(job_doc, profile_doc)

    total = 0.0
    term_count = 0
    for term in tokenize(profile_doc):
        if len(term) <= min_term_length:
            continue
        job_weight = weights.weight(term, 0)
        if job_weight > 0:
            total += job_weight * weights.weight(term, 1)
            term_count += 1

    if not term_count:
        return 0
    # halves round up
    return math.floor(min(100.0, (total / term_count) * 100) + 0.5)


def _candidate_location(profile: CandidateProfile) -> str:
    loc = profile.location
    if loc is None:
        return ""
    return loc.city or loc.state or loc.country or ""


def _bonuses(job: JobPosting, profile: CandidateProfile, cfg: Settings) -> int:
    bonus = 0
    prefs = profile.preferences

    if prefs.remote_work and job.remote:
        bonus += cfg.remote_bonus
    else:
        user_location = _candidate_location(profile)
        if user_location and job.location and user_location.lower() in job.location.lower():
            bonus += cfg.location_bonus

    if job.employment_type and job.employment_type in prefs.employment_types:
        bonus += cfg.employment_type_bonus

    return bonus


def match_score(
    job: JobPosting,
    profile: CandidateProfile,
    cfg: Settings | None = None,
) -> int:
    """Compute the 0-100 fit of `job` for `profile`. Deterministic and pure."""
    cfg = cfg or default_settings
    base = _base_score(
        build_job_document(job),
        build_profile_document(profile),
        cfg.min_term_length,
    )
    final = min(100, max(0, base + _bonuses(job, profile, cfg)))
    logger.debug("Match score for %s: base=%d final=%d", job.url, base, final)
    return final


def rank_jobs(
    jobs: list[JobPosting],
    profile: CandidateProfile,
    cfg: Settings | None = None,
) -> list[ScoredJob]:
    """Score every job and sort by descending score (ties keep input order)."""
    scored = [ScoredJob(job=j, match_score=match_score(j, profile, cfg)) for j in jobs]
    scored.sort(key=lambda s: -s.match_score)
    logger.info("Scored %d jobs against profile", len(scored))
    return scored
