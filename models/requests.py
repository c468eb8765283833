from pydantic import BaseModel, Field

from models.records import CandidateProfile, JobPosting


class JobSearchRequest(BaseModel):
    jobs: list[JobPosting] = Field(..., max_length=200, description="Already-fetched job postings")
    profile: CandidateProfile | None = Field(default=None, description="Score jobs against this profile")


class JobMatchRequest(BaseModel):
    job_url: str = Field(..., description="URL of a previously stored job")
    profile: CandidateProfile


class AnalyzeSkillsRequest(BaseModel):
    skills: list[str] = Field(..., max_length=500, description="Candidate skill names")


class ProfileRequest(BaseModel):
    profile: CandidateProfile
