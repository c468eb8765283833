"""Tests for the job/profile match score."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from config import Settings
from models.records import CandidatePreferences, CandidateProfile, JobPosting, Location, Skill
from services.match_score import (
    _base_score,
    build_job_document,
    build_profile_document,
    match_score,
    rank_jobs,
)


def _job(**overrides) -> JobPosting:
    fields = dict(
        title="Data Analyst",
        company="Globex",
        location="Austin, TX",
        description="Reporting with SQL and Tableau",
        requirements=["SQL", "Excel"],
        url="https://jobs.example.com/data-analyst",
    )
    fields.update(overrides)
    return JobPosting(**fields)


class TestDocuments:
    def test_job_document_concatenates_fields(self, backend_job):
        assert build_job_document(backend_job) == "Backend Engineer Acme Python Django APIs Python SQL"

    def test_profile_document_titles_then_skills(self, backend_profile):
        assert build_profile_document(backend_profile) == "Backend Engineer Python"


class TestBaseScore:
    def test_backend_scenario_base_score(self, backend_job):
        profile = CandidateProfile(skills=[Skill(name="Python")], desired_titles=["Backend Engineer"])
        # backend, engineer, python are shared; python appears twice in the job
        assert match_score(backend_job, profile) == 47

    def test_no_overlap_scores_zero(self, backend_job):
        profile = CandidateProfile(skills=[Skill(name="Photoshop")], desired_titles=["Illustrator"])
        assert match_score(backend_job, profile) == 0

    def test_empty_profile_scores_zero(self, backend_job):
        assert match_score(backend_job, CandidateProfile()) == 0

    def test_short_terms_are_ignored(self):
        job = _job(description="Statistics in R", requirements=["R"])
        profile = CandidateProfile(skills=[Skill(name="R")])
        assert match_score(job, profile) == 0

    def test_base_score_rounds_halves_up(self, monkeypatch):
        class _Weights:
            def weight(self, term, doc_index):
                return 0.5 if doc_index == 0 else 0.25

        monkeypatch.setattr("services.match_score.score", lambda a, b: _Weights())
        # 0.5 * 0.25 = 12.5%
        assert _base_score("python", "python", 2) == 13

    def test_base_score_is_capped_at_100(self):
        job = _job(description="python " * 50, requirements=[])
        profile = CandidateProfile(skills=[Skill(name="Python")] * 3)
        assert match_score(job, profile) == 100


class TestBonuses:
    def test_remote_bonus(self, backend_job, backend_profile):
        score = match_score(backend_job, backend_profile)
        assert score == 57
        assert 0 < score <= 100

    def test_remote_bonus_requires_remote_job(self, backend_job, backend_profile):
        onsite = backend_job.model_copy(update={"remote": False, "location": "Munich"})
        assert match_score(onsite, backend_profile) == 47

    def test_location_bonus_when_not_remote(self, backend_job):
        profile = CandidateProfile(
            skills=[Skill(name="Python")],
            desired_titles=["Backend Engineer"],
            location=Location(city="berlin"),
        )
        assert match_score(backend_job, profile) == 57

    def test_location_uses_first_non_empty_field(self, backend_job):
        # city is set but does not match; state/country are not consulted
        profile = CandidateProfile(
            skills=[Skill(name="Python")],
            desired_titles=["Backend Engineer"],
            location=Location(city="Hamburg", country="Germany"),
        )
        assert match_score(backend_job, profile) == 47

    def test_location_falls_back_to_country(self, backend_job):
        profile = CandidateProfile(
            skills=[Skill(name="Python")],
            desired_titles=["Backend Engineer"],
            location=Location(country="GERMANY"),
        )
        assert match_score(backend_job, profile) == 57

    def test_remote_and_location_bonus_do_not_stack(self, backend_job, backend_profile):
        # backend_profile wants remote and lives in Berlin: only +10
        assert match_score(backend_job, backend_profile) == 57

    def test_employment_type_bonus(self, backend_job, backend_profile):
        profile = backend_profile.model_copy(update={
            "preferences": CandidatePreferences(remote_work=True, employment_types=["Full-time", "Contract"]),
        })
        assert match_score(backend_job, profile) == 67

    def test_final_score_is_capped(self, backend_profile):
        job = _job(
            title="Python",
            description="python " * 50,
            requirements=[],
            remote=True,
            employment_type="Contract",
        )
        profile = backend_profile.model_copy(update={
            "preferences": CandidatePreferences(remote_work=True, employment_types=["Contract"]),
        })
        assert match_score(job, profile) == 100

    def test_bonus_sizes_come_from_settings(self, backend_job, backend_profile):
        cfg = Settings(remote_bonus=25)
        assert match_score(backend_job, backend_profile, cfg) == 72


class TestDeterminism:
    def test_same_inputs_same_score(self, backend_job, backend_profile):
        scores = {match_score(backend_job, backend_profile) for _ in range(20)}
        assert len(scores) == 1

    @pytest.mark.concurrency
    def test_concurrent_calls_are_isolated(self, backend_job, backend_profile):
        other_job = _job()
        other_profile = CandidateProfile(
            skills=[Skill(name="SQL"), Skill(name="Tableau")],
            desired_titles=["Data Analyst"],
        )
        expected_a = match_score(backend_job, backend_profile)
        expected_b = match_score(other_job, other_profile)

        pairs = [(backend_job, backend_profile), (other_job, other_profile)] * 100
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda p: match_score(*p), pairs))

        assert results[0::2] == [expected_a] * 100
        assert results[1::2] == [expected_b] * 100


class TestRankJobs:
    def test_sorted_by_descending_score(self, backend_job, backend_profile):
        unrelated = _job(url="https://jobs.example.com/other")
        ranked = rank_jobs([unrelated, backend_job], backend_profile)
        assert [s.job.url for s in ranked] == [backend_job.url, unrelated.url]
        assert ranked[0].match_score >= ranked[1].match_score

    def test_ties_keep_input_order(self, backend_profile):
        a = _job(url="https://jobs.example.com/a")
        b = _job(url="https://jobs.example.com/b")
        ranked = rank_jobs([a, b], backend_profile)
        assert [s.job.url for s in ranked] == [a.url, b.url]

    def test_empty(self, backend_profile):
        assert rank_jobs([], backend_profile) == []
