from datetime import date, timedelta

from netcoach.config import Settings
from netcoach.features.prioritization.domain.models import CareerGoalProfile, RelevanceWeights
from netcoach.features.prioritization.pipeline.scoring import scorers as scorers_module
from netcoach.features.prioritization.pipeline.scoring import service as scoring_module
from netcoach.features.prioritization.pipeline.scoring.scorers import score_relevance
from netcoach.features.prioritization.pipeline.scoring.service import (
    ContactScoringService,
    contact_scoring_service,
)

EPOCH = date(2024, 1, 1)


def test_score_new_contact_fills_consistent_fields(make_contact, career_profile, today):
    service = ContactScoringService()
    contact = make_contact(
        current_title="Product Manager",
        last_interaction_date=today - timedelta(days=10),
    )

    scored = service.score_new_contact(contact, career_profile, EPOCH, today=today)

    assert scored.warmth_bucket == "hot"
    assert scored.warmth_score == 98
    assert scored.relevance_score == 25
    assert scored.relevance_bucket == "low"
    assert scored.overall_priority_score == 47
    assert scored.overall_priority_bucket == "B"
    assert scored.previous_warmth_bucket is None
    assert scored.reactivated_at is None
    assert contact.warmth_score is None


def test_warmth_falls_back_to_connected_on(make_contact, today):
    service = ContactScoringService()
    contact = make_contact(connected_on=today - timedelta(days=400))

    scores = service.score_contact(contact, None, today=today)

    assert scores.warmth.bucket == "cold"
    assert scores.relevance.score == 50


def test_injected_default_weights_are_used(make_contact, career_profile, today):
    service = ContactScoringService(
        default_weights=RelevanceWeights(industry=0, role=10, location=0, company=0, skills=0)
    )
    contact = make_contact(current_title="Product Manager")

    assert service.score_contact(contact, career_profile, today=today).relevance.score == 100


def test_configured_weights_reach_every_scoring_path(make_contact, monkeypatch, today):
    monkeypatch.setenv("RELEVANCE_WEIGHT_INDUSTRY", "0")
    monkeypatch.setattr(scorers_module, "settings", Settings(_env_file=None))
    contact = make_contact(industry="Tech")
    profile = CareerGoalProfile(target_industries=["Tech"])

    direct = score_relevance(contact, profile)
    fresh = ContactScoringService().score_contact(contact, profile, today=today).relevance
    shared = contact_scoring_service.score_contact(contact, profile, today=today).relevance

    assert direct.score == fresh.score == shared.score == 0

def test_sweep_reports_only_changed_contacts(make_contact, career_profile, today):
    service = ContactScoringService()
    stale = make_contact("stale", last_interaction_date=today - timedelta(days=5), warmth_bucket="cold", warmth_score=10)

    first = service.sweep([stale], career_profile, epoch_start=EPOCH, today=today)

    assert first.updated_count == 1
    assert first.reactivations == 1
    assert first.updated[0].warmth_bucket == "hot"
    assert first.updated[0].reactivated_at == today

    second = service.sweep(first.updated, career_profile, epoch_start=EPOCH, today=today)

    assert second.updated_count == 0
    assert second.unchanged == 1
    assert second.reactivations == 0


def test_sweep_isolates_failures(make_contact, career_profile, today, monkeypatch):
    service = ContactScoringService()
    good = make_contact("good", last_interaction_date=today)
    bad = make_contact("bad", last_interaction_date=today)
    original = scoring_module.score_relevance

    def flaky_relevance(contact, profile, weights=None):
        if contact.id == "bad":
            raise RuntimeError("corrupt profile data")
        return original(contact, profile, weights)

    monkeypatch.setattr(scoring_module, "score_relevance", flaky_relevance)

    result = service.sweep([bad, good], career_profile, today=today)

    assert result.failures == [("bad", "corrupt profile data")]
    assert [c.id for c in result.updated] == ["good"]


def test_rescore_relevance_keeps_warmth(make_contact, career_profile):
    service = ContactScoringService()
    contact = make_contact(warmth_score=60, warmth_bucket="warm", current_title="Product Manager")

    updated = service.rescore_relevance(contact, career_profile)

    assert updated.warmth_score == 60
    assert updated.relevance_score == 25
    assert updated.overall_priority_score == 36
    assert updated.overall_priority_bucket == "C"
