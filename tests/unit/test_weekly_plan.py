from datetime import date, timedelta

import pytest

from netcoach.features.prioritization.domain.errors import InvalidInputError
from netcoach.config import settings
from netcoach.features.prioritization.domain.models import CareerGoalProfile, PlannedContact, WeeklyPlan
from netcoach.features.prioritization.pipeline.planning.service import (
    CHECK_IN_ACTION,
    RECONNECT_ACTION,
    ROLLOVER_ACTION,
    WeeklyPlanService,
)

WEEK = date(2024, 6, 10)  # Monday
TODAY = date(2024, 6, 12)


@pytest.fixture
def contacts(make_contact):
    return [
        make_contact("low-hot", relevance_bucket="low", warmth_bucket="hot", last_interaction_date=TODAY),
        make_contact("high-cold", relevance_bucket="high", warmth_bucket="cold"),
        make_contact("medium-warm", relevance_bucket="medium", warmth_bucket="warm", last_interaction_date=TODAY - timedelta(days=45)),
        make_contact("high-hot", relevance_bucket="high", warmth_bucket="hot", last_interaction_date=TODAY - timedelta(days=70)),
    ]


def _prior_plan(week_start, entries, status="active"):
    return WeeklyPlan(
        week_start_date=week_start,
        target_contacts=len(entries),
        planned_contacts=[PlannedContact(cid, "Check in", done) for cid, done in entries],
        status=status,
    )


def test_ranks_by_selection_score(contacts):
    selection = WeeklyPlanService().select_weekly_plan(contacts, [], 3, WEEK, today=TODAY)

    ids = [entry.contact_id for entry in selection.plan.planned_contacts]
    # high-cold 100+50+20, high-hot 100+10+20, medium-warm 50+30-20
    assert ids == ["high-cold", "high-hot", "medium-warm"]
    assert selection.plan.target_contacts == 3
    assert selection.plan.status == "active"
    assert selection.plan.completed_contacts == 0


def test_suggested_actions(contacts):
    plan = WeeklyPlanService().select_weekly_plan(contacts, [], 4, WEEK, today=TODAY).plan

    actions = {entry.contact_id: entry.suggested_action for entry in plan.planned_contacts}
    assert actions["high-cold"] == RECONNECT_ACTION
    assert actions["high-hot"] == CHECK_IN_ACTION


def test_rollover_contacts_come_first_and_old_plan_is_missed(contacts):
    prior = _prior_plan(WEEK - timedelta(days=7), [("low-hot", False), ("high-hot", True)])

    selection = WeeklyPlanService().select_weekly_plan(contacts, [prior], 2, WEEK, today=TODAY)

    entries = selection.plan.planned_contacts
    assert entries[0].contact_id == "low-hot"
    assert entries[0].suggested_action == ROLLOVER_ACTION
    assert entries[1].contact_id == "high-cold"
    assert selection.rollover_contact_ids == {"low-hot"}
    assert [p.status for p in selection.missed_plans] == ["missed"]
    assert prior.status == "active"


def test_replaced_plan_does_not_roll_over(contacts):
    same_week = _prior_plan(WEEK, [("low-hot", False)])
    finished = _prior_plan(WEEK - timedelta(days=14), [("medium-warm", False)], status="completed")

    selection = WeeklyPlanService().select_weekly_plan(
        contacts, [same_week, finished], 4, WEEK + timedelta(days=3), today=TODAY
    )

    assert selection.replaced_plan is same_week
    assert selection.missed_plans == []
    assert selection.plan.week_start_date == WEEK
    assert all(e.suggested_action != ROLLOVER_ACTION for e in selection.plan.planned_contacts)


def test_capacity_limits_and_empty_inputs(contacts):
    service = WeeklyPlanService()

    assert len(service.select_weekly_plan(contacts, [], 2, WEEK, today=TODAY).plan.planned_contacts) == 2
    assert service.select_weekly_plan(contacts, [], 0, WEEK, today=TODAY).plan.planned_contacts == []
    assert service.select_weekly_plan(contacts, [], -3, WEEK, today=TODAY).plan.planned_contacts == []

    empty = service.select_weekly_plan([], [], 5, WEEK, today=TODAY).plan
    assert empty.planned_contacts == []
    assert empty.target_contacts == 5


def test_non_integer_capacity_is_invalid(contacts):
    with pytest.raises(InvalidInputError):
        WeeklyPlanService().select_weekly_plan(contacts, [], "5", WEEK, today=TODAY)
    with pytest.raises(InvalidInputError):
        WeeklyPlanService().select_weekly_plan(contacts, [], True, WEEK, today=TODAY)


def test_ties_keep_input_order_and_duplicates_collapse(make_contact):
    contacts = [
        make_contact("first", relevance_bucket="medium"),
        make_contact("second", relevance_bucket="medium"),
        make_contact("first", relevance_bucket="high"),
    ]

    plan = WeeklyPlanService().select_weekly_plan(contacts, [], 5, WEEK, today=TODAY).plan

    assert [e.contact_id for e in plan.planned_contacts] == ["first", "second"]


def test_complete_planned_contact():
    service = WeeklyPlanService()
    plan = _prior_plan(WEEK, [("a", False), ("b", False)])

    half = service.complete_planned_contact(plan, "a")
    assert half.completed_contacts == 1
    assert half.status == "active"
    assert service.plan_progress_percent(half) == 50.0

    done = service.complete_planned_contact(half, "b")
    assert done.completed_contacts == 2
    assert done.status == "completed"
    assert plan.completed_contacts == 0

    with pytest.raises(InvalidInputError):
        service.complete_planned_contact(plan, "missing")


def test_capacity_comes_from_profile_or_settings(career_profile, monkeypatch):
    assert WeeklyPlanService.capacity_for(career_profile) == 3

    monkeypatch.setattr(settings, "DEFAULT_WEEKLY_CAPACITY", 7)
    assert WeeklyPlanService.capacity_for(None) == 7
    assert WeeklyPlanService.capacity_for(CareerGoalProfile(weekly_networking_capacity=0)) == 7


def test_contacts_without_ids_are_not_collapsed(make_contact):
    contacts = [
        make_contact(None, first_name="Grace", relevance_bucket="medium"),
        make_contact(None, first_name="Alan", relevance_bucket="medium"),
    ]

    plan = WeeklyPlanService().select_weekly_plan(contacts, [], 5, WEEK, today=TODAY).plan

    assert len(plan.planned_contacts) == 2


def test_more_rollovers_than_capacity(contacts):
    prior = _prior_plan(
        WEEK - timedelta(days=7),
        [("low-hot", False), ("medium-warm", False), ("high-hot", False)],
    )

    selection = WeeklyPlanService().select_weekly_plan(contacts, [prior], 2, WEEK, today=TODAY)

    # rollovers ranked among themselves: high-hot 1130, medium-warm 1060, low-hot 960
    assert [e.contact_id for e in selection.plan.planned_contacts] == ["high-hot", "medium-warm"]
    assert all(e.suggested_action == ROLLOVER_ACTION for e in selection.plan.planned_contacts)
