from datetime import date

import pytest

from netcoach.features.prioritization.domain.models import CareerGoalProfile, Contact


@pytest.fixture
def today():
    return date(2024, 6, 12)


@pytest.fixture
def career_profile():
    return CareerGoalProfile(
        target_industries=["Healthcare"],
        dream_roles=["Product Manager"],
        preferred_locations=["Boston"],
        wishlist_companies=["Acme Health"],
        target_skills=["Roadmapping", "SQL"],
        weekly_networking_capacity=3,
    )


@pytest.fixture
def make_contact():
    def _make(contact_id: str = "c-1", **overrides):
        contact = Contact(id=contact_id, first_name="Ada", last_name="Lovelace")
        for key, value in overrides.items():
            setattr(contact, key, value)
        return contact

    return _make
