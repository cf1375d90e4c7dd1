"""Shared fixtures for unit tests."""

import pytest

from scentlab.models.models import BaseProfile, Feedback


@pytest.fixture
def profile():
    """Base profile whose three strongest categories are woody, musky and citrus."""
    return BaseProfile(
        id="p1",
        name="테스트 향수",
        category_scores={"woody": 8, "musky": 6, "citrus": 3, "floral": 2, "fruity": 1, "spicy": 1},
    )


@pytest.fixture
def empty_profile():
    return BaseProfile(id="p0", name="빈 향수", category_scores={})


@pytest.fixture
def full_retention():
    return Feedback(
        retention_percentage=100,
        category_preferences={},
        user_characteristics={},
        specific_scents=[],
    )
