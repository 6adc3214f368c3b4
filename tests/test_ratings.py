"""Tests for the running-average rating aggregator."""

import pytest

from apps.jobs.ratings import record_completion

pytestmark = pytest.mark.django_db


def test_running_average(make_user):
    user = make_user(rating=4.0, completed_jobs=1)

    record_completion(user, 5)

    user.refresh_from_db()
    assert user.rating == pytest.approx(4.5)
    assert user.completed_jobs == 2


def test_first_rating_becomes_the_average(make_user):
    user = make_user()

    record_completion(user, 3)

    user.refresh_from_db()
    assert user.rating == pytest.approx(3.0)
    assert user.completed_jobs == 1


def test_zero_rating_counts(make_user):
    user = make_user(rating=5.0, completed_jobs=3)

    record_completion(user, 0)

    user.refresh_from_db()
    assert user.rating == pytest.approx(3.75)
    assert user.completed_jobs == 4


def test_fractional_rating(make_user):
    user = make_user(rating=2.0, completed_jobs=2)

    record_completion(user, 3.5)

    assert user.rating == pytest.approx(2.5)


def test_not_idempotent(make_user):
    user = make_user()

    record_completion(user, 5)
    record_completion(user, 5)

    user.refresh_from_db()
    assert user.completed_jobs == 2


def test_created_jobs_untouched(make_user):
    user = make_user(created_jobs=7)

    record_completion(user, 4)

    user.refresh_from_db()
    assert user.created_jobs == 7
