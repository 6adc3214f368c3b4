"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

from apps.jobs.services import JobLifecycle

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    """Clock that only moves when a test tells it to."""

    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


def job_fields(**overrides):
    fields = {
        "title": "Pick up groceries",
        "description": "Two bags from the corner shop",
        "category": "Shopping",
        "reward": "25.00",
        "location": {"address": "12 Main St", "coordinates": [-73.98, 40.75]},
        "time_estimate": "1 hour",
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def lifecycle(clock):
    return JobLifecycle(clock=clock)


@pytest.fixture
def make_user(django_user_model):
    counter = {"n": 0}

    def _make_user(**extra):
        counter["n"] += 1
        n = counter["n"]
        extra.setdefault("name", f"User {n}")
        extra.setdefault("phone_number", f"+1555000{n:04d}")
        return django_user_model.objects.create_user(
            email=extra.pop("email", f"user{n}@example.com"),
            password=extra.pop("password", "secret123"),
            **extra,
        )

    return _make_user


@pytest.fixture
def creator(make_user):
    return make_user(name="Creator")


@pytest.fixture
def worker(make_user):
    return make_user(name="Worker")


@pytest.fixture
def outsider(make_user):
    return make_user(name="Outsider")


@pytest.fixture
def open_job(lifecycle, creator):
    return lifecycle.create_job(creator.pk, job_fields())


@pytest.fixture
def in_progress_job(lifecycle, open_job, worker):
    return lifecycle.apply_for_job(open_job.pk, worker.pk)


@pytest.fixture
def pending_job(lifecycle, in_progress_job, worker):
    return lifecycle.submit_completion(in_progress_job.pk, worker.pk, "All done")


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client():
    def _auth_client(user, keyword="Token"):
        token, _ = Token.objects.get_or_create(user=user)
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"{keyword} {token.key}")
        return client

    return _auth_client
