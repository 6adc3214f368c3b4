"""Lazy job expiry.

There is no scheduler: a job's status is re-resolved against the clock every
time it is read or about to be written.
"""
from datetime import timedelta

from django.conf import settings

from core.constants import TERMINAL_JOB_STATUSES


def default_expiry(created_at):
    return created_at + timedelta(days=settings.JOB_DEFAULT_TTL_DAYS)


def resolve_status(job, now):
    """Status ``job`` has at ``now``; completed and cancelled never change."""
    if job.status in TERMINAL_JOB_STATUSES:
        return job.status
    if now > job.expires_at:
        return 'expired'
    return job.status


def refresh_expiry(job, now):
    """Apply ``resolve_status`` in memory. Returns True if the status moved."""
    resolved = resolve_status(job, now)
    if resolved == job.status:
        return False
    job.status = resolved
    return True
