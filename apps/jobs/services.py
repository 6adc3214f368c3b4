"""
Job lifecycle engine.

Owns the job status machine::

    open --apply--> in_progress --submit--> pending_review --approve--> completed
                        ^                        |
                        +--------reject----------+

plus the implicit ``expired`` transition, which is resolved lazily against the
injected clock on every read and before every guard.

Each write runs inside ``transaction.atomic()``: the row is locked with
``select_for_update()`` and written with ``UPDATE ... WHERE status=<prior>``,
so of two racing writers on the same job exactly one succeeds and the other
gets ``Conflict``. Approval folds the rating into the assignee's average in
the same transaction.
"""
import logging
import math
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q

from core.constants import MAX_RATING, MIN_RATING, TERMINAL_JOB_STATUSES
from core.exceptions import Conflict, Forbidden, InvalidState, NotFound, ValidationError
from core.utils import system_clock
from .expiry import default_expiry, refresh_expiry
from .models import Job
from .ratings import record_completion
from .serializers import JobInputSerializer

logger = logging.getLogger(__name__)
User = get_user_model()

NOT_OPEN_MESSAGES = {
    'apply': "This job is not open for applications",
    'update': "Only open jobs can be edited",
}


def _validated_rating(rating):
    # bool is an int subclass but never a rating
    if isinstance(rating, bool) or not isinstance(rating, (int, float, Decimal)):
        raise ValidationError(f"Invalid rating. Must be between {MIN_RATING} and {MAX_RATING}")
    value = float(rating)
    if math.isnan(value) or not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(f"Invalid rating. Must be between {MIN_RATING} and {MAX_RATING}")
    return value


def _validated_comment(comment):
    if comment is None:
        return ''
    if not isinstance(comment, str):
        raise ValidationError("Comment must be a string", errors={'comment': ["Not a valid string."]})
    return comment.strip()


class JobLifecycle:
    """Entry point for every job read and write.

    ``clock`` returns the current aware datetime; tests pass a fixed one.
    """

    def __init__(self, clock=system_clock):
        self.clock = clock

    # === Reads ===

    def get_job(self, job_id):
        job = self._fetch(job_id, Job.objects.select_related('created_by', 'assigned_to'))
        refresh_expiry(job, self.clock())
        return job

    def list_jobs(self, status=None, category=None, created_by=None, assigned_to=None,
                  participant=None, expires_before=None, expires_after=None,
                  limit=100, offset=0):
        """List jobs, newest first, with statuses resolved at the current time.

        ``status`` matches the resolved status, so ``status='open'`` leaves out
        open jobs whose deadline has passed and ``status='expired'`` includes
        them. ``participant`` matches jobs the user created or is assigned to.
        """
        now = self.clock()
        jobs = Job.objects.select_related('created_by', 'assigned_to')

        if status == 'expired':
            jobs = jobs.filter(
                Q(status='expired') | (~Q(status__in=TERMINAL_JOB_STATUSES) & Q(expires_at__lt=now))
            )
        elif status in TERMINAL_JOB_STATUSES:
            jobs = jobs.filter(status=status)
        elif status is not None:
            jobs = jobs.filter(status=status, expires_at__gte=now)

        if category is not None:
            jobs = jobs.filter(category=category)
        if created_by is not None:
            jobs = jobs.filter(created_by_id=created_by)
        if assigned_to is not None:
            jobs = jobs.filter(assigned_to_id=assigned_to)
        if participant is not None:
            jobs = jobs.filter(Q(created_by_id=participant) | Q(assigned_to_id=participant))
        if expires_before is not None:
            jobs = jobs.filter(expires_at__lt=expires_before)
        if expires_after is not None:
            jobs = jobs.filter(expires_at__gt=expires_after)

        result = list(jobs.order_by('-created_at', '-id')[offset:offset + limit])
        for job in result:
            refresh_expiry(job, now)
        return result

    # === Creator actions ===

    def create_job(self, creator_id, fields):
        now = self.clock()
        if not User.objects.filter(pk=creator_id).exists():
            raise NotFound("User not found")

        data = self._validated_fields(fields, partial=False)
        data.setdefault('expires_at', default_expiry(now))
        job = Job.objects.create(
            created_by_id=creator_id,
            status='open',
            created_at=now,
            updated_at=now,
            **data
        )
        logger.info(f"Job {job.pk} created by {creator_id}")
        return self.get_job(job.pk)

    def update_job(self, job_id, caller_id, fields):
        def guard(job):
            self._require_status(job, 'open', NOT_OPEN_MESSAGES['update'])
            self._require_creator(job, caller_id, "Not authorized to update this job")
            return self._validated_fields(fields, partial=True)

        return self._transition(job_id, caller_id, 'update', guard, to_status='open')

    def delete_job(self, job_id, caller_id):
        with transaction.atomic():
            job = self._fetch(job_id, Job.objects.select_for_update())
            self._require_creator(job, caller_id, "Not authorized to delete this job")
            job.delete()
        logger.info(f"Job {job_id} deleted by {caller_id}")

    # === Lifecycle transitions ===

    def apply_for_job(self, job_id, caller_id):
        def guard(job):
            self._require_status(job, 'open', NOT_OPEN_MESSAGES['apply'])
            if job.is_created_by(caller_id):
                raise Forbidden("Cannot apply for your own job")
            return {'assigned_to_id': caller_id}

        return self._transition(job_id, caller_id, 'apply', guard, to_status='in_progress')

    def submit_completion(self, job_id, caller_id, comment=None):
        def guard(job):
            # Only the assignee may ever submit, whatever the status
            if not job.is_assigned_to(caller_id):
                raise Forbidden("Not authorized to complete this job")
            self._require_status(job, 'in_progress', "Job is not in progress")
            return {
                'completion_comment': _validated_comment(comment),
                'completion_submitted_at': self.clock(),
            }

        return self._transition(job_id, caller_id, 'submit_completion', guard, to_status='pending_review')

    def approve_completion(self, job_id, caller_id, rating):
        def guard(job):
            self._require_status(job, 'pending_review', "Job is not pending review")
            self._require_creator(job, caller_id, "Not authorized to approve this job completion")
            return {'completed_at': self.clock(), '_rating': _validated_rating(rating)}

        return self._transition(job_id, caller_id, 'approve', guard, to_status='completed')

    def reject_completion(self, job_id, caller_id):
        def guard(job):
            self._require_status(job, 'pending_review', "Job is not pending review")
            self._require_creator(job, caller_id, "Not authorized to reject this job completion")
            return {'completion_comment': None, 'completion_submitted_at': None}

        return self._transition(job_id, caller_id, 'reject', guard, to_status='in_progress')

    # === Internals ===

    def _transition(self, job_id, caller_id, action, guard, to_status):
        """Run one guarded read-modify-write on a job.

        ``guard`` sees the locked job with its expiry already resolved and
        either raises or returns the column changes to write.
        """
        failure = None
        with transaction.atomic():
            job = self._fetch(job_id, Job.objects.select_for_update())
            stored_status = job.status
            now = self.clock()
            if refresh_expiry(job, now):
                # Persist the lazily-resolved expiry even though the guard will refuse
                self._compare_and_swap(job.pk, stored_status, {'status': 'expired', 'updated_at': now})
                logger.info(f"Job {job.pk}: {stored_status} -> expired")
                stored_status = job.status

            try:
                changes = guard(job)
            except (Forbidden, InvalidState, ValidationError) as exc:
                logger.warning(f"Job {job.pk}: {action} by {caller_id} refused: {exc.message}")
                failure = exc
            else:
                rating = changes.pop('_rating', None)
                changes.update(status=to_status, updated_at=now)
                self._compare_and_swap(job.pk, stored_status, changes)
                if rating is not None:
                    self._rate_assignee(job, rating)
                logger.info(f"Job {job.pk}: {stored_status} -> {to_status} ({action} by {caller_id})")

        if failure is not None:
            raise failure
        return self.get_job(job_id)

    def _compare_and_swap(self, job_id, expected_status, changes):
        updated = Job.objects.filter(pk=job_id, status=expected_status).update(**changes)
        if updated != 1:
            logger.warning(f"Job {job_id}: lost race, status is no longer {expected_status}")
            raise Conflict()

    def _rate_assignee(self, job, rating):
        if job.assigned_to_id is None:
            logger.warning(f"Job {job.pk} approved without an assignee, no rating recorded")
            return
        try:
            assignee = User.objects.select_for_update().get(pk=job.assigned_to_id)
        except User.DoesNotExist:
            raise NotFound("User not found")
        record_completion(assignee, rating)

    @staticmethod
    def _fetch(job_id, queryset):
        try:
            return queryset.get(pk=job_id)
        except (Job.DoesNotExist, ValueError, TypeError):
            raise NotFound("Job not found")

    @staticmethod
    def _require_status(job, expected, message):
        if job.status != expected:
            raise InvalidState(f"{message} (status is {job.status})")

    @staticmethod
    def _require_creator(job, caller_id, message):
        if not job.is_created_by(caller_id):
            raise Forbidden(message)

    @staticmethod
    def _validated_fields(fields, partial):
        serializer = JobInputSerializer(data=fields or {}, partial=partial)
        if not serializer.is_valid():
            raise ValidationError("Validation error", errors=serializer.errors)
        return serializer.to_model_fields()


job_lifecycle = JobLifecycle()
