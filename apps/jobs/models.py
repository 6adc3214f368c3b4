from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from core.constants import ASSIGNED_JOB_STATUSES, JOB_CATEGORY_CHOICES, JOB_STATUS_CHOICES
from core.utils import as_id


class Job(models.Model):
    title = models.CharField(max_length=200)
    description = models.TextField()
    category = models.CharField(max_length=20, choices=JOB_CATEGORY_CHOICES)
    reward = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    address = models.CharField(max_length=255)
    longitude = models.FloatField()
    latitude = models.FloatField()
    time_estimate = models.CharField(max_length=100)
    status = models.CharField(max_length=20, choices=JOB_STATUS_CHOICES, default='open', db_index=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='posted_jobs'
    )
    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='assigned_jobs'
    )
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()
    expires_at = models.DateTimeField(db_index=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    completion_comment = models.TextField(null=True, blank=True)
    completion_submitted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'expires_at'], name='job_status_expiry_idx'),
        ]

    def __str__(self):
        return f"{self.title} - {self.status}"

    @property
    def creator_id_str(self):
        return as_id(self.created_by_id)

    @property
    def assignee_id_str(self):
        return as_id(self.assigned_to_id)

    @property
    def coordinates(self):
        return [self.longitude, self.latitude]

    @property
    def completion_request(self):
        if self.completion_submitted_at is None:
            return None
        return {
            'comment': self.completion_comment,
            'submitted_at': self.completion_submitted_at,
        }

    def is_created_by(self, user_id):
        return user_id is not None and self.creator_id_str == as_id(user_id)

    def is_assigned_to(self, user_id):
        return user_id is not None and self.assignee_id_str == as_id(user_id)

    def has_consistent_assignee(self):
        """An assignee exists for every status that needs one."""
        if self.status in ASSIGNED_JOB_STATUSES:
            return self.assigned_to_id is not None
        if self.status == 'open':
            return self.assigned_to_id is None
        return True
