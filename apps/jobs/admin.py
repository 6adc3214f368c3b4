from django.contrib import admin
from .models import Job


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ('title', 'category', 'reward', 'status', 'created_by', 'assigned_to', 'expires_at')
    list_filter = ('status', 'category')
    search_fields = ('title', 'description', 'address', 'created_by__email')
    # Status only moves through the lifecycle engine
    readonly_fields = ('status', 'assigned_to', 'completed_at', 'completion_comment', 'completion_submitted_at')
