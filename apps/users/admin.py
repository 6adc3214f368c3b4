from django.contrib import admin
from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'name', 'phone_number', 'rating', 'completed_jobs', 'created_jobs', 'is_superuser')
    list_filter = ('is_superuser', 'is_active')
    search_fields = ('email', 'name', 'phone_number')
    readonly_fields = ('rating', 'completed_jobs')
    exclude = ('password',)
