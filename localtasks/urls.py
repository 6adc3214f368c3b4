from django.contrib import admin
from django.http import JsonResponse
from django.urls import path, include
from drf_yasg.views import get_schema_view
from drf_yasg import openapi
from rest_framework import permissions

schema_view = get_schema_view(
    openapi.Info(
        title="LocalTasks API",
        default_version='v1',
        description="API for the LocalTasks job marketplace",
    ),
    public=True,
    permission_classes=[permissions.AllowAny],
)


def health_check(request):
    return JsonResponse({"message": "Server is running!"})


urlpatterns = [
    path('', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('test', health_check, name='health_check'),
    path('admin/', admin.site.urls),
    path('api/auth/', include('apps.users.urls')),
    path('api/jobs/', include('apps.jobs.urls')),
]
