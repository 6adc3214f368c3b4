from django.urls import path
from .views import (
    JobListCreateView, JobDetailView, JobApplyView,
    JobCompleteView, JobApproveView, JobRejectView
)

urlpatterns = [
    path('', JobListCreateView.as_view(), name='job_list'),
    path('<int:pk>/', JobDetailView.as_view(), name='job_detail'),
    path('<int:pk>/apply/', JobApplyView.as_view(), name='job_apply'),
    path('<int:pk>/complete/', JobCompleteView.as_view(), name='job_complete'),
    path('<int:pk>/approve/', JobApproveView.as_view(), name='job_approve'),
    path('<int:pk>/reject/', JobRejectView.as_view(), name='job_reject'),
]
