from django.urls import path
from .views import RegisterView, LoginView, CurrentUserView

urlpatterns = [
    path('register', RegisterView.as_view(), name='auth_register'),
    path('login', LoginView.as_view(), name='auth_login'),
    path('me', CurrentUserView.as_view(), name='auth_me'),
]
