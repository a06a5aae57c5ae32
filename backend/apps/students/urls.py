"""
URL configuration for student endpoints.
"""
from django.urls import path

from .views import StudentRegistrationView

app_name = 'students'

urlpatterns = [
    path(
        'register/',
        StudentRegistrationView.as_view(),
        name='register'
    ),
]
