"""
Main API URL configuration for Sky Hostel.
Consolidates all app API endpoints.
"""
from django.urls import path, include

# API URL patterns
urlpatterns = [
    path('students/', include('apps.students.urls')),
    path('payments/', include('apps.payments.urls')),
]
