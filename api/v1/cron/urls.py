"""
URL configuration for cron API endpoints.
"""

from django.urls import path

from api.v1.cron import views

urlpatterns = [
    path(
        "license-reminders",
        views.LicenseRemindersView.as_view(),
        name="license-reminders",
    ),
]
