"""
URL configuration for admin API endpoints.
"""

from django.urls import path

from api.v1.admin import views

urlpatterns = [
    path(
        "license-keys",
        views.LicenseKeysView.as_view(),
        name="license-keys",
    ),
    path(
        "license-keys/<uuid:license_key_id>",
        views.LicenseKeyDetailView.as_view(),
        name="license-key-detail",
    ),
    path(
        "licenses/expiring",
        views.ExpiringLicensesView.as_view(),
        name="expiring-licenses",
    ),
]
