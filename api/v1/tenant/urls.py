"""
URL configuration for tenant API endpoints.
"""

from django.urls import path

from api.v1.tenant import views

urlpatterns = [
    path(
        "<uuid:tenant_id>/license/activate",
        views.ActivateLicenseView.as_view(),
        name="activate-license",
    ),
    path(
        "<uuid:tenant_id>/access",
        views.AccessStatusView.as_view(),
        name="tenant-access",
    ),
]
