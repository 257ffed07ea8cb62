"""
URL configuration for license API endpoints.
"""

from django.urls import path

from api.v1.license import views

app_name = "license"

urlpatterns = [
    path(
        "generate-license",
        views.GenerateLicenseView.as_view(),
        name="generate-license",
    ),
    path(
        "find-license",
        views.FindLicenseView.as_view(),
        name="find-license",
    ),
    path(
        "verify-license",
        views.VerifyLicenseView.as_view(),
        name="verify-license",
    ),
]
