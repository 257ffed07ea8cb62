"""
URL configuration for payment provider webhooks.
"""

from django.urls import path

from api.v1.payments import views

app_name = "payments"

urlpatterns = [
    path(
        "stripe-webhook",
        views.StripeWebhookView.as_view(),
        name="stripe-webhook",
    ),
]
