"""
URL configuration for payment endpoints.
"""
from django.urls import path

from .views import (
    IssueReferenceView,
    PaymentStatusView,
    RecordPaymentView,
    VerifyPaymentView,
    SweepPendingPaymentsView
)

app_name = 'payments'

urlpatterns = [
    path(
        'rrr-generation/',
        IssueReferenceView.as_view(),
        name='rrr-generation'
    ),
    path(
        'check-payment-status/',
        PaymentStatusView.as_view(),
        name='check-payment-status'
    ),
    path(
        'payment/',
        RecordPaymentView.as_view(),
        name='payment'
    ),
    path(
        'verify-payment/',
        VerifyPaymentView.as_view(),
        name='verify-payment'
    ),
    path(
        'update-pending-payments/',
        SweepPendingPaymentsView.as_view(),
        name='update-pending-payments'
    ),
]
