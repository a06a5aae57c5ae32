"""
Integration tests for the registration and payment lifecycle.
Tests complete workflows across the registration service, payment service,
HTTP endpoints and the sweep task.
"""
import pytest
from unittest.mock import patch

from django.urls import reverse
from rest_framework import status

from apps.core.services.base import ServiceResult
from apps.payments.models import Payment
from apps.payments.services.payment_service import PaymentService
from apps.payments.tasks import sweep_pending_payments
from apps.students.models import Student
from tests.factories import gateway_status, gateway_failure

ISSUE_PATCH = 'apps.integrations.services.remita_service.RemitaGatewayClient.issue_reference'
QUERY_PATCH = 'apps.integrations.services.remita_service.RemitaGatewayClient.query_status'


class TestHostelFeeFlow:
    """Register, pay and confirm through the public endpoints."""

    @pytest.mark.django_db
    def test_register_pay_and_confirm(self, api_client, registration_payload):
        # Step 1: Register
        response = api_client.post(
            reverse('students:register'), registration_payload, format='json')
        assert response.status_code == status.HTTP_201_CREATED

        # Step 2: Generate a reference for the full fee
        with patch(ISSUE_PATCH) as mock_issue:
            mock_issue.return_value = ServiceResult.ok({'rrr': '290019681818'})

            response = api_client.post(reverse('payments:rrr-generation'), {
                'matricNumber': 'ABC/12345',
                'firstName': 'Ada',
                'lastName': 'Obi',
                'email': 'ada.obi@example.com',
                'paymentOption': 'FULL'
            }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['rrr'] == '290019681818'
        assert mock_issue.call_args.kwargs['amount'] == 219000
        assert mock_issue.call_args.kwargs['payer_phone'] == '08012345678'

        payment = Payment.objects.get(rrr='290019681818')
        assert payment.status == 'pending'
        assert payment.student.matric_number == 'ABC/12345'

        # Step 3: Payment still clearing
        with patch(QUERY_PATCH) as mock_query:
            mock_query.return_value = gateway_status('pending')

            response = api_client.get(
                reverse('payments:check-payment-status'), {'rrr': '290019681818'})

        assert response.data['status'] == 'pending'
        assert Student.objects.get(matric_number='ABC/12345').payment_status == 'pending'

        # Step 4: Payment clears
        with patch(QUERY_PATCH) as mock_query:
            mock_query.return_value = gateway_status('completed', '01')

            response = api_client.post(
                reverse('payments:verify-payment'),
                {'rrr': '290019681818', 'matricNumber': 'abc/12345'},
                format='json'
            )

        assert response.data['isPaid'] is True
        payment.refresh_from_db()
        assert payment.status == 'completed'

        # Step 5: Stored status is now paid
        response = api_client.get(
            reverse('payments:payment'), {'matricNumber': 'ABC/12345'})

        assert response.data['paid'] is True
        assert response.data['paymentDetails']['rrr'] == '290019681818'
        assert response.data['paymentDetails']['amount'] == 219000


class TestSweepFlow:
    """Pending references are settled by the periodic sweep."""

    @pytest.mark.django_db
    def test_sweep_settles_issued_references(
        self,
        student,
        other_student,
        mock_issue_reference,
        mock_query_status
    ):
        # Step 1: Three references, two for the same student
        mock_issue_reference.side_effect = [
            ServiceResult.ok({'rrr': '290019681818'}),
            ServiceResult.ok({'rrr': '290019681819'}),
            ServiceResult.ok({'rrr': '290019681820'}),
        ]
        service = PaymentService()
        for matric in ('ABC/12345', 'XYZ/99999', 'ABC/12345'):
            result = service.issue_reference(
                matric_number=matric,
                first_name='Test',
                last_name='Payer',
                email='payer@example.com',
                amount=109500
            )
            assert result.success

        # Step 2: Sweep with one paid, one failed and one unreachable
        statuses = {
            '290019681818': gateway_status('completed'),
            '290019681819': gateway_status('failed'),
            '290019681820': gateway_failure(),
        }
        mock_query_status.side_effect = lambda rrr: statuses[rrr]

        summary = sweep_pending_payments()

        assert summary['total'] == 3
        assert summary['updated_count'] == 2
        assert summary['failed'] == 1

        assert Payment.objects.get(rrr='290019681818').status == 'completed'
        assert Payment.objects.get(rrr='290019681819').status == 'failed'
        assert Payment.objects.get(rrr='290019681820').status == 'pending'

        student.refresh_from_db()
        other_student.refresh_from_db()
        assert student.payment_status == 'paid'
        assert other_student.payment_status == 'pending'

        # Step 3: A second sweep only revisits the reference still pending
        mock_query_status.reset_mock(side_effect=True)
        mock_query_status.return_value = gateway_status('pending')

        summary = sweep_pending_payments()

        assert summary['total'] == 1
        assert summary['updated_count'] == 0
        mock_query_status.assert_called_once_with('290019681820')
