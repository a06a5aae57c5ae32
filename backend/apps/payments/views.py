"""
API views for hostel fee payments.
Handles reference issuance, status checks, client-reported payments,
verification and the pending-payment sweep trigger.
"""
from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import views, status
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
import logging

from drf_spectacular.utils import (
    extend_schema,
    OpenApiParameter,
    OpenApiExample
)
from drf_spectacular.types import OpenApiTypes as Types

from apps.core.authentication import CronSecretAuthentication
from apps.core.permissions import IsCronCaller
from .serializers import (
    IssueReferenceSerializer,
    RecordPaymentSerializer,
    VerifyPaymentSerializer,
    PaymentDetailsSerializer,
    rrr_validator
)
from .services.payment_service import PaymentService, classify_gateway_error

logger = logging.getLogger(__name__)


# Service error code -> HTTP status
ERROR_STATUS_MAP = {
    'VALIDATION_ERROR': status.HTTP_400_BAD_REQUEST,
    'INVALID_AMOUNT': status.HTTP_400_BAD_REQUEST,
    'REFERENCE_MISMATCH': status.HTTP_400_BAD_REQUEST,
    'NOT_FOUND': status.HTTP_404_NOT_FOUND,
    'GATEWAY_ERROR': status.HTTP_502_BAD_GATEWAY,
    'PERSISTENCE_ERROR': status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(result, http_status=None):
    """Build the standard failure body for a failed ServiceResult."""
    return Response(
        {
            'success': False,
            'error': result.error,
            'errorCode': result.error_code
        },
        status=http_status or ERROR_STATUS_MAP.get(
            result.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    )


def gateway_error_response(result, default, http_status=status.HTTP_502_BAD_GATEWAY):
    """
    Failure body for a GATEWAY_ERROR result.

    The caller sees a coarse category and a fixed message; the raw gateway
    error goes to the log, and into `debug` only when DEBUG is on.
    """
    gateway_code = result.details.get('gateway_code')
    error_code, message = classify_gateway_error(gateway_code, result.error, default=default)
    logger.error(
        f"Gateway call failed: {result.error}",
        extra={'context': {'gateway_code': gateway_code, 'error_code': error_code}}
    )

    body = {
        'success': False,
        'error': message,
        'errorCode': error_code
    }
    if settings.DEBUG:
        body['debug'] = result.error

    return Response(body, status=http_status)


def invalid_request_response(serializer, message):
    return Response(
        {
            'success': False,
            'error': message,
            'errorCode': 'MISSING_FIELDS',
            'errors': serializer.errors
        },
        status=status.HTTP_400_BAD_REQUEST
    )


class PublicPaymentView(views.APIView):
    """Base for the browser-facing payment endpoints."""
    permission_classes = [AllowAny]
    authentication_classes = []


class IssueReferenceView(PublicPaymentView):
    """
    Issue a Remita payment reference (RRR) for a registered student.

    POST /api/v1/payments/rrr-generation/
    """

    @extend_schema(
        summary="Generate payment reference",
        description="""
        Ask Remita for a new payment reference and store a pending payment.

        The amount is taken from `amount`, or derived from `paymentOption`
        (FULL, HALF or CUSTOM with `customAmount`).

        Gateway failures are reported with a user-safe `errorCode`:
        AUTH_ERROR, TIMEOUT, NETWORK_ERROR or GENERATION_FAILED.
        """,
        request=IssueReferenceSerializer,
        responses={
            200: {'description': 'Reference generated'},
            400: {'description': 'Missing or invalid fields'},
            404: {'description': 'Student not registered'},
            500: {'description': 'Gateway or storage failure'}
        },
        examples=[
            OpenApiExample(
                'Success Response',
                value={
                    'success': True,
                    'message': 'Payment reference generated successfully',
                    'rrr': '290019681818',
                    'transactionId': 'FEE-ABC/12345-1700000000000'
                },
                response_only=True
            ),
            OpenApiExample(
                'Gateway Failure',
                value={
                    'success': False,
                    'error': 'The payment service is taking too long to respond. '
                             'Please try again later.',
                    'errorCode': 'TIMEOUT'
                },
                response_only=True
            )
        ],
        tags=['Payments']
    )
    def post(self, request):
        serializer = IssueReferenceSerializer(data=request.data)

        if not serializer.is_valid():
            return invalid_request_response(
                serializer,
                'Please provide all required information to generate your payment reference.'
            )

        result = PaymentService().issue_reference(**serializer.validated_data)

        if not result.success:
            if result.error_code == 'GATEWAY_ERROR':
                return gateway_error_response(
                    result, 'GENERATION_FAILED',
                    http_status=status.HTTP_500_INTERNAL_SERVER_ERROR
                )
            return error_response(result)

        return Response({
            'success': True,
            'message': 'Payment reference generated successfully',
            'rrr': result.data['rrr'],
            'transactionId': result.data['transaction_id']
        })


class PaymentStatusView(PublicPaymentView):
    """
    Check payment status.

    GET /api/v1/payments/check-payment-status/?rrr=<rrr>
    GET /api/v1/payments/check-payment-status/?matricNumber=<matric>
    """

    @extend_schema(
        summary="Check payment status",
        description="""
        With `matricNumber`: the stored status of the student's latest payment,
        without calling the gateway.

        With `rrr`: query Remita, apply the result locally and return it.
        """,
        parameters=[
            OpenApiParameter(
                name='rrr',
                type=Types.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description='Payment reference to reconcile'
            ),
            OpenApiParameter(
                name='matricNumber',
                type=Types.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description='Student matric number'
            )
        ],
        responses={
            200: {'description': 'Current status'},
            400: {'description': 'Neither rrr nor matricNumber given'},
            404: {'description': 'Unknown student or payment'},
            502: {'description': 'Gateway unavailable'}
        },
        tags=['Payments']
    )
    def get(self, request):
        rrr = request.query_params.get('rrr', '').strip()
        matric_number = request.query_params.get('matricNumber', '').strip()

        if not rrr and not matric_number:
            return Response(
                {
                    'success': False,
                    'error': 'Missing RRR or matricNumber parameter'
                },
                status=status.HTTP_400_BAD_REQUEST
            )

        service = PaymentService()

        if matric_number:
            result = service.get_student_payment_status(matric_number)
            if not result.success:
                return error_response(result)

            payment = result.data['payment']
            status_label = 'completed' if result.data['paid'] else 'pending'
            body = {
                'success': True,
                'status': status_label,
                'message': (
                    f"Payment status for student "
                    f"{result.data['student'].matric_number} is {status_label}"
                )
            }
            if payment is not None:
                body['paymentDetails'] = PaymentDetailsSerializer(payment).data
            return Response(body)

        try:
            rrr_validator(rrr)
        except DjangoValidationError:
            return Response(
                {
                    'success': False,
                    'error': 'Invalid RRR parameter',
                    'errorCode': 'VALIDATION_ERROR'
                },
                status=status.HTTP_400_BAD_REQUEST
            )

        result = service.reconcile(rrr)
        if not result.success:
            if result.error_code == 'GATEWAY_ERROR':
                return gateway_error_response(result, 'STATUS_CHECK_FAILED')
            return error_response(result)

        return Response({
            'success': True,
            'status': result.data['status'],
            'message': f"Payment status for RRR {rrr} is {result.data['status']}",
            'paymentDetails': PaymentDetailsSerializer(result.data['payment']).data
        })


class RecordPaymentView(PublicPaymentView):
    """
    Client-reported payments.

    POST /api/v1/payments/payment/
    GET /api/v1/payments/payment/?matricNumber=<matric>
    """

    @extend_schema(
        summary="Record a payment",
        description="""
        Record a payment reported by the browser once the Remita widget
        closes. Unknown references are created; known ones have their status
        updated. A completed payment marks the student as paid.
        """,
        request=RecordPaymentSerializer,
        responses={
            200: {'description': 'Payment recorded'},
            400: {'description': 'Missing payment details'},
            404: {'description': 'Student not registered'}
        },
        tags=['Payments']
    )
    def post(self, request):
        serializer = RecordPaymentSerializer(data=request.data)

        if not serializer.is_valid():
            return invalid_request_response(
                serializer, 'Missing required payment details')

        result = PaymentService().record_payment(**serializer.validated_data)

        if not result.success:
            return error_response(result)

        return Response({
            'success': True,
            'message': 'Payment status updated successfully'
        })

    @extend_schema(
        summary="Get stored payment status",
        parameters=[
            OpenApiParameter(
                name='matricNumber',
                type=Types.STR,
                location=OpenApiParameter.QUERY,
                required=True,
                description='Student matric number'
            )
        ],
        responses={
            200: {'description': 'Stored status'},
            400: {'description': 'Missing matricNumber'},
            404: {'description': 'Student not registered'}
        },
        tags=['Payments']
    )
    def get(self, request):
        matric_number = request.query_params.get('matricNumber', '').strip()

        if not matric_number:
            return Response(
                {'success': False, 'error': 'Missing matricNumber parameter'},
                status=status.HTTP_400_BAD_REQUEST
            )

        result = PaymentService().get_student_payment_status(matric_number)
        if not result.success:
            return error_response(result)

        payment = result.data['payment']
        return Response({
            'success': True,
            'paid': result.data['paid'],
            'paymentDetails': (
                PaymentDetailsSerializer(payment).data if payment else None
            )
        })


class VerifyPaymentView(PublicPaymentView):
    """
    Verify that a reference has been paid by a given student.

    GET /api/v1/payments/verify-payment/?rrr=<rrr>&matricNumber=<matric>
    POST /api/v1/payments/verify-payment/
    """

    def _verify(self, data):
        serializer = VerifyPaymentSerializer(data=data)
        if not serializer.is_valid():
            return None, Response(
                {
                    'success': False,
                    'error': 'RRR and matricNumber are required',
                    'errors': serializer.errors
                },
                status=status.HTTP_400_BAD_REQUEST
            )

        result = PaymentService().verify_payment(
            serializer.validated_data['rrr'],
            serializer.validated_data['matric_number']
        )
        if not result.success:
            if result.error_code == 'GATEWAY_ERROR':
                return None, gateway_error_response(result, 'STATUS_CHECK_FAILED')
            return None, error_response(result)

        return {
            'success': True,
            'isPaid': result.data['is_paid'],
            'status': result.data['status'],
            'message': result.data['message']
        }, None

    @extend_schema(
        summary="Verify a payment",
        parameters=[
            OpenApiParameter(
                name='rrr',
                type=Types.STR,
                location=OpenApiParameter.QUERY,
                required=True,
                description='Payment reference'
            ),
            OpenApiParameter(
                name='matricNumber',
                type=Types.STR,
                location=OpenApiParameter.QUERY,
                required=True,
                description='Student matric number'
            )
        ],
        responses={
            200: {'description': 'Verification result'},
            400: {'description': 'Missing parameters or foreign reference'},
            404: {'description': 'Unknown payment'},
            502: {'description': 'Gateway unavailable'}
        },
        tags=['Payments']
    )
    def get(self, request):
        body, failure = self._verify(request.query_params)
        return failure or Response(body)

    @extend_schema(
        summary="Verify a payment for polling clients",
        description="""
        Performs a single verification. Unpaid results tell the client to
        keep polling; the server never waits for the payment to clear.
        """,
        request=VerifyPaymentSerializer,
        responses={
            200: {'description': 'Verification result'},
            400: {'description': 'Missing parameters or foreign reference'}
        },
        tags=['Payments']
    )
    def post(self, request):
        body, failure = self._verify(request.data)
        if failure:
            return failure

        if not body['isPaid']:
            body['message'] = f"{body['message']}. Client should poll for updates."
        return Response(body)


class SweepPendingPaymentsView(views.APIView):
    """
    Trigger the pending-payment sweep.

    POST /api/v1/payments/update-pending-payments/
    Authorization: Bearer <CRON_SECRET>
    """
    authentication_classes = [CronSecretAuthentication]
    permission_classes = [IsCronCaller]

    @extend_schema(
        summary="Reconcile all pending payments",
        description="""
        Reconciles every pending payment against Remita, one at a time.
        Intended for an external scheduler; Celery Beat runs the same sweep
        every 8 hours.
        """,
        request=None,
        responses={
            200: {'description': 'Sweep summary'},
            401: {'description': 'Missing or invalid cron secret'}
        },
        examples=[
            OpenApiExample(
                'Success Response',
                value={
                    'success': True,
                    'message': 'Updated 3 pending payments',
                    'updatedCount': 3,
                    'total': 5,
                    'failed': 1
                },
                response_only=True
            )
        ],
        tags=['Payments']
    )
    def post(self, request):
        summary = PaymentService().sweep_pending()

        return Response({
            'success': True,
            'message': f"Updated {summary['updated_count']} pending payments",
            'updatedCount': summary['updated_count'],
            'total': summary['total'],
            'failed': summary['failed']
        })
