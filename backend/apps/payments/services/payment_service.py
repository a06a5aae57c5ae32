"""
Payment service for hostel fee payments.
Handles reference issuance, status reconciliation against Remita, the bulk
sweep over pending payments, and client-reported payment records.
"""
from typing import Optional, Dict, Any, Tuple

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from apps.core.services.base import (
    BaseService, NotFoundError, PersistenceError, ServiceException, ServiceResult,
    ValidationError
)
from apps.integrations.services.remita_service import RemitaGatewayClient
from apps.payments.models import Payment
from apps.students.models import Student, normalize_matric_number


# Largest value the payments.amount column can hold
MAX_PAYMENT_AMOUNT = 2147483647


# Coarse, user-safe categories for gateway failures
GATEWAY_ERROR_MESSAGES = {
    'AUTH_ERROR': (
        "The payment system is currently unavailable. "
        "Please try again later or contact support."
    ),
    'TIMEOUT': (
        "The payment service is taking too long to respond. "
        "Please try again later."
    ),
    'NETWORK_ERROR': (
        "There seems to be a network issue. "
        "Please check your connection and try again."
    ),
    'GENERATION_FAILED': "Unable to generate your payment reference.",
    'STATUS_CHECK_FAILED': "Unable to check your payment status right now.",
}


def classify_gateway_error(gateway_code: Optional[str], raw_error: Optional[str] = None,
                           default: str = 'GENERATION_FAILED') -> Tuple[str, str]:
    """
    Map a raw gateway failure onto a user-safe (error_code, message) pair.
    The raw error is for logs only.
    """
    raw = (raw_error or '').lower()
    code = gateway_code or ''

    if code in ('HTTP_401', 'HTTP_403') or 'unauthorized' in raw:
        category = 'AUTH_ERROR'
    elif code == 'TIMEOUT' or 'timeout' in raw or 'timed out' in raw:
        category = 'TIMEOUT'
    elif code == 'NETWORK_ERROR' or 'network' in raw:
        category = 'NETWORK_ERROR'
    else:
        category = default

    return category, GATEWAY_ERROR_MESSAGES[category]


def calculate_amount(option: str, custom_amount: Optional[int] = None) -> int:
    """
    Amount to invoice for a payment option.

    FULL is the configured hostel fee, HALF is half of it and CUSTOM is the
    caller-supplied amount. Unknown options fall back to FULL.
    """
    full_amount = int(getattr(settings, 'HOSTEL_FEE_AMOUNT', 219000))
    option = (option or '').upper()

    if option == 'HALF':
        return full_amount // 2
    if option == 'CUSTOM':
        return int(custom_amount or 0)
    return full_amount


class PaymentService(BaseService):
    """
    Service for the payment-reference lifecycle.

    The gateway client is injected so callers (views, tasks, tests) control
    its construction.
    """

    ORDER_ID_PREFIX = "FEE"
    DEFAULT_PAYER_PHONE = "08000000000"

    def __init__(self, gateway: Optional[RemitaGatewayClient] = None):
        super().__init__()
        self.gateway = gateway or RemitaGatewayClient()

    # ==================== Issuance ====================

    def issue_reference(
        self,
        matric_number: str,
        first_name: str,
        last_name: str,
        email: str,
        amount: int,
        phone_number: Optional[str] = None
    ) -> ServiceResult:
        """
        Issue a new payment reference for a registered student.

        Args:
            matric_number: Student matric number
            first_name: Payer first name
            last_name: Payer last name
            email: Payer email
            amount: Positive integer amount to invoice
            phone_number: Optional payer phone, defaults to the student's

        Returns:
            ServiceResult containing {'rrr', 'transaction_id', 'payment'} or error
        """
        try:
            self._validate_amount(amount)
            student = self._get_student(matric_number)

            order_id = self.generate_order_id(student.matric_number)
            payer_phone = phone_number or student.phone_number or self.DEFAULT_PAYER_PHONE

            gateway_result = self.gateway.issue_reference(
                amount=amount,
                payer_name=f"{first_name} {last_name}".strip(),
                payer_email=email,
                payer_phone=payer_phone,
                description=f"School Fee Payment for {student.matric_number}",
                order_id=order_id
            )

            if not gateway_result.success:
                self.log_warning(
                    f"Gateway refused reference for {student.matric_number}",
                    matric_number=student.matric_number,
                    order_id=order_id,
                    gateway_error=gateway_result.error,
                    gateway_code=gateway_result.error_code
                )
                return ServiceResult.fail(
                    gateway_result.error or "Failed to generate RRR",
                    error_code="GATEWAY_ERROR",
                    details={'gateway_code': gateway_result.error_code}
                )

            rrr = gateway_result.data['rrr']

            with transaction.atomic():
                payment = Payment.objects.create(
                    student=student,
                    rrr=rrr,
                    transaction_id=order_id,
                    amount=amount,
                    status=Payment.STATUS_PENDING
                )

            self.log_info(
                f"Created pending payment {rrr} for {student.matric_number}",
                matric_number=student.matric_number,
                rrr=rrr,
                transaction_id=order_id,
                amount=amount
            )

            return ServiceResult.ok({
                'rrr': rrr,
                'transaction_id': order_id,
                'payment': payment
            })

        except ServiceException as e:
            return ServiceResult.from_exception(e)
        except DatabaseError as e:
            self.log_error(
                "Error saving issued payment reference",
                exception=e,
                matric_number=matric_number
            )
            return ServiceResult.from_exception(PersistenceError("Failed to save payment record"))

    def generate_order_id(self, matric_number: str) -> str:
        """FEE-<matric>-<epoch milliseconds>."""
        millis = int(timezone.now().timestamp() * 1000)
        return f"{self.ORDER_ID_PREFIX}-{matric_number}-{millis}"

    # ==================== Reconciliation ====================

    def reconcile(self, rrr: str) -> ServiceResult:
        """
        Pull the processor status for a reference and apply it locally.

        Safe to call repeatedly: an unchanged status performs no write to the
        payment row.

        Returns:
            ServiceResult containing {'status', 'previous_status', 'changed',
            'payment'} or error
        """
        gateway_result = self.gateway.query_status(rrr)
        if not gateway_result.success:
            return ServiceResult.fail(
                gateway_result.error or "Failed to check payment status",
                error_code="GATEWAY_ERROR",
                details={'gateway_code': gateway_result.error_code}
            )

        status = gateway_result.data['status']

        try:
            try:
                payment = Payment.objects.select_related('student').get(rrr=rrr)
            except Payment.DoesNotExist:
                raise NotFoundError(
                    "Payment not found in database",
                    code="NOT_FOUND",
                    details={'rrr': rrr}
                )

            previous_status = payment.status
            changed = self._apply_status(payment, status)

            return ServiceResult.ok({
                'status': status,
                'previous_status': previous_status,
                'changed': changed,
                'payment': payment
            })

        except ServiceException as e:
            return ServiceResult.from_exception(e)
        except DatabaseError as e:
            self.log_error(
                f"Error applying status for RRR {rrr}",
                exception=e,
                rrr=rrr,
                status=status
            )
            return ServiceResult.from_exception(PersistenceError("Failed to update payment status"))

    def sweep_pending(self) -> Dict[str, Any]:
        """
        Reconcile every pending payment, one at a time.
        A failure on one reference is logged and the sweep carries on.

        Returns:
            Dict with 'total', 'updated_count', 'failed' and 'failures'
        """
        references = list(
            Payment.objects
            .filter(status=Payment.STATUS_PENDING)
            .order_by('created_at')
            .values_list('rrr', flat=True)
        )

        updated_count = 0
        failures = []

        for rrr in references:
            try:
                result = self.reconcile(rrr)
            except Exception as e:
                self.log_error(
                    f"Unexpected error reconciling RRR {rrr}",
                    exception=e,
                    rrr=rrr
                )
                failures.append({'rrr': rrr, 'error': str(e), 'error_code': 'UNEXPECTED'})
                continue

            if not result.success:
                self.log_warning(
                    f"Could not reconcile RRR {rrr}: {result.error}",
                    rrr=rrr,
                    error_code=result.error_code
                )
                failures.append({
                    'rrr': rrr,
                    'error': result.error,
                    'error_code': result.error_code
                })
                continue

            if (result.data['previous_status'] == Payment.STATUS_PENDING
                    and result.data['status'] != Payment.STATUS_PENDING):
                updated_count += 1

        summary = {
            'total': len(references),
            'updated_count': updated_count,
            'failed': len(failures),
            'failures': failures
        }

        self.log_info(
            f"Pending payment sweep finished - Total: {summary['total']}, "
            f"Updated: {updated_count}, Failed: {summary['failed']}",
            **{k: v for k, v in summary.items() if k != 'failures'}
        )

        return summary

    # ==================== Client-reported payments ====================

    def record_payment(
        self,
        matric_number: str,
        rrr: str,
        transaction_id: str,
        amount: int,
        status: str = Payment.STATUS_COMPLETED
    ) -> ServiceResult:
        """
        Upsert a payment reported by the browser after the payment widget
        closes. Creates the row when the reference is unknown.

        Returns:
            ServiceResult containing {'payment', 'created'} or error
        """
        try:
            if status not in dict(Payment.STATUS_CHOICES):
                raise ValidationError(
                    f"Invalid payment status: {status}",
                    code="VALIDATION_ERROR"
                )
            self._validate_amount(amount)
            student = self._get_student(matric_number)

            with transaction.atomic():
                payment = Payment.objects.filter(rrr=rrr).first()
                created = payment is None

                if payment is not None:
                    if payment.student_id != student.id:
                        raise ValidationError(
                            "Payment reference belongs to another student",
                            code="REFERENCE_MISMATCH"
                        )
                    if payment.status != status:
                        payment.status = status
                        payment.save(update_fields=['status', 'updated_at'])
                else:
                    payment = Payment.objects.create(
                        student=student,
                        rrr=rrr,
                        transaction_id=transaction_id,
                        amount=amount,
                        status=status
                    )

                if status == Payment.STATUS_COMPLETED:
                    self._mark_student_paid(student)

            self.log_info(
                f"Recorded {status} payment {rrr} for {student.matric_number}",
                matric_number=student.matric_number,
                rrr=rrr,
                created=created
            )

            return ServiceResult.ok({'payment': payment, 'created': created})

        except ServiceException as e:
            return ServiceResult.from_exception(e)
        except DatabaseError as e:
            self.log_error(
                "Error recording payment",
                exception=e,
                matric_number=matric_number,
                rrr=rrr
            )
            return ServiceResult.from_exception(PersistenceError("Failed to update payment status"))

    def get_student_payment_status(self, matric_number: str) -> ServiceResult:
        """
        Stored payment status for a student, without calling the gateway.

        Returns:
            ServiceResult containing {'paid', 'student', 'payment'} where
            payment is the most recent attempt or None
        """
        try:
            student = self._get_student(matric_number)
            latest = student.payments.order_by('-created_at').first()

            return ServiceResult.ok({
                'paid': student.is_paid,
                'student': student,
                'payment': latest
            })
        except ServiceException as e:
            return ServiceResult.from_exception(e)

    def verify_payment(self, rrr: str, matric_number: str) -> ServiceResult:
        """
        Reconcile a reference on behalf of a specific student.

        Returns:
            ServiceResult containing {'is_paid', 'status', 'message'} or error
        """
        matric_number = normalize_matric_number(matric_number)

        payment = Payment.objects.select_related('student').filter(rrr=rrr).first()
        if payment is not None and payment.student.matric_number != matric_number:
            return ServiceResult.fail(
                "Payment reference does not belong to this student",
                error_code="REFERENCE_MISMATCH"
            )

        result = self.reconcile(rrr)

        if not result.success:
            if result.error_code == 'GATEWAY_ERROR' and self._is_test_fallback(rrr, matric_number):
                self.log_warning(
                    f"Gateway unreachable, using test fallback for RRR {rrr}",
                    rrr=rrr,
                    matric_number=matric_number
                )
                return ServiceResult.ok({
                    'is_paid': True,
                    'status': Payment.STATUS_COMPLETED,
                    'message': "Payment verified using test data"
                })
            return result

        status = result.data['status']
        messages = {
            Payment.STATUS_COMPLETED: "Payment verified and records updated",
            Payment.STATUS_PENDING: "Payment is still pending",
            Payment.STATUS_FAILED: "Payment verification failed",
        }

        return ServiceResult.ok({
            'is_paid': status == Payment.STATUS_COMPLETED,
            'status': status,
            'message': messages[status]
        })

    # ==================== Helpers ====================

    def _get_student(self, matric_number: str) -> Student:
        matric_number = normalize_matric_number(matric_number)
        if not matric_number:
            raise ValidationError("Matric number is required", code="VALIDATION_ERROR")

        try:
            return Student.objects.get(matric_number=matric_number)
        except Student.DoesNotExist:
            raise NotFoundError(
                f"Student with matric number {matric_number} not found",
                code="NOT_FOUND",
                details={'matric_number': matric_number}
            )

    @staticmethod
    def _validate_amount(amount) -> None:
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValidationError(
                "Amount must be a positive whole number",
                code="VALIDATION_ERROR"
            )
        if amount > MAX_PAYMENT_AMOUNT:
            raise ValidationError(
                f"Amount must not exceed {MAX_PAYMENT_AMOUNT}",
                code="VALIDATION_ERROR",
                details={'amount': amount}
            )

    def _apply_status(self, payment: Payment, status: str) -> bool:
        """Write a changed status and mark the owner paid on completion."""
        changed = payment.status != status

        with transaction.atomic():
            if changed:
                payment.status = status
                payment.save(update_fields=['status', 'updated_at'])
                self.log_info(
                    f"Payment {payment.rrr} moved to {status}",
                    rrr=payment.rrr,
                    status=status
                )

            if status == Payment.STATUS_COMPLETED:
                self._mark_student_paid(payment.student)

        return changed

    @staticmethod
    def _mark_student_paid(student: Student) -> None:
        if student.payment_status != 'paid':
            student.payment_status = 'paid'
            student.save(update_fields=['payment_status', 'updated_at'])

    @staticmethod
    def _is_test_fallback(rrr: str, matric_number: str) -> bool:
        if not getattr(settings, 'REMITA_TEST_FALLBACK_ENABLED', False):
            return False
        return (
            rrr == settings.REMITA_TEST_FALLBACK_RRR
            and matric_number == normalize_matric_number(settings.REMITA_TEST_FALLBACK_MATRIC)
        )
