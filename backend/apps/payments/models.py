# apps/payments/models.py

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _
from apps.students.models import Student


class Payment(models.Model):
    """
    One payment attempt against a gateway-issued reference (RRR).
    A student may hold several attempts; nothing enforces a single active one.
    """
    STATUS_PENDING = 'pending'
    STATUS_COMPLETED = 'completed'
    STATUS_FAILED = 'failed'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_FAILED, 'Failed'),
    ]

    student = models.ForeignKey(
        Student,
        on_delete=models.PROTECT,
        related_name='payments'
    )
    rrr = models.CharField(
        max_length=50,
        unique=True,
        help_text="Remita Retrieval Reference issued by the gateway"
    )
    transaction_id = models.CharField(
        max_length=100,
        db_index=True,
        help_text="Locally generated order id sent to the gateway"
    )
    amount = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Amount in the unit the gateway was invoiced with"
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payments'
        verbose_name = _('Payment')
        verbose_name_plural = _('Payments')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='payments_status_idx'),
            models.Index(fields=['student', 'status'], name='payments_student_status_idx'),
        ]

    def __str__(self):
        return f"RRR {self.rrr} - {self.status}"

    @property
    def is_completed(self):
        return self.status == self.STATUS_COMPLETED
