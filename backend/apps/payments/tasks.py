"""
Celery tasks for payment reconciliation.
"""
from celery import shared_task
from django.utils import timezone
import logging

logger = logging.getLogger(__name__)


@shared_task(name='sweep_pending_payments')
def sweep_pending_payments():
    """
    Reconcile every pending payment against Remita.
    Runs every 8 hours via Celery Beat.

    Returns:
        Dict with sweep results
    """
    from apps.payments.services.payment_service import PaymentService

    try:
        logger.info("Starting pending payment sweep")

        summary = PaymentService().sweep_pending()

        logger.info(
            f"Pending payment sweep complete: {summary['updated_count']} of "
            f"{summary['total']} updated, {summary['failed']} failed"
        )

        return {
            'total': summary['total'],
            'updated_count': summary['updated_count'],
            'failed': summary['failed'],
            'timestamp': timezone.now().isoformat()
        }

    except Exception as e:
        logger.error(f"Error sweeping pending payments: {str(e)}")
        raise
