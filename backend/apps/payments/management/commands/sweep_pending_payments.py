# backend/apps/payments/management/commands/sweep_pending_payments.py

from django.core.management.base import BaseCommand
from django.utils import timezone
from apps.payments.models import Payment
from apps.payments.services.payment_service import PaymentService


class Command(BaseCommand):
    help = 'Reconcile pending payments against Remita'

    def add_arguments(self, parser):
        parser.add_argument(
            '--rrr',
            type=str,
            help='Reconcile only a specific payment reference',
        )
        parser.add_argument(
            '--verbose',
            action='store_true',
            help='List each failed reference',
        )

    def handle(self, *args, **options):
        rrr = options.get('rrr')
        verbose = options.get('verbose', False)

        self.stdout.write('\n' + '='*60)
        self.stdout.write(self.style.SUCCESS('PENDING PAYMENT SWEEP'))
        self.stdout.write('='*60)
        self.stdout.write(
            f'Started: {timezone.now().strftime("%Y-%m-%d %H:%M:%S")}')
        self.stdout.write('='*60 + '\n')

        service = PaymentService()

        if rrr:
            self._reconcile_one(service, rrr)
            return

        pending = Payment.objects.filter(status=Payment.STATUS_PENDING).count()
        self.stdout.write(f'Found {pending} pending payments\n')

        if pending == 0:
            self.stdout.write(self.style.WARNING('Nothing to reconcile.'))
            return

        summary = service.sweep_pending()

        if verbose:
            for failure in summary['failures']:
                self.stdout.write(
                    self.style.ERROR(
                        f"  ✗ {failure['rrr']}: {failure['error']} "
                        f"({failure['error_code']})"
                    )
                )

        self.stdout.write('\n' + '='*60)
        self.stdout.write(self.style.SUCCESS('SUMMARY'))
        self.stdout.write('='*60)
        self.stdout.write(f"Total checked: {summary['total']}")
        self.stdout.write(
            self.style.SUCCESS(f"✓ Updated: {summary['updated_count']}"))
        if summary['failed']:
            self.stdout.write(
                self.style.ERROR(f"✗ Failed: {summary['failed']}"))
        self.stdout.write('='*60 + '\n')

    def _reconcile_one(self, service, rrr):
        result = service.reconcile(rrr)

        if result.success:
            change = 'updated' if result.data['changed'] else 'unchanged'
            self.stdout.write(
                self.style.SUCCESS(
                    f"✓ RRR {rrr}: {result.data['status']} ({change})")
            )
        else:
            self.stdout.write(
                self.style.ERROR(
                    f'✗ RRR {rrr}: {result.error} ({result.error_code})')
            )
