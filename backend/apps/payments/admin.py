# apps/payments/admin.py

from django.contrib import admin, messages
from django.utils.html import format_html
from django.urls import reverse
from .models import Payment
from apps.core.admin_site import custom_admin_site


class PaymentAdmin(admin.ModelAdmin):
    list_display = (
        'rrr',
        'student_link',
        'status_display',
        'amount_display',
        'transaction_id',
        'created_at',
        'updated_at'
    )
    list_filter = ('status', 'created_at')
    search_fields = (
        'rrr',
        'transaction_id',
        'student__matric_number',
        'student__last_name'
    )
    # Status and ownership change only through reconciliation or client reports
    readonly_fields = (
        'rrr', 'student', 'status', 'transaction_id', 'created_at', 'updated_at'
    )
    list_select_related = ('student',)

    def student_link(self, obj):
        url = reverse(
            f'{self.admin_site.name}:students_student_change',
            args=[obj.student.id]
        )
        return format_html('<a href="{}">{}</a>', url, obj.student.matric_number)
    student_link.short_description = 'Student'

    def status_display(self, obj):
        colors = {
            'pending': 'orange',
            'completed': 'green',
            'failed': 'red'
        }
        color = colors.get(obj.status, 'black')
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; border-radius: 3px;">{}</span>',
            color,
            obj.get_status_display()
        )
    status_display.short_description = 'Status'

    def amount_display(self, obj):
        return f"₦{obj.amount:,}"
    amount_display.short_description = 'Amount'

    actions = ['reconcile_selected']

    def reconcile_selected(self, request, queryset):
        from apps.payments.services.payment_service import PaymentService

        service = PaymentService()
        updated = 0
        failed = 0

        for rrr in queryset.values_list('rrr', flat=True):
            result = service.reconcile(rrr)
            if not result.success:
                failed += 1
            elif result.data['changed']:
                updated += 1

        self.message_user(request, f'{updated} payment(s) updated from Remita.')
        if failed:
            self.message_user(
                request,
                f'{failed} payment(s) could not be reconciled.',
                level=messages.WARNING
            )
    reconcile_selected.short_description = 'Reconcile selected with Remita'


custom_admin_site.register(Payment, PaymentAdmin)
# Also register with default admin site for compatibility
admin.site.register(Payment, PaymentAdmin)
