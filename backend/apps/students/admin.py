# apps/students/admin.py

from django.contrib import admin
from .models import Student, NextOfKin, Guarantor, SecurityInfo
from apps.core.admin_site import custom_admin_site


class NextOfKinInline(admin.StackedInline):
    model = NextOfKin
    extra = 0


class GuarantorInline(admin.StackedInline):
    model = Guarantor
    extra = 0


class SecurityInfoInline(admin.StackedInline):
    model = SecurityInfo
    extra = 0


class StudentAdmin(admin.ModelAdmin):
    list_display = (
        'matric_number',
        'first_name',
        'last_name',
        'level',
        'department',
        'payment_status',
        'created_at'
    )
    list_filter = ('payment_status', 'level', 'faculty')
    search_fields = ('matric_number', 'first_name', 'last_name', 'email')
    readonly_fields = ('payment_status', 'created_at', 'updated_at')
    inlines = [NextOfKinInline, GuarantorInline, SecurityInfoInline]

    fieldsets = (
        ('Student', {
            'fields': (
                'matric_number',
                'first_name',
                'last_name',
                'email',
                'phone_number',
                'passport_url'
            )
        }),
        ('Academic', {
            'fields': ('level', 'faculty', 'department', 'programme')
        }),
        ('Personal', {
            'fields': (
                'date_of_birth',
                'state_of_origin',
                'marital_status',
                'religion',
                'medical_requirements',
                'home_address',
                'city'
            ),
            'classes': ('collapse',)
        }),
        ('Payment', {
            'fields': ('payment_status', 'created_at', 'updated_at')
        }),
    )


custom_admin_site.register(Student, StudentAdmin)
# Also register with default admin site for compatibility
admin.site.register(Student, StudentAdmin)
