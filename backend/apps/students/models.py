# apps/students/models.py

from django.db import models
from django.core.validators import RegexValidator
from django.utils.translation import gettext_lazy as _


def normalize_matric_number(value):
    """Canonical form used for storage and lookups."""
    return (value or '').strip().upper()


class Student(models.Model):
    """
    Student registered for hostel accommodation.
    Identified by matriculation number.
    """
    PAYMENT_STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('paid', 'Paid'),
    ]

    MARITAL_STATUS_CHOICES = [
        ('single', 'Single'),
        ('married', 'Married'),
        ('divorced', 'Divorced'),
        ('widowed', 'Widowed'),
    ]

    phone_regex = RegexValidator(
        regex=r'^\+?\d{10,15}$',
        message="Phone number must contain 10 to 15 digits, optionally prefixed with '+'."
    )

    matric_number = models.CharField(
        max_length=30,
        unique=True,
        help_text="Matriculation number, e.g. ABC/12345"
    )
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(_('email address'))
    phone_number = models.CharField(
        validators=[phone_regex],
        max_length=17,
        blank=True
    )

    # Academic information
    level = models.CharField(max_length=10)
    faculty = models.CharField(max_length=150)
    department = models.CharField(max_length=150)
    programme = models.CharField(max_length=150)

    # Personal information
    date_of_birth = models.DateField(null=True, blank=True)
    state_of_origin = models.CharField(max_length=50, blank=True)
    marital_status = models.CharField(
        max_length=20,
        choices=MARITAL_STATUS_CHOICES,
        blank=True
    )
    religion = models.CharField(max_length=50, blank=True)
    medical_requirements = models.TextField(blank=True)
    home_address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    passport_url = models.URLField(
        max_length=500,
        blank=True,
        help_text="URL of the uploaded passport photograph"
    )

    payment_status = models.CharField(
        max_length=10,
        choices=PAYMENT_STATUS_CHOICES,
        default='pending',
        help_text="Set to paid once a completed payment is reconciled"
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'students'
        verbose_name = _('Student')
        verbose_name_plural = _('Students')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['payment_status'], name='students_payment_status_idx'),
        ]

    def __str__(self):
        return f"{self.matric_number} - {self.full_name}"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_paid(self):
        return self.payment_status == 'paid'

    def save(self, *args, **kwargs):
        self.matric_number = normalize_matric_number(self.matric_number)
        super().save(*args, **kwargs)


class NextOfKin(models.Model):
    """Next of kin captured during registration."""
    student = models.OneToOneField(
        Student,
        on_delete=models.CASCADE,
        related_name='next_of_kin'
    )
    full_name = models.CharField(max_length=200)
    phone_number = models.CharField(max_length=17)
    email = models.EmailField(blank=True)
    relationship = models.CharField(max_length=50)
    home_address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)

    class Meta:
        db_table = 'next_of_kin'
        verbose_name = _('Next of Kin')
        verbose_name_plural = _('Next of Kin')

    def __str__(self):
        return f"{self.full_name} ({self.relationship})"


class Guarantor(models.Model):
    """Guarantor who signs the hostel declaration for a student."""
    student = models.OneToOneField(
        Student,
        on_delete=models.CASCADE,
        related_name='guarantor'
    )
    full_name = models.CharField(max_length=200)
    phone_number = models.CharField(max_length=17)
    email = models.EmailField(blank=True)
    relationship = models.CharField(max_length=50)
    home_address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    signature = models.BooleanField(
        default=False,
        help_text="Guarantor accepted the signature declaration"
    )

    class Meta:
        db_table = 'guarantors'
        verbose_name = _('Guarantor')
        verbose_name_plural = _('Guarantors')

    def __str__(self):
        return f"{self.full_name} for {self.student.matric_number}"


class SecurityInfo(models.Model):
    """Conduct declarations answered during registration."""
    student = models.OneToOneField(
        Student,
        on_delete=models.CASCADE,
        related_name='security_info'
    )
    has_misconduct = models.BooleanField(default=False)
    has_been_convicted = models.BooleanField(default=False)
    is_well_behaved = models.BooleanField(default=True)

    class Meta:
        db_table = 'security_info'
        verbose_name = _('Security Information')
        verbose_name_plural = _('Security Information')

    def __str__(self):
        return f"Security info for {self.student.matric_number}"
