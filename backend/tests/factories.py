"""
factory_boy factories for Sky Hostel models and canned gateway results.
"""
from faker import Faker
from factory.django import DjangoModelFactory
import factory

from apps.core.services.base import ServiceResult
from apps.students.models import Student, NextOfKin, Guarantor, SecurityInfo
from apps.payments.models import Payment

fake = Faker('en_GB')


class StudentFactory(DjangoModelFactory):
    """Factory for creating test students."""

    class Meta:
        model = Student
        django_get_or_create = ('matric_number',)

    matric_number = factory.Sequence(lambda n: f'CSC/{20000 + n}')
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    email = factory.Faker('email')
    phone_number = factory.LazyAttribute(
        lambda _: f"080{fake.numerify('########')}")

    level = '200'
    faculty = 'Science'
    department = 'Computer Science'
    programme = 'B.Sc Computer Science'
    date_of_birth = factory.Faker('date_of_birth', minimum_age=16, maximum_age=30)
    state_of_origin = 'Lagos'
    marital_status = 'single'
    home_address = factory.Faker('street_address')
    city = factory.Faker('city')

    payment_status = 'pending'


class NextOfKinFactory(DjangoModelFactory):

    class Meta:
        model = NextOfKin

    student = factory.SubFactory(StudentFactory)
    full_name = factory.Faker('name')
    phone_number = factory.LazyAttribute(
        lambda _: f"081{fake.numerify('########')}")
    email = factory.Faker('email')
    relationship = 'Parent'
    home_address = factory.Faker('street_address')
    city = factory.Faker('city')


class GuarantorFactory(DjangoModelFactory):

    class Meta:
        model = Guarantor

    student = factory.SubFactory(StudentFactory)
    full_name = factory.Faker('name')
    phone_number = factory.LazyAttribute(
        lambda _: f"070{fake.numerify('########')}")
    email = factory.Faker('email')
    relationship = 'Uncle'
    home_address = factory.Faker('street_address')
    city = factory.Faker('city')
    signature = True


class SecurityInfoFactory(DjangoModelFactory):

    class Meta:
        model = SecurityInfo

    student = factory.SubFactory(StudentFactory)
    has_misconduct = False
    has_been_convicted = False
    is_well_behaved = True


class PaymentFactory(DjangoModelFactory):
    """Factory for creating test payments."""

    class Meta:
        model = Payment

    student = factory.SubFactory(StudentFactory)
    rrr = factory.Sequence(lambda n: f'{290000000000 + n}')
    transaction_id = factory.LazyAttribute(
        lambda o: f"FEE-{o.student.matric_number}-{fake.numerify('#############')}")
    amount = 219000
    status = Payment.STATUS_PENDING

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to allow explicit created_at bypass of auto_now_add."""
        custom_created_at = kwargs.pop('created_at', None)

        obj = model_class(*args, **kwargs)
        obj.save()

        if custom_created_at is not None:
            model_class.objects.filter(pk=obj.pk).update(
                created_at=custom_created_at)
            obj.refresh_from_db()

        return obj


# ==================== Gateway results ====================

def gateway_status(status, status_code=None):
    """Successful query_status result for a local status."""
    codes = {'completed': '00', 'pending': '021', 'failed': '02'}
    return ServiceResult.ok({
        'status': status,
        'status_code': status_code or codes[status],
        'status_message': None
    })


def gateway_failure(error='Remita API timeout', error_code='TIMEOUT'):
    return ServiceResult.fail(error, error_code=error_code)
