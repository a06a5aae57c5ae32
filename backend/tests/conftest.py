"""
Pytest configuration and fixtures for Sky Hostel tests.
Provides reusable fixtures for students, payments and the Remita gateway.
"""
import os
import sys
from unittest.mock import Mock

import django
import pytest

# Add the backend directory to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Configure Django settings before any Django imports
os.environ.setdefault('DJANGO_SETTINGS_MODULE',
                      'sky_hostel.settings.test')
django.setup()

# Now safe to import Django and third-party modules
from rest_framework.test import APIClient  # noqa: E402

from apps.core.services.base import ServiceResult  # noqa: E402
from apps.integrations.services.remita_service import RemitaGatewayClient  # noqa: E402
from apps.payments.services.payment_service import PaymentService  # noqa: E402
from apps.students.services.registration_service import StudentRegistrationService  # noqa: E402
from tests.factories import StudentFactory, PaymentFactory  # noqa: E402


# ==================== Pytest Fixtures ====================

@pytest.fixture
def api_client():
    """Unauthenticated API client, as used by the browser frontend."""
    return APIClient()


@pytest.fixture
def student(db):
    """Registered student with an unpaid hostel fee."""
    return StudentFactory(
        matric_number='ABC/12345',
        first_name='Ada',
        last_name='Obi',
        email='ada.obi@example.com',
        phone_number='08012345678'
    )


@pytest.fixture
def other_student(db):
    return StudentFactory(matric_number='XYZ/99999')


@pytest.fixture
def pending_payment(db, student):
    """Pending full-fee payment for the default student."""
    return PaymentFactory(
        student=student,
        rrr='290019681818',
        transaction_id='FEE-ABC/12345-1700000000000',
        amount=219000
    )


@pytest.fixture
def remita_client():
    """
    Remita client with a mocked HTTP session.
    Configure `remita_client.session.request` per test.
    """
    session = Mock()
    session.headers = {}
    return RemitaGatewayClient(
        base_url='https://remita.test',
        merchant_id='2547916',
        service_type_id='4430731',
        api_key='test-api-key',
        timeout=5,
        use_mock=False,
        session=session
    )


@pytest.fixture
def fake_gateway():
    """
    Stand-in gateway. Defaults to issuing 290019681818 and reporting it pending.
    """
    gateway = Mock(spec=RemitaGatewayClient)
    gateway.issue_reference.return_value = ServiceResult.ok({
        'rrr': '290019681818',
        'status_message': 'Payment Reference generated'
    })
    gateway.query_status.return_value = ServiceResult.ok({
        'status': 'pending',
        'status_code': '021',
        'status_message': 'Transaction pending'
    })
    return gateway


@pytest.fixture
def payment_service(fake_gateway):
    """PaymentService wired to the fake gateway."""
    return PaymentService(gateway=fake_gateway)


@pytest.fixture
def registration_service():
    return StudentRegistrationService()


@pytest.fixture
def registration_payload():
    """Complete registration form body as posted by the frontend."""
    return {
        'personalInfo': {
            'firstName': 'Ada',
            'lastName': 'Obi',
            'contactNumber': '08012345678',
            'email': 'ada.obi@example.com',
            'matricNumber': 'abc/12345',
            'level': '200',
            'faculty': 'Science',
            'department': 'Computer Science',
            'programme': 'B.Sc Computer Science',
            'dateOfBirth': '2003-04-12',
            'stateOfOrigin': 'Lagos',
            'maritalStatus': 'Single',
            'religion': 'Christianity',
            'medicalRequirements': '',
            'homeAddress': '12 Marina Road',
            'city': 'Lagos',
            'passportPhoto': {
                'url': 'https://images.example.com/passport.jpg',
                'fileId': 'file_123'
            }
        },
        'nextOfKin': {
            'firstName': 'Ngozi',
            'lastName': 'Obi',
            'contactNumber': '08087654321',
            'email': 'ngozi.obi@example.com',
            'relationship': 'Mother',
            'homeAddress': '12 Marina Road',
            'city': 'Lagos'
        },
        'securityInfo': {
            'hasMisconduct': False,
            'hasBeenConvicted': False,
            'isWellBehaved': True
        },
        'agreement': {
            'acceptedTerms': True,
            'firstName': 'Ada',
            'lastName': 'Obi'
        },
        'guarantor': {
            'firstName': 'Emeka',
            'lastName': 'Okafor',
            'contactNumber': '07011112222',
            'email': 'emeka.okafor@example.com',
            'relationship': 'Uncle',
            'homeAddress': '4 Allen Avenue',
            'city': 'Ikeja',
            'signatureDeclaration': True,
            'date': '2026-09-01'
        },
        'roomSelection': {
            'roomType': 'Room of 2',
            'block': 'Block B'
        }
    }


@pytest.fixture
def mock_issue_reference(mocker):
    """Patch reference issuance on every RemitaGatewayClient built during the test."""
    return mocker.patch(
        'apps.integrations.services.remita_service.RemitaGatewayClient.issue_reference'
    )


@pytest.fixture
def mock_query_status(mocker):
    """Patch status queries on every RemitaGatewayClient built during the test."""
    return mocker.patch(
        'apps.integrations.services.remita_service.RemitaGatewayClient.query_status'
    )
