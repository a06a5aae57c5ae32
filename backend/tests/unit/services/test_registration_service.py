"""
Unit tests for StudentRegistrationService.
"""
import pytest
from unittest.mock import patch

from django.db import DatabaseError

from apps.students.models import Student, NextOfKin, Guarantor, SecurityInfo
from tests.factories import StudentFactory


def registration_data(matric_number='ABC/12345'):
    return {
        'personal_info': {
            'matric_number': matric_number,
            'first_name': 'Ada',
            'last_name': 'Obi',
            'email': 'ada.obi@example.com',
            'phone_number': '08012345678',
            'level': '200',
            'faculty': 'Science',
            'department': 'Computer Science',
            'programme': 'B.Sc Computer Science',
            'marital_status': 'single',
        },
        'next_of_kin': {
            'full_name': 'Ngozi Obi',
            'phone_number': '08087654321',
            'email': 'ngozi.obi@example.com',
            'relationship': 'Mother',
            'home_address': '12 Marina Road',
            'city': 'Lagos',
        },
        'guarantor': {
            'full_name': 'Emeka Okafor',
            'phone_number': '07011112222',
            'email': 'emeka.okafor@example.com',
            'relationship': 'Uncle',
            'home_address': '4 Allen Avenue',
            'city': 'Ikeja',
            'signature': True,
        },
        'security_info': {
            'has_misconduct': False,
            'has_been_convicted': False,
            'is_well_behaved': True,
        },
    }


@pytest.mark.django_db
class TestStudentRegistration:
    """Test hostel registration."""

    def test_register_creates_student_and_satellites(self, registration_service):
        # Act
        result = registration_service.register(**registration_data())

        # Assert
        assert result.success is True
        assert result.data['created'] is True

        student = result.data['student']
        assert student.matric_number == 'ABC/12345'
        assert student.payment_status == 'pending'
        assert student.next_of_kin.full_name == 'Ngozi Obi'
        assert student.guarantor.signature is True
        assert student.security_info.is_well_behaved is True

    def test_register_normalizes_matric_number(self, registration_service):
        result = registration_service.register(**registration_data('  abc/12345 '))

        assert result.data['student'].matric_number == 'ABC/12345'

    def test_existing_matric_number_returns_existing_student(self, registration_service):
        existing = StudentFactory(matric_number='ABC/12345', first_name='Original')

        result = registration_service.register(**registration_data('abc/12345'))

        assert result.success is True
        assert result.data['created'] is False
        assert result.data['student'] == existing
        assert Student.objects.count() == 1
        existing.refresh_from_db()
        assert existing.first_name == 'Original'

    def test_failure_rolls_back_everything(self, registration_service):
        with patch.object(SecurityInfo.objects, 'create', side_effect=DatabaseError('boom')):
            result = registration_service.register(**registration_data())

        assert result.success is False
        assert result.error_code == 'PERSISTENCE_ERROR'
        assert Student.objects.count() == 0
        assert NextOfKin.objects.count() == 0
        assert Guarantor.objects.count() == 0
