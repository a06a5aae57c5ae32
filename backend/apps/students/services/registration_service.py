"""
Student registration service.
Creates a student together with next of kin, guarantor and security answers.
"""
from typing import Dict, Any

from django.db import DatabaseError, IntegrityError, transaction

from apps.core.services.base import BaseService, PersistenceError, ServiceResult
from apps.students.models import (
    Student, NextOfKin, Guarantor, SecurityInfo, normalize_matric_number
)


class StudentRegistrationService(BaseService):
    """
    Service for hostel registration.
    Registering an existing matric number returns the existing record.
    """

    DEFAULT_ROOM_DETAILS = {
        'roomType': 'Room of 4',
        'block': 'Block A',
        'numberOfStudents': 2,
    }

    def register(
        self,
        personal_info: Dict[str, Any],
        next_of_kin: Dict[str, Any],
        guarantor: Dict[str, Any],
        security_info: Dict[str, Any]
    ) -> ServiceResult:
        """
        Register a student.

        Args:
            personal_info: Student fields keyed by model field name
            next_of_kin: NextOfKin fields
            guarantor: Guarantor fields
            security_info: SecurityInfo fields

        Returns:
            ServiceResult containing {'student', 'created'} or error
        """
        matric_number = normalize_matric_number(personal_info.get('matric_number'))

        existing = Student.objects.filter(matric_number=matric_number).first()
        if existing:
            self.log_info(
                f"Student {matric_number} already registered",
                matric_number=matric_number
            )
            return ServiceResult.ok({'student': existing, 'created': False})

        try:
            with transaction.atomic():
                student = Student.objects.create(**personal_info)
                NextOfKin.objects.create(student=student, **next_of_kin)
                Guarantor.objects.create(student=student, **guarantor)
                SecurityInfo.objects.create(student=student, **security_info)

        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same matric number
            existing = Student.objects.filter(matric_number=matric_number).first()
            if existing:
                return ServiceResult.ok({'student': existing, 'created': False})
            self.log_error(
                "Integrity error saving registration",
                exception=e,
                matric_number=matric_number
            )
            return ServiceResult.from_exception(PersistenceError("Error saving registration"))
        except DatabaseError as e:
            self.log_error(
                "Error saving registration",
                exception=e,
                matric_number=matric_number
            )
            return ServiceResult.from_exception(PersistenceError("Error saving registration"))

        self.log_info(
            f"Registered student {student.matric_number}",
            matric_number=student.matric_number,
            student_id=student.id
        )

        return ServiceResult.ok({'student': student, 'created': True})
