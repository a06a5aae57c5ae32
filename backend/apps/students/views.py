"""
API views for student registration.
"""
from rest_framework import views, status
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
import logging

from drf_spectacular.utils import extend_schema, OpenApiExample

from .serializers import StudentRegistrationSerializer
from .services.registration_service import StudentRegistrationService

logger = logging.getLogger(__name__)


class StudentRegistrationView(views.APIView):
    """
    Register a student for hostel accommodation.

    POST /api/v1/students/register/
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Register a student",
        description="""
        Submit the multi-step hostel registration form.

        Creates the student record with next of kin, guarantor and security
        declarations in one transaction. Submitting an already registered
        matric number returns the existing student without changes.

        Room allocation is not performed here; the requested room details
        are echoed back.
        """,
        request=StudentRegistrationSerializer,
        responses={
            201: {'description': 'Student registered'},
            200: {'description': 'Student already registered'},
            400: {'description': 'Invalid registration data'}
        },
        examples=[
            OpenApiExample(
                'Success Response',
                value={
                    'success': True,
                    'message': 'Registration successful',
                    'data': {
                        'studentId': 1,
                        'fullName': 'Ada Obi',
                        'roomDetails': {
                            'roomType': 'Room of 4',
                            'block': 'Block A',
                            'numberOfStudents': 2
                        }
                    }
                },
                response_only=True
            )
        ],
        tags=['Students']
    )
    def post(self, request):
        serializer = StudentRegistrationSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(
                {
                    'success': False,
                    'message': 'Invalid registration data',
                    'errors': serializer.errors
                },
                status=status.HTTP_400_BAD_REQUEST
            )

        result = StudentRegistrationService().register(**serializer.to_service_kwargs())

        if not result.success:
            return Response(
                {'success': False, 'message': result.error},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        student = result.data['student']
        created = result.data['created']

        room_details = dict(StudentRegistrationService.DEFAULT_ROOM_DETAILS)
        room_details.update({
            key: value
            for key, value in serializer.validated_data.get('roomSelection', {}).items()
            if value
        })

        return Response(
            {
                'success': True,
                'message': 'Registration successful' if created else 'Student already registered',
                'data': {
                    'studentId': student.id,
                    'fullName': student.full_name,
                    'roomDetails': room_details
                }
            },
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )
