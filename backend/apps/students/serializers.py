"""
Serializers for student registration.
Field names follow the camelCase payload sent by the registration form.
"""
from rest_framework import serializers

from .models import Student, normalize_matric_number


class PersonalInfoSerializer(serializers.Serializer):
    firstName = serializers.CharField(source='first_name', min_length=2, max_length=100)
    lastName = serializers.CharField(source='last_name', min_length=2, max_length=100)
    contactNumber = serializers.CharField(source='phone_number', min_length=10, max_length=17)
    email = serializers.EmailField()
    matricNumber = serializers.CharField(source='matric_number', min_length=5, max_length=30)
    level = serializers.CharField(max_length=10)
    faculty = serializers.CharField(min_length=2, max_length=150)
    department = serializers.CharField(min_length=2, max_length=150)
    programme = serializers.CharField(min_length=2, max_length=150)
    dateOfBirth = serializers.DateField(source='date_of_birth')
    stateOfOrigin = serializers.CharField(source='state_of_origin', min_length=2, max_length=50)
    maritalStatus = serializers.CharField(source='marital_status', max_length=20)
    religion = serializers.CharField(max_length=50, required=False, allow_blank=True)
    medicalRequirements = serializers.CharField(
        source='medical_requirements', required=False, allow_blank=True)
    homeAddress = serializers.CharField(source='home_address', min_length=5, max_length=255)
    city = serializers.CharField(min_length=2, max_length=100)
    passportUrl = serializers.URLField(
        source='passport_url', required=False, allow_blank=True, max_length=500)
    passportPhoto = serializers.DictField(required=False, write_only=True)

    def validate_matricNumber(self, value):
        return normalize_matric_number(value)

    def validate_maritalStatus(self, value):
        value = value.strip().lower()
        if value not in dict(Student.MARITAL_STATUS_CHOICES):
            raise serializers.ValidationError("Please select your marital status")
        return value

    def validate(self, attrs):
        # An uploaded photo arrives as {'url': ..., 'fileId': ...}
        photo = attrs.pop('passportPhoto', None)
        if photo and photo.get('url') and not attrs.get('passport_url'):
            attrs['passport_url'] = photo['url']
        return attrs


class ContactPersonSerializer(serializers.Serializer):
    firstName = serializers.CharField(min_length=2, max_length=100)
    lastName = serializers.CharField(min_length=2, max_length=100)
    contactNumber = serializers.CharField(min_length=10, max_length=17)
    email = serializers.EmailField()
    relationship = serializers.CharField(min_length=2, max_length=50)
    homeAddress = serializers.CharField(min_length=5, max_length=255)
    city = serializers.CharField(min_length=2, max_length=100)

    def to_model_fields(self, data):
        return {
            'full_name': f"{data['firstName']} {data['lastName']}",
            'phone_number': data['contactNumber'],
            'email': data['email'],
            'relationship': data['relationship'],
            'home_address': data['homeAddress'],
            'city': data['city'],
        }


class GuarantorSerializer(ContactPersonSerializer):
    signatureDeclaration = serializers.BooleanField()
    date = serializers.DateField()

    def validate_signatureDeclaration(self, value):
        if value is not True:
            raise serializers.ValidationError(
                "You must declare that the information is accurate")
        return value

    def to_model_fields(self, data):
        fields = super().to_model_fields(data)
        fields['signature'] = data['signatureDeclaration']
        return fields


class SecurityInfoSerializer(serializers.Serializer):
    hasMisconduct = serializers.BooleanField(source='has_misconduct')
    hasBeenConvicted = serializers.BooleanField(source='has_been_convicted')
    isWellBehaved = serializers.BooleanField(source='is_well_behaved')


class AgreementSerializer(serializers.Serializer):
    acceptedTerms = serializers.BooleanField()
    firstName = serializers.CharField(min_length=2)
    lastName = serializers.CharField(min_length=2)

    def validate_acceptedTerms(self, value):
        if value is not True:
            raise serializers.ValidationError(
                "You must accept the terms and conditions")
        return value


class RoomSelectionSerializer(serializers.Serializer):
    roomType = serializers.CharField(required=False, allow_blank=True)
    block = serializers.CharField(required=False, allow_blank=True)
    numberOfStudents = serializers.IntegerField(required=False, min_value=1)


class StudentRegistrationSerializer(serializers.Serializer):
    """
    Validates the complete multi-step registration payload.
    """
    personalInfo = PersonalInfoSerializer()
    nextOfKin = ContactPersonSerializer()
    securityInfo = SecurityInfoSerializer()
    agreement = AgreementSerializer()
    guarantor = GuarantorSerializer()
    roomSelection = RoomSelectionSerializer(required=False)

    def to_service_kwargs(self):
        """Split validated data into the registration service arguments."""
        data = self.validated_data
        return {
            'personal_info': dict(data['personalInfo']),
            'next_of_kin': ContactPersonSerializer().to_model_fields(data['nextOfKin']),
            'guarantor': GuarantorSerializer().to_model_fields(data['guarantor']),
            'security_info': dict(data['securityInfo']),
        }
