"""
Serializers for payment operations.
Request fields use the camelCase names sent by the payment widget.
"""
from django.core.validators import RegexValidator
from rest_framework import serializers

from apps.students.models import normalize_matric_number
from .models import Payment
from .services.payment_service import MAX_PAYMENT_AMOUNT, calculate_amount


# Remita references are numeric; anything else never reaches the gateway URL
rrr_validator = RegexValidator(
    r'^\d{1,20}$',
    message="RRR must contain digits only"
)


class MatricNumberField(serializers.CharField):
    """CharField that normalizes matric numbers."""

    def to_internal_value(self, data):
        return normalize_matric_number(super().to_internal_value(data))


class IssueReferenceSerializer(serializers.Serializer):
    """
    Serializer for requesting a payment reference (RRR).

    Either an explicit amount or a paymentOption (FULL, HALF, CUSTOM) must be
    supplied. An explicit amount wins.
    """
    matricNumber = MatricNumberField(source='matric_number', max_length=30)
    firstName = serializers.CharField(source='first_name', max_length=100)
    lastName = serializers.CharField(source='last_name', max_length=100)
    email = serializers.EmailField()
    amount = serializers.IntegerField(
        min_value=1, max_value=MAX_PAYMENT_AMOUNT, required=False)
    paymentOption = serializers.ChoiceField(
        choices=['FULL', 'HALF', 'CUSTOM'],
        required=False,
        write_only=True
    )
    customAmount = serializers.IntegerField(
        min_value=1, max_value=MAX_PAYMENT_AMOUNT, required=False, write_only=True)
    phoneNumber = serializers.CharField(
        source='phone_number', max_length=17, required=False, allow_blank=True)

    def validate(self, attrs):
        option = attrs.pop('paymentOption', None)
        custom_amount = attrs.pop('customAmount', None)

        if attrs.get('amount') is None:
            if not option:
                raise serializers.ValidationError({
                    'amount': "Provide an amount or a payment option"
                })
            if option == 'CUSTOM' and not custom_amount:
                raise serializers.ValidationError({
                    'customAmount': "Custom amount is required for CUSTOM payments"
                })
            attrs['amount'] = calculate_amount(option, custom_amount)

        return attrs


class RecordPaymentSerializer(serializers.Serializer):
    """
    Serializer for a payment reported by the browser after checkout.
    """
    matricNumber = MatricNumberField(source='matric_number', max_length=30)
    rrr = serializers.CharField(max_length=20, validators=[rrr_validator])
    transactionId = serializers.CharField(source='transaction_id', max_length=100)
    amount = serializers.IntegerField(min_value=1, max_value=MAX_PAYMENT_AMOUNT)
    status = serializers.ChoiceField(
        choices=[choice[0] for choice in Payment.STATUS_CHOICES],
        default=Payment.STATUS_COMPLETED
    )


class VerifyPaymentSerializer(serializers.Serializer):
    rrr = serializers.CharField(max_length=20, validators=[rrr_validator])
    matricNumber = MatricNumberField(source='matric_number', max_length=30)


class PaymentDetailsSerializer(serializers.ModelSerializer):
    """
    Payment row as returned to the browser.
    """
    paymentDate = serializers.DateTimeField(source='created_at', read_only=True)
    transactionId = serializers.CharField(source='transaction_id', read_only=True)

    class Meta:
        model = Payment
        fields = ['rrr', 'amount', 'status', 'paymentDate', 'transactionId']
        read_only_fields = fields
